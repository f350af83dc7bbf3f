"""Lazily loaded collections of remote resources."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Type

import httpx

from .association import Association
from .cache import CollectionCache
from .client import ApiClient
from .dispatch import DynamicDispatcher
from .fetch import FetchEngine
from .models import CollectionOptions
from .pagination import CursorMove, PageCursor
from .resource import Data

logger = logging.getLogger(__name__)


class ResourceTypeMismatch(TypeError):
    pass


class Collection:
    """A lazily loaded, cached page of a remote resource listing.

    Nothing is requested until the resources are needed (iteration, ``len``,
    ``fetch``, ``count``...). Results stay cached until the page, page size or
    cursor position changes, or ``clear_cache`` is called.

    Recognized options are ``verb``, ``path``, ``page``, ``per_page``,
    ``include``, ``collection_path`` and ``association``; any other keyword is
    sent to the server as a query parameter (or as the body for ``put`` and
    ``post`` listings).
    """

    def __init__(
        self,
        client: ApiClient,
        resource_class: Type[Data],
        options: Optional[CollectionOptions] = None,
        **params: Any,
    ) -> None:
        if options is None:
            options = CollectionOptions.from_params(**params)
        elif params:
            options = options.derive(**params)

        self.client = client
        self.resource_class = resource_class
        self.options = options
        self.association: Association = options.association or Association(
            resource_class, path=options.path, collection_path=options.collection_path
        )
        self.cursor = PageCursor(page=options.page, per_page=options.per_page)
        self.cache = CollectionCache(self.cursor)
        self.fetchable = resource_class.fetchable
        self.response: Optional[httpx.Response] = None
        self.engine = FetchEngine(client)
        self.dispatcher = DynamicDispatcher(resource_class)

        if not self.fetchable:
            self.cache.populate([])

    @property
    def path(self) -> str:
        return self.association.generate_path(with_parent=True)

    def _crud_options(self, attributes: Dict[str, Any]) -> Dict[str, Any]:
        return {**attributes, "association": self.association}

    def create(self, **attributes: Any) -> Any:
        return self.resource_class.create(self.client, self._crud_options(attributes))

    def find(self, **options: Any) -> Any:
        return self.resource_class.find(self.client, self._crud_options(options))

    def update(self, **options: Any) -> Any:
        return self.resource_class.update(self.client, self._crud_options(options))

    def destroy(self, **options: Any) -> Any:
        return self.resource_class.destroy(self.client, self._crud_options(options))

    def count(self) -> Optional[int]:
        """Total number of resources server-side, disregarding pagination."""
        self.fetch()
        return self.cache.count

    def page(self, number: Optional[int]) -> "Collection":
        if self.cursor.set_page(number):
            self.clear_cache()
        return self

    def per_page(self, count: Optional[int]) -> "Collection":
        if self.cursor.set_per_page(count):
            self.clear_cache()
        return self

    def include(self, *sideloads: str) -> "Collection":
        self.options.include.extend(str(name) for name in sideloads)
        return self

    def where(self, **params: Any) -> "Collection":
        return Collection(self.client, self.resource_class, self._derived_options(**params))

    __call__ = where

    def sub_collection(self, segment: str) -> "Collection":
        collection_path = [*self.association.generate_path(with_parent=False).split("/"), segment]
        association = Association(
            self.resource_class,
            collection_path=collection_path,
            parent=self.association.parent,
        )
        options = self._derived_options(
            collection_path=collection_path, path=None, association=association
        )
        return Collection(self.client, self.resource_class, options)

    def _derived_options(self, **params: Any) -> CollectionOptions:
        carried: Dict[str, Any] = {"page": self.cursor.page, "per_page": self.cursor.per_page}
        carried.update(params)
        return self.options.derive(**carried)

    def fetch(self, reload: bool = False) -> List[Any]:
        return self.engine.fetch(self, reload)

    def to_list(self) -> List[Any]:
        return self.fetch()

    def clear_cache(self) -> None:
        self.cache.invalidate()

    def next(self) -> "Collection":
        """Move to the next page.

        A page number, when set, is incremented. Otherwise the ``next_page``
        address from the last response is requested on the next fetch. With
        neither, the collection becomes an empty page without a request.
        """
        self._move(self.cursor.advance())
        return self

    def prev(self) -> "Collection":
        """Move to the previous page, mirroring ``next``. Page numbers stop at 1."""
        self._move(self.cursor.retreat())
        return self

    def _move(self, move: CursorMove) -> None:
        self.clear_cache()
        if move is CursorMove.EXHAUSTED:
            self.cache.populate([])

    def each_page(self, callback: Callable[[Any, int], Any]) -> None:
        self.cursor.reset()
        self.clear_cache()

        while self.fetch():
            current_page = self.cursor.current_page or 1
            for resource in list(self.cache.resources or []):
                callback(resource, current_page)
            self.next()

    def _to_resource(self, item: Any) -> Data:
        if isinstance(item, Data):
            if not isinstance(item, self.resource_class):
                raise ResourceTypeMismatch(
                    f"this collection is for {self.resource_class.__name__}"
                )
            return item
        return self.resource_class(self.client, {**dict(item), "association": self.association})

    def append(self, item: Any) -> "Collection":
        resource = self._to_resource(item)
        self.fetch().append(resource)
        return self

    __lshift__ = append

    def insert(self, index: int, item: Any) -> "Collection":
        resource = self._to_resource(item)
        self.fetch().insert(index, resource)
        return self

    def extend(self, items: Iterable[Any]) -> "Collection":
        # convert everything first so a mismatch adds nothing
        resources = [self._to_resource(item) for item in items]
        self.fetch().extend(resources)
        return self

    def replace(self, items: Iterable[Any]) -> "Collection":
        items = list(items)
        if any(not isinstance(item, self.resource_class) for item in items):
            raise ResourceTypeMismatch(f"this collection is for {self.resource_class.__name__}")
        self.cache.replace(items)
        return self

    def save(self) -> "Collection":
        """Persist every cached resource with pending changes.

        Resources stay in the collection whether or not their save succeeded.
        """
        for item in self.cache.resources or []:
            save = getattr(item, "save", None)
            if save is not None and item.changes:
                if not save():
                    logger.info("Could not save %r in %s", item, self.path)
        return self

    def __iter__(self) -> Iterator[Any]:
        return iter(self.fetch())

    def __len__(self) -> int:
        return len(self.fetch())

    def __getitem__(self, index: Any) -> Any:
        return self.fetch()[index]

    def __contains__(self, item: object) -> bool:
        return item in self.fetch()

    def __getattr__(self, name: str) -> Any:
        dispatcher = self.__dict__.get("dispatcher")
        if dispatcher is None:
            raise AttributeError(name)
        return dispatcher.dispatch(self, name)

    def __repr__(self) -> str:
        if self.cache.populated:
            return repr(self.cache.resources)
        return f"<Collection {self.resource_class.__name__} path={self.path!r}>"
