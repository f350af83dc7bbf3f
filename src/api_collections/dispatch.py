"""Fallback resolution for operations a collection does not define itself."""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Type

if TYPE_CHECKING:
    from .collection import Collection


_PATH_SEGMENT = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class UndefinedOperationError(AttributeError):
    pass


def _first(items: List[Any], default: Any = None) -> Any:
    return items[0] if items else default


def _last(items: List[Any], default: Any = None) -> Any:
    return items[-1] if items else default


SEQUENCE_OPERATIONS: Dict[str, Callable[..., Any]] = {
    "size": len,
    "empty": lambda items: not items,
    "first": _first,
    "last": _last,
    "map": lambda items, fn: [fn(item) for item in items],
    "filter": lambda items, predicate: [item for item in items if predicate(item)],
    "reject": lambda items, predicate: [item for item in items if not predicate(item)],
    "index": list.index,
    "sort": lambda items, key=None, reverse=False: sorted(items, key=key, reverse=reverse),
    "reverse": lambda items: list(reversed(items)),
    "pop": list.pop,
    "remove": list.remove,
    "copy": list.copy,
}


class ResolutionKind(str, Enum):
    TYPE_OPERATION = "type_operation"
    SEQUENCE_OPERATION = "sequence_operation"
    SUB_COLLECTION = "sub_collection"


@dataclass(frozen=True)
class Resolution:
    kind: ResolutionKind
    name: str


class DynamicDispatcher:
    """Resolves unknown names on a collection.

    Resolution order: an operation the resource type declares in
    ``type_operations``, then an operation on the realized list of resources,
    then a nested sub-collection named after the path segment.
    """

    def __init__(self, resource_class: Type[Any]) -> None:
        self.resource_class = resource_class

    def resolve(self, name: str) -> Resolution:
        if name in self.resource_class.type_operations and callable(
            getattr(self.resource_class, name, None)
        ):
            return Resolution(ResolutionKind.TYPE_OPERATION, name)
        if name in SEQUENCE_OPERATIONS:
            return Resolution(ResolutionKind.SEQUENCE_OPERATION, name)
        if _PATH_SEGMENT.match(name):
            return Resolution(ResolutionKind.SUB_COLLECTION, name)
        raise UndefinedOperationError(
            f"{self.resource_class.__name__} collection has no operation {name!r}"
        )

    def dispatch(self, collection: "Collection", name: str) -> Any:
        resolution = self.resolve(name)

        if resolution.kind is ResolutionKind.TYPE_OPERATION:
            return functools.partial(getattr(self.resource_class, name), collection.client)

        if resolution.kind is ResolutionKind.SEQUENCE_OPERATION:
            operation = SEQUENCE_OPERATIONS[name]

            @functools.wraps(operation)
            def call(*args: Any, **kwargs: Any) -> Any:
                return operation(collection.fetch(), *args, **kwargs)

            return call

        return collection.sub_collection(name)
