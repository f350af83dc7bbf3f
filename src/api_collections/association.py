"""Request path resolution for resources and nested collections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence, Type

if TYPE_CHECKING:
    from .resource import Resource


def resolve_path(
    resource_name: str,
    path: Optional[str] = None,
    collection_path: Optional[Sequence[str]] = None,
    parent_path: Optional[str] = None,
) -> str:
    """Build the canonical request path for a resource listing.

    An explicit ``path`` is used verbatim. Otherwise the collection path
    segments are joined with ``/`` and, when the listing is scoped to a
    parent resource, prefixed with the parent's own path.
    """
    if path:
        return path
    if collection_path:
        base = "/".join(str(segment).strip("/") for segment in collection_path)
    else:
        base = resource_name
    if parent_path:
        return f"{parent_path}/{base}"
    return base


class Association:
    """Path context of a collection, optionally scoped to a parent resource.

    The parent is only consulted for its path and identity.
    """

    def __init__(
        self,
        resource_class: Type[Any],
        path: Optional[str] = None,
        parent: Optional["Resource"] = None,
        collection_path: Optional[Sequence[str]] = None,
    ) -> None:
        self.resource_class = resource_class
        self.path = path
        self.parent = parent
        self.collection_path = list(collection_path) if collection_path else None

    def __repr__(self) -> str:
        return (
            f"Association({self.resource_class.__name__}, "
            f"path={self.path!r}, parent={self.parent!r})"
        )

    def generate_path(self, with_parent: bool = True, with_id: Any = None) -> str:
        parent_path = None
        if with_parent and self.parent is not None:
            parent_path = self.parent.association.generate_path(with_id=self.parent.id)

        resolved = resolve_path(
            self.resource_class.resource_name,
            path=self.path,
            collection_path=self.collection_path,
            parent_path=parent_path,
        )
        if with_id is not None:
            return f"{resolved}/{with_id}"
        return resolved

    @property
    def has_unsaved_parent(self) -> bool:
        return self.parent is not None and self.parent.new_record
