"""Realized resource cache for a collection."""

from __future__ import annotations

from typing import Any, List, Optional

from .pagination import PageCursor


class CollectionCache:
    def __init__(self, cursor: PageCursor) -> None:
        self.cursor = cursor
        self.resources: Optional[List[Any]] = None
        self.count: Optional[int] = None

    @property
    def populated(self) -> bool:
        return self.resources is not None

    def is_valid(self, force_refresh: bool = False, fetchable: bool = True) -> bool:
        return self.populated and (not force_refresh or not fetchable)

    def invalidate(self) -> None:
        self.resources = None
        self.count = None
        self.cursor.clear_addresses()

    def populate(
        self,
        items: List[Any],
        count: Optional[int] = None,
        next_page: Optional[str] = None,
        previous_page: Optional[str] = None,
    ) -> List[Any]:
        self.resources = items
        self.count = int(count) if count is not None else len(items)
        self.cursor.update_from_response(next_page, previous_page)
        return items

    def replace(self, items: List[Any]) -> List[Any]:
        self.resources = items
        if self.count is None:
            self.count = len(items)
        return items
