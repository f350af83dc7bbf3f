"""Page cursor tracking for paginated collections."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, Optional


_PAGE_PARAM = re.compile(r"page=(\d+)")


class CursorMove(str, Enum):
    PAGE_CHANGED = "page_changed"
    FOLLOW_ADDRESS = "follow_address"
    EXHAUSTED = "exhausted"


def parse_page_number(address: Optional[str]) -> Optional[int]:
    if not address:
        return None
    match = _PAGE_PARAM.search(address)
    if not match:
        return None
    return int(match.group(1))


class PageCursor:
    """Tracks either a caller-set page counter or server supplied page addresses.

    A caller-set ``page`` always takes precedence over the ``next_page`` and
    ``previous_page`` addresses returned by the last response.
    """

    def __init__(self, page: Optional[int] = None, per_page: Optional[int] = None) -> None:
        self.page = page
        self.per_page = per_page
        self.current_page: Optional[int] = page
        self.next_page: Optional[str] = None
        self.previous_page: Optional[str] = None
        self.pending: Optional[str] = None

    def set_page(self, number: Optional[int]) -> bool:
        self.page = number
        self.current_page = number
        if number is None:
            return False
        self.pending = None
        return True

    def set_per_page(self, count: Optional[int]) -> bool:
        self.per_page = count
        if count is None:
            return False
        self.pending = None
        return True

    def advance(self) -> CursorMove:
        self.pending = None
        if self.page is not None:
            self.page += 1
            self.current_page = self.page
            return CursorMove.PAGE_CHANGED
        if self.next_page:
            self.pending = self.next_page
            return CursorMove.FOLLOW_ADDRESS
        return CursorMove.EXHAUSTED

    def retreat(self) -> CursorMove:
        self.pending = None
        if self.page is not None and self.page > 1:
            self.page -= 1
            self.current_page = self.page
            return CursorMove.PAGE_CHANGED
        if self.previous_page:
            self.pending = self.previous_page
            return CursorMove.FOLLOW_ADDRESS
        return CursorMove.EXHAUSTED

    def take_pending(self) -> Optional[str]:
        address, self.pending = self.pending, None
        return address

    def update_from_response(
        self, next_page: Optional[str], previous_page: Optional[str]
    ) -> None:
        self.next_page = next_page
        self.previous_page = previous_page

        next_number = parse_page_number(next_page)
        previous_number = parse_page_number(previous_page)
        if next_number is not None:
            derived: Optional[int] = next_number - 1
        elif previous_number is not None:
            derived = previous_number + 1
        else:
            # addresses without a page= component leave the page unchanged
            return

        self.current_page = derived
        if self.page is not None:
            self.page = derived

    def clear_addresses(self) -> None:
        self.next_page = None
        self.previous_page = None

    def reset(self) -> None:
        self.page = None
        self.current_page = None
        self.pending = None
        self.clear_addresses()

    def params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.page is not None:
            params["page"] = self.page
        if self.per_page is not None:
            params["per_page"] = self.per_page
        return params
