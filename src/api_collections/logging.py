"""Logging helpers with redaction of credentials in params, bodies and page addresses."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict

import httpx


_SENSITIVE_KEYS = re.compile(
    r"(token|secret|api[_-]?key|password|authorization|credential)", re.IGNORECASE
)
_REDACTED = "***REDACTED***"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _redact_value(value: Any) -> Any:
    if isinstance(value, dict):
        return redact_payload(value)
    if isinstance(value, list):
        return [_redact_value(item) for item in value]
    return value


def redact_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: _REDACTED if _SENSITIVE_KEYS.search(str(key)) else _redact_value(value)
        for key, value in payload.items()
    }


def redact_url(address: str) -> str:
    """Mask sensitive query parameters of a request target, e.g. a next_page address."""
    url = httpx.URL(address)
    if not url.query:
        return address
    params = [
        (key, _REDACTED if _SENSITIVE_KEYS.search(key) else value)
        for key, value in url.params.multi_items()
    ]
    return str(url.copy_with(params=params))
