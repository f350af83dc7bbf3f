"""HTTP transport for resource collections."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

import httpx

from .config import Settings
from .logging import redact_payload, redact_url

logger = logging.getLogger(__name__)


class ClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout_seconds: float = 20,
        verify_ssl: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.username = username
        self.api_token = api_token
        self.timeout_seconds = timeout_seconds
        self.verify_ssl = verify_ssl
        self.connection = httpx.Client(
            base_url=self.base_url,
            auth=self._auth(),
            headers={"Accept": "application/json"},
            timeout=timeout_seconds,
            verify=verify_ssl,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.BaseTransport] = None
    ) -> "ApiClient":
        return cls(
            base_url=settings.api_base_url,
            username=settings.api_username,
            api_token=settings.api_token,
            timeout_seconds=settings.api_timeout_seconds,
            verify_ssl=settings.api_verify_ssl,
            transport=transport,
        )

    def _auth(self) -> Optional[httpx.BasicAuth]:
        if not self.username or not self.api_token:
            return None
        return httpx.BasicAuth(f"{self.username}/token", self.api_token)

    def send(
        self,
        verb: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        method = verb.upper()
        logger.debug(
            "%s %s params=%s body=%s",
            method,
            redact_url(path),
            redact_payload(params or {}),
            redact_payload(body or {}),
        )
        try:
            response = self.connection.request(
                method,
                path,
                params=params or None,
                json=body if body is not None else None,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ClientError(
                f"{method} {redact_url(path)} returned {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ClientError(f"{method} {redact_url(path)} failed: {exc}") from exc

        if response.content:
            try:
                response.json()
            except ValueError as exc:
                raise ClientError(
                    f"Undecodable response body from {method} {redact_url(path)}",
                    status_code=response.status_code,
                ) from exc
        return response

    def collection(self, resource_class: Type[Any], **params: Any) -> Any:
        from .collection import Collection

        return Collection(self, resource_class, **params)

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
