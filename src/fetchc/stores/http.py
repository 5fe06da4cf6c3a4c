"""HTTP raw byte store."""

from __future__ import annotations

import base64

import httpx
from loguru import logger

from fetchc.action import Action
from fetchc.errors import StoreError
from fetchc.types import NOTHING, Maybe, Some


def _encode_key(key: bytes) -> str:
    """URL-safe path segment for an arbitrary byte key."""
    return base64.urlsafe_b64encode(key).decode("ascii").rstrip("=")


def _error_message(response: httpx.Response) -> str:
    """The ``error`` field of a JSON object body, else the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"HTTP {response.status_code}"


class AsyncHttpStore:
    """Raw byte store backed by a key/value HTTP service.

    ``GET /v1/kv/<key>`` returns the stored bytes; a 404 means absence.
    Keys are sent unpadded urlsafe-base64 encoded.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        headers = {"Accept": "application/octet-stream"}
        if api_key is not None:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
        )

    def __call__(self, key: bytes) -> Action[Maybe[bytes]]:
        return Action(lambda: self.get(key))

    async def get(self, key: bytes) -> Maybe[bytes]:
        response = await self._client.get(f"/v1/kv/{_encode_key(key)}")
        if response.status_code == 404:
            logger.debug("http store miss for {!r}", key)
            return NOTHING
        if not response.is_success:
            raise StoreError(_error_message(response), status_code=response.status_code)
        return Some(response.content)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
