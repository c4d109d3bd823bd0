"""
Adapter: HttpGraphClient
Talks to the Logseq HTTP API server. Every method is one POST with a
``{"method", "args"}`` body; there is no session, retry or cache.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import (
    GraphResponseError,
    GraphUnavailableError,
    PageNotFoundError,
)
from ..core.model import Block, CurrentGraph, Page
from ..core.ports import GraphClient

logger = logging.getLogger(__name__)

NOT_RUNNING = "invalid response, ensure the logseq HTTP API server is running"


class HttpGraphClient(GraphClient):
    def __init__(self, base_url: str, token: str = "", timeout: float = 10.0) -> None:
        self._url = base_url.strip()
        self._token = token
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    def _call(self, method: str, args: list[Any] | None) -> Any:
        logger.debug("graph call %s %r", method, args)
        try:
            response = httpx.post(
                self._url,
                json={"method": method, "args": args},
                headers=self._headers(),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("graph call %s failed: %s", method, exc)
            raise GraphResponseError(
                f"error calling {method}: {exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("graph call %s failed: %s", method, exc)
            raise GraphUnavailableError(f"error calling {method}: {exc}") from exc

        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("malformed %s response: %r", method, response.text)
            raise GraphResponseError(f"malformed response from {method}") from exc

    def _call_object(self, method: str, args: list[Any] | None) -> dict[str, Any]:
        payload = self._call(method, args)
        if payload is None:
            raise GraphUnavailableError(NOT_RUNNING)
        if not isinstance(payload, dict):
            raise GraphResponseError(f"expected an object from {method}, got {type(payload).__name__}")
        return payload

    def current_graph(self) -> CurrentGraph:
        return CurrentGraph.from_json(self._call_object("logseq.App.getCurrentGraph", None))

    def get_page_by_name(self, name: str) -> Page:
        payload = self._call("logseq.App.getPage", [name])
        if payload is None:
            raise PageNotFoundError(name)
        if not isinstance(payload, dict):
            raise GraphResponseError(f"expected a page for {name!r}, got {type(payload).__name__}")
        return Page.from_json(payload)

    def get_page_by_id(self, id: int) -> Page:
        return Page.from_json(self._call_object("logseq.App.getPage", [id]))

    def get_block(self, uuid: str, include_children: bool = True) -> Block:
        payload = self._call_object(
            "logseq.App.getBlock", [uuid, {"includeChildren": include_children}]
        )
        return Block.from_json(payload)

    def query(self, expression: str) -> list[Block]:
        payload = self._call("logseq.App.q", [expression])
        if payload is None:
            raise GraphUnavailableError(NOT_RUNNING)
        if not isinstance(payload, list):
            raise GraphResponseError(f"expected a list of blocks, got {type(payload).__name__}")
        # queries may return bare values alongside blocks
        return [Block.from_json(item) for item in payload if isinstance(item, dict)]
