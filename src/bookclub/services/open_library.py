"""Open Library client for book metadata lookup.

Used by the search endpoints so clients can find a work, its cover and its
description before suggesting it.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from bookclub.core.errors import LookupServiceError
from bookclub.core.settings import settings

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
MAX_RESULTS = 20


@dataclass(frozen=True)
class BookLookup:
    """One search hit, shaped like a suggestion form."""

    title: str
    work_key: str
    author: str | None = None
    cover_url: str | None = None
    year: int | None = None


def _extract_description(payload: dict[str, Any]) -> str | None:
    description = payload.get("description")
    if isinstance(description, dict):
        description = description.get("value")
    if isinstance(description, str) and description.strip():
        return description.strip()
    return None


class OpenLibraryClient:
    """Thin async wrapper over the Open Library search and works APIs."""

    def __init__(
        self,
        base_url: str | None = None,
        covers_url: str | None = None,
        *,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.open_library_base_url).rstrip("/")
        self.covers_url = (covers_url or settings.open_library_covers_url).rstrip("/")
        self.timeout_seconds = timeout_seconds or settings.open_library_timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=httpx.Timeout(self.timeout_seconds),
                    follow_redirects=True,
                    transport=self._transport,
                )
        return self._client

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        client = await self._ensure_client()
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Open Library request to %s failed: %s", path, exc)
            raise LookupServiceError("Book lookup service unavailable") from exc

    def cover_url(self, cover_id: int | None) -> str | None:
        if not cover_id:
            return None
        return f"{self.covers_url}/b/id/{cover_id}-M.jpg"

    async def search(self, query: str, limit: int = 3) -> list[BookLookup]:
        """Search works by free text.

        Args:
            query: Title/author text; fewer than 3 characters returns no results
            limit: Maximum number of hits (capped at 20)

        Returns:
            Hits that carry a work key, in Open Library's ranking order.
        """
        query = query.strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []
        limit = max(1, min(limit, MAX_RESULTS))
        payload = await self._get_json("/search.json", params={"q": query, "limit": limit})

        results: list[BookLookup] = []
        for doc in payload.get("docs", []):
            work_key = doc.get("key")
            if not work_key or not doc.get("title"):
                continue
            authors = doc.get("author_name") or []
            results.append(
                BookLookup(
                    title=doc["title"],
                    work_key=work_key,
                    author=authors[0] if authors else None,
                    cover_url=self.cover_url(doc.get("cover_i")),
                    year=doc.get("first_publish_year"),
                )
            )
        return results

    async def fetch_description(self, work_key: str) -> str | None:
        """Return the description of a work such as ``/works/OL45804W``."""
        work_key = work_key.strip()
        if not work_key.startswith("/works/"):
            work_key = f"/works/{work_key.lstrip('/')}"
        payload = await self._get_json(f"{work_key}.json")
        return _extract_description(payload)

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


_client: OpenLibraryClient | None = None


def get_open_library_client() -> OpenLibraryClient:
    """Return the process-wide Open Library client."""
    global _client
    if _client is None:
        _client = OpenLibraryClient()
    return _client


async def close_open_library_client() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
