from __future__ import annotations

import logging
from typing import Optional

import requests

from lyrics_finder.core.exceptions import RemoteError, TransportError
from lyrics_finder.core.models import Song

logger = logging.getLogger(__name__)

DEFAULT_INSTANCE = "https://lrclib.net"


def normalize_lrclib_base(url: str | None) -> str:
    u = (url or "").strip().rstrip("/")
    if not u:
        u = DEFAULT_INSTANCE
    if not u.endswith("/api"):
        u += "/api"
    return u


class LrcLibClient:
    """
    Thin wrapper over the two read-only LRCLIB endpoints:
      - GET /api/search?q=...
      - GET /api/get/{id}

    Every call is one stateless round trip: no caching, no retries.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_INSTANCE,
        user_agent: str = "lyrics-finder/0.1",
        timeout: Optional[float] = 15,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = normalize_lrclib_base(base_url)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def search(self, query: str) -> list[Song]:
        url = f"{self.base_url}/search"
        logger.debug("Searching for songs: %s q=%r", url, query)
        data = self._get_json(url, params={"q": query})
        if not isinstance(data, list):
            return []
        return [Song.from_api(item) for item in data if isinstance(item, dict)]

    def get_by_id(self, song_id: int) -> Song:
        url = f"{self.base_url}/get/{int(song_id)}"
        logger.debug("Fetching lyrics for id %s", song_id)
        data = self._get_json(url)
        if not isinstance(data, dict):
            raise TransportError(f"Unexpected response for song {song_id}")
        return Song.from_api(data)

    def _get_json(self, url: str, params: dict | None = None):
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise TransportError(f"Network error: {e}") from e

        if not 200 <= r.status_code < 300:
            raise RemoteError(r.status_code, _error_message(r))

        try:
            return r.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {url}") from e


def _error_message(r: requests.Response) -> str:
    # LRCLIB errors look like {"code": 404, "name": "TrackNotFound", "message": "..."}
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return r.reason or ""
