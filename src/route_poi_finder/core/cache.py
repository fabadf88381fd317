"""Content-addressed disk cache for Overpass API responses."""

import base64
import hashlib
import os
import tempfile
import requests
from pathlib import Path

from .errors import OverpassError


DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"


class QueryCache:
    """
    Fetch Overpass responses, storing each body under a digest of its query.

    Files are named with the URL-safe base64 SHA-1 of the exact query text
    and hold the verbatim response body. Entries never expire: a query that
    was answered once is never sent again while the directory exists.
    """

    def __init__(self, cache_dir: str = "data/query_cache",
                 overpass_url: str = DEFAULT_OVERPASS_URL, timeout: int = 180):
        """
        Initialize the query cache.

        Args:
            cache_dir: Directory holding cached responses
            overpass_url: Overpass interpreter endpoint
            timeout: Request timeout in seconds
        """
        self.cache_dir = Path(cache_dir)
        self.overpass_url = overpass_url
        self.timeout = timeout
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key(query: str) -> str:
        """Return the cache key for a query."""
        digest = hashlib.sha1(query.encode("utf-8")).digest()
        return base64.urlsafe_b64encode(digest).decode("ascii")

    def path(self, query: str) -> Path:
        """Return the cache file path for a query."""
        return self.cache_dir / self.key(query)

    def fetch(self, query: str) -> bytes:
        """
        Return the response body for a query, from disk if cached.

        Raises:
            OverpassError: If the request fails or returns a non-success status
        """
        cache_path = self.path(query)
        if cache_path.exists():
            print(f"  ✓ Query fetched from cached result: {cache_path}")
            self.hits += 1
            return cache_path.read_bytes()

        print(f"  Query result not cached, querying Overpass API: {self.overpass_url}")
        body = self._post(query)
        self._write(cache_path, body)
        print(f"  ✓ Query result written: {cache_path}")
        self.misses += 1
        return body

    def _post(self, query: str) -> bytes:
        """Send the query to the Overpass API once."""
        try:
            response = requests.post(
                self.overpass_url,
                data=query.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise OverpassError(f"Could not reach Overpass API at {self.overpass_url}: {e}") from e

        if not response.ok:
            raise OverpassError(
                f"Overpass API returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        return response.content

    def _write(self, cache_path: Path, body: bytes):
        """Write the body durably: temp file, fsync, then atomic rename."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=".tmp-")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(body)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, cache_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
