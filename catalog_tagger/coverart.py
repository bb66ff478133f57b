from __future__ import annotations

import logging
from typing import Optional

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_random_exponential

from .cache import DEFAULT_TTL
from .types import Artwork

logger = logging.getLogger(__name__)

GIF_SIGNATURE = b"GIF89a"
USER_AGENT = "catalog-tagger/0.1"


class RequestsHttpClient:
    """Blocking HTTP GET returning the raw body."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 10.0):
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)
        self.timeout = timeout

    @retry(
        reraise=True,
        stop=stop_after_attempt(4),
        wait=wait_random_exponential(multiplier=1, max=10),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    )
    def get(self, url: str) -> bytes:
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.content


def is_gif(data: bytes | None) -> bool:
    return bool(data) and data[: len(GIF_SIGNATURE)] == GIF_SIGNATURE


def fetch_cover_art(url: str, cache, http, ttl: int = DEFAULT_TTL) -> Optional[Artwork]:
    """Return the cover at ``url`` as front-cover artwork, or None.

    The cache is consulted first and filled on a miss. GIF images are
    refused (placeholder art), as are failed downloads.
    """
    art = cache.get(url)
    if not art:
        logger.debug("Downloading cover art: %s", url)
        try:
            art = http.get(url)
        except Exception as e:
            logger.warning("Cover art download failed for %s: %s", url, e)
            return None
        if art:
            cache.set(url, art, ttl)

    if not art:
        return None
    if is_gif(art):
        logger.debug("Cover at %s is a gif, skipping", url)
        return None
    return Artwork(data=bytes(art))
