from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .cache import DEFAULT_TTL
from .types import Candidate, CatalogRequest, CatalogResponse, CatalogTrack, Disc
from .utils import safe_int

logger = logging.getLogger(__name__)

_TEXT_KEYS = (
    "album",
    "label",
    "asin",
    "upc",
    "ean",
    "release_date",
    "detail_page_url",
    "image_url_large",
    "image_url_medium",
    "image_url_small",
    "sales_rank",
    "description",
    "price",
    "availability",
    "list_price",
    "used_price",
    "used_count",
)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _discs_from_item(raw) -> Optional[List[Disc]]:
    if raw is None:
        return None
    discs: List[Disc] = []
    for i, d in enumerate(raw, 1):
        tracks: List[CatalogTrack] = []
        for j, t in enumerate(d.get("tracks") or [], 1):
            title = _text(t.get("title"))
            if title is None:
                continue
            number = safe_int(t.get("number"))
            tracks.append(CatalogTrack(number=number if number is not None else j, title=title))
        number = safe_int(d.get("number"))
        discs.append(Disc(number=number if number is not None else i, tracks=tracks))
    return discs


def candidate_from_item(item: Dict[str, Any]) -> Candidate:
    """Build a Candidate from one raw catalog hit.

    Tracks come as ``{"discs": [{"number": 1, "tracks": [{"number": 1,
    "title": "..."}]}]}``; a hit without ``discs`` has no track listing.
    Missing disc/track numbers fall back to their position.
    """
    values = {k: _text(item.get(k)) for k in _TEXT_KEYS}
    year = safe_int(item.get("year"))
    if year is None and values["release_date"]:
        # "05 January, 1999" or "1999-01-05"
        rd = values["release_date"]
        for part in (rd[:4], rd[-4:]):
            if part.isdigit():
                year = int(part)
                break
    return Candidate(year=year, discs=_discs_from_item(item.get("discs")), **values)


def _cache_key(request: CatalogRequest) -> str:
    return f"{request.scheme}:{request.locale}:{request.key}"


class CachingCatalog:
    """Wrap a catalog query function with a response cache.

    Only successful responses are stored, so a failed lookup is retried on
    the next call.
    """

    def __init__(self, query_fn, cache, ttl: int = DEFAULT_TTL):
        self.query_fn = query_fn
        self.cache = cache
        self.ttl = ttl

    def __call__(self, request: CatalogRequest) -> CatalogResponse:
        key = _cache_key(request)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Catalog cache hit: %s", key)
            return cached
        resp = self.query_fn(request)
        if not resp.is_error:
            self.cache.set(key, resp, self.ttl)
        return resp
