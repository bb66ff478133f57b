from __future__ import annotations

import logging
from typing import Any, List, Optional

from .cache import DEFAULT_TTL, MemoryCache
from .config import DEFAULT_LOCALE, Options
from .coverart import RequestsHttpClient, fetch_cover_art
from .matcher import TITLE_THRESHOLD, matches, print_scoreboard, select_best
from .tracklist import tracks_by_discs, tracks_by_name
from .types import Candidate, CatalogError, CatalogRequest, QueryKind, RecordLike, Selection
from .utils import parse_release_date

logger = logging.getLogger(__name__)

# (candidate attribute, record field), copied in this order
FIELD_MAP = (
    ("album", "album"),
    ("label", "label"),
    ("asin", "asin"),
    ("upc", "upc"),
    ("ean", "ean"),
)

EXTENDED_FIELD_MAP = (
    ("sales_rank", "amazon_salesrank"),
    ("description", "amazon_description"),
    ("price", "amazon_price"),
    ("availability", "amazon_availability"),
    ("list_price", "amazon_listprice"),
    ("used_price", "amazon_usedprice"),
    ("used_count", "amazon_usedcount"),
)


def build_request(record: RecordLike, options: Options) -> CatalogRequest:
    """Pick the most specific lookup the record allows.

    ASIN first, then UPC, then EAN (outside the default region only), and
    finally a search on the artist name.
    """
    common = {"locale": options.locale, "max_pages": options.max_pages}
    asin, upc, ean = record.get("asin"), record.get("upc"), record.get("ean")
    if asin and not options.ignore_asin:
        return CatalogRequest(QueryKind.IDENTIFIER, str(asin), "asin", **common)
    if upc and not options.ignore_upc:
        return CatalogRequest(QueryKind.BARCODE, str(upc), "upc", **common)
    if ean and not options.ignore_ean and options.locale != DEFAULT_LOCALE:
        return CatalogRequest(QueryKind.BARCODE, str(ean), "ean", **common)
    return CatalogRequest(QueryKind.ARTIST_NAME, record.get("artist") or "", "artist", **common)


class TagReconciler:
    """Look a record up in the album catalog and merge the best album back.

    ``query_fn`` takes a CatalogRequest and returns a CatalogResponse (or
    raises CatalogError). Cover art goes through ``cover_cache`` and
    ``http``; both default to in-process implementations.
    """

    def __init__(self, query_fn, options: Optional[Options] = None, cover_cache=None, http=None, console=None, cover_ttl: int = DEFAULT_TTL):
        self.query_fn = query_fn
        self.options = (options or Options()).validate()
        self.cover_cache = cover_cache if cover_cache is not None else MemoryCache()
        self.http = http if http is not None else RequestsHttpClient()
        self.console = console
        self.cover_ttl = cover_ttl
        self.last_error: Optional[str] = None
        self.last_selection: Optional[Selection] = None

    def _status(self, msg: str, *args: Any) -> None:
        if not self.options.quiet:
            logger.info(msg, *args)

    def _update(self, record: RecordLike, name: str, value: Any, changed: List[str]) -> bool:
        if value is None or record.get(name) == value:
            return False
        record.set(name, value)
        if name not in changed:
            record.notify_changed(name)
            changed.append(name)
        return True

    def lookup(self, record: RecordLike) -> Optional[Selection]:
        """Query the catalog for the record and elect the best album."""
        self.last_error = None
        self.last_selection = None
        request = build_request(record, self.options)
        if request.kind is QueryKind.ARTIST_NAME:
            self._status("Doing artist lookup with artist: %s", request.key)
        else:
            self._status("Doing %s lookup with %s: %s", request.scheme.upper(), request.scheme.upper(), request.key)

        try:
            resp = self.query_fn(request)
        except CatalogError as e:
            self.last_error = str(e)
        else:
            if resp.is_error:
                self.last_error = resp.error
        if self.last_error is not None:
            logger.error("Catalog lookup failed: %s", self.last_error)
            return None

        selection = select_best(record, resp.candidates, self.options)
        if selection is None:
            self._status(
                "No album scored over %d [ %d candidates ]",
                self.options.min_album_points,
                len(resp.candidates),
            )
            return None
        if self.options.verbose:
            print_scoreboard(selection.scored, console=self.console, winner=selection.candidate)
        self._status(
            "Album title %s won with score of %d [ %d candidates ]",
            selection.candidate.album,
            selection.score,
            selection.total,
        )
        self.last_selection = selection
        return selection

    def reconcile(self, record: RecordLike) -> List[str]:
        """Update ``record`` from the catalog; return the names of changed fields."""
        if not record.get("artist"):
            logger.warning("Catalog lookup works best with the artist already set")

        selection = self.lookup(record)
        if selection is None:
            return []
        cand = selection.candidate
        changed: List[str] = []

        self._merge_tracks(record, cand, changed)

        releasedate = parse_release_date(cand.release_date)
        if releasedate:
            self._update(record, "releasedate", releasedate, changed)

        if not record.get("url") and cand.detail_page_url:
            self._update(record, "url", cand.detail_page_url, changed)

        self._copy_fields(record, cand, changed)
        self._merge_cover(record, cand, changed)

        if changed:
            self._status("Changed: %s", ", ".join(changed))
        return changed

    def _merge_tracks(self, record: RecordLike, cand: Candidate, changed: List[str]) -> None:
        discs = tracks_by_discs(cand)
        if not discs:
            return
        tracknum = 0
        discnum = record.get("disc") or 1

        if self.options.trust_title or not record.get("track"):
            title = record.get("title")
            if title:
                for loc in tracks_by_name(cand).values():
                    if matches(title, loc.title, TITLE_THRESHOLD):
                        self._update(record, "track", loc.number, changed)
                        self._update(record, "disc", loc.disc, changed)
                        tracknum, discnum = loc.number, loc.disc
                        break
        elif self.options.trust_track and record.get("track"):
            tracknum = record.get("track")

        if not 1 <= discnum <= len(discs):
            return
        titles = discs[discnum - 1]
        if tracknum and 1 <= tracknum <= len(titles):
            self._update(record, "title", titles[tracknum - 1], changed)
        if titles:
            self._update(record, "totaltracks", len(titles), changed)
        self._update(record, "totaldiscs", len(discs), changed)

    def _copy_fields(self, record: RecordLike, cand: Candidate, changed: List[str]) -> None:
        pairs = FIELD_MAP
        if self.options.amazon_info:
            pairs = FIELD_MAP + EXTENDED_FIELD_MAP
        for attr, name in pairs:
            record.declare_field(name)
            value = getattr(cand, attr)
            if value:
                self._update(record, name, value, changed)

    def _merge_cover(self, record: RecordLike, cand: Candidate, changed: List[str]) -> None:
        if cand.image_url_large and (not record.get("picture") or self.options.coveroverwrite):
            self._status("Downloading large cover art %s", cand.image_url_large)
            art = fetch_cover_art(cand.image_url_large, self.cover_cache, self.http, self.cover_ttl)
            if art is not None:
                self._update(record, "picture", art, changed)

        if cand.image_url_medium and not record.get("picture"):
            self._status("Downloading medium cover art %s", cand.image_url_medium)
            art = fetch_cover_art(cand.image_url_medium, self.cover_cache, self.http, self.cover_ttl)
            if art is not None:
                self._update(record, "picture", art, changed)


def reconcile(record: RecordLike, options: Optional[Options], query_fn, cover_cache=None, http=None) -> List[str]:
    """One-shot form of TagReconciler.reconcile."""
    return TagReconciler(query_fn, options, cover_cache=cover_cache, http=http).reconcile(record)
