from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Set, Tuple


CORE_FIELDS = (
    "artist",
    "album",
    "title",
    "track",
    "disc",
    "totaltracks",
    "totaldiscs",
    "asin",
    "upc",
    "ean",
    "releasedate",
    "year",
    "url",
    "picture",
    "label",
)

# Commerce fields only filled when the amazon_info option is on
EXTENDED_FIELDS = (
    "amazon_salesrank",
    "amazon_description",
    "amazon_price",
    "amazon_availability",
    "amazon_listprice",
    "amazon_usedprice",
    "amazon_usedcount",
)


class CatalogError(Exception):
    """Raised by a catalog query function when the lookup itself failed."""


class ConfigError(ValueError):
    pass


class RecordLike(Protocol):
    """What the reconciler needs from a destination record."""

    def get(self, name: str) -> Any: ...

    def set(self, name: str, value: Any) -> None: ...

    def declare_field(self, name: str) -> None: ...

    def notify_changed(self, name: str) -> None: ...


class QueryKind(str, Enum):
    IDENTIFIER = "identifier"
    BARCODE = "barcode"
    ARTIST_NAME = "artistName"


@dataclass
class CatalogRequest:
    kind: QueryKind
    key: str
    scheme: str  # asin | upc | ean | artist
    locale: str = "us"
    max_pages: int = 10


@dataclass
class CatalogTrack:
    number: int
    title: str


@dataclass
class Disc:
    number: int
    tracks: List[CatalogTrack] = field(default_factory=list)


@dataclass
class Candidate:
    """One album hit returned by the catalog."""
    album: Optional[str] = None
    label: Optional[str] = None
    asin: Optional[str] = None
    upc: Optional[str] = None
    ean: Optional[str] = None
    release_date: Optional[str] = None
    year: Optional[int] = None
    detail_page_url: Optional[str] = None
    image_url_large: Optional[str] = None
    image_url_medium: Optional[str] = None
    image_url_small: Optional[str] = None
    sales_rank: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    availability: Optional[str] = None
    list_price: Optional[str] = None
    used_price: Optional[str] = None
    used_count: Optional[str] = None
    discs: Optional[List[Disc]] = None

    @property
    def has_tracks(self) -> bool:
        return bool(self.discs) and any(d.tracks for d in self.discs)

    def iter_tracks(self):
        """Yield (disc_number, track) pairs in catalog order."""
        for disc in self.discs or []:
            for tr in disc.tracks:
                yield disc.number, tr


@dataclass
class CatalogResponse:
    candidates: List[Candidate] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass
class TrackLocation:
    number: int
    disc: int
    title: str


@dataclass
class Selection:
    candidate: Candidate
    score: int
    total: int
    scored: List[Tuple[Candidate, int]] = field(default_factory=list)


@dataclass
class Artwork:
    data: bytes
    picture_type: str = "Cover (front)"
    mime_type: str = "image/jpeg"
    description: str = ""


@dataclass
class TrackRecord:
    """In-memory metadata record of a single audio file.

    Core fields are plain attributes. Extended fields live in ``extra`` and
    must be declared with ``declare_field`` before they are set.
    Every mutation done by the reconciler is reported via ``notify_changed``.
    """
    artist: Optional[str] = None
    album: Optional[str] = None
    title: Optional[str] = None
    track: Optional[int] = None
    disc: Optional[int] = None
    totaltracks: Optional[int] = None
    totaldiscs: Optional[int] = None
    asin: Optional[str] = None
    upc: Optional[str] = None
    ean: Optional[str] = None
    releasedate: Optional[str] = None
    year: Optional[int] = None
    url: Optional[str] = None
    picture: Optional[Artwork] = None
    label: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    declared: Set[str] = field(default_factory=set)
    changes: List[str] = field(default_factory=list)

    def declare_field(self, name: str) -> None:
        if name in CORE_FIELDS:
            return
        if name not in EXTENDED_FIELDS:
            raise KeyError(f"unknown field: {name}")
        self.declared.add(name)

    def get(self, name: str) -> Any:
        if name in CORE_FIELDS:
            return getattr(self, name)
        if name in EXTENDED_FIELDS:
            return self.extra.get(name)
        raise KeyError(f"unknown field: {name}")

    def set(self, name: str, value: Any) -> None:
        if name in CORE_FIELDS:
            setattr(self, name, value)
            return
        if name not in self.declared:
            raise KeyError(f"field not declared: {name}")
        self.extra[name] = value

    def notify_changed(self, name: str) -> None:
        self.changes.append(name)
