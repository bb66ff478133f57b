from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional, Tuple

from mutagen import File as MutagenFile
from mutagen import MutagenError

from .types import TrackRecord
from .utils import safe_int

logger = logging.getLogger(__name__)

_date_re = re.compile(r"^(\d{4})(?:-(\d{2})-(\d{2}))?")


def _first(tags, key: str) -> Optional[str]:
    if not tags:
        return None
    v = tags.get(key)
    if not v:
        return None
    if isinstance(v, (list, tuple)):
        v = v[0]
    s = str(v).strip()
    return s or None


def _number_pair(value: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """Split "3/12" into (3, 12)."""
    if not value:
        return None, None
    head, _, tail = value.partition("/")
    return safe_int(head.strip()), safe_int(tail.strip()) if tail else None


def read_record(path: Path) -> TrackRecord:
    """Read an audio file's easy tags into a TrackRecord.

    Files mutagen cannot read give an empty record.
    """
    try:
        audio = MutagenFile(path, easy=True)
    except (MutagenError, OSError) as e:
        logger.warning("Could not read tags from %s: %s", path, e)
        return TrackRecord()
    tags = getattr(audio, "tags", None) if audio is not None else None
    if not tags:
        return TrackRecord()

    track, totaltracks = _number_pair(_first(tags, "tracknumber"))
    disc, totaldiscs = _number_pair(_first(tags, "discnumber"))

    year = releasedate = None
    date = _first(tags, "date")
    if date:
        m = _date_re.match(date)
        if m:
            year = int(m.group(1))
            if m.group(2):
                releasedate = m.group(0)

    return TrackRecord(
        artist=_first(tags, "artist"),
        album=_first(tags, "album"),
        title=_first(tags, "title"),
        track=track,
        disc=disc,
        totaltracks=totaltracks,
        totaldiscs=totaldiscs,
        asin=_first(tags, "asin"),
        upc=_first(tags, "barcode"),
        releasedate=releasedate,
        year=year,
        url=_first(tags, "website"),
        label=_first(tags, "organization"),
    )
