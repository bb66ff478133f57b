from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from .config import Options
from .tracklist import track_count
from .types import Candidate, RecordLike, Selection
from .utils import normalize_name

logger = logging.getLogger(__name__)

ALBUM_THRESHOLD = 0.80
TITLE_THRESHOLD = 0.90

# Election points, see score_candidate
POINTS_ASIN = 128
POINTS_BARCODE = 64
POINTS_ALBUM_EXACT = 32
POINTS_ALBUM_CLOSE = 20
POINTS_TITLE = 8
POINTS_TITLE_POSITION = 2
POINTS_TOTALTRACKS = 4
POINTS_YEAR = 2
POINTS_OLDER = 1


def similarity(a: str | None, b: str | None) -> float:
    """Similarity ratio in [0, 1] of two names after normalization."""
    na, nb = normalize_name(a), normalize_name(b)
    if na == nb:
        return 1.0
    if not na or not nb:
        return 0.0
    return fuzz.ratio(na, nb) / 100.0


def matches(a: str | None, b: str | None, threshold: float) -> bool:
    return similarity(a, b) >= threshold


def _same_code(local, remote) -> bool:
    if not local or not remote:
        return False
    return str(local).strip() == str(remote).strip()


def score_candidate(record: RecordLike, cand: Candidate, baseline: Optional[Candidate] = None, ignore_asin: bool = False) -> int:
    """Points a candidate album earns against the local record.

    Matches ASIN:            128
    Matches UPC or EAN:       64
    Exact album name:         32
     or close album name:     20
    Contains the title:        8
     at the same position:    +2
    Matches totaltracks:       4
    Matches year:              2
    Older than the baseline:   1
    """
    score = 0

    asin = record.get("asin")
    if not ignore_asin and asin and cand.asin and cand.asin.upper() == str(asin).upper():
        score += POINTS_ASIN

    if _same_code(record.get("upc"), cand.upc) or _same_code(record.get("ean"), cand.ean):
        score += POINTS_BARCODE

    album = record.get("album")
    if album and cand.album:
        if cand.album == album:
            score += POINTS_ALBUM_EXACT
        elif matches(cand.album, album, ALBUM_THRESHOLD):
            score += POINTS_ALBUM_CLOSE

    title = record.get("title")
    if title:
        hits = [tr for _, tr in cand.iter_tracks() if matches(tr.title, title, TITLE_THRESHOLD)]
        if hits:
            score += POINTS_TITLE
            track = record.get("track")
            if track and any(tr.number == track for tr in hits):
                score += POINTS_TITLE_POSITION

    totaltracks = record.get("totaltracks")
    if totaltracks is not None and track_count(cand) == totaltracks:
        score += POINTS_TOTALTRACKS

    year = record.get("year")
    if year is not None and cand.year is not None and cand.year == year:
        score += POINTS_YEAR

    if baseline is not None and baseline.year is not None and cand.year is not None:
        if cand.year < baseline.year:
            score += POINTS_OLDER

    return score


def select_best(record: RecordLike, candidates: Sequence[Candidate], options: Optional[Options] = None) -> Optional[Selection]:
    """Elect the album that best matches the record.

    Candidates without a track listing are counted but not scored. The
    first candidate with tracks is the baseline for the "older" point and
    the initial leader; a later candidate only takes the lead with a
    strictly higher score. Returns None when the winning score is below
    ``options.min_album_points``.
    """
    options = options or Options()
    total = 0
    baseline: Optional[Candidate] = None
    best: Optional[Candidate] = None
    best_score = 0
    scored: List[Tuple[Candidate, int]] = []

    for cand in candidates:
        total += 1
        if not cand.has_tracks:
            continue
        if baseline is None:
            baseline = cand
            best = cand
        logger.debug("Checking out ASIN: %s", cand.asin)
        score = score_candidate(record, cand, baseline=baseline, ignore_asin=options.ignore_asin)
        scored.append((cand, score))
        if score > best_score:
            best = cand
            best_score = score

    if best is None or best_score < options.min_album_points:
        return None
    return Selection(candidate=best, score=best_score, total=total, scored=scored)


def print_scoreboard(scored: Sequence[Tuple[Candidate, int]], console=None, winner: Optional[Candidate] = None) -> None:
    from rich.console import Console
    from rich.table import Table

    console = console or Console()
    table = Table(title="Album candidates", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Album")
    table.add_column("ASIN")
    table.add_column("Year", justify="right")
    table.add_column("Tracks", justify="right")
    table.add_column("Score", justify="right")

    for i, (cand, score) in enumerate(scored, 1):
        marker = "*" if winner is not None and cand is winner else ""
        table.add_row(
            f"{i}{marker}",
            cand.album or "",
            cand.asin or "",
            str(cand.year) if cand.year is not None else "",
            str(track_count(cand)),
            str(score),
        )
    console.print(table)
