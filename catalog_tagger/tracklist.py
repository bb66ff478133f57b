from __future__ import annotations

from typing import Dict, List

from .types import Candidate, TrackLocation


def tracks_by_discs(cand: Candidate) -> List[List[str]]:
    """Title table of a candidate: ``table[disc - 1][track - 1]``.

    Discs are ordered by disc number and tracks by track number, so the
    table can be indexed positionally with 1-based numbers.
    """
    if not cand.discs:
        return []
    discs = sorted(cand.discs, key=lambda d: d.number)
    return [[t.title for t in sorted(d.tracks, key=lambda t: t.number)] for d in discs]


def tracks_by_name(cand: Candidate) -> Dict[str, TrackLocation]:
    """Map each track title to where it first appears on the album."""
    tracks: Dict[str, TrackLocation] = {}
    for disc_number, tr in cand.iter_tracks():
        if tr.title not in tracks:
            tracks[tr.title] = TrackLocation(number=tr.number, disc=disc_number, title=tr.title)
    return tracks


def track_count(cand: Candidate) -> int:
    return sum(len(d.tracks) for d in cand.discs or [])
