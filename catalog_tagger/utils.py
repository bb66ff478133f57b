from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import Optional


def now_timestamp_str() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def safe_int(value: str | int | None) -> int | None:
    """Coerce tag/catalog numbers such as ``"3"`` or ``"3/12"`` to int."""
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(str(value).split("/")[0])
        except ValueError:
            return None


_articles_re = re.compile(r"^(?:(?:the|a|an)\s+)+")
_punct_re = re.compile(r"[^\w\s]|_")
_ws_re = re.compile(r"\s+")
_roman_re = re.compile(r"^x{0,3}(?:ix|iv|v?i{0,3})$")

_ROMAN_VALUES = {"i": 1, "v": 5, "x": 10}


def roman_to_int(token: str) -> int | None:
    """Value of a lower-case roman numeral made of i, v and x (1 to 39), else None.

    Letters such as c, d and m are left alone so words like "cd" or "mix"
    stay words.
    """
    if not token or not _roman_re.match(token):
        return None
    total = 0
    prev = 0
    for ch in reversed(token):
        v = _ROMAN_VALUES[ch]
        if v < prev:
            total -= v
        else:
            total += v
            prev = v
    return total


def normalize_name(text: str | None) -> str:
    """Canonical form of an album or track name, used for comparison only.

    Lower-cases, drops leading articles (the, a, an), removes punctuation,
    collapses whitespace and turns standalone roman numerals into decimals,
    so "The Godfather, Part II" and "godfather part 2" compare equal.
    """
    if not text:
        return ""
    s = text.lower()
    s = _articles_re.sub("", s.strip())
    s = _punct_re.sub("", s)
    s = _ws_re.sub(" ", s).strip()
    # punctuation removal can expose another leading article: "(the) wall"
    s = _articles_re.sub("", s)
    words = []
    for word in s.split(" "):
        n = roman_to_int(word)
        words.append(str(n) if n is not None else word)
    return " ".join(words)


MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}

_release_date_re = re.compile(r"(\d{1,2}) ([^,]+), (\d{4})")
_iso_date_re = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def parse_release_date(text: str | None) -> Optional[str]:
    """Convert catalog release dates like "05 January, 1999" to "1999-01-05".

    Returns None when the text does not look like a date; many catalog
    entries simply have none.
    """
    if not text:
        return None
    text = text.strip()
    m = _iso_date_re.match(text)
    if m:
        year, month, day = (int(g) for g in m.groups())
    else:
        m = _release_date_re.search(text)
        if not m:
            return None
        month = MONTHS.get(m.group(2).strip().lower())
        if month is None:
            return None
        day, year = int(m.group(1)), int(m.group(3))
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None
