import pytest

from catalog_tagger.utils import normalize_name, parse_release_date, roman_to_int, safe_int


def test_normalize_strips_articles_and_punctuation():
    assert normalize_name("The Wall") == "wall"
    assert normalize_name("A Night at the Opera") == "night at the opera"
    assert normalize_name("An  Evening   Wasted!") == "evening wasted"
    assert normalize_name("AC/DC") == "acdc"


def test_normalize_roman_numerals():
    assert normalize_name("The Godfather, Part II") == "godfather part 2"
    assert normalize_name("Led Zeppelin IV") == "led zeppelin 4"
    assert normalize_name("Chapter XII") == "chapter 12"


def test_normalize_keeps_words_that_look_roman():
    assert normalize_name("Bonus CD") == "bonus cd"
    assert normalize_name("Club Mix") == "club mix"
    assert normalize_name("MC Solaar") == "mc solaar"
    assert normalize_name("Disc II") == "disc 2"


def test_normalize_empty():
    assert normalize_name(None) == ""
    assert normalize_name("") == ""
    assert normalize_name("   ") == ""


@pytest.mark.parametrize(
    "text",
    ["The Wall", "(The) Wall", "the the the", "Vol. IV: The Return", "a-ha", "  Mixed   CASE, punct!!", "I"],
)
def test_normalize_is_idempotent(text):
    once = normalize_name(text)
    assert normalize_name(once) == once


def test_roman_to_int():
    assert roman_to_int("iv") == 4
    assert roman_to_int("xxxix") == 39
    assert roman_to_int("mcmxcix") is None
    assert roman_to_int("cd") is None
    assert roman_to_int("iiii") is None
    assert roman_to_int("wall") is None
    assert roman_to_int("") is None


def test_parse_release_date():
    assert parse_release_date("05 January, 1999") == "1999-01-05"
    assert parse_release_date("5 march, 2001") == "2001-03-05"
    assert parse_release_date("21 NOVEMBER, 1975") == "1975-11-21"
    assert parse_release_date("1999-01-05") == "1999-01-05"


def test_parse_release_date_no_value():
    assert parse_release_date("garbage") is None
    assert parse_release_date("") is None
    assert parse_release_date(None) is None
    assert parse_release_date("05 Smarch, 1999") is None
    assert parse_release_date("31 February, 1999") is None


def test_safe_int():
    assert safe_int("3") == 3
    assert safe_int("3/12") == 3
    assert safe_int(7) == 7
    assert safe_int(None) is None
    assert safe_int("x") is None
