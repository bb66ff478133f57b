import pytest

from catalog_tagger.types import TrackRecord


def test_extended_fields_must_be_declared():
    rec = TrackRecord()
    with pytest.raises(KeyError):
        rec.set("amazon_price", "$1")
    rec.declare_field("amazon_price")
    rec.set("amazon_price", "$1")
    assert rec.get("amazon_price") == "$1"


def test_unknown_fields_rejected():
    rec = TrackRecord()
    with pytest.raises(KeyError):
        rec.declare_field("mood")
    with pytest.raises(KeyError):
        rec.get("mood")


def test_core_fields():
    rec = TrackRecord()
    rec.declare_field("album")
    rec.set("album", "Jazz")
    assert rec.album == "Jazz"
    rec.notify_changed("album")
    assert rec.changes == ["album"]
