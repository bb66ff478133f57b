from pathlib import Path

from mutagen import MutagenError

from catalog_tagger import metadata
from catalog_tagger.metadata import read_record


class FakeAudio:
    def __init__(self, tags):
        self.tags = tags


def fake_file(tags):
    def _open(path, easy=False):
        assert easy
        return FakeAudio(tags)

    return _open


def test_read_record_easy_tags(monkeypatch):
    tags = {
        "artist": ["Queen"],
        "album": ["A Night at the Opera"],
        "title": ["Bohemian Rhapsody "],
        "tracknumber": ["11/12"],
        "discnumber": ["1"],
        "date": ["1975-11-21"],
        "asin": ["B000001"],
        "barcode": ["077774602727"],
        "organization": ["EMI"],
    }
    monkeypatch.setattr(metadata, "MutagenFile", fake_file(tags))
    rec = read_record(Path("x.mp3"))
    assert rec.artist == "Queen"
    assert rec.title == "Bohemian Rhapsody"
    assert (rec.track, rec.totaltracks) == (11, 12)
    assert (rec.disc, rec.totaldiscs) == (1, None)
    assert rec.year == 1975
    assert rec.releasedate == "1975-11-21"
    assert rec.asin == "B000001"
    assert rec.upc == "077774602727"
    assert rec.label == "EMI"
    assert rec.url is None


def test_read_record_year_only(monkeypatch):
    monkeypatch.setattr(metadata, "MutagenFile", fake_file({"date": ["1975"], "title": ["X"]}))
    rec = read_record(Path("x.flac"))
    assert rec.year == 1975
    assert rec.releasedate is None
    assert rec.track is None


def test_unreadable_file_gives_empty_record(monkeypatch):
    def broken(path, easy=False):
        raise MutagenError("bad header")

    monkeypatch.setattr(metadata, "MutagenFile", broken)
    assert read_record(Path("x.mp3")).artist is None

    monkeypatch.setattr(metadata, "MutagenFile", lambda path, easy=False: None)
    assert read_record(Path("x.txt")).title is None
