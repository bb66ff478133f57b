from catalog_tagger.cache import MemoryCache
from catalog_tagger.catalog import CachingCatalog, candidate_from_item
from catalog_tagger.types import CatalogRequest, QueryKind
from catalog_tagger.tracklist import tracks_by_discs

from helpers import FakeCatalog, album


def test_candidate_from_item():
    cand = candidate_from_item(
        {
            "album": "A Night at the Opera",
            "asin": "B000001",
            "label": " EMI ",
            "release_date": "21 November, 1975",
            "image_url_large": "http://img/l.jpg",
            "sales_rank": 1234,
            "discs": [
                {"number": "2", "tracks": [{"number": 1, "title": "Bonus"}]},
                {"number": 1, "tracks": [{"number": "2", "title": "B"}, {"number": "1", "title": "A"}]},
            ],
        }
    )
    assert cand.album == "A Night at the Opera"
    assert cand.label == "EMI"
    assert cand.year == 1975
    assert cand.sales_rank == "1234"
    assert cand.upc is None
    assert cand.has_tracks
    assert tracks_by_discs(cand) == [["A", "B"], ["Bonus"]]


def test_candidate_from_item_defaults():
    cand = candidate_from_item({"album": "Jazz", "year": "1978"})
    assert cand.year == 1978
    assert cand.discs is None
    assert not cand.has_tracks

    cand = candidate_from_item({"discs": [{"tracks": [{"title": "One"}, {"title": ""}, {"title": "Two"}]}]})
    assert cand.discs[0].number == 1
    assert [(t.number, t.title) for t in cand.discs[0].tracks] == [(1, "One"), (3, "Two")]


def test_caching_catalog_caches_success_only():
    req = CatalogRequest(QueryKind.IDENTIFIER, "B000001", "asin")
    ok = FakeCatalog([album(["x"], album="Jazz")])
    cached = CachingCatalog(ok, MemoryCache())
    first = cached(req)
    second = cached(req)
    assert second is first
    assert len(ok.requests) == 1

    failing = FakeCatalog(error="throttled")
    cached = CachingCatalog(failing, MemoryCache())
    assert cached(req).is_error
    assert cached(req).is_error
    assert len(failing.requests) == 2
