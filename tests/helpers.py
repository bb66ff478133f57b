from catalog_tagger.types import Candidate, CatalogResponse, CatalogTrack, Disc


def disc(number, *titles, start=1):
    return Disc(number=number, tracks=[CatalogTrack(number=i, title=t) for i, t in enumerate(titles, start)])


def album(titles=None, **kw) -> Candidate:
    if titles is None:
        return Candidate(**kw)
    return Candidate(discs=[disc(1, *titles)], **kw)


OPERA = [
    "Death on Two Legs",
    "Lazing on a Sunday Afternoon",
    "I'm in Love with My Car",
    "You're My Best Friend",
    "'39",
    "Sweet Lady",
    "Seaside Rendezvous",
    "The Prophet's Song",
    "Love of My Life",
    "Good Company",
    "Bohemian Rhapsody",
    "God Save the Queen",
]


class FakeCatalog:
    def __init__(self, candidates=None, error=None):
        self.candidates = candidates or []
        self.error = error
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return CatalogResponse(candidates=list(self.candidates), error=self.error)


class FakeHttp:
    def __init__(self, pages=None):
        self.pages = pages or {}
        self.calls = []

    def get(self, url):
        self.calls.append(url)
        if url not in self.pages:
            raise OSError(f"404 for {url}")
        return self.pages[url]
