"""Test doubles for the scorer and report renderer."""
from src.errors import ScorerError
from src.measure.models import ScoreSample


def make_sample(performance=70, accessibility=70, best_practices=70, seo=70) -> ScoreSample:
    return ScoreSample(
        performance=performance,
        accessibility=accessibility,
        best_practices=best_practices,
        seo=seo,
    )


class FakeScorer:
    """Returns queued results per URL; an Exception entry makes that run fail."""

    def __init__(self, results=None, default=None):
        self.results = {url: list(queue) for url, queue in (results or {}).items()}
        self.default = default
        self.calls: list[str] = []

    async def score(self, url: str) -> ScoreSample:
        self.calls.append(url)
        queue = self.results.get(url)
        result = queue.pop(0) if queue else self.default
        if result is None:
            raise ScorerError(f"no result queued for {url}")
        if isinstance(result, Exception):
            raise result
        return result


class RecordingRenderer:
    """Collects what the runner hands to the report renderer."""

    def __init__(self, tmp_path):
        self.tmp_path = tmp_path
        self.calls = []

    async def render(self, current, baseline, delta):
        self.calls.append((current, baseline, delta))
        return self.tmp_path / f"{len(self.calls)}.html"
