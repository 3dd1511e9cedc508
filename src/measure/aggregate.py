"""Reduce repeated Lighthouse samples into one averaged snapshot."""
from typing import Iterable, Sequence

from src.errors import EmptySampleSet
from src.measure.models import CATEGORIES, ScoreSample, Snapshot, utcnow


def mean_score(values: Iterable[int]) -> int:
    """Arithmetic mean of integer scores, rounded half-up to an integer."""
    values = list(values)
    if not values:
        raise EmptySampleSet("Cannot average an empty set of scores")
    total = sum(values)
    n = len(values)
    # floor(total / n + 0.5) without float error
    return (2 * total + n) // (2 * n)


def aggregate(url: str, samples: Sequence[ScoreSample], keep_raw: bool = True) -> Snapshot:
    """Average each category across samples into a Snapshot for url."""
    if not samples:
        raise EmptySampleSet(f"No samples to aggregate for {url}")

    averaged = {
        category: mean_score(sample.score(category) for sample in samples)
        for category in CATEGORIES
    }
    return Snapshot(
        url=url,
        runs=len(samples),
        timestamp=utcnow(),
        raw_results=list(samples) if keep_raw else None,
        **averaged,
    )
