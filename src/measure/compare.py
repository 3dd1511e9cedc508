"""Baseline comparison."""
from typing import Optional

from src.measure.models import CATEGORIES, Delta, Snapshot


def compare(latest: Snapshot, baseline: Optional[Snapshot]) -> Optional[Delta]:
    """Per-category latest minus baseline, or None without a baseline."""
    if baseline is None:
        return None
    return Delta(**{c: latest.score(c) - baseline.score(c) for c in CATEGORIES})
