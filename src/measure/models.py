"""Data models for Lighthouse measurements."""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Attribute name -> Lighthouse category id
CATEGORIES: dict[str, str] = {
    "performance": "performance",
    "accessibility": "accessibility",
    "best_practices": "best-practices",
    "seo": "seo",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Slot(str, Enum):
    """Snapshot namespaces."""

    BASELINE = "baseline"
    LATEST = "latest"


class CategoryScores(BaseModel):
    """The four Lighthouse category scores, 0-100 each."""

    model_config = ConfigDict(populate_by_name=True)

    performance: int = Field(..., ge=0, le=100)
    accessibility: int = Field(..., ge=0, le=100)
    best_practices: int = Field(..., ge=0, le=100, alias="bestPractices")
    seo: int = Field(..., ge=0, le=100)

    def score(self, category: str) -> int:
        return getattr(self, category)


class ScoreSample(CategoryScores):
    """Result of one Lighthouse run."""

    timestamp: datetime = Field(default_factory=utcnow)


class Snapshot(CategoryScores):
    """Averaged measurement for a URL, stored in a slot."""

    url: str = Field(..., min_length=1)
    runs: int = Field(..., ge=1, description="Number of samples averaged")
    timestamp: datetime = Field(default_factory=utcnow)
    raw_results: Optional[list[ScoreSample]] = Field(default=None, alias="rawResults")

    def to_record(self) -> dict:
        """Flat JSON-ready dict in the persisted field layout."""
        record = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        # Persisted key order: url first, then runs
        ordered = {"url": record.pop("url"), "runs": record.pop("runs")}
        ordered.update(record)
        return ordered

    def scores_equal(self, other: "Snapshot") -> bool:
        """Compare url, runs and scores, ignoring timestamps and raw results."""
        return (
            self.url == other.url
            and self.runs == other.runs
            and all(self.score(c) == other.score(c) for c in CATEGORIES)
        )


@dataclass(frozen=True)
class Delta:
    """Signed per-category difference, latest minus baseline."""

    performance: int
    accessibility: int
    best_practices: int
    seo: int

    def score(self, category: str) -> int:
        return getattr(self, category)

    def is_zero(self) -> bool:
        return all(self.score(c) == 0 for c in CATEGORIES)
