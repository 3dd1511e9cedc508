"""Main job runner orchestrating the measurement pipeline."""
import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

from src.config import config
from src.errors import DeserializationFailure, PersistenceFailure, SamplingFailure
from src.jobs.metrics import Metrics
from src.jobs.metrics_exporter import MetricsExporter
from src.measure.aggregate import aggregate
from src.measure.compare import compare
from src.measure.lighthouse import LighthouseScorer, Scorer
from src.measure.models import Delta, Slot, Snapshot
from src.measure.sampler import Sampler
from src.report.html_report import HtmlReportRenderer
from src.store.repository import SnapshotRepository, create_store

logger = logging.getLogger(__name__)


class ReportRenderer(Protocol):
    async def render(
        self,
        current: Snapshot,
        baseline: Optional[Snapshot],
        delta: Optional[Delta],
    ) -> Path: ...


class UrlState(str, Enum):
    """Per-URL pipeline states."""

    START = "start"
    SAMPLED = "sampled"
    AGGREGATED = "aggregated"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class UrlOutcome:
    """What happened to one URL during a run."""

    url: str
    state: UrlState = UrlState.START
    snapshot: Optional[Snapshot] = None
    baseline: Optional[Snapshot] = None
    delta: Optional[Delta] = None
    report_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def measured(self) -> bool:
        """True once an averaged snapshot was produced."""
        return self.snapshot is not None


@dataclass
class RunSummary:
    """Outcome of a full run over the URL set."""

    run_id: str
    update_baseline: bool
    outcomes: list[UrlOutcome] = field(default_factory=list)

    @property
    def completed(self) -> list[UrlOutcome]:
        return [o for o in self.outcomes if o.state is UrlState.COMPLETED]

    @property
    def failed(self) -> list[UrlOutcome]:
        return [o for o in self.outcomes if o.state is UrlState.FAILED]

    @property
    def exit_code(self) -> int:
        """Non-zero only when no URL produced a snapshot."""
        return 0 if any(o.measured for o in self.outcomes) else 1


class MonitorRunner:
    """Measures every URL in turn and stores/compares the results.

    URLs are processed strictly one at a time, and each URL's runs are
    sequential, so at most one Lighthouse process is alive at any moment.
    """

    def __init__(
        self,
        urls: list[str],
        update_baseline: bool = False,
        run_count: Optional[int] = None,
        keep_raw: Optional[bool] = None,
        scorer: Optional[Scorer] = None,
        sampler: Optional[Sampler] = None,
        repository: Optional[SnapshotRepository] = None,
        renderer: Optional[ReportRenderer] = None,
        metrics_file: Optional[Path] = None,
    ):
        self.urls = urls
        self.update_baseline = update_baseline
        self.run_count = run_count or config.RUN_COUNT
        self.keep_raw = config.STORE_RAW_RESULTS if keep_raw is None else keep_raw

        # Generate run_id
        self.run_id = str(uuid.uuid4())
        logger.info(f"Run ID: {self.run_id}")

        self.sampler = sampler or Sampler(scorer or LighthouseScorer())
        self.repository = repository or SnapshotRepository(create_store())
        self.renderer = renderer or HtmlReportRenderer(expected_runs=self.run_count)

        self.metrics = Metrics(len(urls))
        self.metrics_exporter = MetricsExporter(self.run_id, metrics_file)

    @property
    def mode(self) -> str:
        return "baseline" if self.update_baseline else "normal"

    async def run(self) -> RunSummary:
        """Process every URL and return the run summary."""
        summary = RunSummary(run_id=self.run_id, update_baseline=self.update_baseline)

        for url in self.urls:
            outcome = await self._process_url(url)
            summary.outcomes.append(outcome)

            self.metrics.increment("processed")
            self.metrics.increment("ok" if outcome.state is UrlState.COMPLETED else "failed")
            self.metrics.report()

        await self._final_report(summary)
        return summary

    async def _process_url(self, url: str) -> UrlOutcome:
        """Run one URL through sample -> aggregate -> save (-> compare -> render)."""
        outcome = UrlOutcome(url=url)
        failed_before = self.sampler.failed_runs

        try:
            samples = await self.sampler.sample(url, self.run_count)
        except SamplingFailure as e:
            logger.error(str(e))
            outcome.state = UrlState.FAILED
            outcome.error = str(e)
            return outcome
        finally:
            self.metrics.increment("failed_runs", self.sampler.failed_runs - failed_before)
        outcome.state = UrlState.SAMPLED
        self.metrics.increment("samples", len(samples))

        snapshot = aggregate(url, samples, keep_raw=self.keep_raw)
        outcome.snapshot = snapshot
        outcome.state = UrlState.AGGREGATED
        if snapshot.runs < self.run_count:
            self.metrics.increment("low_confidence")
        logger.info(
            f"  Averaged scores: P:{snapshot.performance} A:{snapshot.accessibility} "
            f"BP:{snapshot.best_practices} SEO:{snapshot.seo}"
        )

        try:
            if self.update_baseline:
                await self.repository.save(Slot.BASELINE, snapshot)
            else:
                await self.repository.save(Slot.LATEST, snapshot)
                outcome.baseline = await self.repository.load(Slot.BASELINE, url)
                outcome.delta = compare(snapshot, outcome.baseline)
                outcome.report_path = await self.renderer.render(snapshot, outcome.baseline, outcome.delta)
        except (PersistenceFailure, DeserializationFailure) as e:
            logger.error(f"Error processing {url}: {e}", exc_info=True)
            outcome.state = UrlState.FAILED
            outcome.error = str(e)
            return outcome

        outcome.state = UrlState.COMPLETED
        return outcome

    async def _final_report(self, summary: RunSummary) -> None:
        """Log and export the final report."""
        stats = self.metrics.get_summary()
        failed_urls = [o.url for o in summary.failed]

        logger.info("=" * 60)
        logger.info("FINAL REPORT")
        logger.info(f"Run ID: {self.run_id}")
        logger.info(f"Mode: {self.mode}")
        logger.info(f"Elapsed: {stats['elapsed_seconds']:.1f} seconds")
        logger.info(f"Completed: {len(summary.completed)}/{len(self.urls)}")
        logger.info(f"Failed: {len(failed_urls)}")
        logger.info(f"Lighthouse runs: {stats['samples']} ok, {stats['failed_runs']} failed")
        if stats["low_confidence"]:
            logger.info(f"Low-confidence snapshots: {stats['low_confidence']}")
        for url in failed_urls:
            logger.info(f"  failed: {url}")
        logger.info("=" * 60)

        try:
            await self.metrics_exporter.export_summary(self.mode, stats, failed_urls)
        except OSError as e:
            logger.warning(f"Could not export metrics: {e}")
