"""HTML report per URL: current scores, baseline and delta."""
import logging
from html import escape
from pathlib import Path
from typing import Optional

import aiofiles

from src.config import config
from src.errors import PersistenceFailure
from src.measure.models import Delta, Snapshot
from src.store.keys import url_to_key

logger = logging.getLogger(__name__)

CATEGORY_LABELS = {
    "performance": "Performance",
    "accessibility": "Accessibility",
    "best_practices": "Best Practices",
    "seo": "SEO",
}

REPORT_CSS = """
        body { font-family: Arial, sans-serif; margin: 20px; }
        .header { background: #f5f5f5; padding: 15px; border-radius: 5px; margin-bottom: 20px; }
        .metrics { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 15px; }
        .metric { border: 1px solid #ddd; padding: 15px; border-radius: 5px; }
        .score.good { color: #0c7e3e; font-weight: bold; }
        .score.needs-improvement { color: #e67e22; font-weight: bold; }
        .score.poor { color: #d93025; font-weight: bold; }
        .positive { color: #0c7e3e; font-weight: bold; }
        .negative { color: #d93025; font-weight: bold; }
        .neutral { color: #666; }
        .low-confidence { color: #e67e22; }
        .timestamp { color: #666; font-size: 0.9em; }
        table { width: 100%; border-collapse: collapse; margin-top: 20px; }
        th, td { border: 1px solid #ddd; padding: 10px; text-align: left; }
        th { background-color: #f5f5f5; }
"""


def score_class(score: int) -> str:
    """CSS class for a 0-100 score."""
    if score >= 90:
        return "good"
    if score >= 50:
        return "needs-improvement"
    return "poor"


def format_score(score: int) -> str:
    return f'<span class="score {score_class(score)}">{score}</span>'


def format_delta(value: Optional[int]) -> str:
    if value is None:
        return "N/A"
    sign = "+" if value > 0 else ""
    css = "positive" if value > 0 else "negative" if value < 0 else "neutral"
    return f'<span class="{css}">{sign}{value}</span>'


def _metric_card(category: str, current: Snapshot, baseline: Optional[Snapshot], delta: Optional[Delta]) -> str:
    baseline_line = (
        f"\n            <p>Baseline: {format_score(baseline.score(category))}</p>" if baseline else ""
    )
    return f"""
        <div class="metric">
            <h3>{CATEGORY_LABELS[category]}</h3>
            <p>Current: {format_score(current.score(category))}</p>{baseline_line}
            <p>Delta: {format_delta(delta.score(category) if delta else None)}</p>
        </div>"""


def _comparison_table(current: Snapshot, baseline: Snapshot, delta: Delta) -> str:
    rows = "".join(
        f"""
            <tr>
                <td>{label}</td>
                <td>{format_score(baseline.score(category))}</td>
                <td>{format_score(current.score(category))}</td>
                <td>{format_delta(delta.score(category))}</td>
            </tr>"""
        for category, label in CATEGORY_LABELS.items()
    )
    return f"""
    <table>
        <thead>
            <tr>
                <th>Metric</th>
                <th>Baseline</th>
                <th>Current</th>
                <th>Change</th>
            </tr>
        </thead>
        <tbody>{rows}
        </tbody>
    </table>"""


def render_html(
    current: Snapshot,
    baseline: Optional[Snapshot],
    delta: Optional[Delta],
    expected_runs: Optional[int] = None,
) -> str:
    """Build the report page for one URL."""
    url = escape(current.url)
    runs_line = f"Based on {current.runs} Lighthouse runs (averaged)"
    if expected_runs and current.runs < expected_runs:
        runs_line = (
            f'Based on {current.runs} of {expected_runs} Lighthouse runs (averaged) '
            f'<span class="low-confidence">low confidence</span>'
        )

    cards = "".join(_metric_card(c, current, baseline, delta) for c in CATEGORY_LABELS)
    if baseline is not None and delta is not None:
        comparison = _comparison_table(current, baseline, delta)
    else:
        comparison = (
            "\n    <p><em>No baseline data available. "
            "Run with --update-baseline to establish baseline.</em></p>"
        )

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>PageSpeed Report - {url}</title>
    <style>{REPORT_CSS}    </style>
</head>
<body>
    <div class="header">
        <h1>PageSpeed Report</h1>
        <h2>{url}</h2>
        <p class="timestamp">Generated: {current.timestamp.isoformat()}</p>
        <p class="runs">{runs_line}</p>
    </div>

    <div class="metrics">{cards}
    </div>
{comparison}
</body>
</html>
"""


class HtmlReportRenderer:
    """Writes reports/<key>.html for each measured URL."""

    def __init__(self, reports_dir: Optional[Path] = None, expected_runs: Optional[int] = None):
        self.reports_dir = reports_dir or config.REPORTS_DIR
        self.expected_runs = expected_runs

    def path_for(self, url: str) -> Path:
        return self.reports_dir / f"{url_to_key(url)}.html"

    async def render(
        self,
        current: Snapshot,
        baseline: Optional[Snapshot],
        delta: Optional[Delta],
    ) -> Path:
        """Render and write the report, returning its path."""
        html = render_html(current, baseline, delta, expected_runs=self.expected_runs)
        path = self.path_for(current.url)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(html)
        except OSError as e:
            raise PersistenceFailure(f"Cannot write report {path}: {e}") from e
        logger.info(f"Generated report: {path.name}")
        return path
