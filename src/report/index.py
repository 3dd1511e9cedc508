"""Dashboard index page over all latest snapshots."""
import logging
import shutil
from datetime import datetime
from html import escape
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import aiofiles

from src.config import config
from src.measure.aggregate import mean_score
from src.measure.models import Slot, Snapshot
from src.report.html_report import CATEGORY_LABELS, score_class
from src.store.keys import url_to_key
from src.store.repository import SnapshotRepository

logger = logging.getLogger(__name__)

SCORE_COLORS = {
    "good": "#22543d",
    "needs-improvement": "#b7791f",
    "poor": "#c53030",
}

INDEX_CSS = """
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
               line-height: 1.6; color: #333; background: #f8fafc; padding: 20px; }
        .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white;
                  padding: 40px 20px; border-radius: 12px; text-align: center; margin-bottom: 30px; }
        .stats, .reports-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
                                gap: 20px; margin-bottom: 30px; }
        .stat-card, .report-card { background: white; padding: 20px; border-radius: 8px;
                                   box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .stat-card { text-align: center; }
        .stat-number { font-size: 2rem; font-weight: bold; }
        .stat-label { color: #666; font-size: 0.9rem; }
        .scores { display: grid; grid-template-columns: 1fr 1fr; gap: 8px; margin: 12px 0; }
        .score { display: flex; justify-content: space-between; padding: 4px 8px; border-radius: 4px; }
        .score.good { background: #c6f6d5; }
        .score.needs-improvement { background: #fefcbf; }
        .score.poor { background: #fed7d7; }
        .no-reports, .footer { text-align: center; color: #666; padding: 20px; }
"""


def display_name(url: str) -> str:
    """Host, plus the path when it is not the site root."""
    parsed = urlparse(url)
    host = parsed.hostname or url
    if parsed.path in ("", "/"):
        return host
    return f"{host}{parsed.path}"


def _stats_section(snapshots: list[Snapshot]) -> str:
    if not snapshots:
        return ""
    cards = []
    for category, label in CATEGORY_LABELS.items():
        avg = mean_score(s.score(category) for s in snapshots)
        color = SCORE_COLORS[score_class(avg)]
        cards.append(
            f"""
        <div class="stat-card">
            <div class="stat-number" style="color: {color}">{avg}</div>
            <div class="stat-label">Avg {label}</div>
        </div>"""
        )
    return f'\n    <div class="stats">{"".join(cards)}\n    </div>'


def _report_card(snapshot: Snapshot) -> str:
    scores = "".join(
        f"""
            <div class="score {score_class(snapshot.score(category))}">
                <span class="score-label">{label}</span>
                <span class="score-value">{snapshot.score(category)}</span>
            </div>"""
        for category, label in CATEGORY_LABELS.items()
    )
    return f"""
    <div class="report-card">
        <h3 class="report-title">{escape(display_name(snapshot.url))}</h3>
        <div class="scores">{scores}
        </div>
        <a href="{url_to_key(snapshot.url)}.html" class="view-report">View Full Report</a>
    </div>"""


def render_index(snapshots: list[Snapshot], generated_at: Optional[datetime] = None) -> str:
    """Build the dashboard page."""
    generated_at = generated_at or datetime.now()
    if snapshots:
        body = f'\n    <div class="reports-grid">{"".join(_report_card(s) for s in snapshots)}\n    </div>'
    else:
        body = """
    <div class="no-reports">
        <h2>No reports available yet</h2>
        <p>Reports will appear here after the first PageSpeed test runs.</p>
    </div>"""

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>PageSpeed Monitoring Dashboard</title>
    <style>{INDEX_CSS}    </style>
</head>
<body>
    <div class="header">
        <h1>PageSpeed Monitoring Dashboard</h1>
        <p>Performance monitoring with Lighthouse</p>
    </div>
{_stats_section(snapshots)}
{body}

    <div class="footer">
        <p>Last updated: {generated_at.strftime("%Y-%m-%d %H:%M:%S")}</p>
    </div>
</body>
</html>
"""


async def generate_index(
    repository: SnapshotRepository,
    reports_dir: Optional[Path] = None,
    docs_dir: Optional[Path] = None,
) -> Path:
    """Copy HTML reports into docs/ and write docs/index.html."""
    reports_dir = reports_dir or config.REPORTS_DIR
    docs_dir = docs_dir or config.DOCS_DIR
    docs_dir.mkdir(parents=True, exist_ok=True)

    copied = 0
    if reports_dir.exists():
        for report in reports_dir.glob("*.html"):
            shutil.copy2(report, docs_dir / report.name)
            copied += 1
    logger.info(f"Copied {copied} report(s) to {docs_dir}")

    snapshots = await repository.load_all(Slot.LATEST)
    index_path = docs_dir / "index.html"
    async with aiofiles.open(index_path, "w", encoding="utf-8") as f:
        await f.write(render_index(snapshots))
    logger.info(f"Generated dashboard index at {index_path} ({len(snapshots)} URLs)")
    return index_path
