"""Metrics exporter for observability."""
import json
import time
from pathlib import Path
from typing import Optional
import aiofiles

from src.config import DATA_DIR

METRICS_FILE = DATA_DIR / "metrics.jsonl"


class MetricsExporter:
    """Appends one JSON line per monitoring run."""

    def __init__(self, run_id: str, metrics_file: Optional[Path] = None):
        self.run_id = run_id
        self.metrics_file = metrics_file or METRICS_FILE

    async def export_summary(self, mode: str, summary: dict, failed_urls: list[str]) -> None:
        """Export the run summary to the JSONL file."""
        metrics = {
            "ts": time.time(),
            "run_id": self.run_id,
            "mode": mode,
            **summary,
            "failed_urls": failed_urls,
        }

        self.metrics_file.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(metrics) + "\n"
        async with aiofiles.open(self.metrics_file, "a") as f:
            await f.write(line)
