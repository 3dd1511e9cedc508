"""Sequential multi-run sampling of a URL."""
import asyncio
import logging
from typing import Optional

from src.config import config
from src.errors import SamplingFailure
from src.measure.lighthouse import Scorer
from src.measure.models import ScoreSample

logger = logging.getLogger(__name__)


class Sampler:
    """Runs the scorer several times for one URL, one run at a time.

    Failed runs are logged and dropped. Only when every run fails does
    sample() raise SamplingFailure.
    """

    def __init__(self, scorer: Scorer, delay_seconds: Optional[float] = None):
        self.scorer = scorer
        self.delay_seconds = config.RUN_DELAY_SECONDS if delay_seconds is None else delay_seconds
        self.failed_runs = 0

    async def sample(self, url: str, run_count: int = 3) -> list[ScoreSample]:
        """Collect up to run_count samples for url."""
        if run_count < 1:
            raise ValueError(f"run_count must be at least 1, got {run_count}")

        logger.info(f"Testing {url} ({run_count} runs)...")
        samples: list[ScoreSample] = []

        for i in range(1, run_count + 1):
            logger.info(f"  Run {i}/{run_count}")
            try:
                samples.append(await self.scorer.score(url))
            except Exception as e:
                self.failed_runs += 1
                logger.warning(f"  Run {i}/{run_count} failed for {url}: {e}")

            # Small delay between runs
            if i < run_count and self.delay_seconds > 0:
                await asyncio.sleep(self.delay_seconds)

        if not samples:
            raise SamplingFailure(url, run_count)

        if len(samples) < run_count:
            logger.warning(f"  Only {len(samples)}/{run_count} runs succeeded for {url}")
        return samples
