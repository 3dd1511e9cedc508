"""Lighthouse scorer: runs the Lighthouse CLI and parses its JSON report."""
import asyncio
import logging
import shlex
from typing import Optional, Protocol

import orjson

from src.config import config
from src.errors import ScorerError
from src.measure.models import CATEGORIES, ScoreSample, utcnow

logger = logging.getLogger(__name__)


class Scorer(Protocol):
    """Anything that can measure one URL once."""

    async def score(self, url: str) -> ScoreSample: ...


def parse_lighthouse_output(output: bytes | str) -> ScoreSample:
    """Extract the four category scores from a Lighthouse JSON report."""
    try:
        result = orjson.loads(output)
    except orjson.JSONDecodeError as e:
        raise ScorerError(f"Lighthouse output is not valid JSON: {e}") from e

    categories = result.get("categories") if isinstance(result, dict) else None
    if not isinstance(categories, dict):
        raise ScorerError("Invalid Lighthouse result format - no categories found")

    scores = {}
    for attr, category_id in CATEGORIES.items():
        raw = (categories.get(category_id) or {}).get("score")
        # Lighthouse reports null for categories it could not score; round half-up
        scores[attr] = int((raw or 0) * 100 + 0.5)
    return ScoreSample(timestamp=utcnow(), **scores)


class LighthouseScorer:
    """Runs `lighthouse <url> --output=json` in a subprocess."""

    def __init__(
        self,
        command: Optional[str] = None,
        chrome_flags: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.command = shlex.split(command or config.LIGHTHOUSE_CMD)
        self.chrome_flags = chrome_flags if chrome_flags is not None else config.CHROME_FLAGS
        self.timeout = timeout or config.SCORER_TIMEOUT

    def build_args(self, url: str) -> list[str]:
        """Command line for one run."""
        args = [*self.command, url, "--output=json", "--quiet"]
        if self.chrome_flags:
            args.append(f"--chrome-flags={self.chrome_flags}")
        return args

    async def score(self, url: str) -> ScoreSample:
        """Run Lighthouse once for url."""
        args = self.build_args(url)
        logger.debug(f"Running: {' '.join(args)}")
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ScorerError(f"Cannot start Lighthouse ({args[0]}): {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise ScorerError(f"Lighthouse timed out after {self.timeout}s for {url}") from e
        finally:
            # Cancellation or timeout must not leave Chrome running
            if proc.returncode is None:
                try:
                    proc.kill()
                except ProcessLookupError:
                    pass
                await proc.wait()

        if proc.returncode != 0:
            message = stderr.decode(errors="replace").strip().splitlines()
            tail = message[-1] if message else "no output"
            raise ScorerError(f"Lighthouse exited with {proc.returncode} for {url}: {tail}")

        return parse_lighthouse_output(stdout)
