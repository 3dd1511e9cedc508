"""Logging setup."""
import logging
import sys

from src.config import LOG_LEVELS, config

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once for the CLI and scripts."""
    root = logging.getLogger()
    level_name = (level or config.LOG_LEVEL).upper()
    # Unknown levels are reported by Config.validate(); log at INFO until then
    root.setLevel(level_name if level_name in LOG_LEVELS else logging.INFO)

    # Avoid duplicate handlers if called more than once
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
