"""Configuration management from environment variables."""
import os
from pathlib import Path

import orjson
from dotenv import load_dotenv

from src.errors import ConfigLoadFailure
from src.store.keys import find_key_collisions

# Load .env file
load_dotenv()

# Project root
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
SNAPSHOT_DB = DATA_DIR / "snapshots.db"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration."""

    # Inputs and outputs
    URLS_FILE: Path = Path(os.getenv("URLS_FILE", str(PROJECT_ROOT / "urls.json")))
    BASELINE_DIR: Path = Path(os.getenv("BASELINE_DIR", str(PROJECT_ROOT / "baseline")))
    LATEST_DIR: Path = Path(os.getenv("LATEST_DIR", str(PROJECT_ROOT / "latest")))
    REPORTS_DIR: Path = Path(os.getenv("REPORTS_DIR", str(PROJECT_ROOT / "reports")))
    DOCS_DIR: Path = Path(os.getenv("DOCS_DIR", str(PROJECT_ROOT / "docs")))
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "files")

    # Sampling
    RUN_COUNT: int = int(os.getenv("RUN_COUNT", "3"))
    RUN_DELAY_SECONDS: float = float(os.getenv("RUN_DELAY_SECONDS", "2.0"))
    STORE_RAW_RESULTS: bool = _env_bool("STORE_RAW_RESULTS", "true")

    # Lighthouse
    LIGHTHOUSE_CMD: str = os.getenv("LIGHTHOUSE_CMD", "npx lighthouse")
    CHROME_FLAGS: str = os.getenv("CHROME_FLAGS", "--headless --no-sandbox")
    SCORER_TIMEOUT: int = int(os.getenv("SCORER_TIMEOUT", "120"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration values."""
        errors = []
        if cls.RUN_COUNT < 1:
            errors.append("RUN_COUNT must be at least 1")
        if cls.RUN_DELAY_SECONDS < 0:
            errors.append("RUN_DELAY_SECONDS must not be negative")
        if cls.SCORER_TIMEOUT <= 0:
            errors.append("SCORER_TIMEOUT must be positive")
        if cls.STORE_BACKEND not in ("files", "sqlite"):
            errors.append(f"STORE_BACKEND must be 'files' or 'sqlite', got {cls.STORE_BACKEND!r}")
        if not cls.LIGHTHOUSE_CMD.strip():
            errors.append("LIGHTHOUSE_CMD is required")
        if cls.LOG_LEVEL.upper() not in LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {cls.LOG_LEVEL!r}")
        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")


config = Config()


def load_urls(path: Path) -> list[str]:
    """Load the ordered list of URLs to monitor from a JSON array file."""
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigLoadFailure(f"Cannot read URL list {path}: {e}") from e

    try:
        urls = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise ConfigLoadFailure(f"URL list {path} is not valid JSON: {e}") from e

    if not isinstance(urls, list):
        raise ConfigLoadFailure(f"URL list {path} must be a JSON array")
    if not urls:
        raise ConfigLoadFailure(f"URL list {path} is empty")

    bad = [u for u in urls if not isinstance(u, str) or not u.strip()]
    if bad:
        raise ConfigLoadFailure(f"URL list {path} contains invalid entries: {bad!r}")

    urls = [u.strip() for u in urls]
    collisions = find_key_collisions(urls)
    if collisions:
        details = "; ".join(f"{key}: {', '.join(group)}" for key, group in collisions.items())
        raise ConfigLoadFailure(f"URLs map to the same storage key: {details}")

    return urls
