#!/usr/bin/env python3
"""Generate the dashboard index (docs/index.html) from latest snapshots."""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import config
from src.logging_conf import setup_logging
from src.report.index import generate_index
from src.store.repository import SnapshotRepository, create_store

logger = logging.getLogger(__name__)


def main() -> int:
    setup_logging()

    parser = argparse.ArgumentParser(description="Generate the PageSpeed dashboard index")
    parser.add_argument("--store", choices=["files", "sqlite"], default=None)
    parser.add_argument("--reports-dir", type=Path, default=config.REPORTS_DIR)
    parser.add_argument("--docs-dir", type=Path, default=config.DOCS_DIR)
    args = parser.parse_args()

    repository = SnapshotRepository(create_store(args.store))
    try:
        asyncio.run(generate_index(repository, args.reports_dir, args.docs_dir))
    except OSError as e:
        logger.error(f"Error generating index: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
