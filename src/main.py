"""Main entry point with CLI."""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import config, Config, load_urls
from src.errors import ConfigLoadFailure
from src.jobs.runner import MonitorRunner
from src.logging_conf import setup_logging
from src.measure.sampler import Sampler
from src.measure.lighthouse import LighthouseScorer
from src.store.repository import SnapshotRepository, create_store

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="PageSpeed Monitor")

    parser.add_argument(
        "--update-baseline",
        action="store_true",
        help="Store results as the new baseline instead of latest (no reports)",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Test a single URL instead of the configured list",
    )
    parser.add_argument(
        "--urls-file",
        type=Path,
        default=None,
        help=f"JSON array of URLs (default: {config.URLS_FILE})",
    )
    parser.add_argument(
        "--runs",
        type=int,
        default=None,
        help=f"Lighthouse runs per URL (default: {config.RUN_COUNT})",
    )
    parser.add_argument(
        "--store",
        choices=["files", "sqlite"],
        default=None,
        help=f"Snapshot storage backend (default: {config.STORE_BACKEND})",
    )
    parser.add_argument(
        "--no-raw-results",
        action="store_true",
        help="Don't keep per-run scores inside stored snapshots",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Development mode (verbose logs, no delay between runs)",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    # Setup logging
    setup_logging()

    # Parse args
    args = parse_args(argv)

    if args.dev:
        Config.RUN_DELAY_SECONDS = 0
        logging.getLogger().setLevel(logging.DEBUG)
    if args.runs is not None:
        Config.RUN_COUNT = args.runs
    if args.store:
        Config.STORE_BACKEND = args.store

    try:
        Config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.url:
        urls = [args.url]
        logger.info(f"Testing single URL: {args.url}")
    else:
        try:
            urls = load_urls(args.urls_file or config.URLS_FILE)
        except ConfigLoadFailure as e:
            logger.error(f"Error loading URLs: {e}")
            return 1
        logger.info(f"Testing {len(urls)} URLs from {(args.urls_file or config.URLS_FILE).name}")

    logger.info("=" * 60)
    logger.info("PageSpeed Monitor Starting")
    logger.info(f"Mode: {'update baseline' if args.update_baseline else 'normal'}")
    logger.info(f"Runs per URL: {config.RUN_COUNT}")
    logger.info(f"Delay between runs: {config.RUN_DELAY_SECONDS}s")
    logger.info(f"Store: {config.STORE_BACKEND}")
    logger.info("=" * 60)

    runner = MonitorRunner(
        urls=urls,
        update_baseline=args.update_baseline,
        run_count=config.RUN_COUNT,
        keep_raw=config.STORE_RAW_RESULTS and not args.no_raw_results,
        sampler=Sampler(LighthouseScorer(), delay_seconds=config.RUN_DELAY_SECONDS),
        repository=SnapshotRepository(create_store(config.STORE_BACKEND)),
    )
    try:
        summary = asyncio.run(runner.run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    if summary.exit_code != 0:
        logger.error("No successful results to save.")
    elif args.update_baseline:
        logger.info("Baseline updated successfully!")
    else:
        logger.info(f"PageSpeed testing completed! Reports available in {config.REPORTS_DIR}")
    return summary.exit_code


if __name__ == "__main__":
    sys.exit(main())
