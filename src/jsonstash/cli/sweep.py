"""
CLI for running a single retention sweep.

Deletes item files older than the retention threshold right now, without
waiting for the server's midnight schedule. Only the data directory is
touched: a running server keeps any in-memory copies until its own sweep.
"""

import argparse
import logging
from pathlib import Path

from api.repositories.local import LocalFileRepository
from jsonstash.logging_setup import setup_logging
from jsonstash.retention import RetentionSweeper
from jsonstash.settings import get_settings
from jsonstash.store import ItemStore

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Delete stored items older than the retention threshold"
    )

    cfg = get_settings()

    parser.add_argument(
        "--data-dir",
        type=Path,
        default=cfg.data_dir,
        help=f"Directory holding <id>.json item files (default: {cfg.data_dir})"
    )

    parser.add_argument(
        "--days",
        type=int,
        default=cfg.retention.days,
        help=f"Delete items not modified for more than this many days (default: {cfg.retention.days})"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report which items would be deleted"
    )

    args = parser.parse_args(argv)
    setup_logging(cfg.log_level)

    if args.days < 1:
        logger.error(f"--days must be at least 1, got {args.days}")
        return 1

    if not args.data_dir.is_dir():
        logger.error(f"Data directory not found: {args.data_dir}")
        return 1

    sweeper = RetentionSweeper(
        repository=LocalFileRepository(args.data_dir),
        item_store=ItemStore(),
        retention_days=args.days,
        timezone_name=cfg.retention.timezone,
    )

    logger.info(f"Sweeping {args.data_dir} (retention={args.days}d, dry_run={args.dry_run})")
    report = sweeper.sweep(dry_run=args.dry_run)

    verb = "Would delete" if args.dry_run else "Deleted"
    logger.info(f"{verb} {len(report.deleted)} of {report.scanned} items")

    if report.failed:
        logger.error(f"Failed on {len(report.failed)} items: {', '.join(report.failed)}")
        return 1
    return 0


if __name__ == "__main__":
    exit(main())
