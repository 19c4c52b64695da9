#!/usr/bin/env python3
"""
Archive export tool.

Copies the tables of a SQLite hardware archive into a directory of Parquet
files that the ``parquet`` archive backend can serve.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hwinsight.archive import ARCHIVE_TABLES, export_sqlite_archive
from hwinsight.validation import ArchiveQueryError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """
    Setup logging configuration for the export tool.

    Args:
        verbose: Whether to enable verbose (DEBUG) logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main():
    """
    Main entry point for the archive export tool.

    Exit codes:
        0: At least one table exported
        1: Export failed or no table found
    """
    parser = argparse.ArgumentParser(
        description="Export a SQLite hardware archive to Parquet tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export every archive table
  python tools/export_archive.py hardware_archive.db archive_parquet/

  # Export only process statistics with zstd compression
  python tools/export_archive.py hardware_archive.db out/ --table PROCESS_STATS --compression zstd
        """,
    )
    parser.add_argument("database", help="SQLite archive file")
    parser.add_argument("output", help="Output directory for Parquet tables")
    parser.add_argument(
        "--table",
        action="append",
        choices=list(ARCHIVE_TABLES),
        help="Table to export (repeatable, default: all)",
    )
    parser.add_argument(
        "--compression",
        choices=["snappy", "gzip", "brotli", "lz4", "zstd"],
        default="snappy",
        help="Compression algorithm for Parquet (default: snappy)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()
    setup_logging(args.verbose)

    db_path = Path(args.database)
    if not db_path.exists():
        logger.error(f"Archive does not exist: {db_path}")
        sys.exit(1)

    try:
        exported = export_sqlite_archive(
            db_path, Path(args.output), tables=args.table, compression=args.compression
        )
    except ArchiveQueryError as e:
        logger.error(f"Export failed: {e}")
        sys.exit(1)

    logger.info(f"Exported {len(exported)} tables to {args.output}")
    sys.exit(0 if exported else 1)


if __name__ == "__main__":
    main()
