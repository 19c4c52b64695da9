"""
Export of a SQLite archive into a Parquet table directory.

Lets the Parquet gateway serve an archive copied off the monitored host.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import polars as pl

from ..validation import ArchiveQueryError
from .queries import DATA_ARCHIVE_TABLE, GPU_DATA_ARCHIVE_TABLE, PROCESS_STATS_TABLE
from .storage import TABLE_SCHEMAS, Compression, ParquetTableStore

logger = logging.getLogger(__name__)

ARCHIVE_TABLES = (DATA_ARCHIVE_TABLE, GPU_DATA_ARCHIVE_TABLE, PROCESS_STATS_TABLE)


def read_sqlite_table(conn: sqlite3.Connection, table: str) -> pl.DataFrame:
    """
    Read one archive table into a frame typed with its known schema.

    Columns missing from the known schema keep the type Polars infers.
    """
    cursor = conn.execute(f"SELECT * FROM {table}")
    columns = [desc[0] for desc in cursor.description]
    rows = cursor.fetchall()

    known = TABLE_SCHEMAS.get(table, {})
    overrides = {name: known[name] for name in columns if name in known}
    return pl.DataFrame(
        rows,
        schema=columns,
        schema_overrides=overrides,
        orient="row",
        infer_schema_length=None,
    )


def export_sqlite_archive(
    db_path: Union[str, Path],
    output_dir: Union[str, Path],
    tables: Optional[Iterable[str]] = None,
    compression: Compression = "snappy",
) -> Dict[str, int]:
    """
    Copy archive tables from a SQLite database into Parquet files.

    Tables absent from the database are skipped with a warning.

    Args:
        db_path: SQLite archive file
        output_dir: Directory receiving ``<TABLE>.parquet`` files
        tables: Tables to export (defaults to all archive tables)
        compression: Parquet compression algorithm

    Returns:
        Mapping of exported table name to row count

    Raises:
        ArchiveQueryError: If the database cannot be read
    """
    store = ParquetTableStore(output_dir, compression=compression)
    exported: Dict[str, int] = {}

    try:
        conn = sqlite3.connect(str(db_path))
    except sqlite3.Error as e:
        raise ArchiveQueryError(f"Cannot open archive {db_path}: {e}", cause=e) from e

    try:
        present = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
        for table in tables or ARCHIVE_TABLES:
            if table not in present:
                logger.warning(f"Table {table} not found in {db_path}, skipping")
                continue
            df = read_sqlite_table(conn, table)
            store.save_table(table, df)
            exported[table] = len(df)
            logger.info(f"Exported {len(df)} rows of {table}")
    except sqlite3.Error as e:
        raise ArchiveQueryError(f"Failed to read archive {db_path}: {e}", cause=e) from e
    finally:
        conn.close()

    return exported
