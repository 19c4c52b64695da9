"""
Archive query gateway.

The archive store is owned by the live sampler; this package only issues
range-bounded queries against it and returns flat rows:

- ArchiveGateway: the interface every backend implements
- SqliteArchiveGateway: the sampler's SQLite database
- ParquetArchiveGateway: exported Parquet tables, queried with Polars SQL
- queries: builders for the hardware archive and process stats queries
"""

from .base import ArchiveGateway, Row
from .export import ARCHIVE_TABLES, export_sqlite_archive, read_sqlite_table
from .factory import create_gateway
from .parquet_gateway import ParquetArchiveGateway
from .queries import (
    archive_column,
    build_archive_query,
    build_process_stats_query,
)
from .sqlite_gateway import SqliteArchiveGateway
from .storage import ParquetTableStore

__all__ = [
    "ARCHIVE_TABLES",
    "export_sqlite_archive",
    "read_sqlite_table",
    "ArchiveGateway",
    "Row",
    "create_gateway",
    "ParquetArchiveGateway",
    "ParquetTableStore",
    "SqliteArchiveGateway",
    "archive_column",
    "build_archive_query",
    "build_process_stats_query",
]
