"""
Parquet table store using Polars.

Holds one Parquet file per archive table (``<TABLE>.parquet``) in a
directory. Used by the Parquet gateway to read tables and by the export tool
to write them.
"""

import logging
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

import polars as pl

from .queries import DATA_ARCHIVE_TABLE, GPU_DATA_ARCHIVE_TABLE, PROCESS_STATS_TABLE

logger = logging.getLogger(__name__)

Compression = Literal["snappy", "gzip", "brotli", "lz4", "zstd"]

# Timestamps are ISO-8601 strings, as written by the sampler.
TABLE_SCHEMAS: Dict[str, Dict[str, pl.DataType]] = {
    DATA_ARCHIVE_TABLE: {
        "id": pl.Int64,
        "cpu_avg": pl.Float64,
        "cpu_max": pl.Float64,
        "cpu_min": pl.Float64,
        "ram_avg": pl.Float64,
        "ram_max": pl.Float64,
        "ram_min": pl.Float64,
        "timestamp": pl.Utf8,
    },
    GPU_DATA_ARCHIVE_TABLE: {
        "id": pl.Int64,
        "gpu_name": pl.Utf8,
        "usage_avg": pl.Float64,
        "usage_max": pl.Float64,
        "usage_min": pl.Float64,
        "temperature_avg": pl.Float64,
        "temperature_max": pl.Float64,
        "temperature_min": pl.Float64,
        "dedicated_memory_avg": pl.Float64,
        "dedicated_memory_max": pl.Float64,
        "dedicated_memory_min": pl.Float64,
        "timestamp": pl.Utf8,
    },
    PROCESS_STATS_TABLE: {
        "id": pl.Int64,
        "pid": pl.Int64,
        "process_name": pl.Utf8,
        "cpu_usage": pl.Float64,
        "memory_usage": pl.Float64,
        "execution_sec": pl.Int64,
        "timestamp": pl.Utf8,
    },
}


class ParquetTableStore:
    """
    Directory of archive tables stored as Parquet files.
    """

    def __init__(self, data_dir: Union[str, Path], compression: Compression = "snappy"):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding ``<TABLE>.parquet`` files
            compression: Compression algorithm used when writing
        """
        self.data_dir = Path(data_dir)
        self.compression = compression
        logger.debug(f"Initialized ParquetTableStore at {self.data_dir} ({compression})")

    def table_path(self, table: str) -> Path:
        return self.data_dir / f"{table}.parquet"

    def table_exists(self, table: str) -> bool:
        return self.table_path(table).exists()

    def empty_table(self, table: str) -> pl.DataFrame:
        """An empty frame with the known schema of ``table``."""
        return pl.DataFrame(schema=TABLE_SCHEMAS.get(table, {}))

    def save_table(self, table: str, df: pl.DataFrame) -> Path:
        """
        Write ``df`` as the full contents of ``table``.

        Returns:
            Path of the written file
        """
        path = self.table_path(table)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            df.write_parquet(path, compression=self.compression)
            logger.debug(f"Saved {len(df)} rows of {table} to {path}")
            return path
        except Exception as e:
            logger.error(f"Failed to save {table} to {path}: {e}")
            raise

    def load_table(self, table: str, columns: Optional[List[str]] = None) -> pl.DataFrame:
        """
        Read ``table``, or an empty frame with its schema if no file exists.

        Args:
            table: Table name
            columns: Optional list of columns to load (column pruning)
        """
        path = self.table_path(table)
        if not self.table_exists(table):
            logger.debug(f"No Parquet file for {table}, using an empty table")
            df = self.empty_table(table)
            return df.select(columns) if columns else df
        try:
            return pl.read_parquet(path, columns=columns)
        except Exception as e:
            logger.error(f"Failed to load {table} from {path}: {e}")
            raise
