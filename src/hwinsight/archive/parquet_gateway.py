"""
Parquet archive gateway.

Executes the same SQL text as the SQLite gateway against Parquet tables,
using the Polars SQL engine. Useful for archives exported off the machine
that recorded them.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import polars as pl

from ..validation import ArchiveQueryError
from .base import ArchiveGateway, Row
from .storage import TABLE_SCHEMAS, ParquetTableStore

logger = logging.getLogger(__name__)


class ParquetArchiveGateway(ArchiveGateway):
    """
    Gateway executing archive queries over a directory of Parquet tables.
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        store: Optional[ParquetTableStore] = None,
    ):
        """
        Initialize the gateway.

        Args:
            data_dir: Directory holding ``<TABLE>.parquet`` files
            store: Table store to read from (defaults to one on ``data_dir``)
        """
        self.store = store or ParquetTableStore(data_dir)
        logger.debug(f"Initialized ParquetArchiveGateway for {self.store.data_dir}")

    def _context(self) -> pl.SQLContext:
        frames = {table: self.store.load_table(table) for table in TABLE_SCHEMAS}
        return pl.SQLContext(frames=frames)

    def load(self, query: str) -> List[Row]:
        """
        Execute a query with the Polars SQL engine.

        Tables are re-read on every call so that files replaced between polls
        are picked up.

        Raises:
            ArchiveQueryError: If a table cannot be read or the query fails
        """
        try:
            result = self._context().execute(query, eager=True)
        except Exception as e:
            logger.error(f"Archive query failed on {self.store.data_dir}: {e}")
            raise ArchiveQueryError(
                f"Parquet query failed: {e}", query=query, cause=e
            ) from e

        rows = result.to_dicts()
        logger.debug(f"Loaded {len(rows)} rows from {self.store.data_dir}")
        return rows
