"""
SQLite archive gateway.

Reads the archive database written by the live sampler. The connection is
opened lazily and shared between executor threads behind a lock, since
views run their queries through ``loop.run_in_executor``.
"""

import logging
import sqlite3
import threading
from pathlib import Path
from typing import List, Optional, Union

from ..validation import ArchiveQueryError
from .base import ArchiveGateway, Row

logger = logging.getLogger(__name__)


class SqliteArchiveGateway(ArchiveGateway):
    """
    Gateway executing archive queries against a SQLite database.

    The database is opened read-only unless ``read_only`` is False, which the
    test fixtures use to seed data through the same connection settings.
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        timeout: float = 5.0,
        read_only: bool = True,
    ):
        """
        Initialize the gateway.

        Args:
            db_path: Path to the SQLite archive database
            timeout: Seconds to wait on a locked database before failing
            read_only: Open the database in read-only mode
        """
        self.db_path = Path(db_path)
        self.timeout = timeout
        self.read_only = read_only
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        logger.debug(f"Initialized SqliteArchiveGateway for {self.db_path}")

    def _connect(self) -> sqlite3.Connection:
        if self._connection is None:
            if self.read_only:
                uri = f"{self.db_path.resolve().as_uri()}?mode=ro"
                con = sqlite3.connect(
                    uri, uri=True, timeout=self.timeout, check_same_thread=False
                )
            else:
                con = sqlite3.connect(
                    str(self.db_path), timeout=self.timeout, check_same_thread=False
                )
            con.row_factory = sqlite3.Row
            self._connection = con
        return self._connection

    def load(self, query: str) -> List[Row]:
        """
        Execute a query and return its rows as dictionaries.

        Raises:
            ArchiveQueryError: If SQLite cannot open the database or run the query
        """
        with self._lock:
            try:
                cursor = self._connect().execute(query)
                rows = [dict(row) for row in cursor.fetchall()]
            except sqlite3.Error as e:
                logger.error(f"Archive query failed on {self.db_path}: {e}")
                raise ArchiveQueryError(
                    f"SQLite query failed: {e}", query=query, cause=e
                ) from e

        logger.debug(f"Loaded {len(rows)} rows from {self.db_path}")
        return rows

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
