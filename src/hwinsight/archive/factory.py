"""
Factory for creating archive gateways.
"""

import logging
from pathlib import Path
from typing import Literal, Union

from .base import ArchiveGateway
from .parquet_gateway import ParquetArchiveGateway
from .sqlite_gateway import SqliteArchiveGateway

logger = logging.getLogger(__name__)


def create_gateway(
    backend: Literal["sqlite", "parquet"],
    path: Union[str, Path],
) -> ArchiveGateway:
    """
    Create a gateway for the configured archive backend.

    Args:
        backend: Archive backend ('sqlite' or 'parquet')
        path: SQLite database file or Parquet table directory

    Returns:
        ArchiveGateway instance

    Raises:
        ValueError: If an unsupported backend is specified
    """
    if backend == "sqlite":
        logger.debug(f"Creating SqliteArchiveGateway for {path}")
        return SqliteArchiveGateway(path)
    elif backend == "parquet":
        logger.debug(f"Creating ParquetArchiveGateway for {path}")
        return ParquetArchiveGateway(path)
    else:
        raise ValueError(f"Unsupported archive backend: {backend}")
