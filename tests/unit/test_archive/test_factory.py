"""
Unit tests for the archive gateway factory.
"""

import pytest

from hwinsight.archive.factory import create_gateway
from hwinsight.archive.parquet_gateway import ParquetArchiveGateway
from hwinsight.archive.sqlite_gateway import SqliteArchiveGateway


class TestCreateGateway:
    """Test cases for create_gateway."""

    def test_create_sqlite(self, temp_dir):
        gateway = create_gateway("sqlite", temp_dir / "archive.db")
        assert isinstance(gateway, SqliteArchiveGateway)
        assert gateway.db_path == temp_dir / "archive.db"

    def test_create_parquet(self, temp_dir):
        gateway = create_gateway("parquet", temp_dir)
        assert isinstance(gateway, ParquetArchiveGateway)
        assert gateway.store.data_dir == temp_dir

    def test_unsupported_backend(self, temp_dir):
        with pytest.raises(ValueError, match="Unsupported archive backend"):
            create_gateway("csv", temp_dir)
