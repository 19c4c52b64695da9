"""
Pytest configuration and shared fixtures for the hwinsight test suite.

This module provides common fixtures, archive builders and fake gateways
for all test modules in the hwinsight project.
"""

import asyncio
import shutil
import sqlite3
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hwinsight.archive.base import ArchiveGateway
from hwinsight.config import clear_config_cache, set_config_path
from hwinsight.models.config import AppConfig, DisplayConfig
from hwinsight.time_utils import to_iso
from hwinsight.validation import ArchiveQueryError


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Time Helpers
# ============================================================================

MINUTE_MS = 60_000


def utc_ms(year, month, day, hour=0, minute=0, second=0) -> int:
    """Epoch milliseconds of a UTC wall-clock time."""
    dt = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


# 2024-01-01T00:02:00Z, a whole minute shortly after midnight.
NOW_MS = utc_ms(2024, 1, 1, 0, 2)


# ============================================================================
# Archive Schema
# ============================================================================

ARCHIVE_SCHEMA = """
CREATE TABLE DATA_ARCHIVE (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    cpu_avg REAL, cpu_max REAL, cpu_min REAL,
    ram_avg REAL, ram_max REAL, ram_min REAL,
    timestamp TEXT NOT NULL
);
CREATE TABLE GPU_DATA_ARCHIVE (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    gpu_name TEXT NOT NULL,
    usage_avg REAL, usage_max REAL, usage_min REAL,
    temperature_avg REAL, temperature_max REAL, temperature_min REAL,
    dedicated_memory_avg REAL, dedicated_memory_max REAL, dedicated_memory_min REAL,
    timestamp TEXT NOT NULL
);
CREATE TABLE PROCESS_STATS (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    pid INTEGER NOT NULL,
    process_name TEXT NOT NULL,
    cpu_usage REAL,
    memory_usage REAL,
    execution_sec INTEGER,
    timestamp TEXT NOT NULL
);
"""


class ArchiveBuilder:
    """Seeds a SQLite archive with the sampler's table layout."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.conn = sqlite3.connect(str(db_path))
        self.conn.executescript(ARCHIVE_SCHEMA)

    def add_cpu(self, ts_ms: int, avg: Optional[float], high: Optional[float] = None,
                low: Optional[float] = None, ram: Optional[float] = None) -> "ArchiveBuilder":
        high = avg if high is None else high
        low = avg if low is None else low
        self.conn.execute(
            "INSERT INTO DATA_ARCHIVE (cpu_avg, cpu_max, cpu_min, ram_avg, ram_max, ram_min, timestamp) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (avg, high, low, ram, ram, ram, to_iso(ts_ms)),
        )
        return self

    def add_gpu(self, ts_ms: int, gpu_name: str, usage: float, temperature: float,
                memory: float = 0.0) -> "ArchiveBuilder":
        self.conn.execute(
            "INSERT INTO GPU_DATA_ARCHIVE (gpu_name, usage_avg, usage_max, usage_min, "
            "temperature_avg, temperature_max, temperature_min, "
            "dedicated_memory_avg, dedicated_memory_max, dedicated_memory_min, timestamp) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (gpu_name, usage, usage, usage, temperature, temperature, temperature,
             memory, memory, memory, to_iso(ts_ms)),
        )
        return self

    def add_process(self, ts_ms: int, pid: int, name: str, cpu: float, memory: float,
                    execution_sec: int) -> "ArchiveBuilder":
        self.conn.execute(
            "INSERT INTO PROCESS_STATS (pid, process_name, cpu_usage, memory_usage, execution_sec, timestamp) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (pid, name, cpu, memory, execution_sec, to_iso(ts_ms)),
        )
        return self

    def commit(self) -> Path:
        self.conn.commit()
        return self.db_path

    def close(self) -> None:
        self.conn.close()


# ============================================================================
# Fake Gateways
# ============================================================================


class FakeGateway(ArchiveGateway):
    """Synchronous gateway returning canned rows and recording queries."""

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, responses=None):
        self.rows = rows or []
        self.responses = responses
        self.queries: List[str] = []
        self.fail_with: Optional[Exception] = None
        self.closed = False

    def load(self, query: str) -> List[Dict[str, Any]]:
        self.queries.append(query)
        if self.fail_with is not None:
            raise self.fail_with
        if self.responses is not None:
            return self.responses(query)
        return list(self.rows)

    def close(self) -> None:
        self.closed = True


class ControlledGateway(ArchiveGateway):
    """
    Asynchronous gateway whose responses are released by the test.

    Each call to ``load`` parks on its own event; ``release(i, rows)``
    completes the i-th call with ``rows``.
    """

    def __init__(self):
        self.queries: List[str] = []
        self._events: List[asyncio.Event] = []
        self._results: Dict[int, Any] = {}

    async def load(self, query: str) -> List[Dict[str, Any]]:
        index = len(self.queries)
        self.queries.append(query)
        event = asyncio.Event()
        self._events.append(event)
        await event.wait()
        result = self._results[index]
        if isinstance(result, Exception):
            raise result
        return result

    def release(self, index: int, rows) -> None:
        self._results[index] = rows
        self._events[index].set()

    def close(self) -> None:
        pass


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def utc_config():
    """Application config with UTC labels and default archive cadence."""
    return AppConfig(display=DisplayConfig(timezone_name="UTC", timezone=ZoneInfo("UTC")))


@pytest.fixture
def fixed_clock():
    """Clock frozen at NOW_MS, in epoch seconds."""
    return lambda: NOW_MS / 1000


@pytest.fixture
def archive_builder(temp_dir):
    """Empty SQLite archive with the sampler's tables."""
    builder = ArchiveBuilder(temp_dir / "hardware_archive.db")
    yield builder
    builder.close()


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def notifications():
    """Collects messages passed to a view's notify callback."""
    return []


@pytest.fixture
def sample_config_toml(temp_dir):
    """Write a complete config.toml and return its path."""
    config_file = temp_dir / "config.toml"
    config_file.write_text(
        "[archive]\n"
        'backend = "parquet"\n'
        'path = "archive"\n'
        "update_interval_ms = 30000\n"
        "\n"
        "[display]\n"
        'timezone = "UTC"\n'
        'temperature_unit = "f"\n'
        "value_precision = 2\n"
        "\n"
        "[snapshot]\n"
        "bucket_count = 50\n"
        "default_span_minutes = 60\n"
        "\n"
        "[logging]\n"
        'level = "debug"\n'
    )
    return config_file


@pytest.fixture
def controlled_gateway():
    return ControlledGateway()


@pytest.fixture
def utc_time():
    """Builds epoch milliseconds from UTC wall-clock parts."""
    return utc_ms


@pytest.fixture
def now_ms():
    """The frozen current time, epoch milliseconds."""
    return NOW_MS


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield  # Run the test

    clear_config_cache()
    set_config_path(original_config_path)
