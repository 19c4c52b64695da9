"""
Unit tests for the archive query builders.
"""

import pytest

from hwinsight.archive.queries import (
    archive_column,
    build_archive_query,
    build_process_stats_query,
)
from hwinsight.models.archive import DataStats, GpuMetric, HardwareKind


class TestArchiveColumn:
    """Test cases for archive_column."""

    @pytest.mark.parametrize(
        "hardware,stats,metric,expected",
        [
            (HardwareKind.CPU, DataStats.AVG, None, "cpu_avg"),
            (HardwareKind.CPU, DataStats.MIN, None, "cpu_min"),
            (HardwareKind.MEMORY, DataStats.MAX, None, "ram_max"),
            (HardwareKind.GPU, DataStats.AVG, GpuMetric.USAGE, "usage_avg"),
            (HardwareKind.GPU, DataStats.MAX, GpuMetric.TEMPERATURE, "temperature_max"),
            (HardwareKind.GPU, DataStats.MIN, GpuMetric.DEDICATED_MEMORY, "dedicated_memory_min"),
        ],
    )
    def test_columns(self, hardware, stats, metric, expected):
        assert archive_column(hardware, stats, metric) == expected

    def test_gpu_without_metric(self):
        with pytest.raises(ValueError, match="GpuMetric"):
            archive_column(HardwareKind.GPU, DataStats.AVG)


class TestBuildArchiveQuery:
    """Test cases for build_archive_query."""

    def test_cpu_query(self, now_ms):
        query = build_archive_query(HardwareKind.CPU, DataStats.AVG, now_ms - 60_000, now_ms)
        assert query == (
            'SELECT cpu_avg AS value, "timestamp" FROM DATA_ARCHIVE '
            "WHERE \"timestamp\" BETWEEN '2024-01-01T00:01:00.000Z' AND '2024-01-01T00:02:00.000Z'"
        )

    def test_gpu_query_filters_device(self, now_ms):
        query = build_archive_query(
            HardwareKind.GPU,
            DataStats.MAX,
            now_ms - 60_000,
            now_ms,
            gpu_metric=GpuMetric.TEMPERATURE,
            gpu_name="NVIDIA GeForce RTX 4090",
        )
        assert "FROM GPU_DATA_ARCHIVE" in query
        assert "temperature_max AS value" in query
        assert "gpu_name = 'NVIDIA GeForce RTX 4090'" in query

    def test_gpu_name_quoted(self, now_ms):
        query = build_archive_query(
            HardwareKind.GPU, DataStats.AVG, 0, now_ms,
            gpu_metric=GpuMetric.USAGE, gpu_name="it's",
        )
        assert "gpu_name = 'it''s'" in query


class TestBuildProcessStatsQuery:
    """Test cases for build_process_stats_query."""

    def test_group_by_pair(self, now_ms):
        query = build_process_stats_query(now_ms - 60_000, now_ms)

        assert "FROM PROCESS_STATS" in query
        assert "AVG(cpu_usage) AS avg_cpu_usage" in query
        assert "MAX(execution_sec) AS total_execution_sec" in query
        assert 'MAX("timestamp") AS latest_timestamp' in query
        assert query.endswith("GROUP BY pid, process_name")

    def test_ordered_variant(self, now_ms):
        query = build_process_stats_query(0, now_ms, order_by_cpu=True)
        assert query.endswith("ORDER BY avg_cpu_usage DESC")
