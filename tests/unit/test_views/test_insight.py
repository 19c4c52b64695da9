"""
Tests for the insight chart view: refresh, presentation and request ordering.
"""

import asyncio
import logging
from dataclasses import replace

import pytest

from hwinsight.archive.sqlite_gateway import SqliteArchiveGateway
from hwinsight.models.archive import DataStats, GpuMetric, HardwareKind, Period
from hwinsight.time_utils import to_iso
from hwinsight.validation import ArchiveQueryError
from hwinsight.views import InsightChartView, make_value_transform

MINUTE = 60_000


@pytest.fixture
def make_view(utc_config, fixed_clock, notifications):
    def _make(gateway, **kwargs):
        params = dict(
            hardware=HardwareKind.CPU,
            stats=DataStats.AVG,
            period=Period.MINUTES_10,
        )
        params.update(kwargs)
        return InsightChartView(
            gateway,
            config=params.pop("config", utc_config),
            clock=fixed_clock,
            notify=notifications.append,
            **params,
        )

    return _make


class TestMakeValueTransform:
    """Test cases for make_value_transform."""

    def test_rounding(self):
        assert make_value_transform(None, "C", 1)(12.345) == 12.3

    def test_halves_round_up(self):
        assert make_value_transform(None, "C", 2)(0.125) == 0.13
        assert make_value_transform(None, "C", 0)(2.5) == 3.0

    def test_fahrenheit_for_gpu_temperature(self):
        assert make_value_transform(GpuMetric.TEMPERATURE, "F", 1)(50.0) == 122.0

    def test_fahrenheit_ignored_for_other_metrics(self):
        assert make_value_transform(GpuMetric.USAGE, "F", 1)(50.0) == 50.0


class TestInsightChartView:
    """Test cases for InsightChartView refreshes."""

    @pytest.mark.asyncio
    async def test_refresh_from_sqlite_archive(self, archive_builder, make_view, now_ms):
        archive_builder.add_cpu(now_ms - 5 * MINUTE, 10.0)
        archive_builder.add_cpu(now_ms - 5 * MINUTE, 20.0)
        archive_builder.add_cpu(now_ms - 30 * MINUTE, 99.0)
        gateway = SqliteArchiveGateway(archive_builder.commit())
        view = make_view(gateway)

        try:
            assert await view.refresh() is True
        finally:
            gateway.close()

        assert len(view.labels) == 11
        assert view.values[view.labels.index("23:57")] == 15.0
        assert 99.0 not in view.values
        assert sum(v is not None for v in view.values) == 1

    @pytest.mark.asyncio
    async def test_query_window(self, fake_gateway, make_view):
        view = make_view(fake_gateway)
        await view.refresh()

        query = fake_gateway.queries[0]
        assert "cpu_avg AS value" in query
        assert "BETWEEN '2023-12-31T23:51:00.000Z' AND '2024-01-01T00:01:00.000Z'" in query
        assert view.window.adjusted_end_at == view.window.end_at - MINUTE

    @pytest.mark.asyncio
    async def test_empty_archive_gives_gaps(self, fake_gateway, make_view):
        view = make_view(fake_gateway, stats=DataStats.MAX)
        await view.refresh()

        assert view.values == [None] * 11

    @pytest.mark.asyncio
    async def test_gpu_temperature_in_fahrenheit(self, fake_gateway, make_view, utc_config, now_ms):
        config = replace(utc_config, display=replace(utc_config.display, temperature_unit="F"))
        fake_gateway.rows = [{"value": 50.0, "timestamp": to_iso(now_ms - 2 * MINUTE)}]
        view = make_view(
            fake_gateway,
            config=config,
            hardware=HardwareKind.GPU,
            gpu_metric=GpuMetric.TEMPERATURE,
            gpu_name="gpu0",
        )
        await view.refresh()

        assert "FROM GPU_DATA_ARCHIVE" in fake_gateway.queries[0]
        assert "gpu_name = 'gpu0'" in fake_gateway.queries[0]
        assert 122.0 in view.values

    def test_gpu_requires_metric(self, fake_gateway, make_view):
        with pytest.raises(ValueError, match="gpu_metric"):
            make_view(fake_gateway, hardware=HardwareKind.GPU)

    @pytest.mark.asyncio
    async def test_period_and_offset_changes(self, fake_gateway, make_view):
        view = make_view(fake_gateway)
        view.set_period(Period.DAY_1)
        view.set_offset(2)
        await view.refresh()

        assert view.window.step == 30 * MINUTE
        assert view.window.end_at == view.now_ms() - 2 * 30 * MINUTE
        assert view.labels[0].startswith("2023/12/")


class TestInsightRefreshFailures:
    """Test cases for failed refreshes."""

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_series(self, fake_gateway, make_view, notifications, now_ms):
        fake_gateway.rows = [{"value": 42.0, "timestamp": to_iso(now_ms - MINUTE)}]
        view = make_view(fake_gateway)
        await view.refresh()
        before = view.series

        fake_gateway.fail_with = ArchiveQueryError("database is locked")
        assert await view.refresh() is False

        assert view.series is before
        assert isinstance(view.last_error, ArchiveQueryError)
        assert notifications == ["Could not load history: database is locked"]

    @pytest.mark.asyncio
    async def test_failure_logged_as_query_error(self, fake_gateway, make_view, caplog):
        fake_gateway.fail_with = ArchiveQueryError("no such table: DATA_ARCHIVE")
        view = make_view(fake_gateway)

        with caplog.at_level(logging.ERROR, logger="hwinsight.views.base"):
            await view.refresh()

        assert "Error in archive query InsightChartView refresh #1" in caplog.text

    @pytest.mark.asyncio
    async def test_recovers_on_next_poll(self, fake_gateway, make_view):
        view = make_view(fake_gateway)
        fake_gateway.fail_with = ArchiveQueryError("busy")
        await view.refresh()

        fake_gateway.fail_with = None
        assert await view.refresh() is True
        assert view.last_error is None
        assert view.applied_seq == 2


class TestInsightRequestOrdering:
    """Test cases for overlapping refreshes."""

    @staticmethod
    async def _settle():
        for _ in range(5):
            await asyncio.sleep(0)

    @pytest.mark.asyncio
    async def test_stale_response_discarded(self, controlled_gateway, make_view, now_ms):
        view = make_view(controlled_gateway)
        first = asyncio.create_task(view.refresh())
        second = asyncio.create_task(view.refresh())
        await self._settle()
        assert len(controlled_gateway.queries) == 2

        controlled_gateway.release(1, [{"value": 30.0, "timestamp": to_iso(now_ms - MINUTE)}])
        assert await second is True

        controlled_gateway.release(0, [{"value": 10.0, "timestamp": to_iso(now_ms - MINUTE)}])
        assert await first is False

        assert view.values[-1] == 30.0
        assert view.applied_seq == 2

    @pytest.mark.asyncio
    async def test_in_order_responses_both_applied(self, controlled_gateway, make_view, now_ms):
        view = make_view(controlled_gateway)
        first = asyncio.create_task(view.refresh())
        second = asyncio.create_task(view.refresh())
        await self._settle()

        controlled_gateway.release(0, [{"value": 10.0, "timestamp": to_iso(now_ms - MINUTE)}])
        assert await first is True
        assert view.values[-1] == 10.0

        controlled_gateway.release(1, [{"value": 30.0, "timestamp": to_iso(now_ms - MINUTE)}])
        assert await second is True
        assert view.values[-1] == 30.0


class TestInsightPolling:
    """Test cases for the polling loop."""

    @pytest.mark.asyncio
    async def test_run_until_stopped(self, fake_gateway, make_view):
        view = make_view(fake_gateway)
        stop_event = asyncio.Event()

        task = asyncio.create_task(view.run(stop_event, interval_s=0.01))
        await asyncio.sleep(0.1)
        stop_event.set()
        await asyncio.wait_for(task, timeout=1)

        assert len(fake_gateway.queries) >= 2
        assert view.applied_seq == len(fake_gateway.queries)
