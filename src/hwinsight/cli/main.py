"""
Command-line interface for the hwinsight history engine.

Subcommands mirror the three views:

- ``insight``: one hardware statistic over a catalog period
- ``snapshot``: a free time range with its process history
- ``processes``: per-process statistics over a catalog period

Each command runs one refresh against the configured archive, prints the
result and optionally renders it with Plotly.
"""

import argparse
import asyncio
import locale
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..archive import create_gateway
from ..config import get_config, set_config_path
from ..models import DataStats, GpuMetric, HardwareKind, Period, PROCESS_STAT_FIELDS, ProcessStat
from ..plotter import build_process_scatter_figure, build_series_figure, save_figure
from ..validation import (
    ValidationError,
    handle_cli_error,
    validate_enum_choice,
    validate_timestamp,
    validate_usage_range,
)
from ..views import InsightChartView, ProcessInsightView, SnapshotView

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

PERIOD_CHOICES = [str(int(p)) for p in Period]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hwinsight",
        description="Query the hardware telemetry archive and chart its history.",
    )
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument(
        "--plot",
        type=Path,
        metavar="DIR",
        help="Render the result with Plotly into DIR",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    insight = subparsers.add_parser("insight", help="Chart one statistic over a period")
    insight.add_argument("--hardware", default="cpu", help="cpu, memory or gpu")
    insight.add_argument("--stats", default="avg", help="avg, max or min")
    insight.add_argument("--period", default="60", help=f"Minutes, one of {PERIOD_CHOICES}")
    insight.add_argument("--offset", type=int, default=0, help="Buckets to page back")
    insight.add_argument("--gpu-metric", help="usage, temp or dedicated_memory")
    insight.add_argument("--gpu-name", help="GPU device name")

    snapshot = subparsers.add_parser("snapshot", help="Inspect a free time range")
    snapshot.add_argument("--start", help="ISO-8601 range start")
    snapshot.add_argument("--end", help="ISO-8601 range end")
    snapshot.add_argument("--type", dest="data_type", default="cpu", help="cpu or memory")
    snapshot.add_argument("--cpu-range", default="0:100", help="CPU usage filter, low:high")
    snapshot.add_argument("--memory-range", default="0:100", help="Memory usage filter, low:high")
    snapshot.add_argument(
        "--sort", action="append", default=[], metavar="KEY",
        help="Sort the process table by KEY; repeat to toggle direction",
    )

    processes = subparsers.add_parser("processes", help="Per-process statistics over a period")
    processes.add_argument("--period", default="60", help=f"Minutes, one of {PERIOD_CHOICES}")
    processes.add_argument("--offset", type=int, default=0, help="Buckets to page back")
    processes.add_argument(
        "--sort", action="append", default=[], metavar="KEY",
        help="Sort the process table by KEY; repeat to toggle direction",
    )
    return parser


def _period(value: str) -> Period:
    return Period(int(validate_enum_choice(value, PERIOD_CHOICES, field_name="--period")))


def _enum(enum_cls, value: str, field_name: str):
    choices = [member.value for member in enum_cls]
    return enum_cls(validate_enum_choice(value, choices, field_name, case_sensitive=False))


def _apply_sorts(sorter, keys: List[str]) -> None:
    for key in keys:
        validate_enum_choice(key, list(PROCESS_STAT_FIELDS), field_name="--sort")
        sorter.request_sort(key)


def _print_series(view) -> None:
    for label, value in zip(view.series.labels, view.series.values):
        shown = "-" if value is None else f"{value}"
        print(f"{label:>20}  {shown}")


def _print_processes(stats: List[ProcessStat]) -> None:
    print(f"{'PID':>8}  {'NAME':<32} {'CPU %':>8} {'MEM %':>8} {'EXEC s':>10}  LAST SEEN")
    for stat in stats:
        print(
            f"{stat.pid:>8}  {stat.process_name[:32]:<32} {stat.avg_cpu_usage:>8.2f} "
            f"{stat.avg_memory_usage:>8.2f} {stat.total_execution_sec:>10.0f}  {stat.latest_timestamp}"
        )


def _make_view(args, gateway, config):
    if args.command == "insight":
        hardware = _enum(HardwareKind, args.hardware, "--hardware")
        gpu_metric = _enum(GpuMetric, args.gpu_metric, "--gpu-metric") if args.gpu_metric else None
        if hardware is HardwareKind.GPU and gpu_metric is None:
            raise ValidationError("--gpu-metric is required for gpu charts", field_name="--gpu-metric")
        return InsightChartView(
            gateway,
            hardware=hardware,
            stats=_enum(DataStats, args.stats, "--stats"),
            period=_period(args.period),
            offset=args.offset,
            gpu_metric=gpu_metric,
            gpu_name=args.gpu_name,
            config=config,
        )

    if args.command == "snapshot":
        start_ms = validate_timestamp(args.start, "--start") if args.start else None
        end_ms = validate_timestamp(args.end, "--end") if args.end else None
        view = SnapshotView(
            gateway,
            start_ms=start_ms,
            end_ms=end_ms,
            data_type=_enum(HardwareKind, args.data_type, "--type"),
            config=config,
        )
        view.set_cpu_range(*validate_usage_range(args.cpu_range, "--cpu-range"))
        view.set_memory_range(*validate_usage_range(args.memory_range, "--memory-range"))
        _apply_sorts(view.sorter, args.sort)
        return view

    view = ProcessInsightView(gateway, period=_period(args.period), offset=args.offset, config=config)
    _apply_sorts(view.sorter, args.sort)
    return view


def _report(args, view) -> None:
    if args.command == "insight":
        _print_series(view)
    elif args.command == "snapshot":
        _print_series(view)
        _print_processes(view.filtered_processes)
    else:
        _print_processes(view.sorted_stats)

    if args.plot:
        _plot(args, view)


def _plot(args, view) -> None:
    if args.command == "insight":
        figure = build_series_figure(
            view.series, f"{view.hardware.value} {view.stats.value} ({int(view.period)} min)"
        )
        name = f"insight_{view.hardware.value}_{view.stats.value}_{int(view.period)}"
    elif args.command == "snapshot":
        figure = build_series_figure(view.series, f"{view.data_type.value} snapshot")
        name = f"snapshot_{view.data_type.value}"
    else:
        figure = build_process_scatter_figure(view.scatter_points, view.zoom.state)
        name = f"processes_{int(view.period)}"
    save_figure(figure, name, args.plot)


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Raises:
        SystemExit: On configuration errors, invalid arguments or a failed query
    """
    args = build_parser().parse_args(argv)

    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Could not apply the environment's collation locale: {e}")

    if args.config:
        set_config_path(args.config)
    try:
        config = get_config()
    except Exception as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    logging.getLogger().setLevel(config.log_level)

    try:
        gateway = create_gateway(config.archive.backend, config.archive.path)
        view = _make_view(args, gateway, config)
    except (ValidationError, ValueError) as e:
        handle_cli_error(error=e, context="argument validation", exit_code=2, logger=logger)

    try:
        updated = asyncio.run(view.refresh())
    finally:
        gateway.close()

    if not updated:
        handle_cli_error(
            error=view.last_error or RuntimeError("refresh produced no result"),
            context=f"{args.command} query",
            exit_code=1,
            logger=logger,
        )
    _report(args, view)


if __name__ == "__main__":
    main_cli()
