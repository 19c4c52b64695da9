"""
Plotly rendering of the insight, snapshot and process charts.

The views produce plain series and process lists; this module turns them
into Plotly figures and writes them to disk as interactive HTML, plus a
static PNG when the optional ``kaleido`` package is installed.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .models.archive import Series
from .models.process import ScatterPoint
from .models.zoom import AUTO, ZoomState

logger = logging.getLogger(__name__)

SCATTER_COLUMNS = ["x", "y", "z", "name", "pid"]


def build_series_figure(series: Series, title: str, y_title: str = "Usage (%)") -> go.Figure:
    """
    Line chart of one windowed series.

    Gaps (None values) are drawn as breaks in the line.

    Args:
        series: Labels and values to plot
        title: Figure title
        y_title: Y axis title

    Returns:
        The Plotly figure
    """
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=list(series.labels),
            y=list(series.values),
            mode="lines+markers",
            connectgaps=False,
            name=title,
        )
    )
    fig.update_layout(
        title_text=title,
        xaxis_title="Time",
        yaxis_title=y_title,
        hovermode="x unified",
        legend_title_text=None,
    )
    fig.update_xaxes(type="category")
    return fig


def _scatter_frame(points: Iterable[ScatterPoint]) -> pd.DataFrame:
    rows = [
        {"x": p.x, "y": p.y, "z": p.z, "name": p.name, "pid": p.pid} for p in points
    ]
    return pd.DataFrame(rows, columns=SCATTER_COLUMNS)


def build_process_scatter_figure(
    points: Sequence[ScatterPoint],
    zoom: Optional[ZoomState] = None,
    title: str = "Process usage",
) -> go.Figure:
    """
    Bubble chart of processes: execution minutes vs. CPU usage, sized by memory.

    Args:
        points: Scatter points of the processes
        zoom: Current zoom state; its domains become the axis ranges
        title: Figure title

    Returns:
        The Plotly figure
    """
    df = _scatter_frame(points)
    fig = px.scatter(
        df,
        x="x",
        y="y",
        size="z",
        hover_name="name",
        hover_data={"pid": True, "z": ":.1f"},
        labels={"x": "Execution time (min)", "y": "CPU usage (%)", "z": "Memory usage (%)"},
        title=title,
    )

    if zoom is not None:
        x_start, x_end = zoom.x_domain
        if x_end != AUTO:
            fig.update_xaxes(range=[x_start, x_end])
        fig.update_yaxes(range=list(zoom.y_domain))
    else:
        fig.update_yaxes(range=[0, 100])
    return fig


def save_figure(fig: go.Figure, base_filename: str, output_dir: Path) -> Optional[Path]:
    """
    Save a figure as HTML and, if possible, PNG.

    Args:
        fig: The Plotly figure to save
        base_filename: Output file name without extension
        output_dir: Directory the files are written to

    Returns:
        Path of the HTML file, or None if it could not be written
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    html_path = output_dir / f"{base_filename}.html"
    try:
        fig.write_html(html_path)
        logger.info(f"Interactive plot saved to: {html_path}")
    except OSError as e:
        logger.error(f"Failed to save plot {html_path}: {e}", exc_info=True)
        return None

    # Static export requires the optional 'kaleido' package.
    png_path = output_dir / f"{base_filename}.png"
    try:
        fig.write_image(png_path, width=1200, height=600)
        logger.info(f"Static plot saved to: {png_path}")
    except Exception:
        logger.warning(
            "Failed to save static plot to PNG. To enable this feature, "
            "install the optional 'export' dependencies: `pip install hwinsight[export]`"
        )
    return html_path
