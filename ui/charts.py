"""Chart helpers for the forecast Low/High/Close series."""

from __future__ import annotations

from pathlib import Path

from matplotlib.figure import Figure
import plotly.graph_objects as go
from plotly.offline import plot

from core.series import ChartSeries

CHART_HEIGHT_PX = 400


def build_line_figure(series: ChartSeries) -> go.Figure:
    """Line chart with category dates on x and linear price on y."""
    figure = go.Figure()
    for line in series.lines:
        figure.add_trace(
            go.Scatter(
                x=list(series.labels),
                y=list(line.values),
                mode="lines+markers",
                name=line.label,
                line={"color": line.color, "width": 2, "shape": "spline", "smoothing": 0.8},
                marker={"size": 4},
                connectgaps=False,
                hovertemplate=f"Date: %{{x}}<br>{line.label}: %{{y}}<extra></extra>",
            )
        )

    figure.update_layout(
        template="plotly_white",
        height=CHART_HEIGHT_PX,
        hovermode="x unified",
        legend={"orientation": "h", "yanchor": "bottom", "y": 1.02, "xanchor": "center", "x": 0.5},
        margin={"l": 40, "r": 20, "t": 40, "b": 40},
        xaxis={"title": "Date", "type": "category"},
        yaxis={"title": "Price", "type": "linear"},
    )
    return figure


def build_line_chart(series: ChartSeries) -> str:
    """Render the series as an embeddable Plotly div (script bundle served separately)."""
    return plot(
        build_line_figure(series),
        output_type="div",
        include_plotlyjs=False,
        config={"displaylogo": False, "responsive": True},
    )


def plot_static_chart(series: ChartSeries, title: str, output_path: Path) -> Path:
    """Save a static PNG of the series for PDF export."""
    fig = Figure(figsize=(11, 5.5))
    ax = fig.add_subplot(111)

    positions = list(range(len(series.labels)))
    for line in series.lines:
        values = [float("nan") if value is None else value for value in line.values]
        ax.plot(positions, values, label=line.label, color=line.color, linewidth=1.6)

    if positions:
        step = max(1, len(positions) // 10)
        ax.set_xticks(positions[::step])
        ax.set_xticklabels(list(series.labels)[::step], rotation=30, ha="right")

    ax.legend(loc="upper left")
    ax.set_title(title)
    ax.set_xlabel("Date")
    ax.set_ylabel("Price")
    ax.grid(alpha=0.25)
    fig.tight_layout()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=130)
    return output_path
