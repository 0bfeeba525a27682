"""
Plotting utilities for exposure and xVA visualization.

Provides both Matplotlib and Plotly chart generators. Charts consume
precomputed arrays on the simulation grid.
"""

from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import plotly.graph_objects as go

from pathwise_xva._types import FloatArray
from pathwise_xva.analysis import NonLinearityReport

# Default PDF page size in pixels at 100 dpi
_PDF_DPI = 100

# Exposure measures compared deal by deal against the portfolio
_IMPACT_MEASURES = {
    "PFE": ("pfe_95", "PFE 95%"),
    "EPE": ("epe", "EPE"),
    "ENE": ("ene", "ENE"),
}


def create_exposure_plot(
    time_grid: FloatArray,
    epe: FloatArray,
    ene: FloatArray | None = None,
    pfe: FloatArray | None = None,
    title: str = "Exposure Profile",
    use_plotly: bool = True,
) -> Any:
    """
    Create exposure profile plot.

    Parameters
    ----------
    time_grid : FloatArray
        Time points in years
    epe : FloatArray
        Expected positive exposure
    ene : FloatArray | None
        Expected negative exposure
    pfe : FloatArray | None
        Potential future exposure (95% unless stated otherwise)
    title : str
        Chart title
    use_plotly : bool
        Use Plotly (default True), otherwise Matplotlib

    Returns
    -------
    Any
        Plotly Figure or Matplotlib Figure
    """
    if use_plotly:
        return _create_exposure_plot_plotly(time_grid, epe, ene, pfe, title)
    return _create_exposure_plot_mpl(time_grid, epe, ene, pfe, title)


def _create_exposure_plot_plotly(
    time_grid: FloatArray,
    epe: FloatArray,
    ene: FloatArray | None,
    pfe: FloatArray | None,
    title: str,
) -> go.Figure:
    """Create exposure plot using Plotly."""
    fig = go.Figure()

    curves = [("EPE", epe, {"color": "#FF4B4B", "width": 2})]
    if ene is not None:
        curves.append(("ENE", ene, {"color": "#00CC96", "width": 2}))
    if pfe is not None:
        curves.append(("PFE 95%", pfe, {"color": "#AB63FA", "width": 2, "dash": "dash"}))

    for name, values, line in curves:
        fig.add_trace(
            go.Scatter(
                x=time_grid,
                y=values,
                mode="lines",
                name=name,
                line=line,
                hovertemplate=f"<b>{name}</b><br>Time: %{{x:.3f}}Y<br>Value: %{{y:,.2f}}<extra></extra>",
            )
        )

    fig.update_layout(
        title=title,
        xaxis_title="Time (years)",
        yaxis_title="Exposure",
        hovermode="x unified",
        template="plotly_dark",
        height=400,
        legend={"yanchor": "top", "y": 0.99, "xanchor": "left", "x": 0.01},
    )

    return fig


def _create_exposure_plot_mpl(
    time_grid: FloatArray,
    epe: FloatArray,
    ene: FloatArray | None,
    pfe: FloatArray | None,
    title: str,
) -> plt.Figure:
    """Create exposure plot using Matplotlib."""
    fig, ax = plt.subplots(figsize=(10, 6))

    ax.plot(time_grid, epe, "r-", linewidth=2, label="EPE")

    if ene is not None:
        ax.plot(time_grid, ene, "g-", linewidth=2, label="ENE")

    if pfe is not None:
        ax.plot(time_grid, pfe, "m--", linewidth=2, label="PFE 95%")

    ax.set_xlabel("Time (years)")
    ax.set_ylabel("Exposure")
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig


def create_cva_bar_chart(
    cva_values: dict[str, float],
    title: str = "Standalone vs Portfolio CVA",
    use_plotly: bool = True,
) -> Any:
    """
    Create a bar chart of standalone and portfolio CVAs.

    Parameters
    ----------
    cva_values : dict[str, float]
        Bar label to CVA value, in display order
    title : str
        Chart title
    use_plotly : bool
        Use Plotly (default True), otherwise Matplotlib

    Returns
    -------
    Any
        Figure object
    """
    labels = list(cva_values)
    values = [cva_values[label] for label in labels]

    if use_plotly:
        fig = go.Figure(
            go.Bar(
                x=labels,
                y=values,
                marker_color="#FF4B4B",
                text=[f"{v:,.2f}" for v in values],
                textposition="outside",
                hovertemplate="<b>%{x}</b><br>%{y:,.2f}<extra></extra>",
            )
        )
        fig.update_layout(
            title=title,
            yaxis_title="CVA",
            showlegend=False,
            template="plotly_dark",
            height=400,
        )
        return fig

    fig, ax = plt.subplots(figsize=(10, 6))
    bars = ax.bar(labels, values, color="#FF4B4B")

    for bar, val in zip(bars, values, strict=True):
        ax.annotate(
            f"{val:,.2f}",
            xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
            xytext=(0, 3),
            textcoords="offset points",
            ha="center",
            va="bottom",
        )

    ax.set_ylabel("CVA")
    ax.set_title(title)
    ax.axhline(y=0, color="gray", linestyle="-", linewidth=0.5)

    fig.tight_layout()
    return fig


def create_comparison_plot(
    time_grid: FloatArray,
    data_sets: dict[str, FloatArray],
    title: str = "Comparison",
    ylabel: str = "Exposure",
    use_plotly: bool = True,
) -> Any:
    """
    Create comparison plot with multiple data series.

    Parameters
    ----------
    time_grid : FloatArray
        Time points
    data_sets : dict[str, FloatArray]
        Named data series to plot
    title : str
        Chart title
    ylabel : str
        Y-axis label
    use_plotly : bool
        Use Plotly (default True), otherwise Matplotlib

    Returns
    -------
    Any
        Figure object
    """
    if use_plotly:
        fig = go.Figure()

        for name, data in data_sets.items():
            fig.add_trace(
                go.Scatter(
                    x=time_grid,
                    y=data,
                    mode="lines",
                    name=name,
                    hovertemplate=f"<b>{name}</b><br>Time: %{{x:.3f}}Y<br>Value: %{{y:,.2f}}<extra></extra>",
                )
            )

        fig.update_layout(
            title=title,
            xaxis_title="Time (years)",
            yaxis_title=ylabel,
            template="plotly_dark",
            height=400,
        )

        return fig

    fig, ax = plt.subplots(figsize=(10, 6))

    for name, data in data_sets.items():
        ax.plot(time_grid, data, linewidth=2, label=name)

    ax.set_xlabel("Time (years)")
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig


def create_impact_plot(
    report: NonLinearityReport,
    measure: str,
    use_plotly: bool = True,
) -> Any:
    """
    Compare one exposure measure of every deal with the netted portfolio.

    Parameters
    ----------
    report : NonLinearityReport
        Result of the non-linearity analysis
    measure : str
        'PFE' (95%), 'EPE' or 'ENE'
    use_plotly : bool
        Use Plotly (default True), otherwise Matplotlib

    Returns
    -------
    Any
        Figure with one line per deal plus one for the portfolio
    """
    if measure not in _IMPACT_MEASURES:
        raise ValueError(
            f"Unknown measure {measure!r}, expected one of {sorted(_IMPACT_MEASURES)}"
        )
    attr, label = _IMPACT_MEASURES[measure]

    curves = {
        f"{label} deal {k}": getattr(metrics, attr)
        for k, metrics in enumerate(report.standalone_metrics, start=1)
    }
    curves[f"{label} portfolio"] = getattr(report.portfolio_metrics, attr)

    return create_comparison_plot(
        report.portfolio_metrics.time_grid,
        curves,
        title=f"{label}: deals vs netting set",
        ylabel=label,
        use_plotly=use_plotly,
    )


def save_figure_pdf(
    fig: plt.Figure,
    path: Path | str,
    width: int = 800,
    height: int = 600,
) -> Path:
    """
    Save a Matplotlib figure as a PDF page of ``width`` x ``height`` pixels.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to save
    path : Path | str
        Output file path
    width : int
        Page width in pixels
    height : int
        Page height in pixels

    Returns
    -------
    Path
        Path to the written file

    Raises
    ------
    TypeError
        If ``fig`` is not a Matplotlib figure
    """
    if not isinstance(fig, plt.Figure):
        raise TypeError(
            f"PDF export needs a Matplotlib figure, got {type(fig).__name__}; "
            "create the plot with use_plotly=False"
        )

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig.set_size_inches(width / _PDF_DPI, height / _PDF_DPI)
    fig.savefig(path, format="pdf", dpi=_PDF_DPI)

    return path
