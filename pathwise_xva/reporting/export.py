"""
Export utilities for xVA results.

Provides CSV and JSON export functionality.
"""

import json
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from pathwise_xva.analysis import DiscVAReport, NonLinearityReport
from pathwise_xva.reporting.tables import (
    create_discva_table,
    create_exposure_table,
    create_nonlinearity_table,
)


def export_to_csv(
    df: pd.DataFrame,
    path: str | Path,
    float_format: str = "%.6f",
) -> None:
    """
    Export DataFrame to CSV.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame to export
    path : str | Path
        Output file path
    float_format : str
        Format string for floats
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, float_format=float_format)


def _to_builtin(obj: Any) -> Any:
    """Convert numpy containers and scalars to JSON-serialisable types."""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, dict):
        return {k: _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_builtin(v) for v in obj]
    return obj


def export_to_json(
    data: dict[str, Any],
    path: str | Path,
    indent: int = 2,
) -> None:
    """
    Export dictionary to JSON.

    Parameters
    ----------
    data : dict
        Data to export; numpy arrays and scalars are converted
    path : str | Path
        Output file path
    indent : int
        JSON indentation
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(_to_builtin(data), f, indent=indent)


def create_summary_report(
    report: DiscVAReport | NonLinearityReport,
    output_dir: str | Path,
    prefix: str = "xva_report",
    step: int = 10,
) -> dict[str, Path]:
    """
    Create complete summary report with multiple files.

    Parameters
    ----------
    report : DiscVAReport | NonLinearityReport
        Result of one of the analyses
    output_dir : str | Path
        Output directory
    prefix : str
        File name prefix
    step : int
        Keep every ``step``-th grid time in the exposure CSV

    Returns
    -------
    dict[str, Path]
        Dictionary of created file paths, keyed 'exposure', 'xva', 'summary'.
        A non-linearity report adds 'exposure_deal_k' for each forward k.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if isinstance(report, DiscVAReport):
        metrics = report.metrics
        xva_df = create_discva_table(report)
    else:
        metrics = report.portfolio_metrics
        xva_df = create_nonlinearity_table(report)

    created_files = {}

    exposure_path = output_dir / f"{prefix}_exposure.csv"
    export_to_csv(create_exposure_table(metrics, step=step), exposure_path)
    created_files["exposure"] = exposure_path

    if isinstance(report, NonLinearityReport):
        for k, deal_metrics in enumerate(report.standalone_metrics, start=1):
            deal_path = output_dir / f"{prefix}_exposure_deal_{k}.csv"
            export_to_csv(create_exposure_table(deal_metrics, step=step), deal_path)
            created_files[f"exposure_deal_{k}"] = deal_path

    xva_path = output_dir / f"{prefix}_xva.csv"
    export_to_csv(xva_df, xva_path)
    created_files["xva"] = xva_path

    summary = {
        "xva": report.to_dict(),
        "exposure": {
            "peak_epe": metrics.peak_epe,
            "peak_ene": metrics.peak_ene,
            "avg_epe": metrics.average_epe,
            "avg_ene": metrics.average_ene,
        },
        "horizon": float(metrics.time_grid[-1]),
    }
    summary_path = output_dir / f"{prefix}_summary.json"
    export_to_json(summary, summary_path)
    created_files["summary"] = summary_path

    return created_files
