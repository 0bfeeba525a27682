"""
Table generation utilities for xVA reporting.

Creates formatted pandas DataFrames for display and export.
"""

import numpy as np
import pandas as pd

from pathwise_xva.analysis import DiscVAReport, NonLinearityReport
from pathwise_xva.exposure.metrics import ExposureMetrics


def create_exposure_table(metrics: ExposureMetrics, step: int = 1) -> pd.DataFrame:
    """
    Create exposure profile table, one row per grid time.

    Parameters
    ----------
    metrics : ExposureMetrics
        Exposure metrics of a deal or portfolio
    step : int
        Keep every ``step``-th grid time (the last one is always kept)

    Returns
    -------
    pd.DataFrame
        Columns Time, EPE, ENE, PFE 95%, PFE 99%, Expected MTM
    """
    if step < 1:
        raise ValueError(f"step must be positive, got {step}")

    rows = np.arange(0, len(metrics.time_grid), step)
    if rows[-1] != len(metrics.time_grid) - 1:
        rows = np.append(rows, len(metrics.time_grid) - 1)

    return pd.DataFrame(
        {
            "Time": metrics.time_grid[rows],
            "EPE": metrics.epe[rows],
            "ENE": metrics.ene[rows],
            "PFE 95%": metrics.pfe_95[rows],
            "PFE 99%": metrics.pfe_99[rows],
            "Expected MTM": metrics.expected_exposure[rows],
        }
    )


def create_discva_table(report: DiscVAReport) -> pd.DataFrame:
    """
    Create price and DiscVA breakdown table.

    Parameters
    ----------
    report : DiscVAReport
        Result of the DiscVA analysis

    Returns
    -------
    pd.DataFrame
        One row per quantity, with the exact and Monte Carlo value where
        both exist
    """
    return pd.DataFrame(
        {
            "Quantity": [
                "xVA desk price",
                "Front office price",
                "DiscVA",
                "Front office - DiscVA",
            ],
            "Exact": [
                report.xva_desk_price,
                report.front_office_price,
                np.nan,
                report.reconstructed_xva_desk_price,
            ],
            "Monte Carlo": [
                report.xva_desk_price_mc,
                report.front_office_price_mc,
                report.disc_va,
                np.nan,
            ],
        }
    )


def create_nonlinearity_table(report: NonLinearityReport) -> pd.DataFrame:
    """
    Create standalone vs portfolio CVA table.

    Parameters
    ----------
    report : NonLinearityReport
        Result of the non-linearity analysis

    Returns
    -------
    pd.DataFrame
        One row per deal, then the sum, the portfolio and the difference
    """
    result = report.result
    labels = [repr(inst) for inst in report.netting_set.instruments]

    return pd.DataFrame(
        {
            "Component": [*labels, "Sum of standalone", "Portfolio", "Non-linearity"],
            "CVA": [
                *result.standalone_cva,
                result.sum_of_standalone,
                result.portfolio_cva,
                result.non_linearity,
            ],
        }
    )
