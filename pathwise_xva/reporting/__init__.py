"""
Reporting module for exposure and xVA visualization and export.

Provides:
- Matplotlib and Plotly plots for exposure profiles, with PDF export
- DataFrame formatters
- CSV/JSON export utilities
"""

from pathwise_xva.reporting.export import (
    create_summary_report,
    export_to_csv,
    export_to_json,
)
from pathwise_xva.reporting.plots import (
    create_comparison_plot,
    create_cva_bar_chart,
    create_exposure_plot,
    create_impact_plot,
    save_figure_pdf,
)
from pathwise_xva.reporting.tables import (
    create_discva_table,
    create_exposure_table,
    create_nonlinearity_table,
)

__all__ = [
    # Plots
    "create_exposure_plot",
    "create_comparison_plot",
    "create_cva_bar_chart",
    "create_impact_plot",
    "save_figure_pdf",
    # Tables
    "create_exposure_table",
    "create_discva_table",
    "create_nonlinearity_table",
    # Export
    "export_to_csv",
    "export_to_json",
    "create_summary_report",
]
