#!/usr/bin/env python3
"""
Pathwise xVA Engine - DiscVA Example

This script prices an uncollateralised equity forward twice:
1. Load the configuration (YAML file or the reference scenario)
2. Simulate the underlying under the collateral measure
3. Derive the pathwise exposure and its EPE/ENE/PFE profiles
4. Compute DiscVA and compare xVA desk and front office prices
5. Plot the exposure profile and export the results

Usage:
    python examples/run_discva.py [--config data/discva.yaml]
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from pathwise_xva import XVAError, load_discva_config, run_discva_analysis
from pathwise_xva.config.loader import create_default_discva_config
from pathwise_xva.reporting import (
    create_exposure_plot,
    create_summary_report,
    save_figure_pdf,
)


def main(argv: list[str] | None = None) -> int:
    """Run the DiscVA example and return the process exit code."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(__file__).parent / "outputs",
        help="Directory for the PDF and CSV/JSON files",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Pathwise xVA Engine - DiscVA")
    print("=" * 60)
    print()

    try:
        config = (
            load_discva_config(args.config)
            if args.config is not None
            else create_default_discva_config()
        )
        report = run_discva_analysis(config)
    except (XVAError, ValidationError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(report.summary())
    print()

    metrics = report.metrics
    print(f"   Peak EPE: {metrics.peak_epe:,.2f}")
    print(f"   Peak ENE: {metrics.peak_ene:,.2f}")
    print(f"   Average EPE: {metrics.average_epe:,.2f}")
    print()

    print("Exporting results...")
    fig = create_exposure_plot(
        metrics.time_grid,
        metrics.epe,
        metrics.ene,
        metrics.pfe_95,
        title="Exposure",
        use_plotly=False,
    )
    pdf_path = save_figure_pdf(fig, args.output_dir / "Exposure.pdf", 800, 600)
    print(f"   Saved: {pdf_path}")

    files = create_summary_report(report, args.output_dir, prefix="discva")
    for path in files.values():
        print(f"   Saved: {path}")

    print()
    print("=" * 60)
    print("DiscVA complete!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
