#!/usr/bin/env python3
"""
Pathwise xVA Engine - CVA Non-Linearity Example

This script shows that CVA is not additive across a netting set:
1. Load the configuration (YAML file or the reference scenario)
2. Simulate the underlying once for all forwards
3. Compute the exposure of each forward and of the netted portfolio
4. Compare the sum of standalone CVAs with the portfolio CVA
5. Plot PFE, EPE and ENE of each deal against the portfolio, plot the
   CVAs, and export the results

Usage:
    python examples/run_nonlinearity.py [--config data/nonlinearity.yaml]
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from pathwise_xva import XVAError, load_nonlinearity_config, run_nonlinearity_analysis
from pathwise_xva.config.loader import create_default_nonlinearity_config
from pathwise_xva.reporting import (
    create_cva_bar_chart,
    create_impact_plot,
    create_summary_report,
    save_figure_pdf,
)


def main(argv: list[str] | None = None) -> int:
    """Run the non-linearity example and return the process exit code."""
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
    print("Pathwise xVA Engine - CVA Non-Linearity")
    print("=" * 60)
    print()

    try:
        config = (
            load_nonlinearity_config(args.config)
            if args.config is not None
            else create_default_nonlinearity_config()
        )
        report = run_nonlinearity_analysis(config)
    except (XVAError, ValidationError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(report.summary())
    print()

    print("Exporting results...")
    for measure in ("PFE", "EPE", "ENE"):
        fig = create_impact_plot(report, measure, use_plotly=False)
        pdf_path = save_figure_pdf(fig, args.output_dir / f"{measure}Impact.pdf", 800, 600)
        print(f"   Saved: {pdf_path}")

    result = report.result
    bars = {f"Deal {k}": cva for k, cva in enumerate(result.standalone_cva, start=1)}
    bars["Sum"] = result.sum_of_standalone
    bars["Portfolio"] = result.portfolio_cva
    fig = create_cva_bar_chart(bars, use_plotly=False)
    pdf_path = save_figure_pdf(fig, args.output_dir / "CVA.pdf", 800, 600)
    print(f"   Saved: {pdf_path}")

    files = create_summary_report(report, args.output_dir, prefix="nonlinearity")
    for path in files.values():
        print(f"   Saved: {path}")

    print()
    print("=" * 60)
    print("CVA non-linearity complete!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
