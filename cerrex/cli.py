"""
cerrex/cli.py - Command line entry point.

    cerrex estimate SNAPSHOT.json [--json] [--config FILE] [--log-level LEVEL]
    cerrex categories [--json] [--unit UNIT]

Exit codes: 0 success, 1 invalid input or configuration, 2 usage error.
"""

from __future__ import annotations
from typing import List, Optional
import argparse
import json
import logging
import sys

from .bootstrap import CerrexConfig, load_config, setup_logging
from .cost import default_unit_factors
from .cost.categories import categories_by_unit
from .errors import EngineError
from .estimator import CostEstimator, ProjectEstimate
from .ingest import load_snapshot, to_project

logger = logging.getLogger("cerrex.cli")

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ISDC decommissioning cost estimation",
        prog="cerrex",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (overrides configuration)",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path",
        default=None,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    estimate = subparsers.add_parser("estimate", help="Estimate a project snapshot")
    estimate.add_argument("snapshot", help="Path to project snapshot JSON")
    estimate.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    categories = subparsers.add_parser("categories", help="List default D&D unit factors")
    categories.add_argument(
        "--unit",
        help="Only categories measured in this unit",
        default=None,
    )
    categories.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    return parser


# =============================================================================
# OUTPUT
# =============================================================================

def format_estimate(estimate: ProjectEstimate, name: str = "") -> str:
    """Plain-text estimate report."""
    aggregation = estimate.aggregation
    total = estimate.grand_total
    lines = [
        f"Project: {name or 'unnamed'}",
        f"Items priced: {aggregation.item_count}  skipped: {estimate.skipped_count}",
        "",
        f"{'Code':<12}{'Activity':<58}{'Total':>16}{'%':>8}",
        "-" * 94,
    ]
    for bucket in aggregation.by_l1.values():
        lines.append(
            f"{bucket.code:<12}{bucket.name[:56]:<58}"
            f"{bucket.total:>16,.2f}{aggregation.percentage(bucket):>8.1f}"
        )
    if aggregation.unassigned.item_count:
        lines.append(f"{aggregation.unassigned.code:<12}{'':<58}{aggregation.unassigned.total:>16,.2f}")
    lines.append("-" * 94)
    lines.append(f"{'L0':<12}{'Grand total':<58}{total.total:>16,.2f}")
    lines.append(
        f"  labour {total.labour:,.2f} | investment {total.investment:,.2f} | "
        f"expenses {total.expenses:,.2f} | contingency {total.contingency:,.2f} | "
        f"workforce {total.workforce:,.1f} h"
    )

    if estimate.cashflow is not None:
        cf = estimate.cashflow
        lines.append("")
        lines.append(
            f"Cashflow {cf.start_year}-{cf.end_year}: inflated {cf.total_inflated:,.2f}, "
            f"NPV {cf.npv:,.2f} at {cf.discount_rate}%"
        )

    if estimate.scenarios is not None:
        lines.append("")
        lines.append("Scenarios:")
        for scenario in estimate.scenarios.scenarios:
            lines.append(
                f"  {scenario.name:<24}{scenario.total_cost:>16,.2f}"
                f"{scenario.npv:>16,.2f}{scenario.percent_change_vs_base:>+9.1f}%"
            )
        best = estimate.scenarios.best
        if best is not None:
            lines.append(f"  Lowest NPV: {best.name}")

    lines.append("")
    lines.append(estimate.report.summary)
    return "\n".join(lines)


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_estimate(parsed: argparse.Namespace, config: CerrexConfig) -> int:
    snapshot = load_snapshot(parsed.snapshot)
    project = to_project(snapshot, config)

    estimator = CostEstimator(
        project.unit_factors,
        project.rates,
        missing_policy=config.estimate.missing_policy,
    )
    estimate = estimator.estimate(
        project.items,
        cashflow=project.cashflow,
        sensitivity=project.sensitivity,
    )

    if parsed.json:
        print(json.dumps({"project": project.name, **estimate.to_dict()}, indent=2))
    else:
        print(format_estimate(estimate, project.name))
    return EXIT_OK


def cmd_categories(parsed: argparse.Namespace, config: CerrexConfig) -> int:
    factors = categories_by_unit(parsed.unit) if parsed.unit else default_unit_factors()

    if parsed.json:
        print(json.dumps([uf.to_dict() for uf in factors], indent=2))
        return EXIT_OK

    print(f"{'Code':<8}{'Unit':<6}{'Manpower':>10}{'Invest.':>10}{'Expenses':>10}  Name")
    for uf in factors:
        print(
            f"{uf.code:<8}{uf.unit:<6}{uf.manpower_uf:>10g}{uf.investment_uf:>10g}"
            f"{uf.expenses_uf:>10g}  {uf.name}"
        )
    return EXIT_OK


COMMANDS = {
    "estimate": cmd_estimate,
    "categories": cmd_categories,
}


def main(args: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = build_parser()
    try:
        parsed = parser.parse_args(args)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_USAGE

    try:
        config = load_config(parsed.config)
    except EngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    setup_logging(
        level=parsed.log_level or config.logging.level,
        log_file=parsed.log_file or config.logging.log_file,
        json_format=config.logging.json_logs,
        fmt=config.logging.format,
    )

    try:
        return COMMANDS[parsed.command](parsed, config)
    except EngineError as e:
        logger.debug(f"Command failed: {e!r}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
