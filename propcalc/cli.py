"""CLI entry point for the property scenario model."""

import argparse
import logging
import math
import sys
from pathlib import Path

from propcalc.calculator import calculate_property_data
from propcalc.config import ConfigError, dump_config, load_config
from propcalc.defaults import DEFAULT_INTEREST_RATE, DEFAULT_LOAN_TERM, STATES
from propcalc.loan import calculate_loan_details
from propcalc.output import (
    comparison_csv,
    comparison_table,
    detailed_table,
    fmt,
    fmt_pct,
    full_report,
    to_csv,
)
from propcalc.sensitivity import (
    METRICS,
    format_matrix,
    format_sweep,
    frange,
    sweep,
    what_if_matrix,
)
from propcalc.stamp_duty import calculate_stamp_duty
from propcalc.validation import validate_property_data


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _load(path: str | None) -> dict:
    if not path:
        return {}
    try:
        return load_config(path)
    except ConfigError as exc:
        _fail(str(exc))


def _parse_range(text: str) -> list[float]:
    parts = text.split(",")
    if len(parts) != 3:
        _fail(f"range '{text}' must be start,stop,step (e.g., 4,8,0.5)")
    try:
        start, stop, step = (float(p) for p in parts)
        return frange(start, stop, step)
    except ValueError as exc:
        _fail(f"invalid range '{text}': {exc}")


def _parse_axis(text: str) -> tuple[str, list[float]]:
    param, sep, range_text = text.partition(":")
    if not sep or not param:
        _fail(f"axis '{text}' must be param:start,stop,step (e.g., loan.interest:5,7,0.5)")
    return param, _parse_range(range_text)


def cmd_run(args: argparse.Namespace) -> None:
    """Calculate one scenario."""
    data = calculate_property_data(_load(args.config))
    errors = validate_property_data(data)

    if args.csv:
        print(to_csv(data.projections), end="")
    elif args.detailed:
        print(detailed_table(data))
    else:
        print(full_report(data, errors))


def cmd_quote(args: argparse.Namespace) -> None:
    """Stamp duty, LMI and repayment preview without a full scenario."""
    value = args.value
    duty = calculate_stamp_duty(value, args.fhb, args.land, args.state)
    print(f"Stamp duty ({args.state.upper()}): {fmt(duty)}")
    if args.deposit is None:
        return

    loan = calculate_loan_details(value, args.deposit, duty, {
        "interest": args.interest,
        "term": args.term,
        "is_interest_only": args.interest_only,
    })
    print(f"Loan:       {fmt(loan.amount)} (LVR {fmt_pct(loan.lvr)})")
    print(f"LMI:        {fmt(loan.lmi)}" + (" (not insurable above 95% LVR)" if math.isnan(loan.lmi) else ""))
    print(f"Repayment:  {fmt(loan.monthly_mortgage)}/month")


def cmd_sensitivity(args: argparse.Namespace) -> None:
    """Run sensitivity analysis on one input."""
    base = _load(args.config)
    values = _parse_range(args.range)
    try:
        results = sweep(base, args.param, values)
    except ValueError as exc:
        _fail(str(exc))
    print(format_sweep(args.param, results))


def cmd_matrix(args: argparse.Namespace) -> None:
    """Two-input what-if grid."""
    base = _load(args.config)
    row_param, row_values = _parse_axis(args.rows)
    col_param, col_values = _parse_axis(args.cols)
    try:
        result = what_if_matrix(base, row_param, row_values, col_param, col_values, args.metric)
    except ValueError as exc:
        _fail(str(exc))
    print(format_matrix(result))


def cmd_compare(args: argparse.Namespace) -> None:
    """Side-by-side comparison of scenario files."""
    scenarios = [
        (Path(path).stem, calculate_property_data(_load(path)))
        for path in args.configs
    ]
    if args.csv:
        print(comparison_csv(scenarios), end="")
    else:
        print(comparison_table(scenarios))


def cmd_defaults(args: argparse.Namespace) -> None:
    """Print the default scenario as YAML."""
    print(dump_config(calculate_property_data()), end="")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Australian property purchase model: stamp duty, LMI, repayments and projections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  propcalc run                              # Run with defaults
  propcalc run scenario.yaml                # Run a scenario file
  propcalc run scenario.yaml --detailed     # Sectioned breakdown
  propcalc run scenario.yaml --csv          # Projections as CSV
  propcalc quote 750000 --state VIC --fhb --deposit 75000
  propcalc sensitivity --param loan.interest --range 5,7,0.5
  propcalc matrix --rows capital_growth:2,8,2 --cols loan.interest:5,7,1
  propcalc compare a.yaml b.yaml --csv
  propcalc defaults                         # Print default scenario
""",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    # run
    run_parser = subparsers.add_parser("run", help="Calculate a scenario")
    run_parser.add_argument("config", nargs="?", help="YAML/JSON scenario file")
    run_parser.add_argument("--detailed", action="store_true", help="Show sectioned breakdown")
    run_parser.add_argument("--csv", action="store_true", help="Output projections as CSV")

    # quote
    quote_parser = subparsers.add_parser("quote", help="Stamp duty / LMI / repayment preview")
    quote_parser.add_argument("value", type=float, help="Property value")
    quote_parser.add_argument("--state", default="NSW", help=f"One of {', '.join(STATES)}")
    quote_parser.add_argument("--fhb", action="store_true", help="First home buyer")
    quote_parser.add_argument("--land", action="store_true", help="Vacant land")
    quote_parser.add_argument("--deposit", type=float, help="Deposit (enables loan preview)")
    quote_parser.add_argument("--interest", type=float, default=DEFAULT_INTEREST_RATE, help="Interest rate, %% p.a.")
    quote_parser.add_argument("--term", type=int, default=DEFAULT_LOAN_TERM, help="Years")
    quote_parser.add_argument("--interest-only", action="store_true", help="Interest-only loan")

    # sensitivity
    sens_parser = subparsers.add_parser("sensitivity", help="Sweep one input")
    sens_parser.add_argument("--config", help="Base scenario file")
    sens_parser.add_argument("--param", required=True, help="Input path (e.g., loan.interest)")
    sens_parser.add_argument("--range", required=True, help="start,stop,step (e.g., 5,7,0.5)")

    # matrix
    matrix_parser = subparsers.add_parser("matrix", help="Two-input what-if grid")
    matrix_parser.add_argument("--config", help="Base scenario file")
    matrix_parser.add_argument("--rows", required=True, help="param:start,stop,step")
    matrix_parser.add_argument("--cols", required=True, help="param:start,stop,step")
    matrix_parser.add_argument("--metric", default="roi", choices=list(METRICS))

    # compare
    compare_parser = subparsers.add_parser("compare", help="Compare scenario files")
    compare_parser.add_argument("configs", nargs="+", help="YAML/JSON scenario files")
    compare_parser.add_argument("--csv", action="store_true", help="Output as CSV")

    # defaults
    subparsers.add_parser("defaults", help="Print default scenario")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "run": cmd_run,
        "quote": cmd_quote,
        "sensitivity": cmd_sensitivity,
        "matrix": cmd_matrix,
        "compare": cmd_compare,
        "defaults": cmd_defaults,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
    else:
        command(args)


if __name__ == "__main__":
    main()
