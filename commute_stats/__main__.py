"""
Entry point for Commute Stats.

Usage:
    python -m commute_stats records.csv
    python -m commute_stats records.csv --low 22 --high 35 --confidence 8
"""

import argparse
import sys
import traceback
import warnings


def _check_dependencies():
    """Verify required packages are installed."""
    missing = []
    try:
        import numpy  # noqa: F401
    except ImportError:
        missing.append("numpy")
    try:
        import matplotlib  # noqa: F401
    except ImportError:
        missing.append("matplotlib")

    if missing:
        print(
            f"Missing required packages: {', '.join(missing)}\n"
            f"Install with: pip install {' '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)


def _exception_hook(exc_type, exc_value, exc_tb):
    """Global exception handler: full traceback on stderr, exit code 2."""
    msg = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print(f"Unhandled exception:\n{msg}", file=sys.stderr)
    sys.exit(2)


def _show_warning(message, category, filename, lineno, file=None, line=None):
    print(f"warning: {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    from . import APP_NAME, APP_VERSION
    from .constants import DEFAULT_BIN_SIZE_MINUTES

    parser = argparse.ArgumentParser(
        prog="commute_stats",
        description=f"{APP_NAME}: analyse recorded commute durations.",
    )
    parser.add_argument("csv", help="commute records (ID, Date, Time, Duration (s))")
    parser.add_argument("--low", help="forecast lower bound, whole minutes")
    parser.add_argument("--high", help="forecast upper bound, whole minutes")
    parser.add_argument("--confidence", type=int, default=9,
                        help="confidence in the forecast, 5-10 (default: 9)")
    parser.add_argument("--bin-size", type=float, default=DEFAULT_BIN_SIZE_MINUTES,
                        help="histogram bin width in minutes")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {APP_VERSION}")
    return parser


def main(argv=None) -> int:
    """Print the statistics report (and challenge score) for a CSV file."""
    _check_dependencies()
    sys.excepthook = _exception_hook
    warnings.showwarning = _show_warning

    from .analysis import analyze_durations, render_histogram, render_text_report
    from .breakdown import histogram_bins, hourly_breakdown
    from .constants import MIN_CHALLENGE_RECORDS
    from .csv_parser import durations_of, load_commute_csv
    from .scoring import score_challenge

    args = build_parser().parse_args(argv)

    try:
        records = load_commute_csv(args.csv)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    durations = durations_of(records)
    print(render_text_report(analyze_durations(durations)))

    print()
    print(f"Histogram ({args.bin_size:g}-minute bins)")
    print(render_histogram(histogram_bins(durations, args.bin_size)))

    print()
    print("By start hour")
    for row in hourly_breakdown(records):
        print(f"  {row.hour}  {row.average_minutes:6.1f} min avg  ({row.count} trips)")

    if args.low is not None or args.high is not None:
        print()
        print("90% CI challenge")
        result = score_challenge(args.low, args.high, durations, args.confidence)
        if result is None:
            print(
                f"  Forecast not scoreable: need whole minutes with 0 < low < high, "
                f"confidence 5-10 and at least {MIN_CHALLENGE_RECORDS} commutes.",
                file=sys.stderr,
            )
            return 1
        cov = result.coverage
        print(f"  Score      {result.score}")
        print(f"  Checksum   {result.checksum}")
        print(f"  Coverage   {cov.below} below / {cov.within} within / {cov.above} above")
        print(f"  CSV row    {result.csv_row}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
