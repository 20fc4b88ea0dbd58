#!/usr/bin/env python3
"""
fimov - CLI Entry Point
=======================

Usage:
    fimov camera --start 2020-01-01 --end 2020-12-31 --name folder-name
    fimov whatsapp --start 2020-01-01 --name folder-name   # end defaults to today
    fimov camera --start 2020-01-01                        # name defaults to start_end
    python -m fimov camera --start 2020-01-01 --date-source exif --report-out report.json
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from dotenv import find_dotenv, load_dotenv
from rich.markup import escape

from .config import get_profile, load_config, resolve_config_path, validate_paths
from .dates import DATE_FORMAT, resolve_range
from .errors import FimovError, MoveError, UnknownKeywordError, UsageError
from .organizer import DATE_SOURCES, organize
from .utils import console, print_error, print_header, print_report_table, print_success, print_warning, save_json

USAGE = "Usage: fimov <keyword> --start <start-date> [--end <end-date>] [--name <folder-name>]"


@dataclass(frozen=True)
class CliArgs:
    keyword: str
    start: str
    end: str | None = None
    name: str | None = None
    config: Path | None = None
    date_source: str = "mtime"
    report_out: Path | None = None


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(f"Error: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="fimov",
        description="Move files modified between two dates into a dated folder",
        usage="%(prog)s <keyword> --start <start-date> [--end <end-date>] [--name <folder-name>]",
    )
    parser.add_argument("keyword", nargs="?", help="Profile name from the configuration file")
    parser.add_argument("--start", help="Start date (format: YYYY-MM-DD)")
    parser.add_argument("--end", help="End date (format: YYYY-MM-DD, default: today)")
    parser.add_argument("--name", help="Folder name (default: <start>_<end>)")
    parser.add_argument("--config", type=Path,
                        help="Configuration file (default: $FIMOV_CONFIG or ./.fimov.json)")
    parser.add_argument("--date-source", choices=DATE_SOURCES, default="mtime",
                        help="Match on modification time or EXIF capture date (default: mtime)")
    parser.add_argument("--report-out", type=Path, help="Write a JSON report of the run")
    return parser


def parse_args(argv: list[str]) -> CliArgs:
    """
    Parse an explicit argument list.

    Args:
        argv: Arguments without the program name.

    Returns:
        The parsed CliArgs.

    Raises:
        UsageError: If the keyword or --start is missing, or an option is invalid.
    """
    args = build_parser().parse_args(argv)

    if not args.keyword:
        raise UsageError("Error: keyword is required")

    if not args.start:
        raise UsageError(f"Error: --start flag is required for {args.keyword}")

    return CliArgs(
        keyword=args.keyword,
        start=args.start,
        end=args.end,
        name=args.name,
        config=args.config,
        date_source=args.date_source,
        report_out=args.report_out,
    )


def run(args: CliArgs) -> int:
    """Load the profile, resolve the date range and organize. Returns the exit code."""
    config_path = resolve_config_path(args.config)
    config = load_config(config_path)
    conf = get_profile(config, args.keyword)
    validate_paths(conf)

    date_range, name = resolve_range(args.start, args.end, args.name)
    if date_range.is_empty:
        print_warning("Start date is not before end date, no file can match.")

    dest_path = Path(conf.destination) / name

    print_header(
        "fimov",
        f"Profile: {args.keyword}\n"
        f"Range: {date_range.start.strftime(DATE_FORMAT)} .. {date_range.end.strftime(DATE_FORMAT)} "
        f"({args.date_source})\n"
        f"Destination: {dest_path}",
    )

    report = organize(Path(conf.source), dest_path, date_range, args.date_source)

    if args.report_out:
        save_json(report, args.report_out)

    print_report_table(report)

    if report["failed_count"]:
        print_warning(f"{report['failed_count']} file(s) could not be moved.")
        return MoveError.exit_code

    print_success("Images organized successfully.")
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    load_dotenv(find_dotenv(usecwd=True))

    try:
        return run(parse_args(argv))
    except (UsageError, UnknownKeywordError) as e:
        console.print(escape(str(e)))
        console.print(escape(USAGE))
        return e.exit_code
    except FimovError as e:
        print_error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        console.print("\n[ABORT] Operation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
