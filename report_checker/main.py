#!/usr/bin/env python3
r"""
Report Checker
==============
Checks a tree of health-insurance report files against a client roster.

Usage:
  report-checker scan "D:\Reports"                          # parse only, list errors
  report-checker check "D:\Reports" --clients clients.json --month Listopad
  report-checker check "D:\Reports" --clients clients.json --month 11 --year 2025 \
                 --excel missing.xlsx --json summary.json
  report-checker organize "D:\Reports"                      # dry run
  report-checker organize "D:\Reports" --execute            # move misplaced files

ROOT defaults to REPORT_CHECKER_ROOT (environment or .env).
"""

import argparse
import logging
import sys
from typing import List, Optional

from report_checker import config
from report_checker.errors import RosterError
from report_checker.folders import FolderResolver
from report_checker.matcher import evaluate_walk
from report_checker.parser import FilenameParser
from report_checker.periods import CzechMonth, default_year
from report_checker.report import missing_rows, write_results_excel, write_summary_json
from report_checker.roster import load_clients
from report_checker.walker import walk


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.INFO)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def _print_errors(walk_result) -> None:
    if not walk_result.error_reports:
        return
    print(f"\nERRORS ({len(walk_result.error_reports)}):")
    for err in walk_result.error_reports:
        print(f"  - {err.file_name}: {err.error_message}")


def cmd_scan(args) -> int:
    parser = FilenameParser(strict_insurer=args.strict_insurer)
    result = walk(args.root, parser, show_progress=args.progress)
    misplaced = sum(1 for pf in result.parsed_file_names if pf.invalid_directory)

    print(f"{'='*70}")
    print(f"SCAN  {args.root}")
    print(f"{'='*70}")
    print(f"  Parsed files:      {len(result.parsed_file_names)}")
    print(f"  Misplaced files:   {misplaced}")
    print(f"  Errors:            {len(result.error_reports)}")
    _print_errors(result)
    return 1 if result.error_reports else 0


def cmd_check(args) -> int:
    try:
        month = CzechMonth.parse(args.month)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    year = args.year or default_year()

    try:
        clients = load_clients(args.clients)
    except (FileNotFoundError, RosterError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    parser = FilenameParser(strict_insurer=args.strict_insurer)
    result = walk(args.root, parser, show_progress=args.progress)
    updated = evaluate_walk(clients, result, year, month.number)
    missing = missing_rows(updated, result, year, month.number)

    print(f"{'='*70}")
    print(f"CHECK  {month} {year}  ({args.root})")
    print(f"{'='*70}")
    print(f"  Clients:           {len(updated)}")
    print(f"  With reports:      {len(updated) - len(missing)}")
    print(f"  Missing reports:   {len(missing)}")
    if missing:
        print("\nMISSING:")
        for name, ico, _required, _have, lacking in missing:
            suffix = f"  (missing: {lacking})" if lacking else ""
            print(f"  - {name} [{ico}]{suffix}")
    _print_errors(result)

    if args.excel:
        write_results_excel(args.excel, updated, result, year, month.number)
        print(f"\n  Excel:  {args.excel}")
    if args.json:
        write_summary_json(args.json, updated, result, year, month.number)
        print(f"  JSON:   {args.json}")
    return 1 if missing else 0


def cmd_organize(args) -> int:
    parser = FilenameParser(strict_insurer=args.strict_insurer)
    result = walk(args.root, parser, show_progress=args.progress)
    moves = FolderResolver(args.root).relocate(result.parsed_file_names,
                                               dry_run=not args.execute)
    for m in moves:
        note = f"  ({m.error})" if m.error else ""
        print(f"  [{m.status}] {m.source} -> {m.destination}{note}")
    if not args.execute:
        print(f"\nDRY RUN complete ({len(moves)} moves). Use --execute to move files.")
        return 0
    failed = sum(1 for m in moves if m.status == "failed")
    print(f"\nMove complete: {len(moves) - failed} moved/skipped, {failed} failed")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check health-insurance report files against a client roster")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p):
        p.add_argument("root", nargs="?", default=config.REPORTS_ROOT,
                       help="Reports root folder (default: REPORT_CHECKER_ROOT)")
        p.add_argument("--progress", action="store_true", help="Show a progress bar")
        p.add_argument("--strict-insurer", action="store_true", default=config.STRICT_INSURER,
                       help="Treat filenames without a known insurer as errors")

    p_scan = sub.add_parser("scan", help="Parse all report files and list errors")
    add_common(p_scan)
    p_scan.set_defaults(func=cmd_scan)

    p_check = sub.add_parser("check", help="Find clients missing reports for a month")
    add_common(p_check)
    p_check.add_argument("--clients", required=True, help="Client roster (JSON)")
    p_check.add_argument("--month", required=True,
                         help="Month number (1-12) or Czech name, e.g. Listopad")
    p_check.add_argument("--year", type=int, default=None,
                         help="Report year (default: current year)")
    p_check.add_argument("--excel", default=None, help="Write results workbook here")
    p_check.add_argument("--json", default=None, help="Write JSON summary here")
    p_check.set_defaults(func=cmd_check)

    p_org = sub.add_parser("organize", help="Move misplaced files into insurer folders")
    add_common(p_org)
    p_org.add_argument("--execute", action="store_true",
                       help="Apply moves (default: dry run)")
    p_org.set_defaults(func=cmd_organize)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
