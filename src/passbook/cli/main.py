#!/usr/bin/env python3
"""
EPF Passbook CLI.

Parses an EPFO member passbook and prints the structured result.

Usage:
    epf-passbook parse passbook.pdf
    epf-passbook parse passbook.pdf --format table --excel report.xlsx
    epf-passbook parse passbook.txt --text
    epf-passbook extract passbook.pdf --password SECRET
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from passbook.core.exceptions import PassbookError, ExtractionError
from passbook.core.settings import ParserSettings, SETTINGS_ENV_VAR
from passbook.parsers.epf.parser import EPFPassbookParser
from passbook.parsers.epf.pdf_extractor import extract_text
from passbook.reports.contribution_report import (
    contributions_to_frame,
    summarize_by_category,
    balances_to_frame,
    write_excel_report,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def load_settings(config: Optional[str]) -> ParserSettings:
    """Settings from --config, else $EPF_PASSBOOK_CONFIG, else defaults."""
    path = config or os.environ.get(SETTINGS_ENV_VAR)
    return ParserSettings.load(Path(path) if path else None)


def read_text_file(path: Path) -> str:
    """Read an already-decoded passbook text file."""
    if not path.exists():
        raise ExtractionError(f"File not found: {path}", source=str(path))
    return path.read_text(encoding="utf-8")


def print_table(result) -> None:
    """Print the parse result as plain-text tables."""
    member = result.member_info
    print(f"\nMember:       {member.member_name or '-'} ({member.member_id or '-'})")
    print(f"Establishment: {member.establishment_name or '-'} ({member.establishment_id or '-'})")
    print(f"UAN:          {member.uan or '-'}")
    print(f"FY:           {member.financial_year}")

    with pd.option_context("display.max_rows", None, "display.width", 200,
                           "display.max_colwidth", 40):
        contributions = contributions_to_frame(result)
        print(f"\nContributions ({len(contributions)} records):")
        if contributions.empty:
            print("  (none)")
        else:
            print(contributions.to_string(index=False))

        print("\nBy Category:")
        categories = summarize_by_category(result)
        print("  (none)" if categories.empty else categories.to_string(index=False))

        print("\nBalances:")
        print(balances_to_frame(result).to_string(index=False))

    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")


# ============================================================================
# Command Handlers
# ============================================================================

def cmd_parse(args) -> int:
    """Handle parse command - parse a passbook and print it."""
    settings = load_settings(args.config)
    parser = EPFPassbookParser(settings)
    source = Path(args.file)

    if args.text:
        result = parser.parse_text(read_text_file(source))
    else:
        result = parser.parse(source, password=args.password)

    if args.format == "table":
        print_table(result)
    else:
        print(result.to_json())

    if args.excel:
        path = write_excel_report(result, Path(args.excel))
        print(f"\nReport written: {path}", file=sys.stderr)

    return 0


def cmd_extract(args) -> int:
    """Handle extract command - dump the decoded text of a passbook PDF."""
    print(extract_text(Path(args.file), password=args.password))
    return 0


# ============================================================================
# Main
# ============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog='epf-passbook',
        description='EPF Passbook - structured records from EPFO member passbooks',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  epf-passbook parse passbook.pdf
  epf-passbook parse passbook.pdf --format table --excel report.xlsx
  epf-passbook parse passbook.txt --text
  epf-passbook extract passbook.pdf
        """
    )

    # Global arguments
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    parser.add_argument('--debug', action='store_true', help='Debug output')

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Command')

    # parse command
    parse_parser = subparsers.add_parser('parse', help='Parse a passbook')
    parse_parser.add_argument('file', help='Passbook PDF (or text file with --text)')
    parse_parser.add_argument('--password', '-p', help='PDF password')
    parse_parser.add_argument('--text', action='store_true',
                              help='Treat FILE as already-decoded UTF-8 text')
    parse_parser.add_argument('--format', '-f', choices=['json', 'table'], default='json',
                              help='Output format (default: json)')
    parse_parser.add_argument('--excel', help='Also write an Excel report to this path')
    parse_parser.add_argument('--config', '-c',
                              help=f'Settings JSON (default: ${SETTINGS_ENV_VAR})')

    # extract command
    extract_parser = subparsers.add_parser('extract', help='Print the decoded text of a passbook PDF')
    extract_parser.add_argument('file', help='Passbook PDF')
    extract_parser.add_argument('--password', '-p', help='PDF password')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose, args.debug)

    try:
        if args.command == 'parse':
            return cmd_parse(args)
        elif args.command == 'extract':
            return cmd_extract(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled", file=sys.stderr)
        return 130
    except PassbookError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
