#!/usr/bin/env python3
"""
cmpfiles CLI — compare two or more files byte by byte in a single pass.
Parses arguments into CompareParams, runs CompareCommand and prints the report.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from cmpfiles.core.errors import CompareError, ConfigurationError
from cmpfiles.core.models import CompareParams, CompareReport
from cmpfiles.commands import CompareCommand
from cmpfiles.services.report_service import ReportService
from cmpfiles.utils.convert_utils import ConvertUtils
from cmpfiles.aliases import (
    DESCRIPTION_TEXT, USAGE_HINT_TEXT, BUFFER_SIZE_HELP_TEXT,
    COMPARE_FILES_HELP_TEXT, EPILOG_TEXT
)

EXIT_MATCHED = 0
EXIT_NOT_MATCHED = 1
EXIT_FAILURE = 2


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="cmpfiles",
            description=DESCRIPTION_TEXT,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "files",
            nargs="*",
            default=[],
            metavar="FILE",
            help="Files to compare (same as --compare-files)"
        )
        parser.add_argument(
            "--compare-files", "--check-files", "-cf",
            nargs="+",
            default=None,
            type=str,
            metavar="FILE",
            dest="compare_files",
            help=COMPARE_FILES_HELP_TEXT
        )
        parser.add_argument(
            "--buffer-size", "-bs",
            default=None,
            type=str,
            metavar="SIZE",
            dest="buffer_size",
            help=BUFFER_SIZE_HELP_TEXT
        )
        parser.add_argument(
            "--only-matching", "-om",
            action="store_true",
            dest="only_matching",
            help="Only show the files that have matched data"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Print nothing, only set the exit status"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show statistics, groups of matching files and their fingerprints"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.files and args.compare_files:
            self.error_exit("--compare-files cannot be used, since the file paths have already been defined!")

        identities = args.compare_files or args.files
        if not identities:
            self.error_exit("No file paths were defined!")
        if len(identities) < 2:
            self.error_exit("At least 2 files need to be defined (use -h --help for more information)!")

        if args.buffer_size is not None:
            try:
                buffer_size = ConvertUtils.human_to_bytes(args.buffer_size)
            except ValueError as e:
                self.error_exit(f"Invalid buffer size: {e}")
            if buffer_size == 0:
                self.error_exit("--buffer-size was provided with an invalid value (which is zero)!")

    def create_params(self, args: argparse.Namespace) -> CompareParams:
        """Create CompareParams from CLI arguments."""
        identities = args.compare_files or args.files
        try:
            return CompareParams.from_human_readable(identities, args.buffer_size)
        except ConfigurationError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows decided pairs in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} pairs decided ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} pairs decided...")
        sys.stderr.flush()

    def run_comparison(self, params: CompareParams) -> CompareReport:
        """Execute the comparison workflow."""
        command = CompareCommand()
        if self.verbose:
            print(f"Comparing {len(params.identities)} files "
                  f"(buffer size: {ConvertUtils.bytes_to_human(params.buffer_size)})...")

        try:
            report = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except CompareError as e:
            self.error_exit(e.message)

        if self.verbose:
            sys.stderr.write("\n")
            print(report.stats.print_summary())
        return report

    def output_results(self, report: CompareReport, only_matching: bool = False) -> None:
        """Print one line per pair in enumeration order."""
        if self.quiet:
            return

        for line in ReportService.describe_pairs(report, only_matching=only_matching):
            print(line)

        if self.verbose:
            groups = ReportService.matched_groups(report)
            if groups:
                print(f"\nFound {len(groups)} group(s) of matching files")
            for idx, group in enumerate(groups, 1):
                fingerprint = f" | xxh64: {group.fingerprint}" if group.fingerprint else ""
                print(f"\n📁 Group {idx} | Files: {group.match_count}{fingerprint}")
                for identity in group.identities:
                    print(f"   {identity}")

    def print_usage_hint(self) -> None:
        print(DESCRIPTION_TEXT)
        print(USAGE_HINT_TEXT)
        print()
        print("cmpfiles -h")
        print("cmpfiles --help")

    @staticmethod
    def error_exit(message: str, code: int = EXIT_FAILURE) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit status."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.print_usage_hint()
            return EXIT_MATCHED

        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger().setLevel(logging.INFO)

        self.validate_args(args)
        params = self.create_params(args)

        report = self.run_comparison(params)
        self.output_results(report, only_matching=args.only_matching)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")

        return EXIT_MATCHED if report.all_matched else EXIT_NOT_MATCHED


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
