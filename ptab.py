#!/usr/bin/env python3
"""
ptab: Reconstructs table rows from the whitespace layout of document text.

Pages are read from a PDF (rendered to layout text with pdfminer) or from a
text file with form feed page breaks, cleaned of repeating headers, footers
and page numbers, and folded into logical rows by the TableTextExtractor.
"""

import argparse
import logging
import os
import sys
import time

# --- Dependency Imports ---
try:
    from rich.console import Console
    from rich.table import Table
    from rich.theme import Theme
except ImportError as e:
    print(f"Error: Missing required library. -> {e}")
    print("Please install all core dependencies with:")
    print("pip install pdfminer.six rich")
    sys.exit(1)

# --- Local Application Imports ---
from ptab_lib.api import parse_page_selection, process_document, rows_to_json
from ptab_lib.config import ConfigurationError, ExtractorOptions, load_options_file

from core.log_utils import ContextFilter, setup_logging


# --- CUSTOM ARGPARSE FORMATTER ---
class CustomHelpFormatter(
    argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter
):
    """
    A custom argparse formatter that combines showing default values with
    preserving newline formatting in help text.
    """

    pass


def _line_number(value):
    """argparse type for pagination options: a 1-based line number."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a line number, got '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError("line numbers start at 1")
    return number


class Application:
    """Orchestrates the table extraction workflow based on command-line arguments."""

    DEFAULT_FILENAME_SENTINEL = "__DEFAULT_FILENAME__"

    def __init__(self, args):
        self.args = args
        self.stats = {}
        self.console = Console(theme=Theme({"table.header": "bold sky_blue2"}))

    def run(self):
        """Main entry point for the application logic."""
        self.stats["start_time"] = time.monotonic()
        setup_logging(
            level=logging.INFO if self.args.verbose else logging.WARNING,
            color_logs=self.args.color_logs,
            debug_topics=self.args.debug_topics,
            log_file=self.args.log_file,
        )
        app_log = logging.getLogger("ptab")

        log_filter = ContextFilter(os.path.basename(self.args.input_file))
        root_logger = logging.getLogger()
        for handler in root_logger.handlers:
            handler.addFilter(log_filter)

        options = self.build_options()
        pages = parse_page_selection(self.args.pages)
        if pages is None and self.args.pages.lower() != "all":
            sys.exit(1)

        extractor = process_document(self.args.input_file, options, pages)
        result = extractor.result()
        self.stats["lines"] = len(extractor.lines)
        self.stats["rows"] = len(result)

        self._save_extracted_lines(extractor.lines)
        self._save_result(result)
        self._display_result(result)

        duration = time.monotonic() - self.stats["start_time"]
        app_log.info(
            "Done: %d line(s) -> %d row(s) in %.2fs.",
            self.stats["lines"],
            self.stats["rows"],
            duration,
        )

    def build_options(self) -> ExtractorOptions:
        """Layers the options file and explicit command-line flags over the defaults."""
        options = ExtractorOptions()
        if self.args.config:
            options = options.merged_with(load_options_file(self.args.config))

        flags = {
            "remove_page_headers": self.args.remove_headers,
            "remove_page_footers": self.args.remove_footers,
            "remove_pagination_from_header": self.args.pagination_header,
            "remove_pagination_from_footer": self.args.pagination_footer,
            "remove_empty_lines": self.args.remove_empty_lines,
            "position_tolerance": self.args.tolerance,
        }
        return options.merged_with({k: v for k, v in flags.items() if v is not None})

    def _resolve_filename(self, value, suffix):
        if value != self.DEFAULT_FILENAME_SENTINEL:
            return value
        base = os.path.splitext(os.path.basename(self.args.input_file))[0]
        return f"{base}{suffix}"

    def _save_extracted_lines(self, lines):
        """Saves the normalized input lines if requested."""
        if not self.args.extracted_file:
            return
        path = self._resolve_filename(self.args.extracted_file, ".extracted")
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + ("\n" if lines else ""))
        logging.getLogger("ptab").info("Normalized lines saved to: %s", path)

    def _save_result(self, result):
        """Saves the rows as JSON if requested."""
        if not self.args.output_file:
            return
        path = self._resolve_filename(self.args.output_file, ".json")
        with open(path, "w", encoding="utf-8") as f:
            f.write(rows_to_json(result))
        logging.getLogger("ptab").info("Rows saved to: %s", path)

    def _display_result(self, result):
        """Prints the rows to stdout in the selected format."""
        fmt = self.args.format
        if fmt == "none":
            return
        if fmt == "json":
            print(rows_to_json(result))
        elif fmt == "text":
            for cells in result:
                print(" | ".join(c["text"] for c in cells))
        else:
            for number, cells in enumerate(result, start=1):
                table = Table(title=f"Row {number}", show_lines=True)
                for cell in cells:
                    table.add_column(f"@{cell['offset']}")
                table.add_row(*(c["text"] for c in cells))
                self.console.print(table)

    @staticmethod
    def parse_arguments(args=None):
        """Parses command-line arguments for the script."""
        examples = [
            "\nExamples:",
            "  python ptab.py report.pdf",
            '  python ptab.py report.pdf -o "rows.json" --format none',
            "  python ptab.py report.txt --pagination-footer -T 3",
            "  python ptab.py report.pdf -d merge,classify --color-logs",
        ]

        parser = argparse.ArgumentParser(
            description="Reconstruct table rows from the whitespace layout of text.",
            formatter_class=CustomHelpFormatter,
            add_help=False,
            epilog="\n".join(examples),
        )
        S = Application.DEFAULT_FILENAME_SENTINEL

        g_opts = parser.add_argument_group("Main Options")
        g_opts.add_argument(
            "input_file", help="Path to a PDF or a text file with form feed page breaks."
        )
        g_opts.add_argument(
            "-h",
            "--help",
            action="help",
            help="Show this help message and exit.",
        )
        g_opts.add_argument(
            "-c",
            "--config",
            metavar="FILE",
            default=None,
            help="INI file with an [Extraction] section of option overrides.",
        )

        g_proc = parser.add_argument_group("Processing Control")
        g_proc.add_argument(
            "-p",
            "--pages",
            default="all",
            metavar="PAGES",
            help="PDF pages to process (e.g., '1,3,5-7'). (default: %(default)s)",
        )
        g_proc.add_argument(
            "--no-remove-headers",
            action="store_false",
            dest="remove_headers",
            default=None,
            help="Keep lines repeated at the top of every page. (default: removed)",
        )
        g_proc.add_argument(
            "--no-remove-footers",
            action="store_false",
            dest="remove_footers",
            default=None,
            help="Keep lines repeated at the bottom of every page. (default: removed)",
        )
        g_proc.add_argument(
            "--pagination-header",
            nargs="?",
            const=True,
            default=None,
            type=_line_number,
            metavar="LINE",
            help="Remove a page number near the top; scan 5 lines or use LINE.",
        )
        g_proc.add_argument(
            "--pagination-footer",
            nargs="?",
            const=True,
            default=None,
            type=_line_number,
            metavar="LINE",
            help="Remove a page number near the bottom; scan 5 lines or use LINE.",
        )
        g_proc.add_argument(
            "--keep-empty-lines",
            action="store_false",
            dest="remove_empty_lines",
            default=None,
            help="Keep blank lines as empty rows. (default: removed)",
        )
        g_proc.add_argument(
            "-T",
            "--tolerance",
            type=int,
            default=None,
            metavar="COLS",
            help="Maximum column drift when matching cell offsets. (default: 2)",
        )

        g_out = parser.add_argument_group("Script Output & Actions")
        g_out.add_argument(
            "-o",
            "--output-file",
            nargs="?",
            const=S,
            default=None,
            metavar="FILE",
            help="Save rows as JSON. Defaults to input name.",
        )
        g_out.add_argument(
            "-e",
            "--extracted-file",
            nargs="?",
            const=S,
            default=None,
            metavar="FILE",
            help="Save normalized lines. Defaults to input name.",
        )
        g_out.add_argument(
            "-f",
            "--format",
            default="table",
            choices=["table", "json", "text", "none"],
            help="How to print rows to stdout. (default: %(default)s)",
        )
        g_out.add_argument(
            "--log-file",
            metavar="FILE",
            default=None,
            help="Redirect all logging output to a specified file.",
        )
        g_out.add_argument(
            "--color-logs",
            action="store_true",
            help="Enable colored logging output. (default: %(default)s)",
        )
        g_out.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable INFO logging for detailed progress. (default: %(default)s)",
        )
        g_out.add_argument(
            "-d",
            "--debug",
            nargs="?",
            const="all",
            dest="debug_topics",
            metavar="TOPICS",
            help="Enable DEBUG logging (all,source,normalize,tokenize,classify,merge).",
        )

        return parser.parse_args(args)


def main():
    """Main entry point for the script."""
    # Basic logging config for early errors before full setup
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        args = Application.parse_arguments(sys.argv[1:])
        app = Application(args)
        app.run()
    except (FileNotFoundError, ConfigurationError) as e:
        logging.getLogger("ptab").critical(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logging.getLogger("ptab").info("\nProcess interrupted by user. Exiting.")
        sys.exit(0)
    except Exception as e:
        logging.getLogger("ptab").critical(
            "\nAn unexpected error occurred: %s", e, exc_info=True
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
