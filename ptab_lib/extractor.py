#!/usr/bin/env python3
"""
ptab_lib/extractor.py: The table reconstruction pipeline.

This module contains the TableTextExtractor class, which takes per-page text
from a page source and rebuilds logical table rows in these stages:

1. Page normalization: pagination, header and footer lines are stripped.
2. Flattening: pages become one globally indexed line sequence, optionally
   without blank lines.
3. Tokenization: every line becomes a Row of positioned cells.
4. Merging: wrapped continuation lines are folded into logical rows.
"""
import logging
from collections.abc import Mapping

from .config import ExtractorOptions
from .merger import RowMerger
from .models import Row
from .normalizer import PageNormalizer
from .tokenizer import parse_line_to_cells

log = logging.getLogger("ptab")
log_tokenize = logging.getLogger("ptab.tokenize")


class TableTextExtractor:
    """
    Reconstructs table rows from the whitespace layout of page text.

    Args:
        source: A page source exposing `pages()` (a list of line lists).
        options (ExtractorOptions | Mapping | None): Extraction options, or
            overrides to merge over the defaults. Unknown keys are ignored.

    Raises:
        ConfigurationError: If any option value is malformed.
    """

    def __init__(self, source, options=None):
        self.source = source
        if isinstance(options, ExtractorOptions):
            options.validate()
            self.options = options
        elif options is None or isinstance(options, Mapping):
            self.options = ExtractorOptions.from_dict(options)
        else:
            raise TypeError(f"Unsupported options type: {type(options).__name__}")
        self.lines: list[str] = []
        self.rows: list[Row] = []
        self.merged_rows: list[Row] = []

    def extract_tables(self):
        """Runs the whole pipeline and returns the merged rows."""
        pages = self.source.pages()
        log.info("--- Normalizing %d page(s) ---", len(pages))
        pages = PageNormalizer(self.options).normalize(pages)

        self.lines = self._flatten(pages)
        self.rows = self._tokenize(self.lines)
        log.info("--- Merging %d row(s) ---", len(self.rows))
        self.merged_rows = RowMerger(self.options.position_tolerance).process(self.rows)
        return self.merged_rows

    def result(self):
        """Returns the merged rows as lists of {'text', 'offset'} dicts."""
        return [row.to_list() for row in self.merged_rows]

    def _flatten(self, pages):
        lines = [line for page in pages for line in page]
        if self.options.remove_empty_lines:
            lines = [line for line in lines if line.strip()]
        return lines

    def _tokenize(self, lines):
        rows = []
        for index, line in enumerate(lines):
            cells, offsets = parse_line_to_cells(line)
            rows.append(Row(cells, offsets, index))
        log_tokenize.info("Tokenized %d line(s).", len(rows))
        return rows
