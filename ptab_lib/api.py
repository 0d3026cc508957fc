# --- ptab_lib/api.py ---
import json
import logging

from .extractor import TableTextExtractor
from .sources import open_page_source

log = logging.getLogger("ptab.api")


def parse_page_selection(pages_str: str) -> set | None:
    """
    Parses a page selection string (e.g., '1,3,5-7') into a set of 1-based
    page numbers. Returns None for 'all' and for an invalid selection.
    """
    if pages_str.lower() == "all":
        return None
    pages = set()
    try:
        for part in (p.strip() for p in pages_str.split(",")):
            if "-" in part:
                first, last = map(int, part.split("-"))
            else:
                first = last = int(part)
            if first < 1 or last < first:
                raise ValueError(f"empty page range '{part}'")
            pages.update(range(first, last + 1))
    except ValueError:
        log.error("Invalid page selection format: %s", pages_str)
        return None
    return pages


def process_document(path: str, options=None, pages: set | None = None):
    """
    Extracts table rows from a PDF or form-feed separated text file.

    Returns the extractor, whose `result()` holds the rows and whose `lines`
    hold the normalized input lines.
    """
    source = open_page_source(path, pages)
    extractor = TableTextExtractor(source, options)
    extractor.extract_tables()
    log.info("Extracted %d row(s) from %s", len(extractor.merged_rows), path)
    return extractor


def rows_to_json(result, indent: int | None = 2) -> str:
    """Serializes extractor results (lists of cell dicts) as JSON."""
    return json.dumps(
        [{"cells": cells} for cells in result], indent=indent, ensure_ascii=False
    )
