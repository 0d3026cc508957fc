# --- ptab_lib/constants.py ---
"""
ptab_lib/constants.py: Shared constants for the table reconstruction pipeline.
"""
import re

# Two or more whitespace characters separate columns on a line.
CELL_SEPARATOR = re.compile(r"(\s{2,})")
CONSECUTIVE_SPACES = re.compile(r"\s{2,}")

# A trimmed line ending in digits looks like a page number ("Page 3", "- 12").
PAGINATION_PATTERN = re.compile(r"^.*\d+$")

# Number of lines from the page edge scanned when pagination removal is `True`.
PAGINATION_SCAN_DEPTH = 5

# A single cell longer than (second offset of the reference row - margin) is
# treated as free text rather than as an aligned first column.
SINGLE_CELL_MARGIN = 2

DEFAULT_OPTIONS = {
    "remove_page_headers": True,
    "remove_page_footers": True,
    "remove_pagination_from_header": False,
    "remove_pagination_from_footer": False,
    "remove_empty_lines": True,
    "position_tolerance": 2,
}

# INI section read by `load_options_file`.
OPTIONS_FILE_SECTION = "Extraction"
