# --- ptab_lib/tokenizer.py ---
"""
ptab_lib/tokenizer.py: Splits a text line into positioned cells.
"""
import logging

from .constants import CELL_SEPARATOR, CONSECUTIVE_SPACES
from .models import Cell

log_tokenize = logging.getLogger("ptab.tokenize")


def has_consecutive_spaces(text: str) -> bool:
    """Checks whether the text contains a run of two or more whitespace chars."""
    return bool(CONSECUTIVE_SPACES.search(text))


def parse_line_to_cells(line: str) -> tuple[list[Cell], list[int]]:
    """
    Tokenizes a line into cells using whitespace runs as column separators.

    Each cell records the column where its text starts on the original line.
    Returns the cells together with their offsets (co-indexed, ascending).
    """
    if not has_consecutive_spaces(line):
        text = line.strip()
        if not text:
            return [], []
        offset = len(line) - len(line.lstrip())
        return [Cell(text, offset)], [offset]

    cells, offsets, position = [], [], 0
    for part in CELL_SEPARATOR.split(line):
        if part and not has_consecutive_spaces(part):
            cells.append(Cell(part, position))
            offsets.append(position)
        position += len(part)

    log_tokenize.debug("Line tokenized into %d cell(s) at %s", len(cells), offsets)
    return cells, offsets
