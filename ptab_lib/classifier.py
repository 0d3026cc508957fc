# --- ptab_lib/classifier.py ---
"""
ptab_lib/classifier.py: Congruence predicates used to decide row merging.

Rows never point at each other. The classifier looks siblings up by index in
the tokenized row list and reads the open accumulator from the end of the
merged row list, both of which it is handed explicitly.
"""
import logging

from .constants import SINGLE_CELL_MARGIN

log_classify = logging.getLogger("ptab.classify")

PREVIOUS = "previous"
LAST_MERGED = "last_merged"


class RowClassifier:
    """
    Answers classification questions about the rows of one document.

    Args:
        rows (list[Row]): The tokenized rows, indexed by `Row.index`.
        merged_rows (list[Row]): The accumulator rows built so far.
        tolerance (int): Maximum offset drift accepted by `positions_match`.
    """

    def __init__(self, rows, merged_rows, tolerance):
        self.rows = rows
        self.merged_rows = merged_rows
        self.tolerance = tolerance

    def previous(self, index):
        return self.rows[index - 1] if index > 0 else None

    def following(self, index):
        return self.rows[index + 1] if index + 1 < len(self.rows) else None

    def last_merged(self):
        return self.merged_rows[-1] if self.merged_rows else None

    def is_single_cell(self, row, relative_to=PREVIOUS) -> bool:
        """
        A row is single-cell when its only offset is 0 and its text cannot be
        trusted as an aligned first column of the reference row.

        The reference row is the predecessor, or the open accumulator when
        `relative_to` is LAST_MERGED.
        """
        if not row.has_single_offset_at_zero:
            return False
        if row.merged or row.index == 0:
            return True
        if relative_to == LAST_MERGED:
            reference = self.last_merged()
            if reference is None or reference.has_single_offset_at_zero:
                return True
            return self._is_long_text(row, reference)

        # Walk back through the chain of [0] rows; the answer for the
        # predecessor decides ours unless our own text is already too long.
        current = row
        while True:
            reference = self.previous(current.index)
            if reference is None or self._is_long_text(current, reference):
                return True
            if not reference.has_single_offset_at_zero:
                return False
            if reference.index == 0:
                return True
            current = reference

    @staticmethod
    def _is_long_text(row, reference) -> bool:
        return len(row.cells[0].text) > reference.second_offset - SINGLE_CELL_MARGIN

    def positions_match(self, row, other) -> bool:
        """Checks that each of `row`'s offsets has a near match in `other`.

        The window for an offset `p` is `[p, p + tolerance]`.
        """
        if other is None:
            return False
        for pos in row.offsets:
            if not any(pos <= o <= pos + self.tolerance for o in other.offsets):
                return False
        return True

    def congruent_with_previous(self, row) -> bool:
        prev = self.previous(row.index)
        if prev is None:
            return False
        return self.is_single_cell(row) == self.is_single_cell(prev) and self.positions_match(
            row, prev
        )

    def congruent_with_last_merged(self, row) -> bool:
        last = self.last_merged()
        if last is None:
            return False
        return self.is_single_cell(row, LAST_MERGED) == self.is_single_cell(
            last
        ) and self.positions_match(row, last)

    def is_incongruent_with_neighbours(self, row) -> bool:
        """True for a multi-cell row that neither neighbour lines up with."""
        if self.is_single_cell(row):
            return False
        if self.previous(row.index) is not None and self.congruent_with_previous(row):
            return False
        nxt = self.following(row.index)
        if nxt is not None and self.congruent_with_previous(nxt):
            return False
        log_classify.debug("Row %d is incongruent with its neighbours: %s", row.index, row)
        return True
