# --- ptab_lib/merger.py ---
"""
ptab_lib/merger.py: Folds tokenized rows into logical table rows.
"""
import logging

from .classifier import RowClassifier
from .models import Row

log_merge = logging.getLogger("ptab.merge")


class RowMerger:
    """
    Walks tokenized rows once, left to right, merging wrapped continuation
    lines into the open accumulator.

    Only the last accumulator is ever merged into; once a row opens a new
    accumulator the previous one is final.
    """

    def __init__(self, tolerance):
        self.tolerance = tolerance

    def process(self, rows):
        """Returns the accumulator rows built from `rows`."""
        merged_rows: list[Row] = []
        classifier = RowClassifier(rows, merged_rows, self.tolerance)

        for row in rows:
            if classifier.is_incongruent_with_neighbours(row):
                row.collapse_to_single_cell()
                log_merge.debug("Collapsed row %d to '%s'", row.index, row.cells[0].text)

            if not merged_rows or not classifier.congruent_with_last_merged(row):
                merged_rows.append(Row.accumulator_from(row))
                log_merge.debug(
                    "Row %d opens accumulator %d at %s",
                    row.index,
                    len(merged_rows) - 1,
                    row.offsets,
                )
            else:
                merged_rows[-1].merge_in(row)
                log_merge.debug("Row %d merged into accumulator %d", row.index, len(merged_rows) - 1)

        log_merge.info("Merged %d line(s) into %d row(s).", len(rows), len(merged_rows))
        return merged_rows
