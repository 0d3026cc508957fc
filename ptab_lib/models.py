# --- ptab_lib/models.py ---
"""
ptab_lib/models.py: Data models for positioned cells and table rows.
"""
import logging
import re
from dataclasses import asdict, dataclass

log_merge = logging.getLogger("ptab.merge")


@dataclass
class Cell:
    """A piece of text and the column where it began on its source line."""

    text: str
    offset: int

    def to_dict(self) -> dict:
        return asdict(self)


class Row:
    """
    A row of cells, either tokenized from one source line or accumulated by
    merging several of them.

    Args:
        cells (list[Cell]): Cells in ascending offset order.
        offsets (list[int]): The offsets of `cells`, co-indexed with them.
        index (int | None): Position in the flattened line sequence, or None
            for a merge accumulator.
        merged (bool): True when this row is a merge accumulator.
    """

    def __init__(self, cells, offsets, index=None, merged=False):
        self.cells: list[Cell] = cells
        self.offsets: list[int] = offsets
        self.index = index
        self.merged = merged

    @classmethod
    def accumulator_from(cls, row: "Row") -> "Row":
        """Starts a new accumulator holding a copy of `row`'s cells."""
        cells = [Cell(c.text, c.offset) for c in row.cells]
        return cls(cells, list(row.offsets), index=None, merged=True)

    @property
    def has_single_offset_at_zero(self) -> bool:
        return self.offsets == [0]

    @property
    def second_offset(self) -> int:
        """The offset of the second cell, 0 when the row has fewer cells."""
        return self.offsets[1] if len(self.offsets) > 1 else 0

    def collapse_to_single_cell(self):
        """Replaces all cells with one whitespace-normalized cell at offset 0."""
        ordered = sorted(self.cells, key=lambda c: c.offset)
        text = re.sub(r"\s+", " ", " ".join(c.text for c in ordered)).strip()
        self.cells = [Cell(text, 0)]
        self.offsets = [0]

    def merge_in(self, other: "Row"):
        """Appends `other`'s text to the cells sharing an exact offset.

        Cells of `other` without a counterpart here are dropped.
        """
        by_offset = {c.offset: c for c in other.cells}
        for cell in self.cells:
            match = by_offset.get(cell.offset)
            if match is not None:
                cell.text += f" {match.text}"
        dropped = [c.offset for c in other.cells if c.offset not in self.offsets]
        if dropped:
            log_merge.debug("Dropped cell(s) at %s while merging row %s", dropped, other.index)

    def to_list(self) -> list[dict]:
        return [c.to_dict() for c in sorted(self.cells, key=lambda c: c.offset)]

    def __repr__(self):
        kind = "merged" if self.merged else f"#{self.index}"
        return f"Row({kind}, {[(c.offset, c.text) for c in self.cells]})"
