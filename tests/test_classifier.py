import pytest

from ptab_lib.classifier import LAST_MERGED, RowClassifier
from ptab_lib.models import Cell, Row
from ptab_lib.tokenizer import parse_line_to_cells


def make_rows(lines):
    rows = []
    for index, line in enumerate(lines):
        cells, offsets = parse_line_to_cells(line)
        rows.append(Row(cells, offsets, index))
    return rows


def make_classifier(lines, merged_rows=None, tolerance=2):
    rows = make_rows(lines)
    return RowClassifier(rows, merged_rows if merged_rows is not None else [], tolerance), rows


def offsets_row(offsets, index=0):
    return Row([Cell(f"c{o}", o) for o in offsets], list(offsets), index)


class TestIsSingleCell:
    def test_first_row_at_zero(self):
        classifier, rows = make_classifier(["Test"])
        assert classifier.is_single_cell(rows[0])

    def test_merged_row_at_zero(self):
        classifier, _ = make_classifier([])
        assert classifier.is_single_cell(Row([Cell("Test", 0)], [0], None, merged=True))

    def test_multi_cell_row(self):
        classifier, rows = make_classifier(["Cell1  Cell2"])
        assert not classifier.is_single_cell(rows[0])

    def test_single_cell_not_at_zero(self):
        classifier, rows = make_classifier([" indented"])
        assert not classifier.is_single_cell(rows[0])

    def test_previous_row_is_single_cell(self):
        classifier, rows = make_classifier(["Prev", "Test"])
        assert classifier.is_single_cell(rows[1])

    def test_long_text_against_multi_cell_previous(self):
        classifier, rows = make_classifier(["Cell1  Cell2", "A long free text line"])
        assert classifier.is_single_cell(rows[1])

    def test_short_text_aligned_with_first_column(self):
        classifier, rows = make_classifier(["Name        Value", "abc"])
        assert not classifier.is_single_cell(rows[1])

    def test_previous_without_second_offset_is_permissive(self):
        classifier, rows = make_classifier(["Name        Value", "ab", "cd"])

        assert not classifier.is_single_cell(rows[1])
        assert classifier.is_single_cell(rows[2])

    def test_long_chain_of_single_cells(self):
        classifier, rows = make_classifier(["line"] * 5000)
        assert classifier.is_single_cell(rows[-1])

    def test_against_last_merged(self):
        acc = Row([Cell("Name", 0), Cell("Value", 12)], [0, 12], None, merged=True)
        classifier, rows = make_classifier(["Prev", "abc"], merged_rows=[acc])

        assert classifier.is_single_cell(rows[1])
        assert not classifier.is_single_cell(rows[1], LAST_MERGED)

    def test_against_missing_last_merged(self):
        classifier, rows = make_classifier(["Name        Value", "abc"])
        assert classifier.is_single_cell(rows[1], LAST_MERGED)


class TestPositionsMatch:
    def test_within_tolerance(self):
        classifier, _ = make_classifier([], tolerance=2)

        assert classifier.positions_match(offsets_row([0, 7]), offsets_row([0, 9]))
        assert not classifier.positions_match(offsets_row([0, 7]), offsets_row([0, 10]))

    def test_window_only_extends_to_the_right(self):
        classifier, _ = make_classifier([], tolerance=2)

        assert not classifier.positions_match(offsets_row([0, 9]), offsets_row([0, 7]))

    def test_zero_tolerance_requires_exact_offsets(self):
        classifier, _ = make_classifier([], tolerance=0)

        assert classifier.positions_match(offsets_row([0, 7]), offsets_row([0, 7]))
        assert not classifier.positions_match(offsets_row([0, 7]), offsets_row([0, 8]))

    def test_subset_matches_superset(self):
        classifier, _ = make_classifier([])

        assert classifier.positions_match(offsets_row([0, 10]), offsets_row([0, 10, 20]))
        assert not classifier.positions_match(offsets_row([0, 10, 20]), offsets_row([0, 10]))

    def test_missing_other_row(self):
        classifier, _ = make_classifier([])

        assert not classifier.positions_match(offsets_row([0]), None)
        assert not classifier.positions_match(offsets_row([]), None)

    @pytest.mark.parametrize("tolerance", [0, 1, 2, 3])
    def test_tolerance_is_monotonic(self, tolerance):
        row, other = offsets_row([0, 5, 11]), offsets_row([1, 6, 12, 14])
        matched = RowClassifier([], [], tolerance).positions_match(row, other)

        if matched:
            for wider in range(tolerance + 1, tolerance + 4):
                assert RowClassifier([], [], wider).positions_match(row, other)


class TestCongruence:
    def test_first_row_is_not_congruent_with_previous(self):
        classifier, rows = make_classifier(["Cell1  Cell2"])
        assert not classifier.congruent_with_previous(rows[0])

    def test_aligned_rows_are_congruent(self):
        classifier, rows = make_classifier(["Cell1  Cell2", "Line2  Line2Col2"])
        assert classifier.congruent_with_previous(rows[1])

    def test_single_cell_after_multi_cell_is_not_congruent(self):
        classifier, rows = make_classifier(["Cell1  Cell2", "SingleCellRow"])
        assert not classifier.congruent_with_previous(rows[1])

    def test_no_accumulator_means_not_congruent(self):
        classifier, rows = make_classifier(["Cell1  Cell2"])
        assert not classifier.congruent_with_last_merged(rows[0])

    def test_congruent_with_last_merged(self):
        acc = Row([Cell("Cell1", 0), Cell("Cell2", 7)], [0, 7], None, merged=True)
        classifier, rows = make_classifier(["Cell1  Cell2", "Line2  Line2Col2"], [acc])

        assert classifier.congruent_with_last_merged(rows[1])


class TestIncongruentWithNeighbours:
    def test_lone_multi_cell_row(self):
        classifier, rows = make_classifier(["Cell1  Cell2"])
        assert classifier.is_incongruent_with_neighbours(rows[0])

    def test_single_cell_row_is_never_incongruent(self):
        classifier, rows = make_classifier(["Cell1  Cell2", "SingleCellRow", "Cell3  Cell4"])
        assert not classifier.is_incongruent_with_neighbours(rows[1])

    def test_first_row_followed_by_congruent_row(self):
        classifier, rows = make_classifier(["Cell1  Cell2", "Line2  Line2Col2"])
        assert not classifier.is_incongruent_with_neighbours(rows[0])

    def test_first_row_judged_through_successor_only(self):
        classifier, rows = make_classifier(["Cell1  Cell2", "SingleCellRow"])
        assert classifier.is_incongruent_with_neighbours(rows[0])

    def test_row_congruent_with_previous(self):
        classifier, rows = make_classifier(["A  B", "C  D", "free text"])
        assert not classifier.is_incongruent_with_neighbours(rows[1])

    def test_row_between_mismatching_neighbours(self):
        classifier, rows = make_classifier(["A  B", "C      D", "E          F"])
        assert classifier.is_incongruent_with_neighbours(rows[1])
