import json

import pytest

from ptab_lib.api import parse_page_selection, process_document, rows_to_json
from ptab_lib.config import ConfigurationError


@pytest.fixture
def report_file(tmp_path):
    text_file = tmp_path / "report.txt"
    text_file.write_text(
        "Quarterly report\nName    Qty\nBolt    10\nPage 1\f"
        "Quarterly report\nNut     20\n\nScrew   30\nPage 2\f",
        encoding="utf-8",
    )
    return str(text_file)


def test_parse_page_selection():
    assert parse_page_selection("all") is None
    assert parse_page_selection("ALL") is None
    assert parse_page_selection("1,3,5-7") == {1, 3, 5, 6, 7}
    assert parse_page_selection("1,x") is None


@pytest.mark.parametrize("selection", ["5-3", "0", "2,0-1", "1-2-3", ""])
def test_parse_page_selection_rejects_empty_ranges(selection):
    assert parse_page_selection(selection) is None


def test_process_document(report_file):
    extractor = process_document(report_file)

    assert extractor.lines[0] == "Name    Qty"
    assert extractor.lines[-1] == "Page 2"


def test_process_document_with_pagination_option(report_file):
    extractor = process_document(report_file, {"remove_pagination_from_footer": 1})

    assert extractor.result() == [
        [
            {"text": "Name Bolt Nut Screw", "offset": 0},
            {"text": "Qty 10 20 30", "offset": 8},
        ]
    ]


def test_process_document_rejects_bad_options(report_file):
    with pytest.raises(ConfigurationError):
        process_document(report_file, {"position_tolerance": -3})


def test_process_document_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        process_document(str(tmp_path / "nope.txt"))


def test_rows_to_json():
    result = [[{"text": "Größe", "offset": 0}, {"text": "10", "offset": 8}]]

    payload = rows_to_json(result)

    assert "Größe" in payload
    assert json.loads(payload) == [{"cells": result[0]}]
    assert json.loads(rows_to_json([])) == []
