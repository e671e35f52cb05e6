from __future__ import annotations

import logging

import pytest

from pdfassembler.exceptions import InvalidRangeError
from pdfassembler.extract import (
    PageRange,
    build_output_filename,
    coerce_range,
    equal_parts,
    every_page_ranges,
    filter_valid_ranges,
    parse_range_spec,
    single_page_ranges,
    unique_filename,
    validate_range,
)


def test_page_range_rejects_inverted_bounds() -> None:
    with pytest.raises(ValueError):
        PageRange(5, 2)
    with pytest.raises(ValueError):
        PageRange(0, 2)


def test_page_range_helpers() -> None:
    page_range = PageRange(2, 4)
    assert len(page_range) == 3
    assert page_range.label() == "Pages 2-4"
    assert list(page_range.page_indices()) == [1, 2, 3]


@pytest.mark.parametrize(
    "item, expected",
    [
        ({"from": 1, "to": 3}, (1, 3)),
        ({"start": 2, "end": 4}, (2, 4)),
        ((5, 6), (5, 6)),
        ([7, 8], (7, 8)),
        (PageRange(1, 1), (1, 1)),
    ],
)
def test_coerce_range_accepts_supported_shapes(item, expected) -> None:
    assert coerce_range(item) == expected


@pytest.mark.parametrize("item", ["1-3", 4, (1, 2, 3)])
def test_coerce_range_rejects_unsupported_shapes(item) -> None:
    with pytest.raises(InvalidRangeError):
        coerce_range(item)


@pytest.mark.parametrize(
    "raw, valid",
    [
        ((1, 10), True),
        ((10, 10), True),
        ((0, 3), False),
        ((8, 12), False),
        ((5, 2), False),
        ((1.0, 2.0), True),
        ((1.5, 3), False),
        (("1", 3), False),
        ((True, 3), False),
        ((None, 3), False),
    ],
)
def test_validate_range(raw, valid: bool) -> None:
    assert (validate_range(raw, 10) is not None) is valid


def test_filter_valid_ranges_keeps_input_order_and_logs_skips(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="pdfassembler.extract")

    result = filter_valid_ranges([{"from": 4, "to": 5}, {"from": 8, "to": 12}, {"from": 1, "to": 2}], 10)

    assert result == [PageRange(4, 5), PageRange(1, 2)]
    assert "Skipping invalid range" in caplog.text


def test_filter_valid_ranges_skips_unsupported_shapes(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="pdfassembler.extract")

    result = filter_valid_ranges([4, {"from": 1, "to": 2}, None, (1, 2, 3), "2-3", (3, 3)], 5)

    assert result == [PageRange(1, 2), PageRange(3, 3)]
    assert "Skipping unsupported range value 4" in caplog.text


def test_filter_valid_ranges_with_only_unsupported_shapes_reports_page_count() -> None:
    with pytest.raises(InvalidRangeError) as excinfo:
        filter_valid_ranges([4, None], 5)

    assert excinfo.value.total_pages == 5


def test_filter_valid_ranges_reports_page_count_when_nothing_is_valid() -> None:
    with pytest.raises(InvalidRangeError) as excinfo:
        filter_valid_ranges([{"from": 0, "to": 1}, {"from": 3, "to": 2}], 7)

    assert excinfo.value.total_pages == 7
    assert str(excinfo.value) == "No valid page ranges found. Document has 7 pages."


def test_filter_valid_ranges_rejects_empty_list() -> None:
    with pytest.raises(InvalidRangeError):
        filter_valid_ranges([], 3)


def test_parse_range_spec() -> None:
    assert parse_range_spec("1-3, 5 ,8 - 9") == [(1, 3), (5, 5), (8, 9)]


@pytest.mark.parametrize("spec", ["", "   ", "a-b", "1-", ",,"])
def test_parse_range_spec_rejects_bad_input(spec: str) -> None:
    with pytest.raises(InvalidRangeError):
        parse_range_spec(spec)


def test_equal_parts_uses_ceiling_division() -> None:
    assert equal_parts(10, 3) == [(1, 4), (5, 8), (9, 10)]
    assert equal_parts(10, 1) == [(1, 10)]


@pytest.mark.parametrize("total, parts", [(10, 3), (7, 7), (9, 4), (3, 5), (1, 8), (25, 6)])
def test_equal_parts_cover_every_page_once_after_filtering(total: int, parts: int) -> None:
    ranges = filter_valid_ranges(equal_parts(total, parts), total)

    covered = [number for page_range in ranges for number in range(page_range.start, page_range.end + 1)]
    assert covered == list(range(1, total + 1))
    assert all(len(page_range) <= -(-total // parts) for page_range in ranges)


def test_equal_parts_beyond_page_count_yields_out_of_bounds_ranges() -> None:
    raw = equal_parts(3, 5)
    assert len(raw) == 5
    assert raw[3][0] > 3
    assert len(filter_valid_ranges(raw, 3)) == 3


@pytest.mark.parametrize("parts", [0, -1, 2.5, True, "2"])
def test_equal_parts_rejects_bad_part_counts(parts) -> None:
    with pytest.raises(InvalidRangeError):
        equal_parts(10, parts)


def test_single_and_every_page_ranges() -> None:
    assert single_page_ranges([3, 1]) == [(3, 3), (1, 1)]
    assert every_page_ranges(3) == [(1, 1), (2, 2), (3, 3)]
    with pytest.raises(InvalidRangeError, match="No pages selected"):
        single_page_ranges([])


def test_build_output_filename() -> None:
    assert build_output_filename("report", PageRange(2, 2)) == "report_page_2.pdf"
    assert build_output_filename("report", PageRange(1, 3)) == "report_pages_1-3.pdf"


def test_unique_filename_numbers_repeats() -> None:
    taken: set[str] = set()

    names = [unique_filename(name, taken) for name in ("a.pdf", "a.pdf", "a_2.pdf", "a.pdf", "notes")]
    names.append(unique_filename("notes", taken))

    assert names == ["a.pdf", "a_2.pdf", "a_2_2.pdf", "a_3.pdf", "notes", "notes_2"]
    assert taken == set(names)
