"""Page range parsing, validation and generation for :mod:`pdfassembler.extract`."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from ..exceptions import InvalidRangeError

LOGGER = logging.getLogger("pdfassembler.extract")

RawRange = Tuple[Any, Any]

_RANGE_TOKEN = re.compile(r"^(\d+)\s*-\s*(\d+)$")


@dataclass(frozen=True)
class PageRange:
    """Represents an inclusive, 1-based page range."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1 or self.end < 1:
            raise ValueError("Page numbers must be positive integers")
        if self.start > self.end:
            raise ValueError("Page range start must be less than or equal to end")

    def __len__(self) -> int:
        return self.end - self.start + 1

    def label(self) -> str:
        """Return a human-readable label for the range."""

        return f"Pages {self.start}-{self.end}"

    def page_indices(self) -> range:
        """Return the 0-based page indices covered by the range."""

        return range(self.start - 1, self.end)


def _as_page_number(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def coerce_range(item: Any) -> RawRange:
    """Return the ``(from, to)`` pair held by *item* without validating it.

    Accepts :class:`PageRange` instances, two-item sequences and mappings
    with ``from``/``to`` (or ``start``/``end``) keys.
    """

    if isinstance(item, PageRange):
        return item.start, item.end
    if isinstance(item, Mapping):
        if "from" in item or "to" in item:
            return item.get("from"), item.get("to")
        return item.get("start"), item.get("end")
    if isinstance(item, Sequence) and not isinstance(item, (str, bytes)) and len(item) == 2:
        return item[0], item[1]
    raise InvalidRangeError(f"Unsupported page range value: {item!r}")


def validate_range(raw: RawRange, total_pages: int) -> Optional[PageRange]:
    """Return a :class:`PageRange` if *raw* is valid for *total_pages*, else ``None``."""

    start = _as_page_number(raw[0])
    end = _as_page_number(raw[1])
    if start is None or end is None:
        return None
    if start < 1 or end > total_pages or start > end:
        return None
    return PageRange(start, end)


def filter_valid_ranges(ranges: Iterable[Any], total_pages: int) -> List[PageRange]:
    """Keep the ranges that fit the document, in input order.

    Invalid ranges, including entries of an unsupported shape, are dropped
    rather than clamped. When nothing survives an :class:`InvalidRangeError`
    carrying *total_pages* is raised.
    """

    valid: List[PageRange] = []
    for item in ranges:
        try:
            raw = coerce_range(item)
        except InvalidRangeError:
            LOGGER.debug("Skipping unsupported range value %r", item)
            continue
        page_range = validate_range(raw, total_pages)
        if page_range is None:
            LOGGER.debug("Skipping invalid range %r for %d-page document", raw, total_pages)
            continue
        valid.append(page_range)

    if not valid:
        raise InvalidRangeError(total_pages=total_pages)
    return valid


def parse_range_spec(spec: str) -> List[RawRange]:
    """Parse ``"1-3,5,8-9"`` into ``(from, to)`` pairs.

    Bounds are not checked against a document here; that is left to
    :func:`filter_valid_ranges`.
    """

    if not spec or not spec.strip():
        raise InvalidRangeError("Ranges string cannot be empty")

    parsed: List[RawRange] = []
    for token in spec.split(","):
        token = token.strip()
        if not token:
            continue
        match = _RANGE_TOKEN.match(token)
        if match:
            parsed.append((int(match.group(1)), int(match.group(2))))
        elif token.isdigit():
            parsed.append((int(token), int(token)))
        else:
            raise InvalidRangeError(
                f"Invalid range format: '{token}'. Expected 'start-end' or a page number."
            )

    if not parsed:
        raise InvalidRangeError("Ranges string cannot be empty")
    return parsed


def equal_parts(total_pages: int, parts: int) -> List[RawRange]:
    """Partition *total_pages* into *parts* ranges of ``ceil(total / parts)`` pages.

    The final part may be shorter. When *parts* exceeds the page count the
    trailing ranges start past the end of the document; they are returned
    as-is and removed by :func:`filter_valid_ranges`.
    """

    if isinstance(parts, bool) or not isinstance(parts, int) or parts < 1:
        raise InvalidRangeError(f"Number of parts must be an integer >= 1, got {parts!r}")
    if total_pages < 1:
        raise InvalidRangeError(total_pages=total_pages)

    pages_per_part = math.ceil(total_pages / parts)
    return [
        (index * pages_per_part + 1, min((index + 1) * pages_per_part, total_pages))
        for index in range(parts)
    ]


def single_page_ranges(pages: Iterable[Any]) -> List[RawRange]:
    """One range per selected page number, preserving selection order."""

    ranges = [(page, page) for page in pages]
    if not ranges:
        raise InvalidRangeError("No pages selected for splitting")
    return ranges


def every_page_ranges(total_pages: int) -> List[RawRange]:
    """One range per page of a *total_pages* document."""

    return [(number, number) for number in range(1, total_pages + 1)]


def build_output_filename(base_name: str, part: PageRange) -> str:
    """Construct the download filename for an extracted range."""

    if part.start == part.end:
        return f"{base_name}_page_{part.start}.pdf"
    return f"{base_name}_pages_{part.start}-{part.end}.pdf"


def unique_filename(filename: str, taken: Set[str]) -> str:
    """Return *filename*, numbered ``_2``, ``_3``... if it is already in *taken*.

    The chosen name is added to *taken*.
    """

    stem, dot, extension = filename.rpartition(".")
    if not dot:
        stem, extension = filename, ""
    candidate = filename
    counter = 2
    while candidate in taken:
        candidate = f"{stem}_{counter}{dot}{extension}"
        counter += 1
    taken.add(candidate)
    return candidate


__all__ = [
    "PageRange",
    "RawRange",
    "build_output_filename",
    "coerce_range",
    "equal_parts",
    "every_page_ranges",
    "filter_valid_ranges",
    "parse_range_spec",
    "single_page_ranges",
    "unique_filename",
    "validate_range",
]
