from __future__ import annotations

import io
from pathlib import Path
from typing import Callable
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

PdfFactory = Callable[..., bytes]


def build_pdf(
    pages: int,
    *,
    title: str | None = None,
    author: str | None = None,
    subject: str | None = None,
    base_width: int = 100,
) -> bytes:
    """Blank pages whose widths encode their 1-based position (base_width + n)."""

    writer = PdfWriter()
    for number in range(1, pages + 1):
        writer.add_blank_page(width=base_width + number, height=200)
    metadata = {}
    if title is not None:
        metadata["/Title"] = title
    if author is not None:
        metadata["/Author"] = author
    if subject is not None:
        metadata["/Subject"] = subject
    if metadata:
        writer.add_metadata(metadata)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def pdf_factory() -> PdfFactory:
    return build_pdf


@pytest.fixture()
def ten_page_pdf() -> bytes:
    return build_pdf(10, title="Quarterly Report", author="Finance", subject="Q3")


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    pdf_path.write_bytes(build_pdf(5, title="Sample"))
    return pdf_path


@pytest.fixture()
def sample_pdfs(tmp_path: Path) -> list[Path]:
    first = tmp_path / "one.pdf"
    first.write_bytes(build_pdf(2, title="Document One", author="Alice"))
    second = tmp_path / "two.pdf"
    second.write_bytes(build_pdf(3, title="Document Two", author="Bob", base_width=300))
    return [first, second]
