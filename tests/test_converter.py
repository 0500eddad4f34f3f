from __future__ import annotations

from pathlib import Path

import pypdf
import pytest

from epub2pdf.core.converter import (
    book_to_html,
    convert,
    count_pdf_pages,
    default_output_path,
    format_file_size,
)
from epub2pdf.models.options import ConversionOptions


class FakeRenderer:
    """Writes a one-page PDF instead of launching a browser."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Path, ConversionOptions]] = []

    def render(self, html: str, output_path: Path, options: ConversionOptions) -> Path:
        self.calls.append((html, output_path, options))
        writer = pypdf.PdfWriter()
        writer.add_blank_page(width=72, height=72)
        with open(output_path, "wb") as fh:
            writer.write(fh)
        return Path(output_path)


def test_book_to_html_is_self_contained(sample_epub: Path) -> None:
    html = book_to_html(sample_epub)

    assert "<title>Test Book</title>" in html
    assert '<p class="author">Jane Doe</p>' in html
    assert "../Images/pic.png" not in html
    assert html.count("data:image/png;base64,") == 2
    assert html.index("Opening") < html.index("Second")
    assert "<?xml" not in html


def test_book_to_html_is_deterministic(sample_epub: Path) -> None:
    assert book_to_html(sample_epub) == book_to_html(sample_epub)


def test_convert_with_renderer(sample_epub: Path) -> None:
    renderer = FakeRenderer()
    options = ConversionOptions(page_size="A5")

    result = convert(sample_epub, options=options, renderer=renderer)

    assert result.output_path == sample_epub.with_suffix(".pdf")
    assert result.page_count == 1
    assert result.chapter_count == 2
    assert result.size_bytes == result.output_path.stat().st_size
    html, _, passed = renderer.calls[0]
    assert passed is options
    assert "<h1>Test Book</h1>" in html


def test_count_pdf_pages_unreadable(tmp_path: Path) -> None:
    empty = tmp_path / "empty.pdf"
    empty.write_bytes(b"")
    assert count_pdf_pages(empty) is None


def test_default_output_path() -> None:
    assert default_output_path(Path("/books/My Book.epub")) == Path("/books/My Book.pdf")


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (512, "512 bytes"),
        (2048, "2.00 KB"),
        (5 * 1024 * 1024, "5.00 MB"),
        (3 * 1024**3, "3.00 GB"),
    ],
)
def test_format_file_size(size: int, expected: str) -> None:
    assert format_file_size(size) == expected
