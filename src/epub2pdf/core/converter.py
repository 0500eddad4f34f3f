"""EPUB to HTML/PDF conversion entry points."""

import logging
from dataclasses import dataclass
from pathlib import Path

import pypdf
from pypdf.errors import PdfReadError

from epub2pdf.core.assembler import assemble
from epub2pdf.core.epub_parser import parse_book
from epub2pdf.core.renderer import ChromeRenderer
from epub2pdf.models.book import Book
from epub2pdf.models.options import ConversionOptions

log = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of a PDF conversion."""

    output_path: Path
    size_bytes: int
    page_count: int | None
    chapter_count: int


def default_output_path(input_path: Path) -> Path:
    """book.epub -> book.pdf"""
    return Path(input_path).with_suffix(".pdf")


def format_file_size(size: int) -> str:
    kb = 1024
    mb = kb * 1024
    gb = mb * 1024

    if size >= gb:
        return f"{size / gb:.2f} GB"
    if size >= mb:
        return f"{size / mb:.2f} MB"
    if size >= kb:
        return f"{size / kb:.2f} KB"
    return f"{size} bytes"


def count_pdf_pages(pdf_path: Path) -> int | None:
    try:
        return len(pypdf.PdfReader(str(pdf_path)).pages)
    except (PdfReadError, OSError) as e:
        log.warning("Could not read back %s: %s", pdf_path, e)
        return None


def book_to_html(epub_path: Path, options: ConversionOptions | None = None) -> str:
    """Parse an EPUB and assemble it into one HTML document."""
    options = options or ConversionOptions()
    return assemble(parse_book(epub_path, strict=options.strict))


def render_book(
    book: Book,
    output_path: Path,
    options: ConversionOptions,
    renderer: ChromeRenderer | None = None,
) -> ConversionResult:
    """Render an already parsed book to PDF."""
    renderer = renderer or ChromeRenderer(options.browser)
    pdf_path = renderer.render(assemble(book), output_path, options)
    return ConversionResult(
        output_path=pdf_path,
        size_bytes=pdf_path.stat().st_size,
        page_count=count_pdf_pages(pdf_path),
        chapter_count=len(book.chapters),
    )


def convert(
    epub_path: Path,
    output_path: Path | None = None,
    options: ConversionOptions | None = None,
    renderer: ChromeRenderer | None = None,
) -> ConversionResult:
    """Convert an EPUB file to PDF."""
    options = options or ConversionOptions()
    book = parse_book(epub_path, strict=options.strict)
    return render_book(
        book, output_path or default_output_path(epub_path), options, renderer
    )
