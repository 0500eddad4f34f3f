"""HTML command implementation."""

import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from epub2pdf.core.converter import book_to_html, format_file_size
from epub2pdf.models.options import ConversionOptions


def execute_html(
    book_path: Path,
    output_path: Path | None,
    options: ConversionOptions,
    console: Console,
) -> None:
    """Write the assembled single-file HTML document."""
    html = book_to_html(book_path, options)

    if output_path is None:
        sys.stdout.write(html)
        sys.stdout.write("\n")
        return

    output_path.write_text(html, encoding="utf-8")
    size = format_file_size(len(html.encode("utf-8")))
    console.print(f"[green]Wrote {escape(str(output_path))} ({size})[/]")
