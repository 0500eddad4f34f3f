"""Convert command implementation."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from epub2pdf.core.converter import (
    default_output_path,
    format_file_size,
    render_book,
)
from epub2pdf.core.epub_parser import parse_book
from epub2pdf.core.renderer import ChromeRenderer
from epub2pdf.models.book import Book
from epub2pdf.models.options import ConversionOptions


def execute_convert(
    book_path: Path,
    output_path: Path | None,
    options: ConversionOptions,
    verbose: bool,
    console: Console,
    renderer: ChromeRenderer | None = None,
) -> None:
    """Execute the convert command."""
    output = output_path or default_output_path(book_path)

    if verbose:
        orientation = " (landscape)" if options.landscape else ""
        console.print(f"[dim]Input:[/]  {escape(str(book_path))}")
        console.print(f"[dim]Output:[/] {escape(str(output))}")
        console.print(f"[dim]Page:[/]   {options.page_size}{orientation}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Parsing EPUB...", total=None)
        book: Book = parse_book(book_path, strict=options.strict)

        if verbose:
            progress.console.print(f"[dim]Title:[/]    {escape(book.title)}")
            progress.console.print(f"[dim]Author:[/]   {escape(book.author)}")
            progress.console.print(f"[dim]Chapters:[/] {len(book.chapters)}")

        progress.update(task, description="Converting to PDF...")
        result = render_book(book, output, options, renderer)

    summary = [
        f"[green]Successfully created {escape(str(result.output_path))}[/]",
        "",
        f"[dim]Size:[/] {format_file_size(result.size_bytes)}",
        f"[dim]Chapters:[/] {result.chapter_count}",
    ]
    if result.page_count is not None:
        summary.append(f"[dim]Pages:[/] {result.page_count}")

    console.print(Panel("\n".join(summary), title="Complete", border_style="green"))
