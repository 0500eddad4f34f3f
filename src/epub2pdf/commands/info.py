"""Info command implementation."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from epub2pdf.core.content_processor import ContentProcessor
from epub2pdf.core.epub_parser import parse_book

MAX_LISTED_CHAPTERS = 20


def execute_info(book_path: Path, console: Console, strict: bool = False) -> None:
    """Display book metadata and chapter list."""
    book = parse_book(book_path, strict=strict)
    processor = ContentProcessor()

    info_lines = [
        f"[bold]{escape(book.title or 'Unknown Title')}[/]",
        "",
        f"[dim]File:[/] {escape(str(book_path))}",
        f"[dim]Author:[/] {escape(book.author or 'Unknown')}",
        f"[dim]Chapters:[/] {len(book.chapters)}",
        f"[dim]Style sheets:[/] {len(book.style_sheets)}",
    ]

    console.print()
    console.print(
        Panel("\n".join(info_lines), title="EPUB Information", border_style="green")
    )

    console.print()
    table = Table(title="Chapter List", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Label", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Words", justify="right", style="green")

    for chapter in book.chapters[:MAX_LISTED_CHAPTERS]:
        table.add_row(
            str(chapter.order + 1),
            escape(chapter.label),
            escape(processor.display_title(chapter)),
            f"{processor.count_words(chapter.content):,}",
        )

    console.print(table)

    remaining = len(book.chapters) - MAX_LISTED_CHAPTERS
    if remaining > 0:
        console.print(f"[dim]... and {remaining} more chapters[/]")
    console.print()
