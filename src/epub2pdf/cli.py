"""Main CLI application."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from epub2pdf import __version__
from epub2pdf.core.errors import EpubError
from epub2pdf.core.renderer import RenderError
from epub2pdf.logging_utils import configure_logging
from epub2pdf.models.options import PAGE_SIZES, ConversionOptions

app = typer.Typer(
    name="epub2pdf",
    help="Convert EPUB e-books to PDF via a single self-contained HTML document.",
    add_completion=False,
)

console = Console()


def _validate_input(book_path: Path) -> Path:
    if not book_path.exists():
        console.print(f"[red]Input file not found: {escape(str(book_path))}[/]")
        raise typer.Exit(1)
    if book_path.suffix.lower() != ".epub":
        console.print("[red]Input file must be an EPUB file[/]")
        raise typer.Exit(1)
    return book_path.resolve()


def _build_options(**kwargs) -> ConversionOptions:
    try:
        return ConversionOptions(**kwargs)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]Invalid {field}: {escape(error['msg'])}[/]")
        raise typer.Exit(1)


BookArgument = Annotated[
    Path,
    typer.Argument(help="Path to the EPUB file", dir_okay=False),
]


@app.command()
def convert(
    book_path: BookArgument,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output PDF path (default: input name with .pdf extension)",
        ),
    ] = None,
    page_size: Annotated[
        str,
        typer.Option(
            "--page-size",
            "-p",
            help=f"Page size: {', '.join(PAGE_SIZES)}",
        ),
    ] = "A4",
    margin: Annotated[
        float,
        typer.Option("--margin", "-m", help="Page margin in inches"),
    ] = 0.5,
    landscape: Annotated[
        bool,
        typer.Option("--landscape", "-l", help="Use landscape orientation"),
    ] = False,
    no_background: Annotated[
        bool,
        typer.Option("--no-background", help="Don't print background graphics"),
    ] = False,
    scale: Annotated[
        float,
        typer.Option("--scale", "-s", help="Scale factor (0.1 - 2.0)"),
    ] = 1.0,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on dangling spine/manifest references"),
    ] = False,
    browser: Annotated[
        Optional[str],
        typer.Option("--browser", help="Chrome/Chromium executable to render with"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose output"),
    ] = False,
) -> None:
    """Convert an EPUB file to PDF."""
    configure_logging(verbose, console)
    book_path = _validate_input(book_path)
    options = _build_options(
        page_size=page_size,
        margin=margin,
        landscape=landscape,
        print_background=not no_background,
        scale=scale,
        strict=strict,
        browser=browser,
    )

    try:
        from epub2pdf.commands.convert import execute_convert

        execute_convert(
            book_path=book_path,
            output_path=output,
            options=options,
            verbose=verbose,
            console=console,
        )
    except (EpubError, RenderError, OSError) as e:
        console.print(f"[red]Conversion failed: {escape(str(e))}[/]")
        raise typer.Exit(1)


@app.command()
def info(
    book_path: BookArgument,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on dangling spine/manifest references"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose output"),
    ] = False,
) -> None:
    """Display EPUB metadata and chapter list."""
    configure_logging(verbose, console)
    book_path = _validate_input(book_path)

    try:
        from epub2pdf.commands.info import execute_info

        execute_info(book_path=book_path, console=console, strict=strict)
    except EpubError as e:
        console.print(f"[red]Error reading file: {escape(str(e))}[/]")
        raise typer.Exit(1)


@app.command()
def html(
    book_path: BookArgument,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Write the HTML here instead of standard output",
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on dangling spine/manifest references"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose output"),
    ] = False,
) -> None:
    """Write the single self-contained HTML document for an EPUB."""
    configure_logging(verbose, console)
    book_path = _validate_input(book_path)
    options = _build_options(strict=strict)

    try:
        from epub2pdf.commands.html import execute_html

        execute_html(
            book_path=book_path,
            output_path=output,
            options=options,
            console=console,
        )
    except (EpubError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Print the version."""
    console.print(f"epub2pdf {__version__}")


if __name__ == "__main__":
    app()
