"""EPUB parsing: archive in, fully inlined Book out."""

import logging
import posixpath
from pathlib import Path
from urllib.parse import unquote

from epub2pdf.core.archive import Archive
from epub2pdf.core.asset_inliner import AssetInliner
from epub2pdf.core.errors import ArchiveEntryError, DanglingReferenceError
from epub2pdf.core.markup_rewriter import MarkupRewriter
from epub2pdf.core.package_parser import (
    package_base_directory,
    parse_container,
    parse_package,
)
from epub2pdf.core.spine_resolver import resolve
from epub2pdf.models.book import Book, Chapter

log = logging.getLogger(__name__)


class EpubParser:
    """Parse EPUB files into a Book with every image inlined."""

    def __init__(self, epub_path: Path, strict: bool = False):
        self.path = Path(epub_path)
        self.strict = strict

    def parse(self) -> Book:
        """Parse the EPUB and return the complete book.

        The archive is closed before returning, whether parsing succeeds or not.
        """
        with Archive.open(self.path) as archive:
            return self._parse(archive)

    def _parse(self, archive: Archive) -> Book:
        container = parse_container(archive)
        root_path = container.primary.full_path
        package = parse_package(archive, root_path)
        base_path = package_base_directory(root_path)

        resolved = resolve(package, base_path, strict=self.strict)
        rewriter = MarkupRewriter(AssetInliner(archive))

        style_sheets = []
        for css_path in resolved.style_sources:
            css = self._read_text(archive, css_path)
            if css is None:
                log.debug("Skipping missing style sheet %s", css_path)
                continue
            style_sheets.append(rewriter.rewrite(css, posixpath.dirname(css_path)))

        chapters: list[Chapter] = []
        for source in resolved.chapter_sources:
            content = self._read_text(archive, source.stored_path)
            if content is None:
                if self.strict:
                    raise DanglingReferenceError(
                        source.stored_path, "Spine content file not found"
                    )
                log.debug("Skipping missing chapter %s", source.stored_path)
                continue

            chapters.append(
                Chapter(
                    label=source.id,
                    content=rewriter.rewrite(
                        content, posixpath.dirname(source.stored_path)
                    ),
                    order=len(chapters),
                    source_path=source.stored_path,
                )
            )

        log.debug(
            "Parsed %s: %d chapter(s), %d style sheet(s)",
            self.path.name,
            len(chapters),
            len(style_sheets),
        )

        return Book(
            title=package.title,
            author=package.creator,
            chapters=chapters,
            style_sheets=style_sheets,
            base_path=base_path,
        )

    def _read_text(self, archive: Archive, stored_path: str) -> str | None:
        """Read an entry, also trying its percent-decoded name."""
        for candidate in dict.fromkeys((stored_path, unquote(stored_path))):
            try:
                text = archive.read_text(candidate)
            except ArchiveEntryError as e:
                log.warning("Cannot read %s: %s", candidate, e.reason)
                return None
            if text is not None:
                return text
        return None


def parse_book(epub_path: Path, strict: bool = False) -> Book:
    """Parse an EPUB file into a Book."""
    return EpubParser(epub_path, strict=strict).parse()
