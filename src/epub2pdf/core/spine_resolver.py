"""Join the manifest to the spine to get reading order and style sheets."""

import logging
import posixpath

from epub2pdf.core.errors import DanglingReferenceError
from epub2pdf.models.epub import (
    ChapterSource,
    ManifestItem,
    PackageDocument,
    ResolvedPackage,
)

log = logging.getLogger(__name__)

CSS_MEDIA_TYPE = "text/css"


def join_stored_path(base_directory: str, href: str) -> str:
    """Join a manifest href onto the package directory."""
    if not base_directory:
        return href
    return posixpath.normpath(posixpath.join(base_directory, href))


def is_renderable(media_type: str) -> bool:
    """XHTML, HTML and generic XML content all count as chapters."""
    return "html" in media_type or "xml" in media_type


def resolve(
    package: PackageDocument, base_directory: str, strict: bool = False
) -> ResolvedPackage:
    """Return chapter sources in spine order and style sheets in manifest order."""
    by_id: dict[str, ManifestItem] = {}
    for item in package.manifest:
        by_id.setdefault(item.id, item)

    chapter_sources = []
    for ref in package.spine:
        item = by_id.get(ref.idref)
        if item is None:
            if strict:
                raise DanglingReferenceError(ref.idref, "Spine idref has no manifest item")
            log.debug("Skipping dangling spine idref %r", ref.idref)
            continue

        if not is_renderable(item.media_type):
            log.debug("Skipping non-document spine item %r (%s)", item.id, item.media_type)
            continue

        chapter_sources.append(
            ChapterSource(
                stored_path=join_stored_path(base_directory, item.href),
                id=item.id,
            )
        )

    style_sources = [
        join_stored_path(base_directory, item.href)
        for item in package.manifest
        if item.media_type == CSS_MEDIA_TYPE
    ]

    return ResolvedPackage(chapter_sources=chapter_sources, style_sources=style_sources)
