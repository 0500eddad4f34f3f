"""Data models."""

from epub2pdf.models.book import Book, Chapter
from epub2pdf.models.epub import (
    ChapterSource,
    ContainerDescriptor,
    ManifestItem,
    PackageDocument,
    ResolvedPackage,
    RootFile,
    SpineRef,
)
from epub2pdf.models.options import PAGE_SIZES, ConversionOptions

__all__ = [
    # Book models
    "Book",
    "Chapter",
    # Package models
    "RootFile",
    "ContainerDescriptor",
    "ManifestItem",
    "SpineRef",
    "PackageDocument",
    "ChapterSource",
    "ResolvedPackage",
    # Configuration
    "PAGE_SIZES",
    "ConversionOptions",
]
