"""Resolve asset references inside an archive and encode them as data URIs.

A reference found in markup or CSS is relative to the directory of the file
that contains it. Resolution is deliberately forgiving: when the joined path
is not in the archive, the bare reference and a normalized form are tried
too. Anything that still cannot be found, or whose extension is not a known
image type, is reported as ``None`` so the caller leaves the text alone.
"""

import base64
import logging
import posixpath
import re
from urllib.parse import unquote

from epub2pdf.core.archive import Archive
from epub2pdf.core.errors import ArchiveEntryError

log = logging.getLogger(__name__)

PASSTHROUGH_PREFIXES = ("data:", "http://", "https://", "ftp://", "//")

IMAGE_MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".ico": "image/x-icon",
}

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_PARENT_PREFIX = re.compile(r"(?:\.\./)*")


def is_passthrough(reference: str) -> bool:
    """Already self-contained, or pointing at the network."""
    return reference.strip().lower().startswith(PASSTHROUGH_PREFIXES)


def strip_fragment(reference: str) -> str:
    return reference.split("#", 1)[0]


def media_type_for(filename: str) -> str | None:
    """Image media type from the file extension, or None."""
    ext = posixpath.splitext(filename.lower())[1]
    return IMAGE_MEDIA_TYPES.get(ext)


def is_image_reference(reference: str) -> bool:
    return media_type_for(strip_fragment(reference)) is not None


def percent_decode(reference: str) -> str:
    """Percent-decode a path, returning it untouched if the escapes are bad.

    Path semantics: a literal ``+`` stays ``+`` rather than becoming a space.
    """
    if _BAD_ESCAPE.search(reference):
        return reference
    try:
        return unquote(reference, encoding="utf-8", errors="strict")
    except UnicodeDecodeError:
        return reference


def resolve_relative_path(base_directory: str, href: str) -> str:
    """Resolve ``href`` against ``base_directory``.

    Each leading ``../`` consumes one level of the base. The parent of the
    archive root is the root, so surplus parent segments clamp there.
    """
    parents = _PARENT_PREFIX.match(href).group(0)
    base = base_directory
    for _ in range(len(parents) // 3):
        if not base:
            break
        base = posixpath.dirname(base)
    href = href[len(parents) :]
    if not base:
        return href
    return posixpath.normpath(posixpath.join(base, href.lstrip("/")))


def normalize_path(path: str) -> str:
    """Collapse ``.``/``..`` segments and strip leading separators."""
    if not path:
        return ""
    normalized = posixpath.normpath(path).lstrip("/")
    return "" if normalized == "." else normalized


def is_contained(path: str) -> bool:
    """True if the path cannot address anything above the archive root."""
    if not path or path.startswith("/"):
        return False
    return ".." not in path.split("/")


def lookup_candidates(reference: str, base_directory: str) -> list[str]:
    """Stored paths to try, in order, for an already cleaned reference."""
    resolved = resolve_relative_path(base_directory, reference)
    candidates = []
    for path in (resolved, reference, normalize_path(resolved), normalize_path(reference)):
        if path not in candidates and is_contained(path):
            candidates.append(path)
    return candidates


def encode_data_uri(data: bytes, media_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


class AssetInliner:
    """Turns asset references into data URIs using one archive.

    Payloads are cached per stored path for the lifetime of the inliner.
    """

    def __init__(self, archive: Archive):
        self.archive = archive
        self._payloads: dict[str, str] = {}

    def inline(self, reference: str, base_directory: str) -> str | None:
        """Return a data URI for ``reference``, or None to leave it as is."""
        if is_passthrough(reference):
            return None

        cleaned = percent_decode(strip_fragment(reference))
        if not cleaned:
            return None

        for candidate in lookup_candidates(cleaned, base_directory):
            if candidate in self._payloads:
                return self._payloads[candidate]
            if candidate not in self.archive:
                continue

            media_type = media_type_for(candidate)
            if media_type is None:
                log.debug("Not inlining %s: unsupported type", candidate)
                return None

            try:
                data = self.archive.lookup(candidate)
            except ArchiveEntryError as e:
                log.debug("Not inlining %s: %s", candidate, e.reason)
                return None
            if data is None:
                return None

            payload = encode_data_uri(data, media_type)
            self._payloads[candidate] = payload
            return payload

        log.debug("Unresolved asset reference %r (base %r)", reference, base_directory)
        return None


def inline(reference: str, base_directory: str, archive: Archive) -> str | None:
    """One-shot form of :meth:`AssetInliner.inline`."""
    return AssetInliner(archive).inline(reference, base_directory)
