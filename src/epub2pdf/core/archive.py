"""Random-access view over the ZIP container of an EPUB."""

import logging
import zipfile
import zlib
from pathlib import Path

from epub2pdf.core.errors import (
    ArchiveEntryError,
    ArchiveNotFoundError,
    NotAnArchiveError,
)

log = logging.getLogger(__name__)


class Archive:
    """Lookup of stored entry names to their bytes.

    Names are matched exactly: no case folding, no path normalization.
    """

    def __init__(self, zip_file: zipfile.ZipFile, cache: bool = True):
        self._zip = zip_file
        self._entries = {
            info.filename: info for info in zip_file.infolist() if not info.is_dir()
        }
        self._cache: dict[str, bytes] | None = {} if cache else None

    @classmethod
    def open(cls, path: Path, cache: bool = True) -> "Archive":
        """Open an archive on disk."""
        path = Path(path)
        if not path.is_file():
            raise ArchiveNotFoundError("Archive not found", str(path))
        try:
            zip_file = zipfile.ZipFile(path)
        except zipfile.BadZipFile as e:
            raise NotAnArchiveError(f"Not a ZIP archive ({e})", str(path)) from e
        log.debug("Opened %s (%d entries)", path, len(zip_file.infolist()))
        return cls(zip_file, cache=cache)

    @property
    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, stored_path: object) -> bool:
        return stored_path in self._entries

    def lookup(self, stored_path: str) -> bytes | None:
        """Return the bytes stored under exactly ``stored_path``, or None."""
        if self._cache is not None and stored_path in self._cache:
            return self._cache[stored_path]

        info = self._entries.get(stored_path)
        if info is None:
            return None

        try:
            data = self._zip.read(info)
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError) as e:
            raise ArchiveEntryError(stored_path, str(e)) from e

        if self._cache is not None:
            self._cache[stored_path] = data
        return data

    def read_text(self, stored_path: str) -> str | None:
        """Return an entry decoded as UTF-8, or None if absent."""
        data = self.lookup(stored_path)
        if data is None:
            return None
        return data.decode("utf-8-sig", errors="replace")

    def close(self) -> None:
        self._zip.close()
        if self._cache is not None:
            self._cache.clear()

    def __enter__(self) -> "Archive":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
