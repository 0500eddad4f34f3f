"""Exceptions raised while reading an EPUB archive."""


class EpubError(Exception):
    """Base class for all EPUB extraction errors."""


class StructuralError(EpubError):
    """The archive cannot be turned into a book at all."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}" if path else message)


class ArchiveNotFoundError(StructuralError):
    """The archive file does not exist."""


class NotAnArchiveError(StructuralError):
    """The file exists but is not a ZIP container."""


class MissingContainerError(StructuralError):
    """META-INF/container.xml is absent."""


class MalformedXMLError(StructuralError):
    """A container or package document could not be decoded."""


class NoRootFileError(StructuralError):
    """The container descriptor names no package document."""


class MissingPackageError(StructuralError):
    """The package document named by the container is absent."""


class DanglingReferenceError(EpubError):
    """A spine or manifest reference points at nothing (strict mode only)."""

    def __init__(self, reference: str, message: str):
        self.reference = reference
        super().__init__(f"{message}: {reference}")


class ArchiveEntryError(EpubError):
    """An archive entry exists but its bytes cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")
