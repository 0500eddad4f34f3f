"""Data models for the EPUB container and package documents."""

from pydantic import BaseModel, ConfigDict, Field


class RootFile(BaseModel):
    """One <rootfile> entry of META-INF/container.xml."""

    model_config = ConfigDict(frozen=True)

    full_path: str
    media_type: str = ""


class ContainerDescriptor(BaseModel):
    """Decoded container descriptor."""

    model_config = ConfigDict(frozen=True)

    root_files: list[RootFile] = Field(min_length=1)

    @property
    def primary(self) -> RootFile:
        """Only the first root file is ever consulted."""
        return self.root_files[0]


class ManifestItem(BaseModel):
    """Single manifest entry."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    href: str = ""  # relative to the package document's directory
    media_type: str = ""


class SpineRef(BaseModel):
    """Single spine <itemref>."""

    model_config = ConfigDict(frozen=True)

    idref: str = ""


class PackageDocument(BaseModel):
    """Metadata, manifest and spine of an OPF package document."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    creator: str = ""
    manifest: list[ManifestItem] = Field(default_factory=list)
    spine: list[SpineRef] = Field(default_factory=list)


class ChapterSource(BaseModel):
    """Stored path of a renderable spine entry."""

    model_config = ConfigDict(frozen=True)

    stored_path: str
    id: str


class ResolvedPackage(BaseModel):
    """Spine/manifest join result."""

    model_config = ConfigDict(frozen=True)

    chapter_sources: list[ChapterSource] = Field(default_factory=list)
    style_sources: list[str] = Field(default_factory=list)
