"""Data models for the extracted book."""

from pydantic import BaseModel, ConfigDict, Field


class Chapter(BaseModel):
    """Chapter markup with assets already inlined."""

    model_config = ConfigDict(frozen=True)

    label: str  # manifest id, not a human title
    content: str
    order: int
    source_path: str = ""


class Book(BaseModel):
    """Complete book ready for assembly."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    author: str = ""
    chapters: list[Chapter] = Field(default_factory=list)
    style_sheets: list[str] = Field(default_factory=list)
    base_path: str = ""
