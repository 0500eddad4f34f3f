"""Conversion configuration."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Width and height in inches
PAGE_SIZES: dict[str, tuple[float, float]] = {
    "A3": (11.69, 16.54),
    "A4": (8.27, 11.69),
    "A5": (5.83, 8.27),
    "Letter": (8.5, 11.0),
    "Legal": (8.5, 14.0),
    "Tabloid": (11.0, 17.0),
}


class ConversionOptions(BaseModel):
    """Options for one conversion run."""

    model_config = ConfigDict(frozen=True)

    page_size: str = "A4"
    margin: float = Field(default=0.5, ge=0)  # inches, all four sides
    landscape: bool = False
    print_background: bool = True
    scale: float = Field(default=1.0, ge=0.1, le=2.0)
    strict: bool = False
    browser: str | None = None
    timeout_seconds: float = Field(default=120.0, gt=0)

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, value: str) -> str:
        if value not in PAGE_SIZES:
            valid = ", ".join(PAGE_SIZES)
            raise ValueError(f"invalid page size: {value} (valid: {valid})")
        return value

    def page_dimensions(self) -> tuple[float, float]:
        """Return (width, height) in inches, honoring orientation."""
        width, height = PAGE_SIZES[self.page_size]
        if self.landscape:
            return height, width
        return width, height
