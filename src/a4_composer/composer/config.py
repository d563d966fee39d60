"""
Module: composer.config

Purpose:
    Configuration dataclass for a composer session. Immutable
    configuration with validation on construction.

Key Classes:
    - ComposerConfig: Page canvas, region, font and export settings

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - composer.controller: Session state
    - composer.geometry.model: Default box and minimum dimensions
    - composer.output.exporter: Scale, settle interval, page size
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from a4_composer.core.models import GeometryBox


# A4 page canvas at 96 DPI
DEFAULT_PAGE_WIDTH_PX = 794
DEFAULT_PAGE_HEIGHT_PX = 1123

# Physical output page (A4 portrait)
A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297

ALLOWED_MIN_DIMENSIONS = (100, 120)
DEFAULT_BOX = GeometryBox(x=80, y=120, width=630, height=850)


@dataclass(frozen=True)
class ComposerConfig:
    """
    Configuration for a composer session (immutable).

    Attributes:
        page_width: Page canvas width in pixels
        page_height: Page canvas height in pixels
        default_box: Content region on start and after reset
        min_region_width: Smallest region width a resize may produce
        min_region_height: Smallest region height a resize may produce
        default_font_size: Base font size in pixels
        min_font_size: Lowest selectable font size
        max_font_size: Highest selectable font size
        capture_scale: Raster scale factor used for export
        settle_seconds: Wait after hiding chrome before the first capture
        output_page_mm: Physical output page size (width, height)
        default_filename: File name used when downloading
        output_dir: Directory for downloads (None = working directory)
        accepted_suffixes: Document file suffixes the loader accepts

    Example:
        >>> config = ComposerConfig(min_region_width=120)
        >>> config.default_box.width
        630
    """

    # Canvas
    page_width: int = DEFAULT_PAGE_WIDTH_PX
    page_height: int = DEFAULT_PAGE_HEIGHT_PX

    # Content region
    default_box: GeometryBox = DEFAULT_BOX
    min_region_width: int = 100
    min_region_height: int = 100

    # Font
    default_font_size: int = 16
    min_font_size: int = 10
    max_font_size: int = 40

    # Export
    capture_scale: float = 2.0
    settle_seconds: float = 0.2
    output_page_mm: Tuple[float, float] = (A4_WIDTH_MM, A4_HEIGHT_MM)
    default_filename: str = "document.pdf"
    output_dir: Optional[Path] = None

    # Loading
    accepted_suffixes: Tuple[str, ...] = field(default=(".docx",))

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.min_region_width not in ALLOWED_MIN_DIMENSIONS:
            raise ValueError(
                f"min_region_width must be one of {ALLOWED_MIN_DIMENSIONS}: {self.min_region_width}"
            )
        if self.min_region_height not in ALLOWED_MIN_DIMENSIONS:
            raise ValueError(
                f"min_region_height must be one of {ALLOWED_MIN_DIMENSIONS}: {self.min_region_height}"
            )
        if self.default_box.width < self.min_region_width:
            raise ValueError("default_box is narrower than min_region_width")
        if self.default_box.height < self.min_region_height:
            raise ValueError("default_box is shorter than min_region_height")
        if self.min_font_size > self.max_font_size:
            raise ValueError(
                f"min_font_size exceeds max_font_size: {self.min_font_size} > {self.max_font_size}"
            )
        if not self.accepts_font_size(self.default_font_size):
            raise ValueError(f"default_font_size out of range: {self.default_font_size}")
        if self.capture_scale <= 0:
            raise ValueError(f"capture_scale must be positive: {self.capture_scale}")
        if self.settle_seconds < 0:
            raise ValueError(f"settle_seconds must be non-negative: {self.settle_seconds}")

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return (self.page_width, self.page_height)

    def accepts_font_size(self, size: float) -> bool:
        return self.min_font_size <= size <= self.max_font_size

    def download_path(self) -> Path:
        """Where DOWNLOAD exports land when no destination is given."""
        base = self.output_dir if self.output_dir is not None else Path.cwd()
        return base / self.default_filename
