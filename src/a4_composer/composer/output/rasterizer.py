"""
Module: composer.output.rasterizer

Purpose:
    Render a page headlessly with Pillow. A PageSurface carries
    everything a page needs (blocks, region box, font size, template);
    PillowPageRasterizer turns it into an RGB image at any scale.

Key Classes:
    - PageSurface: Renderable description of one page
    - PageRasterizer: capture(surface, scale) -> PIL image
    - ChromeSource: Anything exposing chrome_visible (the geometry model)
    - PillowPageRasterizer: Production rasterizer

Drawing order:
    1. White canvas
    2. Template image scaled to cover the whole canvas
    3. Blocks inside the content region, using text_metrics
    4. Dashed border and resize handle, editable page only, and only
       while chrome is visible

Dependencies:
    - PIL: Image, ImageDraw, ImageOps
    - composer.layout.text_metrics: Same wrapping as measurement

Used By:
    - composer.output.exporter: Capturing pages
    - gui.widgets.page_canvas: On-screen painting
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Tuple

from PIL import Image, ImageDraw, ImageOps

from a4_composer.core.models import Block, BlockKind, GeometryBox, Page, Template

from ..config import DEFAULT_PAGE_HEIGHT_PX, DEFAULT_PAGE_WIDTH_PX
from ..layout.text_metrics import (
    BULLET,
    TABLE_CELL_PADDING_EM,
    block_lines,
    block_style,
    load_font,
    table_rows,
)

logger = logging.getLogger(__name__)

# Chrome styling
BORDER_COLOR = "#999999"
BORDER_WIDTH = 2
DASH_LENGTH = 6
DASH_GAP = 4
HANDLE_COLOR = "#2563eb"
HANDLE_SIZE = 14
HANDLE_OFFSET = 6  # Handle overhangs the bottom-right corner by this much
TEXT_COLOR = "black"
TABLE_BORDER_COLOR = "#444444"


@dataclass(frozen=True)
class PageSurface:
    """
    Renderable description of one page (immutable).

    Attributes:
        page: Blocks placed on this page
        box: Content region (shared by all pages)
        font_size: Base font size in pixels
        template: Background template, or None for plain white
        editable: True for the first page, which carries the chrome
        canvas_size: Page canvas (width, height) in pixels
    """

    page: Page
    box: GeometryBox
    font_size: float
    template: Optional[Template] = None
    editable: bool = False
    canvas_size: Tuple[int, int] = (DEFAULT_PAGE_WIDTH_PX, DEFAULT_PAGE_HEIGHT_PX)

    @property
    def index(self) -> int:
        return self.page.index


class PageRasterizer(Protocol):
    """Produces a raster image of a page surface at a scale factor."""

    def capture(self, surface: Any, scale: float) -> Image.Image:
        ...


class ChromeSource(Protocol):
    @property
    def chrome_visible(self) -> bool:
        ...


def handle_rect(box: GeometryBox) -> Tuple[float, float, float, float]:
    """Resize handle bounds (left, top, right, bottom) in canvas pixels."""
    right = box.right + HANDLE_OFFSET
    bottom = box.bottom + HANDLE_OFFSET
    return (right - HANDLE_SIZE, bottom - HANDLE_SIZE, right, bottom)


class PillowPageRasterizer:
    """
    Renders PageSurfaces with Pillow.

    Args:
        chrome: Source of the chrome visibility flag. Without one, chrome
            is never drawn.

    Example:
        >>> rasterizer = PillowPageRasterizer(chrome=geometry)
        >>> image = rasterizer.capture(surface, 2.0)
        >>> image.size
        (1588, 2246)
    """

    def __init__(self, chrome: Optional[ChromeSource] = None) -> None:
        self._chrome = chrome
        self._templates: Dict[Tuple[str, Tuple[int, int]], Image.Image] = {}

    def capture(self, surface: PageSurface, scale: float) -> Image.Image:
        """
        Render a surface.

        Raises:
            OSError: If the template image cannot be read
        """
        width, height = surface.canvas_size
        size = (round(width * scale), round(height * scale))
        image = Image.new("RGB", size, "white")

        if surface.template is not None:
            image.paste(self._template_image(surface.template, size), (0, 0))

        draw = ImageDraw.Draw(image)
        self._draw_blocks(draw, surface, scale)

        if surface.editable and self._chrome is not None and self._chrome.chrome_visible:
            _draw_chrome(draw, surface.box, scale)

        logger.debug(f"Rasterized page {surface.index + 1} at {size[0]}x{size[1]}")
        return image

    def _template_image(self, template: Template, size: Tuple[int, int]) -> Image.Image:
        key = (template.url, size)
        cached = self._templates.get(key)
        if cached is None:
            with Image.open(template.path) as source:
                # Cover the canvas, cropping overflow (like object-fit: cover)
                cached = ImageOps.fit(source.convert("RGB"), size)
            self._templates[key] = cached
        return cached

    def _draw_blocks(self, draw: ImageDraw.ImageDraw, surface: PageSurface, scale: float) -> None:
        box = surface.box
        y = box.y
        for block in surface.page.blocks:
            if block.kind is BlockKind.TABLE:
                y = _draw_table(draw, block, box.x, y, box.width, surface.font_size, scale)
            else:
                y = _draw_text_block(draw, block, box.x, y, box.width, surface.font_size, scale)


def _draw_text_block(
    draw: ImageDraw.ImageDraw,
    block: Block,
    x: float,
    y: float,
    width: float,
    font_size: float,
    scale: float,
) -> float:
    """Draw a paragraph, heading or list item. Returns the next block's y."""
    style, lines = block_lines(block, width, font_size)
    font = load_font(max(1, round(style.font_px * scale)), style.bold)
    text_x = x + style.indent_px
    # Centre glyphs vertically in the line box
    leading = (style.line_px - style.font_px) / 2

    if block.kind is BlockKind.LIST_ITEM:
        draw.text(
            ((x + style.indent_px - style.font_px) * scale, (y + leading) * scale),
            BULLET,
            fill=TEXT_COLOR,
            font=font,
        )

    for i, line in enumerate(lines):
        if line:
            draw.text(
                (text_x * scale, (y + i * style.line_px + leading) * scale),
                line,
                fill=TEXT_COLOR,
                font=font,
            )

    return y + len(lines) * style.line_px + style.spacing_px


def _draw_table(
    draw: ImageDraw.ImageDraw,
    block: Block,
    x: float,
    y: float,
    width: float,
    font_size: float,
    scale: float,
) -> float:
    """Draw a table as a grid of equal-width columns. Returns the next block's y."""
    style = block_style(block, font_size)
    font = load_font(max(1, round(style.font_px * scale)), style.bold)
    padding = style.font_px * TABLE_CELL_PADDING_EM
    columns = max((len(row) for row in block.cells), default=1) or 1
    column_width = width / columns
    leading = (style.line_px - style.font_px) / 2

    for cells, row_height in table_rows(block, width, style):
        for column, lines in enumerate(cells):
            left = x + column * column_width
            draw.rectangle(
                (left * scale, y * scale, (left + column_width) * scale, (y + row_height) * scale),
                outline=TABLE_BORDER_COLOR,
                width=max(1, round(scale)),
            )
            for i, line in enumerate(lines):
                if line:
                    draw.text(
                        ((left + padding) * scale, (y + padding + i * style.line_px + leading) * scale),
                        line,
                        fill=TEXT_COLOR,
                        font=font,
                    )
        y += row_height

    return y + style.spacing_px


def _draw_chrome(draw: ImageDraw.ImageDraw, box: GeometryBox, scale: float) -> None:
    """Dashed border around the region plus the round resize handle."""
    left, top = box.x * scale, box.y * scale
    right, bottom = box.right * scale, box.bottom * scale
    line_width = max(1, round(BORDER_WIDTH * scale))
    dash, gap = DASH_LENGTH * scale, DASH_GAP * scale

    for (x0, y0, x1, y1) in (
        (left, top, right, top),
        (right, top, right, bottom),
        (left, bottom, right, bottom),
        (left, top, left, bottom),
    ):
        _dashed_line(draw, x0, y0, x1, y1, dash, gap, line_width)

    hx0, hy0, hx1, hy1 = handle_rect(box)
    draw.ellipse((hx0 * scale, hy0 * scale, hx1 * scale, hy1 * scale), fill=HANDLE_COLOR)


def _dashed_line(
    draw: ImageDraw.ImageDraw,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    dash: float,
    gap: float,
    width: int,
) -> None:
    """Axis-aligned dashed line."""
    length = abs(x1 - x0) + abs(y1 - y0)
    if length == 0:
        return
    dx, dy = (x1 - x0) / length, (y1 - y0) / length
    position = 0.0
    while position < length:
        end = min(position + dash, length)
        draw.line(
            (x0 + dx * position, y0 + dy * position, x0 + dx * end, y0 + dy * end),
            fill=BORDER_COLOR,
            width=width,
        )
        position = end + gap
