"""
Module: composer.layout.text_metrics

Purpose:
    Shared text metrics for measuring and drawing blocks. The measurer
    and the rasterizer both go through block_lines() so a block is drawn
    exactly as tall as it was measured.

Key Functions:
    - block_style(): Font size, line height, spacing and indent for a block
    - block_lines(): Wrapped lines (or table rows) for a block at a width
    - wrap_text(): Greedy word wrap with character fallback
    - load_font(): Cached TrueType font lookup with default fallback

Dependencies:
    - PIL: ImageFont for glyph metrics

Used By:
    - composer.layout.measure: Block heights
    - composer.output.rasterizer: Drawing blocks
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple

from PIL import ImageFont

from a4_composer.core.models import Block, BlockKind

logger = logging.getLogger(__name__)

LINE_HEIGHT = 1.4
BLOCK_SPACING_EM = 1.0
LIST_INDENT_EM = 2.5
TABLE_CELL_PADDING_EM = 0.25

# Browser default heading sizes (em) and spacing (em of the heading font)
HEADING_SCALE = {1: 2.0, 2: 1.5, 3: 1.17, 4: 1.0, 5: 0.83, 6: 0.67}
HEADING_SPACING_EM = 0.67

BULLET = "•"

_REGULAR_FONTS = (
    "DejaVuSans.ttf",
    "arial.ttf",
    "Arial.ttf",
    "LiberationSans-Regular.ttf",
)
_BOLD_FONTS = (
    "DejaVuSans-Bold.ttf",
    "arialbd.ttf",
    "Arial Bold.ttf",
    "LiberationSans-Bold.ttf",
)


@dataclass(frozen=True)
class BlockStyle:
    """
    Resolved metrics for drawing one block.

    Attributes:
        font_px: Font size in pixels
        line_px: Height of one text line
        spacing_px: Gap below the block
        indent_px: Left indent of the text
        bold: Whether to use the bold face
    """

    font_px: int
    line_px: float
    spacing_px: float
    indent_px: float
    bold: bool = False


@lru_cache(maxsize=64)
def load_font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont:
    """
    Load a font for text rendering.

    Tries common system fonts, then Pillow's bundled default.

    Args:
        size: Font size in pixels
        bold: Prefer a bold face

    Returns:
        Font object
    """
    candidates = _BOLD_FONTS + _REGULAR_FONTS if bold else _REGULAR_FONTS
    for font_name in candidates:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning("Could not load TrueType font, using default")
    return ImageFont.load_default(size=size)


def block_style(block: Block, font_size: float) -> BlockStyle:
    """Resolve metrics for a block at the given base font size."""
    if block.kind is BlockKind.HEADING:
        font_px = max(1, round(font_size * HEADING_SCALE[block.level]))
        return BlockStyle(
            font_px=font_px,
            line_px=font_px * LINE_HEIGHT,
            spacing_px=font_px * HEADING_SPACING_EM,
            indent_px=0.0,
            bold=True,
        )

    font_px = max(1, round(font_size))
    indent = font_size * LIST_INDENT_EM if block.kind is BlockKind.LIST_ITEM else 0.0
    return BlockStyle(
        font_px=font_px,
        line_px=font_px * LINE_HEIGHT,
        spacing_px=font_size * BLOCK_SPACING_EM,
        indent_px=indent,
    )


def wrap_text(text: str, font: ImageFont.FreeTypeFont, max_width: float) -> List[str]:
    """
    Greedy word wrap.

    Explicit newlines start new lines. Words wider than max_width are
    broken on characters. An empty string yields a single empty line.

    Args:
        text: Text to wrap
        font: Font used for width measurement
        max_width: Available width in pixels

    Returns:
        Wrapped lines
    """
    lines: List[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if font.getlength(candidate) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            # Word alone is too wide: break it on characters
            current = ""
            for char in word:
                if current and font.getlength(current + char) > max_width:
                    lines.append(current)
                    current = char
                else:
                    current += char
        lines.append(current)
    return lines


def table_rows(
    block: Block, width: float, style: BlockStyle
) -> List[Tuple[List[List[str]], float]]:
    """
    Wrap each table cell into an equal-width column.

    Returns:
        One (wrapped cells, row height) pair per row
    """
    columns = max((len(row) for row in block.cells), default=1) or 1
    padding = style.font_px * TABLE_CELL_PADDING_EM
    cell_width = max(1.0, width / columns - 2 * padding)
    font = load_font(style.font_px, style.bold)

    rows = []
    for row in block.cells:
        wrapped = [wrap_text(cell, font, cell_width) for cell in row]
        line_count = max((len(cell) for cell in wrapped), default=1)
        rows.append((wrapped, line_count * style.line_px + 2 * padding))
    return rows


def block_lines(block: Block, width: float, font_size: float) -> Tuple[BlockStyle, List[str]]:
    """
    Wrap a non-table block's text for the given container width.

    Args:
        block: Block to wrap
        width: Container width in pixels
        font_size: Base font size in pixels

    Returns:
        (style, lines)
    """
    style = block_style(block, font_size)
    font = load_font(style.font_px, style.bold)
    available = max(1.0, width - style.indent_px)
    return style, wrap_text(block.text, font, available)


def block_height(block: Block, width: float, font_size: float) -> float:
    """Rendered height of a block including the spacing below it."""
    if block.kind is BlockKind.TABLE:
        style = block_style(block, font_size)
        rows = table_rows(block, width, style)
        return sum(height for _, height in rows) + style.spacing_px

    style, lines = block_lines(block, width, font_size)
    return len(lines) * style.line_px + style.spacing_px
