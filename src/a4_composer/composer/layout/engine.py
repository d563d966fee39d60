"""
Module: composer.layout.engine

Purpose:
    Flow an ordered sequence of blocks into fixed-height page regions.
    Pure function: same blocks, width, height, font size and measurer
    always give the same result.

Key Functions:
    - layout(): Main pagination function

Algorithm:
    1. Add the next block to the current page buffer
    2. If the buffer's measured height still fits, keep going
    3. Otherwise close the buffer without this block and start a new
       buffer holding only this block
    4. Flush the last non-empty buffer

    A block taller than the region sits alone on its page, unsplit.
    Blocks are never split and no empty page is ever produced.

Dependencies:
    - composer.layout.measure: BlockMeasurer
    - core.models: Block, Page, PaginationResult

Used By:
    - composer.controller: Recomputes on document/font/region changes
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from a4_composer.core.errors import MeasurementUnavailable
from a4_composer.core.models import Block, Page, PaginationResult

from .measure import BlockMeasurer

logger = logging.getLogger(__name__)


def layout(
    blocks: Sequence[Block],
    width: float,
    height: float,
    font_size: float,
    *,
    measurer: Optional[BlockMeasurer],
) -> PaginationResult:
    """
    Paginate blocks into pages of at most `height` measured pixels.

    If the measurer is missing or raises MeasurementUnavailable, the
    whole document is returned on a single page with degraded=True.

    Args:
        blocks: Blocks in document order
        width: Content region width in pixels
        height: Content region height budget in pixels
        font_size: Base font size in pixels
        measurer: Block height capability

    Returns:
        PaginationResult whose pages partition `blocks` in order

    Example:
        >>> result = layout(doc.blocks, 630, 850, 16, measurer=PillowBlockMeasurer())
        >>> result.blocks == doc.blocks
        True
    """
    blocks = tuple(blocks)
    if not blocks:
        return PaginationResult(pages=(), width=width, height=height, font_size=font_size)

    if measurer is None:
        return _degraded(blocks, width, height, font_size, "no block measurer available")

    try:
        pages, warnings = _flow(blocks, width, height, font_size, measurer)
    except MeasurementUnavailable as e:
        return _degraded(blocks, width, height, font_size, str(e) or "measurement failed")

    logger.info(f"Paginated {len(blocks)} blocks onto {len(pages)} pages")

    return PaginationResult(
        pages=tuple(pages),
        width=width,
        height=height,
        font_size=font_size,
        warnings=warnings,
    )


def _flow(
    blocks: tuple[Block, ...],
    width: float,
    height: float,
    font_size: float,
    measurer: BlockMeasurer,
) -> tuple[List[Page], List[str]]:
    pages: List[Page] = []
    warnings: List[str] = []

    buffer: List[Block] = []
    buffer_height = 0.0

    for position, block in enumerate(blocks):
        block_height = measurer.measure(block, width, font_size)

        if buffer and buffer_height + block_height > height:
            # Close the page without this block
            pages.append(_close_page(len(pages), buffer, buffer_height, height))
            buffer = []
            buffer_height = 0.0

        buffer.append(block)
        buffer_height += block_height

        if len(buffer) == 1 and block_height > height:
            message = (
                f"Block {position} overflows page {len(pages)}: "
                f"{block_height:.0f}px needed, {height:.0f}px available"
            )
            logger.warning(message)
            warnings.append(message)

    if buffer:
        pages.append(_close_page(len(pages), buffer, buffer_height, height))

    return pages, warnings


def _close_page(index: int, buffer: List[Block], used: float, height: float) -> Page:
    return Page(
        index=index,
        blocks=tuple(buffer),
        height_used=used,
        overflows=used > height,
    )


def _degraded(
    blocks: tuple[Block, ...],
    width: float,
    height: float,
    font_size: float,
    reason: str,
) -> PaginationResult:
    """Single page holding the whole document, unmeasured."""
    message = f"Layout degraded ({reason}); showing all {len(blocks)} blocks on one page"
    logger.warning(message)
    return PaginationResult(
        pages=(Page(index=0, blocks=blocks),),
        width=width,
        height=height,
        font_size=font_size,
        degraded=True,
        warnings=[message],
    )
