"""
Module: pages

Purpose:
    Pagination output models. A Page is a run of consecutive blocks that
    fit the content region height; a PaginationResult is the ordered list
    of pages for a whole document plus the inputs it was computed from.

Key Classes:
    - Page: Blocks placed on one page
    - PaginationResult: Complete pagination output

Dependencies:
    - dataclasses (std)
    - core.models.blocks: Block

Used By:
    - composer.layout.engine: Produces PaginationResult
    - composer.controller: Holds the current result
    - composer.output: Renders Pages
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .blocks import Block


@dataclass(frozen=True)
class Page:
    """
    Blocks placed on a single page.

    Attributes:
        index: Page number (0-indexed)
        blocks: Blocks on this page, in document order
        height_used: Sum of measured block heights, None when layout
            was degraded and nothing was measured
        overflows: True when a single block alone exceeds the region height

    Example:
        >>> page = Page(index=0, blocks=(b1, b2), height_used=700.0)
        >>> page.block_count
        2
    """

    index: int
    blocks: Tuple[Block, ...]
    height_used: Optional[float] = None
    overflows: bool = False

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    @property
    def markup(self) -> str:
        return "".join(block.markup for block in self.blocks)


@dataclass(frozen=True)
class PaginationResult:
    """
    Pagination output with the inputs it was computed for.

    Invariant: concatenating every page's blocks yields the input blocks
    exactly, in order, each exactly once.

    Attributes:
        pages: Tuple of Pages
        width: Region width used for measurement
        height: Region height budget
        font_size: Base font size in pixels
        degraded: True when measuring was impossible and every block was
            put on a single page
        warnings: Diagnostic messages

    Example:
        >>> result.page_count
        2
    """

    pages: Tuple[Page, ...]
    width: float
    height: float
    font_size: float
    degraded: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def blocks(self) -> Tuple[Block, ...]:
        """All blocks across pages, in page order."""
        return tuple(block for page in self.pages for block in page.blocks)

    @property
    def is_empty(self) -> bool:
        return not self.pages
