"""
Module: composer.layout

Purpose:
    Pagination of document blocks into fixed-height content regions.

Key Functions:
    - layout(): Paginate blocks for a region width/height and font size

Key Classes:
    - BlockMeasurer: Height measurement capability
    - PillowBlockMeasurer: Production measurer using Pillow font metrics

Used By:
    - composer.controller: Session recomputation
"""

from .engine import layout
from .measure import BlockMeasurer, PillowBlockMeasurer

__all__ = [
    "layout",
    "BlockMeasurer",
    "PillowBlockMeasurer",
]
