"""
Module: composer.layout.measure

Purpose:
    BlockMeasurer protocol and the Pillow-backed production measurer.

Key Classes:
    - BlockMeasurer: (block, width, font_size) -> height
    - PillowBlockMeasurer: Uses Pillow font metrics via text_metrics

Dependencies:
    - composer.layout.text_metrics: Shared wrap/height rules

Used By:
    - composer.layout.engine: Height budget checks
    - composer.controller: Default measurer
"""

from __future__ import annotations
from collections import OrderedDict
from typing import Protocol, Tuple

from a4_composer.core.models import Block

from .text_metrics import block_height

# Enough for every block of a long document at a handful of widths
DEFAULT_CACHE_SIZE = 4096


class BlockMeasurer(Protocol):
    """
    Measures rendered block heights.

    Implementations raise MeasurementUnavailable when no rendering
    surface is available.
    """

    def measure(self, block: Block, width: float, font_size: float) -> float:
        ...


class PillowBlockMeasurer:
    """
    Measures blocks with Pillow font metrics.

    Results are memoised per (block, width, font_size) in a least recently
    used cache of at most `cache_size` entries; a resize drag touches a new
    width on every pointer move, so older widths are evicted first.

    Args:
        cache_size: Maximum number of cached heights
    """

    def __init__(self, cache_size: int = DEFAULT_CACHE_SIZE) -> None:
        if cache_size < 1:
            raise ValueError(f"cache_size must be positive: {cache_size}")
        self._cache_size = cache_size
        self._cache: "OrderedDict[Tuple[Block, float, float], float]" = OrderedDict()

    @property
    def cached_count(self) -> int:
        return len(self._cache)

    def measure(self, block: Block, width: float, font_size: float) -> float:
        key = (block, width, font_size)
        height = self._cache.get(key)
        if height is not None:
            self._cache.move_to_end(key)
            return height

        height = block_height(block, width, font_size)
        self._cache[key] = height
        if len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)
        return height

    def clear(self) -> None:
        self._cache.clear()
