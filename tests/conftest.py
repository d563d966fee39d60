import os
import pytest
import sys
from pathlib import Path
from typing import Dict, List

# Add src to sys.path so we can import a4_composer
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

# Qt widgets are created without a display during tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from a4_composer.core.errors import MeasurementUnavailable
from a4_composer.core.models import Block


class StubMeasurer:
    """Measurer returning fixed heights per block text; records calls."""

    def __init__(self, heights: Dict[str, float], default: float = 100.0):
        self.heights = heights
        self.default = default
        self.calls: List[tuple] = []

    def measure(self, block: Block, width: float, font_size: float) -> float:
        self.calls.append((block.text, width, font_size))
        return self.heights.get(block.text, self.default)


class FailingMeasurer:
    """Measurer with no rendering surface."""

    def measure(self, block: Block, width: float, font_size: float) -> float:
        raise MeasurementUnavailable("no surface")


@pytest.fixture
def make_blocks():
    """Factory: paragraphs named b0..bN-1."""
    def _create(count: int) -> List[Block]:
        return [Block.paragraph(f"b{i}") for i in range(count)]
    return _create


@pytest.fixture
def stub_measurer():
    """Factory for StubMeasurer."""
    def _create(heights: Dict[str, float], default: float = 100.0) -> StubMeasurer:
        return StubMeasurer(heights, default)
    return _create


@pytest.fixture
def failing_measurer():
    return FailingMeasurer()
