"""
Unit tests for ComposerConfig.
"""

from pathlib import Path

import pytest

from a4_composer.composer.config import ComposerConfig
from a4_composer.core.models import GeometryBox


class TestComposerConfigDefaults:
    def test_defaults(self):
        config = ComposerConfig()

        assert config.canvas_size == (794, 1123)
        assert config.default_box == GeometryBox(80, 120, 630, 850)
        assert (config.min_font_size, config.default_font_size, config.max_font_size) == (10, 16, 40)
        assert config.capture_scale == 2.0
        assert config.settle_seconds == 0.2
        assert config.output_page_mm == (210, 297)

    def test_download_path_uses_output_dir(self, tmp_path):
        config = ComposerConfig(output_dir=tmp_path)

        assert config.download_path() == tmp_path / "document.pdf"

    def test_download_path_defaults_to_cwd(self):
        assert ComposerConfig().download_path() == Path.cwd() / "document.pdf"

    @pytest.mark.parametrize("size,accepted", [(9, False), (10, True), (40, True), (41, False)])
    def test_accepts_font_size(self, size, accepted):
        assert ComposerConfig().accepts_font_size(size) is accepted


class TestComposerConfigValidation:
    @pytest.mark.parametrize("kwargs,message", [
        ({"page_width": 0}, "page_width"),
        ({"min_region_width": 50}, "min_region_width"),
        ({"min_region_height": 110}, "min_region_height"),
        ({"default_box": GeometryBox(0, 0, 90, 500)}, "narrower"),
        ({"min_font_size": 30, "max_font_size": 20, "default_font_size": 25}, "exceeds"),
        ({"default_font_size": 50}, "default_font_size"),
        ({"capture_scale": 0}, "capture_scale"),
        ({"settle_seconds": -1}, "settle_seconds"),
    ])
    def test_when_invalid_then_raises(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            ComposerConfig(**kwargs)
