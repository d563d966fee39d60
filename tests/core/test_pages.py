"""
Unit tests for Page, PaginationResult and templates.
"""

from a4_composer.core.models import (
    Block,
    DEFAULT_TEMPLATES,
    Page,
    PaginationResult,
)


class TestPaginationResult:
    """Tests for PaginationResult helpers."""

    def test_blocks_concatenates_pages_in_order(self):
        # Arrange
        a, b, c = Block.paragraph("a"), Block.paragraph("b"), Block.paragraph("c")
        pages = (Page(0, (a, b), 300.0), Page(1, (c,), 100.0))

        # Act
        result = PaginationResult(pages=pages, width=630, height=850, font_size=16)

        # Assert
        assert result.page_count == 2
        assert result.blocks == (a, b, c)
        assert not result.is_empty
        assert not result.degraded
        assert result.warnings == []

    def test_when_no_pages_then_empty(self):
        result = PaginationResult(pages=(), width=630, height=850, font_size=16)

        assert result.is_empty
        assert result.blocks == ()

    def test_page_markup_and_count(self):
        page = Page(0, (Block.heading("H", 2), Block.paragraph("p")))

        assert page.block_count == 2
        assert page.markup == "<h2>H</h2><p>p</p>"
        assert page.height_used is None


class TestDefaultTemplates:
    def test_five_templates_with_image_paths(self):
        assert len(DEFAULT_TEMPLATES) == 5
        assert DEFAULT_TEMPLATES[0].name == "Template 1"
        assert DEFAULT_TEMPLATES[4].url == "templates/template5.png"
        assert DEFAULT_TEMPLATES[2].path.name == "template3.png"
