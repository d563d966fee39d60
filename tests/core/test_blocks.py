"""
Unit tests for Block and Document models.
"""

import pytest

from a4_composer.core.models import Block, BlockKind, Document, EMPTY_DOCUMENT


class TestBlockValidation:
    """Tests for Block invariants."""

    @pytest.mark.parametrize("level", [0, 7, -1])
    def test_when_heading_level_out_of_range_then_raises(self, level):
        with pytest.raises(ValueError, match="heading level"):
            Block(BlockKind.HEADING, "Title", level=level)

    def test_when_paragraph_has_level_then_raises(self):
        with pytest.raises(ValueError, match="only valid for headings"):
            Block(BlockKind.PARAGRAPH, "text", level=2)

    def test_when_non_table_has_cells_then_raises(self):
        with pytest.raises(ValueError, match="cells"):
            Block(BlockKind.PARAGRAPH, "text", cells=(("a",),))

    def test_when_blocks_equal_then_hash_equal(self):
        assert Block.paragraph("same") == Block.paragraph("same")
        assert hash(Block.paragraph("same")) == hash(Block.paragraph("same"))


class TestBlockMarkup:
    """Tests for tag/markup rendering."""

    def test_when_heading_then_tag_includes_level(self):
        assert Block.heading("Intro", 3).tag == "h3"
        assert Block.heading("Intro", 3).markup == "<h3>Intro</h3>"

    def test_when_text_has_html_characters_then_escaped(self):
        block = Block.paragraph("a < b & c")

        assert block.markup == "<p>a &lt; b &amp; c</p>"

    def test_when_list_item_then_li(self):
        assert Block.list_item("one").markup == "<li>one</li>"

    def test_when_table_then_rows_and_text_joined(self):
        # Arrange
        rows = (("a", "b"), ("c", "d"))

        # Act
        block = Block.table(rows)

        # Assert
        assert block.kind is BlockKind.TABLE
        assert block.text == "a\tb\nc\td"
        assert block.markup == (
            "<table><tr><td>a</td><td>b</td></tr><tr><td>c</td><td>d</td></tr></table>"
        )


class TestDocument:
    """Tests for Document."""

    def test_when_built_from_list_then_blocks_stored_as_tuple(self):
        doc = Document(blocks=[Block.paragraph("x"), Block.paragraph("y")])

        assert isinstance(doc.blocks, tuple)
        assert len(doc) == 2
        assert [b.text for b in doc] == ["x", "y"]

    def test_when_empty_then_is_empty(self):
        assert EMPTY_DOCUMENT.is_empty
        assert EMPTY_DOCUMENT.markup == ""

    def test_markup_concatenates_blocks_in_order(self):
        doc = Document(blocks=(Block.heading("T"), Block.paragraph("body")))

        assert doc.markup == "<h1>T</h1><p>body</p>"
