"""
Tests for the ReportLab PDF assembler, verified with PyMuPDF.
"""

import fitz
import pytest
from PIL import Image

from a4_composer.composer.output import PdfAssembler


@pytest.fixture
def page_image():
    return Image.new("RGB", (1588, 2246), "white")


class TestPdfAssembler:
    def test_when_three_pages_placed_then_pdf_has_three_a4_pages(self, page_image):
        # Arrange
        builder = PdfAssembler().new_document((210, 297))

        # Act
        for i in range(3):
            if i > 0:
                builder.add_page()
            builder.place_image(page_image, 0, 0, 210, 297)
        data = builder.output()

        # Assert
        doc = fitz.open(stream=data, filetype="pdf")
        try:
            assert doc.page_count == 3
            for page in doc:
                assert page.rect.width == pytest.approx(595.28, abs=0.5)
                assert page.rect.height == pytest.approx(841.89, abs=0.5)
                assert len(page.get_images()) == 1
        finally:
            doc.close()

    def test_image_covers_whole_page(self, page_image):
        builder = PdfAssembler().new_document((210, 297))
        builder.place_image(page_image, 0, 0, 210, 297)

        doc = fitz.open(stream=builder.output(), filetype="pdf")
        try:
            page = doc[0]
            xref = page.get_images()[0][0]
            bbox = page.get_image_bbox(page.get_images()[0])
            assert xref > 0
            assert bbox.x0 == pytest.approx(0, abs=0.5)
            assert bbox.y0 == pytest.approx(0, abs=0.5)
            assert bbox.x1 == pytest.approx(page.rect.width, abs=0.5)
            assert bbox.y1 == pytest.approx(page.rect.height, abs=0.5)
        finally:
            doc.close()

    def test_page_count_tracks_added_pages(self):
        builder = PdfAssembler().new_document((210, 297))

        builder.add_page()

        assert builder.page_count == 2

    def test_when_finalised_then_further_use_raises(self, page_image):
        builder = PdfAssembler().new_document((210, 297))
        builder.place_image(page_image, 0, 0, 210, 297)
        builder.output()

        with pytest.raises(RuntimeError, match="finalised"):
            builder.add_page()
