"""Tests for the page canvas widget and its export capture."""

import pytest
from PySide6.QtCore import QPoint, Qt

from a4_composer.composer import ComposerSession
from a4_composer.composer.config import ComposerConfig
from a4_composer.composer.output import ExportMode, PdfAssembler
from a4_composer.composer.output.rasterizer import handle_rect
from a4_composer.core.models import Block, Document
from a4_composer.gui.utils.widget_rasterizer import WidgetRasterizer
from a4_composer.gui.widgets.page_canvas import PageCanvas


class FixedLoader:
    def __init__(self, document):
        self.document = document

    def load_bytes(self, name, data):
        return self.document


class FixedMeasurer:
    def measure(self, block, width, font_size):
        return 300


@pytest.fixture
def session(tmp_path):
    blocks = [Block.paragraph(f"Paragraph {i}") for i in range(5)]
    session = ComposerSession(
        ComposerConfig(output_dir=tmp_path),
        loader=FixedLoader(Document(blocks)),
        measurer=FixedMeasurer(),
        assembler=PdfAssembler(),
    )
    session.load_document_bytes("doc.docx", b"")
    yield session
    session.close()


@pytest.fixture
def canvases(qtbot, session):
    widgets = []
    for surface in session.page_surfaces():
        canvas = PageCanvas(session.geometry)
        canvas.set_surface(surface)
        qtbot.addWidget(canvas)
        widgets.append(canvas)
    yield widgets
    for canvas in widgets:
        canvas.detach()


def handle_pixel(image, scale):
    left, top, right, bottom = handle_rect(ComposerConfig().default_box)
    return image.getpixel((round((left + right) / 2 * scale), round((top + bottom) / 2 * scale)))


class TestPageCanvas:
    def test_canvas_is_a4_sized(self, canvases):
        assert canvases[0].size().width() == 794
        assert canvases[0].size().height() == 1123
        assert len(canvases) == 2

    def test_chrome_painted_on_first_page_only(self, canvases):
        rasterizer = WidgetRasterizer()

        first = rasterizer.capture(canvases[0], 1.0)
        second = rasterizer.capture(canvases[1], 1.0)

        assert handle_pixel(first, 1.0) != (255, 255, 255)
        assert handle_pixel(second, 1.0) == (255, 255, 255)

    def test_chrome_hidden_in_export_mode(self, canvases, session):
        with session.geometry.export_mode():
            image = WidgetRasterizer().capture(canvases[0], 2.0)

        assert image.size == (1588, 2246)
        assert handle_pixel(image, 2.0) == (255, 255, 255)

    def test_press_inside_region_starts_drag(self, qtbot, canvases, session):
        qtbot.mousePress(canvases[0], Qt.MouseButton.LeftButton, pos=QPoint(300, 400))

        assert session.geometry.gesture.kind.value == "dragging"
        session.geometry.end()

    def test_press_on_handle_starts_resize(self, qtbot, canvases, session):
        left, top, right, bottom = handle_rect(session.geometry.box)
        center = QPoint(round((left + right) / 2), round((top + bottom) / 2))

        qtbot.mousePress(canvases[0], Qt.MouseButton.LeftButton, pos=center)

        assert session.geometry.gesture.kind.value == "resizing"
        session.geometry.end()

    def test_press_on_second_page_does_nothing(self, qtbot, canvases, session):
        qtbot.mousePress(canvases[1], Qt.MouseButton.LeftButton, pos=QPoint(300, 400))

        assert session.geometry.gesture.is_idle

    def test_session_export_with_widgets(self, canvases, session, tmp_path):
        artifact = session.export(
            ExportMode.DOWNLOAD,
            surfaces=canvases,
            rasterizer=WidgetRasterizer(),
            settle=lambda seconds: None,
        )

        assert artifact.page_count == 2
        assert (tmp_path / "document.pdf").exists()
        assert session.geometry.chrome_visible
