"""
Tests for ComposerSession: state changes keep pagination current.
"""

import io

import docx
import fitz
import pytest

from a4_composer.composer import ComposerSession, create_session
from a4_composer.composer.config import ComposerConfig
from a4_composer.composer.output import ExportMode
from a4_composer.core.errors import CapabilityUnavailableError, InputError, NothingToExportError
from a4_composer.core.models import DEFAULT_TEMPLATES, Document, EMPTY_DOCUMENT, Point


class FixedLoader:
    """Loader returning a prepared document."""

    def __init__(self, document):
        self.document = document

    def load(self, path):
        return self.document

    def load_bytes(self, name, data):
        if not name.endswith(".docx"):
            raise InputError(f"Unsupported file type: {name}")
        return self.document


class WidthMeasurer:
    """Height inversely proportional to width, proportional to font size."""

    def measure(self, block, width, font_size):
        return 100 * (630 / width) * (font_size / 16)


@pytest.fixture
def document(make_blocks):
    return Document(blocks=make_blocks(6), source_name="doc.docx")


@pytest.fixture
def session(document, tmp_path):
    return ComposerSession(
        ComposerConfig(output_dir=tmp_path),
        loader=FixedLoader(document),
        measurer=WidthMeasurer(),
    )


class TestSessionPagination:
    def test_initially_no_pages(self, session):
        assert session.document is EMPTY_DOCUMENT
        assert session.pagination.page_count == 0

    def test_load_paginates_immediately(self, session, document):
        # Act
        session.load_document_bytes("doc.docx", b"")

        # Assert
        assert session.document == document
        assert session.pagination.blocks == document.blocks
        assert session.pagination.page_count == 1  # 6 x 100 <= 850

    def test_failed_load_keeps_current_document(self, session, document):
        session.load_document_bytes("doc.docx", b"")

        with pytest.raises(InputError):
            session.load_document_bytes("doc.txt", b"")

        assert session.document == document

    def test_font_size_change_repaginates(self, session):
        session.load_document_bytes("doc.docx", b"")

        session.set_font_size(32)  # each block now 200px

        assert session.font_size == 32
        assert [len(p.blocks) for p in session.pages] == [4, 2]

    @pytest.mark.parametrize("size", [9, 41])
    def test_font_size_out_of_range_raises(self, session, size):
        with pytest.raises(ValueError, match="font size"):
            session.set_font_size(size)
        assert session.font_size == 16

    def test_resize_repaginates(self, session):
        # Arrange
        session.load_document_bytes("doc.docx", b"")
        geometry = session.geometry

        # Act: halve the width, doubling every block height
        geometry.begin_resize(Point(0, 0))
        geometry.update_resize(Point(-315, 0))
        geometry.end()

        # Assert
        assert session.pagination.width == 315
        assert session.pagination.page_count == 2

    def test_move_does_not_repaginate(self, session):
        session.load_document_bytes("doc.docx", b"")
        results = []
        session.subscribe(results.append)

        session.geometry.begin_drag(Point(0, 0))
        session.geometry.update_drag(Point(50, 50))

        assert results == []

    def test_listeners_receive_new_pagination(self, session):
        results = []
        unsubscribe = session.subscribe(results.append)

        session.load_document_bytes("doc.docx", b"")
        unsubscribe()
        session.set_font_size(20)

        assert len(results) == 1
        assert results[0].page_count == 1

    def test_template_does_not_repaginate(self, session):
        results = []
        session.subscribe(results.append)

        session.select_template(DEFAULT_TEMPLATES[1])

        assert session.template == DEFAULT_TEMPLATES[1]
        assert results == []

    def test_reset_restores_defaults(self, session):
        # Arrange
        session.load_document_bytes("doc.docx", b"")
        session.set_font_size(30)
        session.select_template(DEFAULT_TEMPLATES[0])
        session.geometry.begin_drag(Point(0, 0))
        session.geometry.update_drag(Point(10, 10))

        # Act
        session.reset()

        # Assert
        assert session.document.is_empty
        assert session.font_size == 16
        assert session.template is None
        assert session.geometry.box == session.config.default_box
        assert session.geometry.gesture.is_idle
        assert session.pagination.page_count == 0

    def test_without_measurer_pagination_degrades(self, document):
        session = ComposerSession(loader=FixedLoader(document))

        session.load_document_bytes("doc.docx", b"")

        assert session.pagination.degraded
        assert session.pagination.page_count == 1


class TestSessionSurfaces:
    def test_only_first_surface_is_editable(self, session):
        session.load_document_bytes("doc.docx", b"")
        session.set_font_size(32)

        surfaces = session.page_surfaces()

        assert [s.editable for s in surfaces] == [True, False]
        assert all(s.box == session.geometry.box for s in surfaces)
        assert all(s.font_size == 32 for s in surfaces)


class TestSessionCapabilities:
    def test_when_no_loader_then_capability_error(self):
        session = ComposerSession()

        with pytest.raises(CapabilityUnavailableError) as exc_info:
            session.load_document_bytes("a.docx", b"")
        assert exc_info.value.capability == "loader"

    def test_when_no_assembler_then_capability_error(self, session):
        with pytest.raises(CapabilityUnavailableError):
            session.export(ExportMode.DOWNLOAD)

    def test_close_releases_gesture_and_listeners(self, session):
        results = []
        session.subscribe(results.append)
        session.geometry.begin_drag(Point(0, 0))

        session.close()
        session.repaginate()

        assert session.geometry.gesture.is_idle
        assert results == []


class TestProductionSession:
    """End to end with python-docx, Pillow and ReportLab."""

    def test_load_and_download_pdf(self, tmp_path):
        # Arrange
        source = docx.Document()
        source.add_heading("Composer", 0)
        for i in range(60):
            source.add_paragraph(f"Paragraph {i} " + "lorem ipsum dolor sit amet " * 6)
        buffer = io.BytesIO()
        source.save(buffer)

        session = create_session(ComposerConfig(output_dir=tmp_path))
        session.load_document_bytes("long.docx", buffer.getvalue())
        settles = []

        # Act
        artifact = session.export(ExportMode.DOWNLOAD, settle=settles.append)

        # Assert
        assert session.pagination.page_count > 1
        assert artifact.page_count == session.pagination.page_count
        assert artifact.path == tmp_path / "document.pdf"
        assert settles == [0.2]
        pdf = fitz.open(artifact.path)
        try:
            assert pdf.page_count == artifact.page_count
        finally:
            pdf.close()
        assert not session.geometry.is_exporting

    def test_export_with_no_pages_raises(self, tmp_path):
        session = create_session(ComposerConfig(output_dir=tmp_path))

        with pytest.raises(NothingToExportError):
            session.export(ExportMode.DOWNLOAD, settle=lambda s: None)
        assert not (tmp_path / "document.pdf").exists()


    def test_close_removes_preview_files_but_keeps_downloads(self, tmp_path):
        # Arrange
        source = docx.Document()
        source.add_paragraph("Preview me")
        buffer = io.BytesIO()
        source.save(buffer)

        session = create_session(ComposerConfig(output_dir=tmp_path))
        session.load_document_bytes("short.docx", buffer.getvalue())
        first = session.export(ExportMode.PREVIEW, settle=lambda s: None)
        second = session.export(ExportMode.PREVIEW, settle=lambda s: None)
        download = session.export(ExportMode.DOWNLOAD, settle=lambda s: None)
        assert first.path.exists() and second.path.exists()

        # Act
        session.close()

        # Assert
        assert not first.path.exists()
        assert not second.path.exists()
        assert download.path.exists()
