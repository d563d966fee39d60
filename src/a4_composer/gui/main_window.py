"""
Main Window for the A4 Composer GUI.

Layout (top to bottom): toolbar (open / reset / preview / download),
template gallery, font size slider, scrollable page stack, console log.
All state lives in a ComposerSession; the window only forwards user
actions to it and rebuilds the page stack when pagination changes.
"""
import logging
import queue
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QTimer, QUrl, Qt
from PySide6.QtGui import QAction, QDesktopServices, QKeySequence
from PySide6.QtWidgets import (
    QFileDialog, QHBoxLayout, QLabel, QMainWindow, QMessageBox, QPushButton,
    QScrollArea, QSlider, QSplitter, QVBoxLayout, QWidget,
)

from a4_composer import __copyright__, __version__
from a4_composer.composer import ComposerSession, create_session
from a4_composer.composer.geometry import GeometryChange
from a4_composer.composer.output import ExportMode, PillowPageRasterizer
from a4_composer.core.errors import ComposerError
from a4_composer.core.models import DEFAULT_TEMPLATES, PaginationResult, Template
from a4_composer.gui.styles.theme import Colors, Styles
from a4_composer.gui.utils.logging_utils import attach_queue_handler, detach_queue_handler
from a4_composer.gui.utils.pointer_capture import QtPointerCapture
from a4_composer.gui.utils.widget_rasterizer import WidgetRasterizer, wait_for_repaint
from a4_composer.gui.widgets.console_widget import ConsoleWidget
from a4_composer.gui.widgets.page_canvas import PageCanvas
from a4_composer.gui.widgets.template_gallery import TemplateGallery

logger = logging.getLogger(__name__)

LOGGER_NAME = "a4_composer"
PAGE_SPACING = 40


class MainWindow(QMainWindow):
    def __init__(self, session: Optional[ComposerSession] = None):
        super().__init__()

        self.session = session or create_session()
        self._capture = QtPointerCapture(parent=self)
        self.session.geometry.set_capture(self._capture)
        # Canvases draw chrome themselves; this one never does
        self._page_rasterizer = PillowPageRasterizer()
        self._canvases: List[PageCanvas] = []

        self.setWindowTitle("A4 Composer")
        self.resize(1100, 900)
        self.setMinimumSize(900, 600)

        # --- Menu Bar ---
        file_menu = self.menuBar().addMenu("File")
        open_action = QAction("Open...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._open_document)
        file_menu.addAction(open_action)
        file_menu.addSeparator()
        exit_action = QAction("Quit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        help_menu = self.menuBar().addMenu("Help")
        about_action = QAction("About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

        # --- Logging ---
        self.log_queue = queue.Queue()
        self._log_handler = attach_queue_handler(self.log_queue, LOGGER_NAME)
        self.log_timer = QTimer(self)
        self.log_timer.timeout.connect(self._drain_log_queue)
        self.log_timer.start(100)

        # --- Central Widget ---
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(12, 12, 12, 0)
        main_layout.setSpacing(10)

        main_layout.addLayout(self._build_toolbar())

        self.gallery = TemplateGallery(DEFAULT_TEMPLATES)
        self.gallery.templateSelected.connect(self._on_template_selected)
        main_layout.addWidget(self.gallery)

        main_layout.addLayout(self._build_font_row())

        splitter = QSplitter(Qt.Orientation.Vertical)
        splitter.setChildrenCollapsible(False)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        pages_host = QWidget()
        pages_host.setStyleSheet(f"background-color: {Colors.BACKGROUND};")
        self.pages_layout = QVBoxLayout(pages_host)
        self.pages_layout.setSpacing(PAGE_SPACING)
        self.pages_layout.setContentsMargins(20, 20, 20, 20)
        self.pages_layout.setAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)
        self.scroll_area.setWidget(pages_host)
        splitter.addWidget(self.scroll_area)

        self.console = ConsoleWidget()
        splitter.addWidget(self.console)
        splitter.setStretchFactor(0, 4)
        splitter.setStretchFactor(1, 1)
        main_layout.addWidget(splitter, 1)

        self.statusBar().showMessage("Open a .docx file to begin")

        self._unsubscribe_pagination = self.session.subscribe(self._on_pagination_changed)
        self._unsubscribe_geometry = self.session.geometry.subscribe(self._on_geometry_changed)
        self._sync_pages()

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    def _build_toolbar(self) -> QHBoxLayout:
        row = QHBoxLayout()

        title = QLabel("A4 COMPOSER")
        title.setStyleSheet(Styles.TITLE)
        row.addWidget(title)
        row.addStretch()

        self.open_button = QPushButton("Open .docx")
        self.open_button.setStyleSheet(Styles.BUTTON_SECONDARY)
        self.open_button.clicked.connect(self._open_document)

        self.reset_button = QPushButton("Reset")
        self.reset_button.setStyleSheet(Styles.BUTTON_SECONDARY)
        self.reset_button.clicked.connect(self._reset)

        self.preview_button = QPushButton("Preview PDF")
        self.preview_button.setStyleSheet(Styles.BUTTON_SECONDARY)
        self.preview_button.clicked.connect(lambda: self._export(ExportMode.PREVIEW))

        self.download_button = QPushButton("Download PDF")
        self.download_button.setStyleSheet(Styles.BUTTON_PRIMARY)
        self.download_button.clicked.connect(lambda: self._export(ExportMode.DOWNLOAD))

        for button in (self.open_button, self.reset_button, self.preview_button, self.download_button):
            row.addWidget(button)
        return row

    def _build_font_row(self) -> QHBoxLayout:
        config = self.session.config
        row = QHBoxLayout()
        row.addWidget(QLabel("Font size"))

        self.font_slider = QSlider(Qt.Orientation.Horizontal)
        self.font_slider.setRange(config.min_font_size, config.max_font_size)
        self.font_slider.setValue(self.session.font_size)
        self.font_slider.setFixedWidth(240)
        self.font_slider.valueChanged.connect(self._on_font_size_changed)
        row.addWidget(self.font_slider)

        self.font_label = QLabel(f"{self.session.font_size}px")
        self.font_label.setMinimumWidth(40)
        row.addWidget(self.font_label)
        row.addStretch()

        self.page_count_label = QLabel()
        self.page_count_label.setStyleSheet(f"color: {Colors.TEXT_SECONDARY};")
        row.addWidget(self.page_count_label)
        return row

    # ─────────────────────────────────────────────────────────────────────────
    # Actions
    # ─────────────────────────────────────────────────────────────────────────

    def _open_document(self):
        filename, _ = QFileDialog.getOpenFileName(
            self, "Open Word Document", "", "Word Documents (*.docx)"
        )
        if not filename:
            return
        try:
            document = self.session.load_document(Path(filename))
        except ComposerError as e:
            logger.error(str(e))
            QMessageBox.warning(self, "Cannot Open Document", str(e))
            return
        self.statusBar().showMessage(f"{document.source_name}: {len(document)} blocks")

    def _reset(self):
        self.session.reset()
        self.gallery.clear_selection()
        self.font_slider.blockSignals(True)
        self.font_slider.setValue(self.session.font_size)
        self.font_slider.blockSignals(False)
        self.font_label.setText(f"{self.session.font_size}px")
        self.statusBar().showMessage("Reset")

    def _on_font_size_changed(self, value: int):
        self.font_label.setText(f"{value}px")
        self.session.set_font_size(value)

    def _on_template_selected(self, template: Template):
        self.session.select_template(template)
        self._sync_pages()

    def _export(self, mode: ExportMode):
        destination = None
        if mode is ExportMode.DOWNLOAD:
            filename, _ = QFileDialog.getSaveFileName(
                self, "Save PDF", str(self.session.config.download_path()), "PDF Files (*.pdf)"
            )
            if not filename:
                return
            destination = Path(filename)

        self._set_busy(True)
        try:
            artifact = self.session.export(
                mode,
                destination=destination,
                surfaces=list(self._canvases),
                rasterizer=WidgetRasterizer(),
                settle=wait_for_repaint,
            )
        except ComposerError as e:
            logger.error(str(e))
            QMessageBox.warning(self, "Export Failed", str(e))
            return
        finally:
            self._set_busy(False)

        if mode is ExportMode.PREVIEW:
            QDesktopServices.openUrl(QUrl.fromLocalFile(str(artifact.path)))
        else:
            self.statusBar().showMessage(f"Saved {artifact.path}")

    def _set_busy(self, busy: bool):
        for widget in (
            self.open_button, self.reset_button, self.preview_button,
            self.download_button, self.font_slider, self.gallery,
        ):
            widget.setEnabled(not busy)

    def _show_about(self):
        QMessageBox.about(
            self,
            "About A4 Composer",
            f"A4 Composer {__version__}\n\n"
            "Lay out Word documents on A4 pages and export them to PDF.\n\n"
            f"{__copyright__}",
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Page stack
    # ─────────────────────────────────────────────────────────────────────────

    def _on_pagination_changed(self, pagination: PaginationResult):
        self._sync_pages()

    def _on_geometry_changed(self, change: GeometryChange):
        # Resizes already arrive through the pagination listener
        if not change.resized:
            self._sync_pages()

    def _sync_pages(self):
        """Match the canvas stack to the session's current pages."""
        surfaces = self.session.page_surfaces()

        # Canvases are reused by index so the first page survives an active resize
        while len(self._canvases) > len(surfaces):
            canvas = self._canvases.pop()
            canvas.detach()
            self.pages_layout.removeWidget(canvas)
            canvas.deleteLater()
        while len(self._canvases) < len(surfaces):
            canvas = PageCanvas(self.session.geometry, self._page_rasterizer)
            self.pages_layout.addWidget(canvas)
            self._canvases.append(canvas)

        for canvas, surface in zip(self._canvases, surfaces):
            canvas.set_surface(surface)

        pagination = self.session.pagination
        count = pagination.page_count
        self.page_count_label.setText(f"{count} page{'s' if count != 1 else ''}")
        for warning in pagination.warnings:
            self.statusBar().showMessage(warning)

    @property
    def canvases(self) -> List[PageCanvas]:
        return list(self._canvases)

    # ─────────────────────────────────────────────────────────────────────────
    # Logging / teardown
    # ─────────────────────────────────────────────────────────────────────────

    def _drain_log_queue(self):
        while True:
            try:
                message, level = self.log_queue.get_nowait()
            except queue.Empty:
                break
            self.console.append_log(level, message)

    def closeEvent(self, event):
        self.log_timer.stop()
        self._unsubscribe_pagination()
        self._unsubscribe_geometry()
        for canvas in self._canvases:
            canvas.detach()
        self.session.close()
        detach_queue_handler(self._log_handler, LOGGER_NAME)
        super().closeEvent(event)
