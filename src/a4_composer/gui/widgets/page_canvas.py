"""
A4 page widget.

Paints one PageSurface at the screen's device pixel ratio using the same
Pillow rasterizer the export path uses, so on-screen line breaks always
match pagination. The first page also draws the region chrome (dashed
border and resize handle) and starts drag/resize gestures on press;
moves and the release are delivered through pointer capture.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from PIL.ImageQt import ImageQt
from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPen
from PySide6.QtWidgets import QWidget

from a4_composer.composer.geometry import GeometryModel
from a4_composer.composer.output import PageSurface, PillowPageRasterizer
from a4_composer.composer.output.rasterizer import (
    BORDER_COLOR,
    BORDER_WIDTH,
    DASH_GAP,
    DASH_LENGTH,
    HANDLE_COLOR,
    handle_rect,
)
from a4_composer.core.models import Point

logger = logging.getLogger(__name__)


class PageCanvas(QWidget):
    """
    Fixed-size page canvas.

    Chrome is painted with QPainter (not baked into the raster) so that
    hiding it for export only needs a repaint.
    """

    def __init__(
        self,
        geometry: GeometryModel,
        rasterizer: Optional[PillowPageRasterizer] = None,
        parent=None,
    ):
        super().__init__(parent)
        self._geometry = geometry
        self._rasterizer = rasterizer or PillowPageRasterizer()
        self._surface: Optional[PageSurface] = None
        self._image: Optional[ImageQt] = None
        self._image_key = None

        width, height = geometry.config.canvas_size
        self.setFixedSize(width, height)
        self.setMouseTracking(True)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)

        self._unsubscribe_mode = geometry.subscribe_mode(self._on_mode_changed)

    @property
    def surface(self) -> Optional[PageSurface]:
        return self._surface

    @property
    def editable(self) -> bool:
        return self._surface is not None and self._surface.editable

    def set_surface(self, surface: PageSurface) -> None:
        if surface == self._surface:
            return
        self._surface = surface
        self.update()

    def detach(self) -> None:
        """Stop listening to the geometry model (call before deleting)."""
        self._unsubscribe_mode()
        if self.editable:
            self._geometry.end()

    # ─────────────────────────────────────────────────────────────────────────
    # Painting
    # ─────────────────────────────────────────────────────────────────────────

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), Qt.GlobalColor.white)

        if self._surface is not None:
            scale = self._device_scale(painter)
            painter.drawImage(QRectF(0, 0, self.width(), self.height()), self._raster(scale))

            if self._surface.editable and self._geometry.chrome_visible:
                self._paint_chrome(painter)

        painter.end()

    def _device_scale(self, painter: QPainter) -> float:
        # The engine device is the export pixmap when render() redirects painting
        engine = painter.paintEngine()
        device = engine.paintDevice() if engine is not None else None
        if device is None:
            return self.devicePixelRatioF()
        return device.devicePixelRatioF()

    def _raster(self, scale: float) -> ImageQt:
        key = (self._surface, scale)
        if key != self._image_key:
            try:
                image = self._rasterizer.capture(self._surface, scale)
            except OSError as e:
                logger.warning(f"Template unavailable ({e}); drawing page {self._surface.index + 1} without it")
                image = self._rasterizer.capture(dataclasses.replace(self._surface, template=None), scale)
            # ImageQt keeps the pixel buffer alive for the QImage
            self._image = ImageQt(image)
            self._image_key = key
        return self._image

    def _paint_chrome(self, painter: QPainter) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        box = self._surface.box

        pen = QPen(QColor(BORDER_COLOR), BORDER_WIDTH)
        pen.setDashPattern([DASH_LENGTH / BORDER_WIDTH, DASH_GAP / BORDER_WIDTH])
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(QRectF(box.x, box.y, box.width, box.height))

        left, top, right, bottom = handle_rect(box)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(HANDLE_COLOR)))
        painter.drawEllipse(QRectF(left, top, right - left, bottom - top))

    # ─────────────────────────────────────────────────────────────────────────
    # Pointer
    # ─────────────────────────────────────────────────────────────────────────

    def mousePressEvent(self, event):
        if not self.editable or event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return

        local = _point(event.position())
        pointer = _point(event.globalPosition())
        if self._on_handle(local):
            started = self._geometry.begin_resize(pointer)
        elif self._surface.box.contains(local):
            started = self._geometry.begin_drag(pointer)
        else:
            started = False

        if started:
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        # Gesture moves arrive through pointer capture; only the cursor is updated here
        if self.editable and self._geometry.gesture.is_idle:
            local = _point(event.position())
            if self._on_handle(local):
                self.setCursor(Qt.CursorShape.SizeFDiagCursor)
            elif self._surface.box.contains(local):
                self.setCursor(Qt.CursorShape.SizeAllCursor)
            else:
                self.unsetCursor()
        super().mouseMoveEvent(event)

    def _on_handle(self, point: Point) -> bool:
        left, top, right, bottom = handle_rect(self._surface.box)
        return left <= point.x <= right and top <= point.y <= bottom

    def _on_mode_changed(self, exporting: bool) -> None:
        self.update()


def _point(position) -> Point:
    return Point(position.x(), position.y())
