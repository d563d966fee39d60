"""
Rasterize page widgets for export.

WidgetRasterizer renders a widget into an offscreen pixmap with a device
pixel ratio equal to the capture scale, then hands it back as a Pillow
image. wait_for_repaint() is the GUI settle function: it keeps the event
loop running so hidden chrome is actually repainted before capture.
"""
from __future__ import annotations

from PIL import Image
from PIL.ImageQt import fromqpixmap
from PySide6.QtCore import QEventLoop, QTimer, Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QWidget


class WidgetRasterizer:
    """Captures a QWidget at a scale factor."""

    def capture(self, surface: QWidget, scale: float) -> Image.Image:
        size = surface.size()
        pixmap = QPixmap(round(size.width() * scale), round(size.height() * scale))
        if pixmap.isNull():
            raise RuntimeError(f"Cannot capture a {size.width()}x{size.height()} widget")
        pixmap.setDevicePixelRatio(scale)
        pixmap.fill(Qt.GlobalColor.white)
        surface.render(pixmap)
        return fromqpixmap(pixmap).convert("RGB")


def wait_for_repaint(seconds: float) -> None:
    """Run the event loop for `seconds` so pending repaints are processed."""
    loop = QEventLoop()
    QTimer.singleShot(int(seconds * 1000), loop.quit)
    loop.exec()
