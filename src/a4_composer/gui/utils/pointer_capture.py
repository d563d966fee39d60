"""
Application-wide pointer capture for drag/resize gestures.

While acquired, an event filter on the QApplication forwards every mouse
move and button release to the geometry model, so a gesture keeps
tracking (and ends) even when the pointer leaves the page widget. The
filter is removed as soon as the gesture ends.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QEvent, QObject
from PySide6.QtWidgets import QApplication

from a4_composer.core.models import Point

logger = logging.getLogger(__name__)


class QtPointerCapture(QObject):
    """PointerCapture implementation backed by an application event filter."""

    def __init__(self, app: Optional[QApplication] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._app = app or QApplication.instance()
        self._on_move: Optional[Callable[[Point], None]] = None
        self._on_release: Optional[Callable[[], None]] = None
        self._installed = False

    @property
    def active(self) -> bool:
        return self._installed

    def acquire(self, on_move: Callable[[Point], None], on_release: Callable[[], None]) -> None:
        if self._installed:
            self.release()
        self._on_move = on_move
        self._on_release = on_release
        self._app.installEventFilter(self)
        self._installed = True

    def release(self) -> None:
        if self._installed:
            self._app.removeEventFilter(self)
            self._installed = False
        self._on_move = None
        self._on_release = None

    def eventFilter(self, obj, event):
        if not self._installed:
            return False

        event_type = event.type()
        if event_type == QEvent.Type.MouseMove and self._on_move is not None:
            pos = event.globalPosition()
            self._on_move(Point(pos.x(), pos.y()))
        elif event_type == QEvent.Type.MouseButtonRelease and self._on_release is not None:
            # on_release ends the gesture, which calls release() on us
            self._on_release()

        # Never swallow events; widgets still see them
        return False
