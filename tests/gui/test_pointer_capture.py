"""Tests for the Qt pointer capture used by drag/resize gestures."""

from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QApplication, QWidget

from a4_composer.composer.geometry import GeometryModel
from a4_composer.core.models import Point
from a4_composer.gui.utils.pointer_capture import QtPointerCapture


def mouse_event(kind, x, y):
    point = QPointF(x, y)
    return QMouseEvent(
        kind, point, point, point,
        Qt.MouseButton.LeftButton, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier,
    )


class TestQtPointerCapture:
    def test_moves_and_release_reach_callbacks(self, qtbot):
        # Arrange
        widget = QWidget()
        qtbot.addWidget(widget)
        capture = QtPointerCapture()
        moves, releases = [], []
        capture.acquire(moves.append, lambda: releases.append(True))

        # Act
        capture.eventFilter(widget, mouse_event(QEvent.Type.MouseMove, 30, 40))
        capture.eventFilter(widget, mouse_event(QEvent.Type.MouseButtonRelease, 30, 40))

        # Assert
        assert moves == [Point(30, 40)]
        assert releases == [True]
        capture.release()

    def test_release_stops_delivery(self, qtbot):
        widget = QWidget()
        qtbot.addWidget(widget)
        capture = QtPointerCapture()
        moves = []
        capture.acquire(moves.append, lambda: None)

        capture.release()
        capture.eventFilter(widget, mouse_event(QEvent.Type.MouseMove, 1, 1))

        assert not capture.active
        assert moves == []

    def test_geometry_gesture_holds_capture_until_release(self, qtbot):
        # Arrange
        widget = QWidget()
        qtbot.addWidget(widget)
        capture = QtPointerCapture(QApplication.instance())
        model = GeometryModel(capture=capture)

        # Act
        model.begin_resize(Point(0, 0))
        active_during = capture.active
        capture.eventFilter(widget, mouse_event(QEvent.Type.MouseMove, -20, 10))
        capture.eventFilter(widget, mouse_event(QEvent.Type.MouseButtonRelease, -20, 10))

        # Assert
        assert active_during
        assert not capture.active
        assert model.gesture.is_idle
        assert model.box.size == (610, 860)

    def test_events_are_never_consumed(self, qtbot):
        widget = QWidget()
        qtbot.addWidget(widget)
        capture = QtPointerCapture()
        capture.acquire(lambda p: None, lambda: None)

        consumed = capture.eventFilter(widget, mouse_event(QEvent.Type.MouseMove, 0, 0))

        capture.release()
        assert consumed is False
