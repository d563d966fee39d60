"""
Module: composer.geometry.model

Purpose:
    Own the editable content region and the pointer gesture that is
    changing it. Width/height feed pagination; x/y only affect where the
    region is drawn.

Key Classes:
    - GestureKind: IDLE / DRAGGING / RESIZING
    - GestureState: Active gesture with origin and box snapshot
    - GeometryChange: Notification payload for listeners
    - PointerCapture: Application-wide pointer listener capability
    - GeometryModel: Region state, gestures and export mode flag

Rules:
    - One gesture at a time. begin_* while another gesture is active
      is ignored.
    - Deltas are measured from the gesture origin against the snapshot
      taken when the gesture began; positions are never clamped to the
      page canvas.
    - Resizes clamp to the configured minimum width/height.
    - Pointer capture is held only while a gesture is active and is
      released on end(), reset(), close(), entering export mode, and when
      applying an update raises.
    - While export mode is active no gesture can begin.

Dependencies:
    - core.models: GeometryBox, Point
    - composer.config: ComposerConfig

Used By:
    - composer.controller: Repaginates on resize
    - composer.output.exporter: Export mode
    - gui.widgets.page_canvas: Pointer events
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Protocol

from a4_composer.core.errors import ExportInProgressError
from a4_composer.core.models import GeometryBox, Point

from ..config import ComposerConfig

logger = logging.getLogger(__name__)


class GestureKind(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"


@dataclass(frozen=True)
class GestureState:
    """
    Active gesture (immutable).

    Attributes:
        kind: Which gesture is active
        origin: Pointer position when the gesture began
        snapshot: Region box when the gesture began
    """

    kind: GestureKind
    origin: Optional[Point] = None
    snapshot: Optional[GeometryBox] = None

    @property
    def is_idle(self) -> bool:
        return self.kind is GestureKind.IDLE


IDLE = GestureState(GestureKind.IDLE)


@dataclass(frozen=True)
class GeometryChange:
    """Region box before and after a change."""

    previous: GeometryBox
    current: GeometryBox

    @property
    def resized(self) -> bool:
        return self.previous.size != self.current.size

    @property
    def moved(self) -> bool:
        return (self.previous.x, self.previous.y) != (self.current.x, self.current.y)


class PointerCapture(Protocol):
    """
    Application-wide pointer listener.

    acquire() starts delivering every pointer move and release to the
    callbacks, wherever the pointer is; release() stops it.
    """

    def acquire(
        self,
        on_move: Callable[[Point], None],
        on_release: Callable[[], None],
    ) -> None:
        ...

    def release(self) -> None:
        ...


class NullPointerCapture:
    """Capture that never delivers events; for headless use."""

    def acquire(self, on_move: Callable[[Point], None], on_release: Callable[[], None]) -> None:
        pass

    def release(self) -> None:
        pass


GeometryListener = Callable[[GeometryChange], None]
ModeListener = Callable[[bool], None]


class GeometryModel:
    """
    Editable content region with drag/resize gestures.

    Example:
        >>> model = GeometryModel(ComposerConfig())
        >>> model.begin_resize(Point(0, 0))
        True
        >>> model.update_resize(Point(-1000, 0)).width
        100
        >>> model.end()
    """

    def __init__(
        self,
        config: Optional[ComposerConfig] = None,
        capture: Optional[PointerCapture] = None,
    ) -> None:
        self._config = config or ComposerConfig()
        self._capture: PointerCapture = capture or NullPointerCapture()
        self._box = self._config.default_box
        self._gesture = IDLE
        self._capturing = False
        self._exporting = False
        self._listeners: List[GeometryListener] = []
        self._mode_listeners: List[ModeListener] = []

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def config(self) -> ComposerConfig:
        return self._config

    @property
    def box(self) -> GeometryBox:
        return self._box

    @property
    def gesture(self) -> GestureState:
        return self._gesture

    @property
    def is_exporting(self) -> bool:
        return self._exporting

    @property
    def chrome_visible(self) -> bool:
        """Whether the dashed border and resize handle should be drawn."""
        return not self._exporting

    @property
    def min_width(self) -> int:
        return self._config.min_region_width

    @property
    def min_height(self) -> int:
        return self._config.min_region_height

    def set_capture(self, capture: PointerCapture) -> None:
        """Swap the capture implementation (GUI installs a Qt one)."""
        self._release_capture()
        self._capture = capture

    # ─────────────────────────────────────────────────────────────────────────
    # Listeners
    # ─────────────────────────────────────────────────────────────────────────

    def subscribe(self, listener: GeometryListener) -> Callable[[], None]:
        """Register for box changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)
        return lambda: self._remove(self._listeners, listener)

    def subscribe_mode(self, listener: ModeListener) -> Callable[[], None]:
        """Register for export mode changes (True = exporting)."""
        self._mode_listeners.append(listener)
        return lambda: self._remove(self._mode_listeners, listener)

    @staticmethod
    def _remove(listeners: list, listener) -> None:
        if listener in listeners:
            listeners.remove(listener)

    # ─────────────────────────────────────────────────────────────────────────
    # Gestures
    # ─────────────────────────────────────────────────────────────────────────

    def begin_drag(self, pointer: Point) -> bool:
        return self._begin(GestureKind.DRAGGING, pointer)

    def begin_resize(self, pointer: Point) -> bool:
        return self._begin(GestureKind.RESIZING, pointer)

    def update_drag(self, pointer: Point) -> Optional[GeometryBox]:
        """Move the region by the pointer delta. No-op unless dragging."""
        if self._gesture.kind is not GestureKind.DRAGGING or self._exporting:
            return None
        delta = pointer - self._gesture.origin
        snapshot = self._gesture.snapshot
        return self._apply_gesture(snapshot.moved_to(snapshot.x + delta.x, snapshot.y + delta.y))

    def update_resize(self, pointer: Point) -> Optional[GeometryBox]:
        """Resize the region by the pointer delta. No-op unless resizing."""
        if self._gesture.kind is not GestureKind.RESIZING or self._exporting:
            return None
        delta = pointer - self._gesture.origin
        snapshot = self._gesture.snapshot
        return self._apply_gesture(snapshot.resized_to(
            max(self.min_width, snapshot.width + delta.x),
            max(self.min_height, snapshot.height + delta.y),
        ))

    def move(self, pointer: Point) -> Optional[GeometryBox]:
        """Apply a pointer move to whichever gesture is active."""
        if self._gesture.kind is GestureKind.DRAGGING:
            return self.update_drag(pointer)
        if self._gesture.kind is GestureKind.RESIZING:
            return self.update_resize(pointer)
        return None

    def end(self) -> None:
        """Clear the active gesture and release pointer capture."""
        if not self._gesture.is_idle:
            logger.debug(f"Gesture {self._gesture.kind.value} ended at {self._box}")
        self._gesture = IDLE
        self._release_capture()

    def reset(self) -> None:
        """End any gesture and restore the default region."""
        self.end()
        self._apply(self._config.default_box)

    def close(self) -> None:
        """Component teardown: release everything the model holds."""
        self.end()
        self._listeners.clear()
        self._mode_listeners.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Export mode
    # ─────────────────────────────────────────────────────────────────────────

    @contextmanager
    def export_mode(self) -> Iterator[None]:
        """
        Hide interactive chrome and lock the region for the duration.

        Raises:
            ExportInProgressError: If export mode is already active
        """
        if self._exporting:
            raise ExportInProgressError("Export already in progress")
        self.end()
        self._set_exporting(True)
        try:
            yield
        finally:
            self._set_exporting(False)

    def _set_exporting(self, exporting: bool) -> None:
        self._exporting = exporting
        for listener in list(self._mode_listeners):
            listener(exporting)

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _begin(self, kind: GestureKind, pointer: Point) -> bool:
        if self._exporting:
            logger.debug(f"Ignoring {kind.value} start during export")
            return False
        if not self._gesture.is_idle:
            logger.debug(f"Ignoring {kind.value} start while {self._gesture.kind.value}")
            return False

        self._gesture = GestureState(kind=kind, origin=pointer, snapshot=self._box)
        try:
            self._capture.acquire(self.move, self.end)
        except Exception:
            self._gesture = IDLE
            raise
        self._capturing = True
        logger.debug(f"Gesture {kind.value} started at {pointer}")
        return True

    def _apply(self, box: GeometryBox) -> GeometryBox:
        if box == self._box:
            return box
        change = GeometryChange(previous=self._box, current=box)
        self._box = box
        for listener in list(self._listeners):
            listener(change)
        return box

    def _apply_gesture(self, box: GeometryBox) -> GeometryBox:
        try:
            return self._apply(box)
        except Exception:
            # A failing listener must not leave the pointer captured
            self.end()
            raise

    def _release_capture(self) -> None:
        if self._capturing:
            self._capturing = False
            self._capture.release()
