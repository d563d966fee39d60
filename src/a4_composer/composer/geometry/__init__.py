"""
Module: composer.geometry

Purpose:
    Interactive geometry of the content region.

Key Classes:
    - GeometryModel: Region box, drag/resize gestures, export mode
    - GestureKind, GestureState: Tagged gesture state
    - GeometryChange: Listener payload
    - PointerCapture: Global pointer listener capability
"""

from .model import (
    GeometryChange,
    GeometryModel,
    GestureKind,
    GestureState,
    NullPointerCapture,
    PointerCapture,
)

__all__ = [
    "GeometryChange",
    "GeometryModel",
    "GestureKind",
    "GestureState",
    "NullPointerCapture",
    "PointerCapture",
]
