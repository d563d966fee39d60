"""
Core Models Package

Immutable value types shared by every layer. All models are frozen
dataclasses: safe to cache, hash and pass around without copying.
"""

from .blocks import Block, BlockKind, Document, EMPTY_DOCUMENT
from .geometry import GeometryBox, Point
from .pages import Page, PaginationResult
from .templates import Template, DEFAULT_TEMPLATES

__all__ = [
    "Block",
    "BlockKind",
    "Document",
    "EMPTY_DOCUMENT",
    "GeometryBox",
    "Point",
    "Page",
    "PaginationResult",
    "Template",
    "DEFAULT_TEMPLATES",
]
