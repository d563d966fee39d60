"""
Module: core.errors

Purpose:
    Exception hierarchy shared by loading, layout and export. Every error
    the composer raises on purpose derives from ComposerError so callers
    (the GUI in particular) can catch one type.

Key Classes:
    - ComposerError: Base class
    - InputError, ConversionError: Document loading failures
    - CapabilityUnavailableError: A required collaborator was not supplied
    - MeasurementUnavailable: Raised by block measurers, absorbed by layout
    - ExportError and subclasses: Export pipeline failures

Used By:
    - composer.loading, composer.layout, composer.output, composer.controller
"""

from __future__ import annotations


class ComposerError(Exception):
    """Base class for composer failures."""
    pass


class InputError(ComposerError):
    """Uploaded file is not a supported document type."""
    pass


class ConversionError(ComposerError):
    """Document could not be converted into blocks."""
    pass


class CapabilityUnavailableError(ComposerError):
    """
    A collaborator the operation depends on was not supplied.

    Attributes:
        capability: Name of the missing capability ("loader", "rasterizer", ...)
    """

    def __init__(self, capability: str):
        super().__init__(f"{capability} is not available")
        self.capability = capability


class MeasurementUnavailable(ComposerError):
    """Block heights cannot be measured (no rendering surface)."""
    pass


class ExportError(ComposerError):
    """Base class for export failures."""
    pass


class CaptureError(ExportError):
    """
    Rasterizing a page failed.

    Attributes:
        page_index: 0-based index of the page that failed
    """

    def __init__(self, message: str, page_index: int):
        super().__init__(message)
        self.page_index = page_index


class AssemblyError(ExportError):
    """Building or persisting the output artifact failed."""
    pass


class NothingToExportError(ExportError):
    """Export was requested with no pages."""
    pass


class ExportInProgressError(ExportError):
    """Export mode is already active."""
    pass
