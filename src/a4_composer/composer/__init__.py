"""
Module: composer

Purpose:
    Compose a loaded document onto A4 page canvases: paginate its blocks
    into the content region, track the region's geometry, and export
    the pages to PDF.

Key Functions:
    - layout(): Paginate blocks for a region size and font size

Key Classes:
    - ComposerConfig: Session configuration
    - ComposerSession: Session state and orchestration
    - GeometryModel: Content region and pointer gestures
    - ExportPipeline: Ordered page capture and PDF assembly
    - DocxDocumentLoader, PillowBlockMeasurer, PillowPageRasterizer,
      PdfAssembler: Production capabilities

Dependencies:
    - python-docx: Document loading
    - PIL: Measuring and rasterizing
    - reportlab: PDF generation

Used By:
    - a4_composer.gui: Desktop app
"""

from typing import Optional

from .config import ComposerConfig
from .controller import ComposerSession
from .geometry import GeometryModel
from .layout import layout, PillowBlockMeasurer
from .loading import DocxDocumentLoader
from .output import (
    ExportArtifact,
    ExportMode,
    ExportPipeline,
    PageSurface,
    PdfAssembler,
    PillowPageRasterizer,
)


def create_session(config: Optional[ComposerConfig] = None) -> ComposerSession:
    """Session wired with the production capabilities."""
    config = config or ComposerConfig()
    geometry = GeometryModel(config)
    return ComposerSession(
        config,
        loader=DocxDocumentLoader(config.accepted_suffixes),
        measurer=PillowBlockMeasurer(),
        geometry=geometry,
        rasterizer=PillowPageRasterizer(chrome=geometry),
        assembler=PdfAssembler(),
    )


__all__ = [
    # Config
    "ComposerConfig",
    # Session
    "ComposerSession",
    "create_session",
    # Components
    "GeometryModel",
    "layout",
    "ExportPipeline",
    "ExportMode",
    "ExportArtifact",
    "PageSurface",
    # Capabilities
    "DocxDocumentLoader",
    "PillowBlockMeasurer",
    "PillowPageRasterizer",
    "PdfAssembler",
]
