"""
Module: composer.output

Purpose:
    Page rasterization and PDF export.

Key Classes:
    - ExportPipeline: Ordered capture/assemble/deliver protocol
    - ExportMode, ExportArtifact: Export request and result
    - PageSurface, PillowPageRasterizer: Headless page rendering
    - PdfAssembler: ReportLab PDF builder

Dependencies:
    - reportlab: PDF generation
    - PIL: Rasterization
"""

from .assembler import ArtifactBuilder, Assembler, PdfAssembler
from .exporter import ExportArtifact, ExportMode, ExportPipeline, write_artifact
from .rasterizer import PageRasterizer, PageSurface, PillowPageRasterizer

__all__ = [
    "ArtifactBuilder",
    "Assembler",
    "PdfAssembler",
    "ExportArtifact",
    "ExportMode",
    "ExportPipeline",
    "write_artifact",
    "PageRasterizer",
    "PageSurface",
    "PillowPageRasterizer",
]
