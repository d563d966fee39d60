"""
Module: composer.output.assembler

Purpose:
    Build the output PDF from page rasters using ReportLab. The builder
    starts with one open page; add_page() opens the next. Images are
    placed in millimetres from the page's top-left corner and embedded
    as JPEG.

Key Classes:
    - ArtifactBuilder: Stateful page-by-page builder protocol
    - Assembler: Creates builders
    - PdfAssembler / PdfArtifactBuilder: ReportLab implementation

Dependencies:
    - reportlab: PDF generation
    - PIL: Image encoding

Used By:
    - composer.output.exporter: Page assembly
"""

from __future__ import annotations

import io
import logging
from typing import Protocol, Tuple

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

JPEG_QUALITY = 92


class ArtifactBuilder(Protocol):
    """Sequential, stateful artifact builder."""

    def add_page(self) -> None:
        ...

    def place_image(
        self,
        image: Image.Image,
        x_mm: float,
        y_mm: float,
        width_mm: float,
        height_mm: float,
    ) -> None:
        ...

    def output(self) -> bytes:
        ...


class Assembler(Protocol):
    def new_document(self, page_size_mm: Tuple[float, float]) -> ArtifactBuilder:
        ...


class PdfArtifactBuilder:
    """
    ReportLab-backed builder writing into memory.

    Nothing touches the filesystem; output() returns the finished bytes.

    Example:
        >>> builder = PdfAssembler().new_document((210, 297))
        >>> builder.place_image(img, 0, 0, 210, 297)
        >>> data = builder.output()
    """

    def __init__(self, page_size_mm: Tuple[float, float]) -> None:
        width_mm, height_mm = page_size_mm
        self._page_width_pt = width_mm * mm
        self._page_height_pt = height_mm * mm
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(self._page_width_pt, self._page_height_pt),
        )
        self._page_count = 1
        self._finished = False

    @property
    def page_count(self) -> int:
        return self._page_count

    def add_page(self) -> None:
        self._ensure_open()
        self._canvas.showPage()
        self._page_count += 1

    def place_image(
        self,
        image: Image.Image,
        x_mm: float,
        y_mm: float,
        width_mm: float,
        height_mm: float,
    ) -> None:
        self._ensure_open()
        # PDF origin is bottom-left; callers work top-down
        y_pt = self._page_height_pt - (y_mm + height_mm) * mm
        self._canvas.drawImage(
            _jpeg_reader(image),
            x_mm * mm,
            y_pt,
            width=width_mm * mm,
            height=height_mm * mm,
        )

    def output(self) -> bytes:
        self._ensure_open()
        self._canvas.save()
        self._finished = True
        logger.debug(f"Assembled PDF with {self._page_count} pages")
        return self._buffer.getvalue()

    def _ensure_open(self) -> None:
        if self._finished:
            raise RuntimeError("PDF already finalised")


class PdfAssembler:
    """Creates ReportLab PDF builders."""

    def new_document(self, page_size_mm: Tuple[float, float]) -> PdfArtifactBuilder:
        return PdfArtifactBuilder(page_size_mm)


def _jpeg_reader(image: Image.Image) -> ImageReader:
    """
    Encode a PIL image as JPEG for embedding.

    Args:
        image: Any-mode PIL image

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    image.convert("RGB").save(buf, format="JPEG", quality=JPEG_QUALITY)
    buf.seek(0)
    return ImageReader(buf)
