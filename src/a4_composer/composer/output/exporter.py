"""
Module: composer.output.exporter

Purpose:
    Export rendered pages to a single PDF, strictly one page at a time.

Key Functions:
    - write_artifact(): Persist finished PDF bytes

Key Classes:
    - ExportMode: PREVIEW or DOWNLOAD
    - ExportArtifact: Export result
    - ExportPipeline: Orchestrates the capture/assemble protocol

Protocol:
    1. Enter export mode on the geometry model (chrome hidden)
    2. Wait the settle interval so no chrome is captured
    3. For each page in order: capture at 2x; add a page if i > 0;
       place the image over the full 210x297mm page
    4. Leave export mode, whatever happened
    5. PREVIEW: write to a temporary file. DOWNLOAD: write to the
       destination (default <output_dir>/document.pdf)

    Page i+1 is never captured before page i has been placed. Any
    capture or assembly failure aborts the remaining pages and nothing
    is written to disk.

Dependencies:
    - composer.geometry.model: Export mode flag
    - composer.output.rasterizer: PageRasterizer
    - composer.output.assembler: Assembler

Used By:
    - composer.controller: ComposerSession.export()
"""

from __future__ import annotations

import logging
import tempfile
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from a4_composer.core.errors import (
    AssemblyError,
    CaptureError,
    NothingToExportError,
)

from ..config import ComposerConfig
from ..geometry.model import GeometryModel
from .assembler import ArtifactBuilder, Assembler
from .rasterizer import PageRasterizer

logger = logging.getLogger(__name__)


class ExportMode(str, Enum):
    PREVIEW = "preview"
    DOWNLOAD = "download"


@dataclass(frozen=True)
class ExportArtifact:
    """
    Export result (immutable).

    Attributes:
        mode: How the artifact was delivered
        page_count: Number of pages in the PDF
        data: PDF bytes
        path: Temporary file (PREVIEW) or saved file (DOWNLOAD)
    """

    mode: ExportMode
    page_count: int
    data: bytes
    path: Optional[Path] = None


class ExportPipeline:
    """
    Sequential page export.

    Args:
        rasterizer: Captures one page surface as an image
        assembler: Creates the artifact builder
        geometry: Model whose export mode hides the chrome
        config: Scale, settle interval, page size and default filename
        settle: Called with settle_seconds before the first capture

    Example:
        >>> pipeline = ExportPipeline(rasterizer, PdfAssembler(), geometry)
        >>> artifact = pipeline.export(surfaces, ExportMode.DOWNLOAD)
        >>> artifact.path.name
        'document.pdf'
    """

    def __init__(
        self,
        rasterizer: PageRasterizer,
        assembler: Assembler,
        geometry: GeometryModel,
        config: Optional[ComposerConfig] = None,
        *,
        settle: Callable[[float], None] = time.sleep,
    ) -> None:
        self._rasterizer = rasterizer
        self._assembler = assembler
        self._geometry = geometry
        self._config = config or ComposerConfig()
        self._settle = settle

    def export(
        self,
        surfaces: Sequence[Any],
        mode: ExportMode,
        *,
        destination: Optional[Path] = None,
    ) -> ExportArtifact:
        """
        Capture and assemble every surface, then deliver the PDF.

        Args:
            surfaces: Page surfaces in page order
            mode: PREVIEW or DOWNLOAD
            destination: DOWNLOAD target (defaults to config.download_path())

        Returns:
            ExportArtifact

        Raises:
            NothingToExportError: If surfaces is empty
            ExportInProgressError: If another export is running
            CaptureError: If a page cannot be rasterized
            AssemblyError: If the PDF cannot be built or written
        """
        if not surfaces:
            raise NothingToExportError("No pages to export")

        start_time = time.perf_counter()
        logger.info(f"Exporting {len(surfaces)} pages ({mode.value})")

        with self._geometry.export_mode():
            self._settle(self._config.settle_seconds)
            data = self._assemble(surfaces)

        path = self._deliver(data, mode, destination)

        elapsed = time.perf_counter() - start_time
        logger.info(f"Exported {len(surfaces)} pages to {path} in {elapsed:.2f}s")
        return ExportArtifact(mode=mode, page_count=len(surfaces), data=data, path=path)

    def _assemble(self, surfaces: Sequence[Any]) -> bytes:
        builder = self._new_builder()
        width_mm, height_mm = self._config.output_page_mm

        for i, surface in enumerate(surfaces):
            try:
                image = self._rasterizer.capture(surface, self._config.capture_scale)
            except CaptureError:
                raise
            except Exception as e:
                raise CaptureError(f"Failed to capture page {i + 1}: {e}", page_index=i) from e

            try:
                if i > 0:
                    builder.add_page()
                builder.place_image(image, 0, 0, width_mm, height_mm)
            except Exception as e:
                raise AssemblyError(f"Failed to add page {i + 1}: {e}") from e

            logger.debug(f"Placed page {i + 1}/{len(surfaces)}")

        try:
            return builder.output()
        except Exception as e:
            raise AssemblyError(f"Failed to generate PDF: {e}") from e

    def _new_builder(self) -> ArtifactBuilder:
        try:
            return self._assembler.new_document(self._config.output_page_mm)
        except Exception as e:
            raise AssemblyError(f"Failed to start PDF: {e}") from e

    def _deliver(self, data: bytes, mode: ExportMode, destination: Optional[Path]) -> Path:
        if mode is ExportMode.PREVIEW:
            return write_artifact(data, None)
        return write_artifact(data, destination or self._config.download_path())


def write_artifact(data: bytes, path: Optional[Path]) -> Path:
    """
    Write PDF bytes to `path`, or to a new temporary file when path is None.

    An existing file at `path` is replaced atomically: the bytes go to a
    sibling temporary file which is renamed over the target only once
    fully written, so a failed write leaves the previous file intact.

    Raises:
        AssemblyError: If the file cannot be written
    """
    if path is None:
        directory = None
        prefix, suffix = "a4-composer-", ".pdf"
    else:
        directory = path.parent
        prefix, suffix = f".{path.name}.", ".part"

    temp_path: Optional[Path] = None
    try:
        if directory is not None:
            directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=directory, prefix=prefix, suffix=suffix, delete=False
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(data)

        if path is None:
            return temp_path
        temp_path.replace(path)
        return path
    except OSError as e:
        if temp_path is not None:
            _discard(temp_path)
        raise AssemblyError(f"Failed to write PDF: {e}") from e


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove partial file {path}: {e}")
