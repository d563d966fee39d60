"""
Module: composer.controller

Purpose:
    Hold the state of one composing session and keep pagination in
    step with it. Every mutation that affects pagination (document, font
    size, region width/height) recomputes it synchronously before
    returning, so `pagination` is always current.

    Load → Paginate → (resize / font change → Paginate) → Export

Key Classes:
    - ComposerSession: Session state and orchestration

Dependencies:
    - composer.loading: DocumentLoader
    - composer.layout: layout(), BlockMeasurer
    - composer.geometry: GeometryModel
    - composer.output: ExportPipeline, PageSurface, rasterizer, assembler

Used By:
    - gui.main_window: Main window state
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple

from a4_composer.core.errors import CapabilityUnavailableError
from a4_composer.core.models import (
    Document,
    EMPTY_DOCUMENT,
    Page,
    PaginationResult,
    Template,
)

from .config import ComposerConfig
from .geometry import GeometryChange, GeometryModel
from .layout import BlockMeasurer, layout
from .loading import DocumentLoader
from .output import (
    Assembler,
    ExportArtifact,
    ExportMode,
    ExportPipeline,
    PageRasterizer,
    PageSurface,
)

logger = logging.getLogger(__name__)

PaginationListener = Callable[[PaginationResult], None]


class ComposerSession:
    """
    One composing session.

    Capabilities are injected; any of them may be missing, in which case
    the operations that need it raise CapabilityUnavailableError (or, for
    the measurer, pagination degrades to a single page).

    Args:
        config: Session configuration
        loader: Document loader
        measurer: Block height measurer
        geometry: Region model (created from config if omitted)
        rasterizer: Default page rasterizer for export
        assembler: PDF assembler for export

    Example:
        >>> session = ComposerSession(
        ...     loader=DocxDocumentLoader(),
        ...     measurer=PillowBlockMeasurer(),
        ...     assembler=PdfAssembler(),
        ... )
        >>> session.load_document(Path("letter.docx"))
        >>> session.pagination.page_count
        3
    """

    def __init__(
        self,
        config: Optional[ComposerConfig] = None,
        *,
        loader: Optional[DocumentLoader] = None,
        measurer: Optional[BlockMeasurer] = None,
        geometry: Optional[GeometryModel] = None,
        rasterizer: Optional[PageRasterizer] = None,
        assembler: Optional[Assembler] = None,
    ) -> None:
        self.config = config or ComposerConfig()
        self._loader = loader
        self._measurer = measurer
        self.geometry = geometry or GeometryModel(self.config)
        self._rasterizer = rasterizer
        self._assembler = assembler

        self._document: Document = EMPTY_DOCUMENT
        self._font_size: int = self.config.default_font_size
        self._template: Optional[Template] = None
        self._listeners: List[PaginationListener] = []
        # Preview PDFs stay on disk for the viewer until the session closes
        self._previews: List[Path] = []

        self._unsubscribe_geometry = self.geometry.subscribe(self._on_geometry_changed)
        self._pagination = self._paginate()

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def document(self) -> Document:
        return self._document

    @property
    def font_size(self) -> int:
        return self._font_size

    @property
    def template(self) -> Optional[Template]:
        return self._template

    @property
    def pagination(self) -> PaginationResult:
        return self._pagination

    @property
    def pages(self) -> Tuple[Page, ...]:
        return self._pagination.pages

    def subscribe(self, listener: PaginationListener) -> Callable[[], None]:
        """Register for pagination changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ─────────────────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────────────────

    def load_document(self, path: Path) -> Document:
        """
        Load a document from disk and repaginate.

        The current document is untouched if loading fails.

        Raises:
            CapabilityUnavailableError: If no loader was supplied
            InputError: If the file type is not supported
            ConversionError: If the file cannot be converted
        """
        loader = self._require(self._loader, "loader")
        return self._commit(loader.load(Path(path)))

    def load_document_bytes(self, name: str, data: bytes) -> Document:
        """Load a document from raw bytes (same errors as load_document)."""
        loader = self._require(self._loader, "loader")
        return self._commit(loader.load_bytes(name, data))

    def set_font_size(self, size: int) -> PaginationResult:
        """
        Change the base font size and repaginate.

        Raises:
            ValueError: If size is outside the configured range
        """
        if not self.config.accepts_font_size(size):
            raise ValueError(
                f"font size must be within {self.config.min_font_size}.."
                f"{self.config.max_font_size}: {size}"
            )
        if size != self._font_size:
            self._font_size = size
            self.repaginate()
        return self._pagination

    def select_template(self, template: Optional[Template]) -> None:
        """Use `template` as the background of every page (None = plain)."""
        self._template = template
        logger.info(f"Template: {template.name if template else 'none'}")

    def reset(self) -> PaginationResult:
        """Restore defaults: no document, default font, no template, default region."""
        self._document = EMPTY_DOCUMENT
        self._font_size = self.config.default_font_size
        self._template = None
        self.geometry.reset()
        logger.info("Session reset")
        return self.repaginate()

    def repaginate(self) -> PaginationResult:
        """Recompute pagination from current state and notify listeners."""
        self._pagination = self._paginate()
        for listener in list(self._listeners):
            listener(self._pagination)
        return self._pagination

    # ─────────────────────────────────────────────────────────────────────────
    # Rendering / export
    # ─────────────────────────────────────────────────────────────────────────

    def page_surfaces(self) -> List[PageSurface]:
        """One renderable surface per page; only the first is editable."""
        box = self.geometry.box
        return [
            PageSurface(
                page=page,
                box=box,
                font_size=self._font_size,
                template=self._template,
                editable=page.index == 0,
                canvas_size=self.config.canvas_size,
            )
            for page in self._pagination.pages
        ]

    def export(
        self,
        mode: ExportMode,
        *,
        destination: Optional[Path] = None,
        surfaces: Optional[Sequence[Any]] = None,
        rasterizer: Optional[PageRasterizer] = None,
        settle: Callable[[float], None] = time.sleep,
    ) -> ExportArtifact:
        """
        Export the current pages.

        Args:
            mode: PREVIEW or DOWNLOAD
            destination: DOWNLOAD target (default config.download_path())
            surfaces: Surfaces to capture (default page_surfaces())
            rasterizer: Overrides the session rasterizer (the GUI passes
                a widget rasterizer together with its page widgets)
            settle: Wait function used before the first capture

        Raises:
            CapabilityUnavailableError: If no rasterizer or assembler
            ExportError: See ExportPipeline.export()
        """
        pipeline = ExportPipeline(
            self._require(rasterizer or self._rasterizer, "rasterizer"),
            self._require(self._assembler, "assembler"),
            self.geometry,
            self.config,
            settle=settle,
        )
        if surfaces is None:
            surfaces = self.page_surfaces()
        artifact = pipeline.export(surfaces, mode, destination=destination)
        if artifact.mode is ExportMode.PREVIEW:
            self._previews.append(artifact.path)
        return artifact

    def close(self) -> None:
        """Teardown: release listeners and pointer capture, then delete preview files."""
        self._unsubscribe_geometry()
        self._listeners.clear()
        self.geometry.close()

        for path in self._previews:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not remove preview {path}: {e}")
        self._previews.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _commit(self, document: Document) -> Document:
        self._document = document
        self.repaginate()
        return document

    def _paginate(self) -> PaginationResult:
        box = self.geometry.box
        return layout(
            self._document.blocks,
            box.width,
            box.height,
            self._font_size,
            measurer=self._measurer,
        )

    def _on_geometry_changed(self, change: GeometryChange) -> None:
        # Position-only changes never affect pagination
        if change.resized:
            self.repaginate()

    @staticmethod
    def _require(capability, name: str):
        if capability is None:
            raise CapabilityUnavailableError(name)
        return capability
