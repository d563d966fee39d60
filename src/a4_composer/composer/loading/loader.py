"""
Module: composer.loading.loader

Purpose:
    Convert an uploaded .docx file into a Document of top-level blocks
    using python-docx. Paragraphs and tables are visited in body order.

Key Functions:
    - paragraph_to_block(): Map one paragraph to a Block (or None if empty)
    - table_to_block(): Map one table to a TABLE Block

Key Classes:
    - DocumentLoader: Loader capability protocol
    - DocxDocumentLoader: python-docx implementation

Mapping:
    - "Title"       -> HEADING level 1
    - "Heading N"   -> HEADING level N (clamped to 1..6)
    - "List ..." or numbered paragraph -> LIST_ITEM
    - table         -> TABLE with stripped cell text
    - other         -> PARAGRAPH
    Empty paragraphs are dropped.

Dependencies:
    - python-docx: .docx parsing

Used By:
    - composer.controller: ComposerSession.load_document()
"""

from __future__ import annotations

import io
import logging
import re
import zipfile
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

import docx
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table
from docx.text.paragraph import Paragraph

from a4_composer.core.errors import ConversionError, InputError
from a4_composer.core.models import Block, Document

logger = logging.getLogger(__name__)

_HEADING_STYLE = re.compile(r"^heading\s*(\d)", re.IGNORECASE)


class DocumentLoader(Protocol):
    """Converts an uploaded file into a Document."""

    def load(self, path: Path) -> Document:
        ...

    def load_bytes(self, name: str, data: bytes) -> Document:
        ...


class DocxDocumentLoader:
    """
    Loads .docx files with python-docx.

    Args:
        accepted_suffixes: File suffixes accepted (case-insensitive)

    Example:
        >>> doc = DocxDocumentLoader().load(Path("letter.docx"))
        >>> doc.blocks[0].tag
        'h1'
    """

    def __init__(self, accepted_suffixes: Sequence[str] = (".docx",)) -> None:
        self._suffixes = tuple(s.lower() for s in accepted_suffixes)

    def load(self, path: Path) -> Document:
        """
        Load a document from disk.

        Raises:
            InputError: If the file type is not accepted
            ConversionError: If the file cannot be read or parsed
        """
        path = Path(path)
        self._check_name(path.name)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ConversionError(f"Cannot read {path.name}: {e}") from e
        return self.load_bytes(path.name, data)

    def load_bytes(self, name: str, data: bytes) -> Document:
        """
        Load a document from raw bytes.

        Raises:
            InputError: If the file type is not accepted
            ConversionError: If the bytes are not a valid .docx package
        """
        self._check_name(name)
        try:
            source = docx.Document(io.BytesIO(data))
            blocks = _convert(source)
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError, SyntaxError) as e:
            # lxml's XMLSyntaxError derives from SyntaxError
            raise ConversionError(f"Cannot convert {name}: {e}") from e

        logger.info(f"Loaded {name}: {len(blocks)} blocks")
        return Document(blocks=tuple(blocks), source_name=name)

    def _check_name(self, name: str) -> None:
        if not name.lower().endswith(self._suffixes):
            raise InputError(
                f"Unsupported file type: {name!r} (expected {', '.join(self._suffixes)})"
            )


def _convert(source) -> List[Block]:
    blocks: List[Block] = []
    for item in source.iter_inner_content():
        if isinstance(item, Paragraph):
            block = paragraph_to_block(item)
        elif isinstance(item, Table):
            block = table_to_block(item)
        else:
            block = None
        if block is not None:
            blocks.append(block)
    return blocks


def paragraph_to_block(paragraph: Paragraph) -> Optional[Block]:
    """Map a paragraph to a Block. Returns None for empty paragraphs."""
    text = paragraph.text.strip()
    if not text:
        return None

    style_name = paragraph.style.name if paragraph.style is not None else ""
    if style_name == "Title":
        return Block.heading(text, 1)

    match = _HEADING_STYLE.match(style_name)
    if match:
        return Block.heading(text, min(6, max(1, int(match.group(1)))))

    if style_name.startswith("List") or _is_numbered(paragraph):
        return Block.list_item(text)

    return Block.paragraph(text)


def table_to_block(table: Table) -> Optional[Block]:
    """Map a table to a TABLE Block. Returns None for tables with no rows."""
    rows = tuple(
        tuple(cell.text.strip() for cell in row.cells)
        for row in table.rows
    )
    if not rows:
        return None
    return Block.table(rows)


def _is_numbered(paragraph: Paragraph) -> bool:
    # Direct numbering lives in w:pPr/w:numPr
    p_pr = paragraph._p.pPr
    return p_pr is not None and p_pr.numPr is not None
