"""
Module: blocks

Purpose:
    Block and Document models. A Block is one top-level content unit
    (paragraph, heading, list item or table) as produced by the document
    loader. Its rendered height is not stored: it depends on the
    container width and font size and is measured on demand.

Key Classes:
    - BlockKind: Kind of content unit
    - Block: Immutable content unit with an HTML-like markup rendition
    - Document: Ordered, immutable sequence of blocks

Dependencies:
    - dataclasses (std)
    - html (std): escaping for markup

Used By:
    - composer.loading.loader: Creates Blocks
    - composer.layout: Measures and paginates Blocks
    - composer.output.rasterizer: Draws Blocks
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


class BlockKind(str, Enum):
    """Kind of top-level content unit."""

    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST_ITEM = "list_item"
    TABLE = "table"


@dataclass(frozen=True, slots=True)
class Block:
    """
    One top-level content unit.

    Attributes:
        kind: What the block is
        text: Plain text. For tables, rows joined by newlines and cells by tabs
        level: Heading level 1..6 for headings, 0 otherwise
        cells: Table rows (TABLE only)

    Invariants:
        - HEADING blocks have 1 <= level <= 6
        - non-HEADING blocks have level == 0
        - only TABLE blocks carry cells

    Example:
        >>> Block(BlockKind.HEADING, "Intro", level=2).markup
        '<h2>Intro</h2>'
    """

    kind: BlockKind
    text: str
    level: int = 0
    cells: Tuple[Tuple[str, ...], ...] = ()

    def __post_init__(self) -> None:
        """Validate block on construction."""
        if self.kind is BlockKind.HEADING:
            if not 1 <= self.level <= 6:
                raise ValueError(f"heading level must be 1..6: {self.level}")
        elif self.level != 0:
            raise ValueError(f"level is only valid for headings: {self.level}")
        if self.cells and self.kind is not BlockKind.TABLE:
            raise ValueError("cells are only valid for table blocks")

    @classmethod
    def paragraph(cls, text: str) -> "Block":
        return cls(BlockKind.PARAGRAPH, text)

    @classmethod
    def heading(cls, text: str, level: int = 1) -> "Block":
        return cls(BlockKind.HEADING, text, level=level)

    @classmethod
    def list_item(cls, text: str) -> "Block":
        return cls(BlockKind.LIST_ITEM, text)

    @classmethod
    def table(cls, rows: Tuple[Tuple[str, ...], ...]) -> "Block":
        rows = tuple(tuple(row) for row in rows)
        text = "\n".join("\t".join(row) for row in rows)
        return cls(BlockKind.TABLE, text, cells=rows)

    @property
    def tag(self) -> str:
        """HTML tag name for this block."""
        if self.kind is BlockKind.HEADING:
            return f"h{self.level}"
        return {
            BlockKind.PARAGRAPH: "p",
            BlockKind.LIST_ITEM: "li",
            BlockKind.TABLE: "table",
        }[self.kind]

    @property
    def markup(self) -> str:
        """HTML-like rendition of the block."""
        if self.kind is BlockKind.TABLE:
            rows = "".join(
                "<tr>" + "".join(f"<td>{html.escape(cell)}</td>" for cell in row) + "</tr>"
                for row in self.cells
            )
            return f"<table>{rows}</table>"
        return f"<{self.tag}>{html.escape(self.text)}</{self.tag}>"


@dataclass(frozen=True)
class Document:
    """
    Ordered sequence of blocks (immutable).

    Replaced wholesale when a new file is loaded or the session is reset.

    Attributes:
        blocks: Blocks in document order
        source_name: File name the document was loaded from, if any
    """

    blocks: Tuple[Block, ...] = ()
    source_name: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept any iterable from callers but store a tuple
        object.__setattr__(self, "blocks", tuple(self.blocks))

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    @property
    def markup(self) -> str:
        """Concatenated markup of every block."""
        return "".join(block.markup for block in self.blocks)


EMPTY_DOCUMENT = Document()
