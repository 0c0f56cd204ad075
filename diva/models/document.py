"""
In-memory document tree produced by the transcoder.

An ``OutputDocument`` is an ordered list of blocks (``Paragraph``, ``Table``,
``PageBreak``) that ``diva.services.docx_writer`` serializes with
python-docx.  All block types are frozen so a transcoder run can never
mutate blocks it has already emitted.

Units
-----
- ``Span.size`` is in half-points (22 == 11pt), the unit Word stores.
- ``spacing_before`` / ``spacing_after`` are in twips (1/20 pt).
- ``line_spacing`` is a multiple of single spacing (1.5 == 360 twips "auto").
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class DocumentType(str, Enum):
    """Kind of guide being generated."""

    DEV_SETUP = "dev-setup"
    USER_GUIDE = "user-guide"

    @property
    def label(self) -> str:
        return "Developer Setup Guide" if self is DocumentType.DEV_SETUP else "User Guide"


class InputMode(str, Enum):
    """How source lines are normalized before dispatch."""

    MARKDOWN = "markdown"  # lines kept verbatim; "#" lines are discarded
    RAW = "raw"            # leading "#" runs stripped, "---" rules dropped


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    JUSTIFIED = "justified"


@dataclass(frozen=True)
class DocumentMetadata:
    """Form metadata that drives the title page."""

    application_name: str
    document_type: DocumentType = DocumentType.DEV_SETUP
    institution_name: Optional[str] = None
    developers: Tuple[str, ...] = ()
    supervisor_name: Optional[str] = None


@dataclass(frozen=True)
class Span:
    """A run of text sharing one style."""

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    font: str = "Arial"
    size: int = 22                 # half-points
    color: Optional[str] = None    # hex RGB, e.g. "1F4E79"
    fill: Optional[str] = None     # run background shading
    link: Optional[str] = None     # external hyperlink target


@dataclass(frozen=True)
class Paragraph:
    spans: Tuple[Span, ...]
    alignment: Alignment = Alignment.LEFT
    spacing_before: Optional[int] = None
    spacing_after: Optional[int] = None
    line_spacing: Optional[float] = None
    heading_level: Optional[int] = None

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


@dataclass(frozen=True)
class Cell:
    spans: Tuple[Span, ...]
    width_pct: float
    alignment: Alignment = Alignment.LEFT
    fill: Optional[str] = None

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


@dataclass(frozen=True)
class Row:
    cells: Tuple[Cell, ...]
    is_header: bool = False


@dataclass(frozen=True)
class BorderStyle:
    """Single border definition applied to every edge of a table."""

    style: str = "single"
    size: int = 4          # eighths of a point
    color: str = "000000"


@dataclass(frozen=True)
class Table:
    rows: Tuple[Row, ...]
    border: BorderStyle = field(default_factory=BorderStyle)

    @property
    def column_count(self) -> int:
        return max((len(row.cells) for row in self.rows), default=0)


@dataclass(frozen=True)
class PageBreak:
    pass


Block = Union[Paragraph, Table, PageBreak]


@dataclass
class OutputDocument:
    """Ordered block list plus page setup, ready for serialization."""

    blocks: List[Block] = field(default_factory=list)
    margin_inches: float = 1.0

    @property
    def page_breaks(self) -> int:
        return sum(1 for block in self.blocks if isinstance(block, PageBreak))

    @property
    def tables(self) -> List[Table]:
        return [block for block in self.blocks if isinstance(block, Table)]

    @property
    def paragraphs(self) -> List[Paragraph]:
        return [block for block in self.blocks if isinstance(block, Paragraph)]
