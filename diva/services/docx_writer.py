"""
Serialize an OutputDocument into a .docx payload with python-docx.

python-docx has no API for run shading, table borders or hyperlinks, so
those are written as raw OOXML elements (``w:shd``, ``w:tblBorders``,
``w:hyperlink``).  Everything else goes through the regular object model.

Public API
----------
build_docx(document)  -> docx.document.Document
render_docx(document) -> bytes
"""
from __future__ import annotations

import io
import logging
from typing import Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor, Twips

from diva.exceptions import SerializationError
from diva.models.document import (
    Alignment,
    BorderStyle,
    OutputDocument,
    PageBreak,
    Paragraph,
    Span,
    Table,
)
from diva.services.styles import DEFAULT_STYLE

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

_ALIGNMENTS = {
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
    Alignment.JUSTIFIED: WD_ALIGN_PARAGRAPH.JUSTIFY,
}

_BORDER_EDGES = ("top", "left", "bottom", "right", "insideH", "insideV")


# ---------------------------------------------------------------------------
# OOXML helpers
# ---------------------------------------------------------------------------

def _shading(fill: str):
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), fill)
    return shd


def _apply_span(run, span: Span) -> None:
    run.bold = span.bold
    run.italic = span.italic
    run.underline = span.underline
    run.font.name = span.font
    run.font.size = Pt(span.size / 2)
    if span.color:
        run.font.color.rgb = RGBColor.from_string(span.color)
    if span.fill:
        # w:shd sits after w:u in rPr, so it must be added last
        run._r.get_or_add_rPr().append(_shading(span.fill))


def _add_span(paragraph, span: Span) -> None:
    run = paragraph.add_run(span.text)
    _apply_span(run, span)
    if not span.link:
        return
    r_id = paragraph.part.relate_to(span.link, RT.HYPERLINK, is_external=True)
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), r_id)
    hyperlink.append(run._r)  # moves the styled run inside the link
    paragraph._p.append(hyperlink)


def _set_table_borders(table, border: BorderStyle) -> None:
    tbl_pr = table._tbl.tblPr
    borders = OxmlElement("w:tblBorders")
    for edge in _BORDER_EDGES:
        element = OxmlElement(f"w:{edge}")
        element.set(qn("w:val"), border.style)
        element.set(qn("w:sz"), str(border.size))
        element.set(qn("w:space"), "0")
        element.set(qn("w:color"), border.color)
        borders.append(element)

    # schema order: tblBorders precedes shd, tblLayout, tblCellMar and tblLook
    tbl_pr.insert_element_before(
        borders, "w:shd", "w:tblLayout", "w:tblCellMar", "w:tblLook", "w:tblCaption", "w:tblDescription"
    )


def _set_full_width(table) -> None:
    tbl_w = table._tbl.tblPr.find(qn("w:tblW"))
    if tbl_w is not None:
        tbl_w.set(qn("w:type"), "pct")
        tbl_w.set(qn("w:w"), "5000")


# ---------------------------------------------------------------------------
# Block writers
# ---------------------------------------------------------------------------

def _write_paragraph(doc, block: Paragraph) -> None:
    style = f"Heading {block.heading_level}" if block.heading_level else None
    paragraph = doc.add_paragraph(style=style)
    paragraph.alignment = _ALIGNMENTS[block.alignment]

    fmt = paragraph.paragraph_format
    if block.spacing_before is not None:
        fmt.space_before = Twips(block.spacing_before)
    if block.spacing_after is not None:
        fmt.space_after = Twips(block.spacing_after)
    if block.line_spacing is not None:
        fmt.line_spacing = block.line_spacing

    for span in block.spans:
        _add_span(paragraph, span)


def _write_table(doc, block: Table, text_width_inches: float) -> None:
    columns = block.column_count
    table = doc.add_table(rows=0, cols=columns)
    table.autofit = False
    _set_full_width(table)
    _set_table_borders(table, block.border)

    for row in block.rows:
        targets = table.add_row().cells
        for target, cell in zip(targets, row.cells):
            target.width = Inches(text_width_inches * cell.width_pct / 100)
            if cell.fill:
                target._tc.get_or_add_tcPr().append(_shading(cell.fill))
            paragraph = target.paragraphs[0]
            paragraph.alignment = _ALIGNMENTS[cell.alignment]
            for span in cell.spans:
                _add_span(paragraph, span)


def build_docx(document: OutputDocument, text_width_inches: Optional[float] = None):
    """
    Build a python-docx Document from *document*.

    Args:
        document: Transcoder output.
        text_width_inches: Width that table column percentages refer to.
                           Defaults to the default style's text width.
    """
    width = text_width_inches or DEFAULT_STYLE.text_width_inches
    doc = Document()

    margin = Inches(document.margin_inches)
    for section in doc.sections:
        section.top_margin = margin
        section.bottom_margin = margin
        section.left_margin = margin
        section.right_margin = margin

    for block in document.blocks:
        if isinstance(block, PageBreak):
            doc.add_page_break()
        elif isinstance(block, Table):
            _write_table(doc, block, width)
        else:
            _write_paragraph(doc, block)
    return doc


def render_docx(document: OutputDocument, text_width_inches: Optional[float] = None) -> bytes:
    """
    Serialize *document* to .docx bytes.

    Raises:
        SerializationError: python-docx failed to build or save the package.
    """
    try:
        doc = build_docx(document, text_width_inches)
        buffer = io.BytesIO()
        doc.save(buffer)
    except Exception as exc:
        logger.error("render_docx: failed to build document — %s", exc, exc_info=True)
        raise SerializationError("Failed to convert to DOCX", [str(exc)]) from exc

    payload = buffer.getvalue()
    logger.info(
        "render_docx: %d blocks → %d bytes", len(document.blocks), len(payload)
    )
    return payload
