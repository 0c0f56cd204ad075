"""
Institutional title page prepended to every generated guide.
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional

from diva.config import settings
from diva.models.document import (
    Alignment,
    Block,
    DocumentMetadata,
    PageBreak,
    Paragraph,
    Span,
)
from diva.services.styles import DEFAULT_STYLE, StyleConfig
from diva.utils.helpers import format_long_date


def _centered(
    text: str,
    size: int,
    style: StyleConfig,
    bold: bool = False,
    before: Optional[int] = None,
    after: Optional[int] = None,
) -> Paragraph:
    return Paragraph(
        spans=(Span(text=text, bold=bold, font=style.font, size=size),),
        alignment=Alignment.CENTER,
        spacing_before=before,
        spacing_after=after,
    )


def build_title_page(
    metadata: DocumentMetadata,
    style: StyleConfig = DEFAULT_STYLE,
    today: Optional[date] = None,
) -> List[Block]:
    """
    Build the cover page blocks for *metadata*.

    The sequence is always: institution, optional "UNIVERSITY" line,
    document-type label, "for", application name, optional developers,
    optional supervisor, date, page break.  Every input is optional.
    """
    institution = (metadata.institution_name or "").strip() or settings.DEFAULT_INSTITUTION_NAME
    lowered = institution.lower()

    blocks: List[Block] = [
        _centered(institution.upper(), style.institution_size, style, bold=True, after=240),
    ]
    if "university" in lowered or "institute" in lowered:
        blocks.append(
            _centered("UNIVERSITY", style.institution_size, style, bold=True, after=240)
        )

    blocks.extend([
        _centered(metadata.document_type.label, style.document_label_size, style, bold=True, after=120),
        _centered("for", style.for_size, style, after=120),
    ])
    # No empty paragraphs: a blank name leaves the slot out
    app_name = metadata.application_name.strip()
    if app_name:
        blocks.append(_centered(app_name, style.app_name_size, style, after=360))

    developers = [name.strip() for name in metadata.developers if name.strip()]
    if developers:
        blocks.append(_centered("Developers", style.people_label_size, style, bold=True, after=120))
        for name in developers:
            blocks.append(_centered(name, style.person_size, style, after=60))

    supervisor = (metadata.supervisor_name or "").strip()
    if supervisor:
        blocks.append(
            _centered("Project Supervisor", style.people_label_size, style, bold=True, before=120, after=60)
        )
        blocks.append(_centered(supervisor, style.person_size, style, after=120))

    blocks.append(_centered(format_long_date(today or date.today()), style.date_size, style, before=240))
    blocks.append(PageBreak())
    return blocks
