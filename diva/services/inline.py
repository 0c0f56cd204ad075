"""
Inline span rendering: emphasis, URLs and parenthesised table-cell notes.

``render_inline`` implements the two-level emphasis split used for every
body line:

1. split on ``**bold**`` pairs; odd segments are bold;
2. split each even segment on ``*italic*`` pairs; odd sub-segments are
   italic, even ones plain.

Segments that are blank after trimming yield no span, but kept segments are
not trimmed.  There is no nesting and no escaping: ``**a * b**`` is one bold
span and ``*a **b** c*`` is split on the bold pair first.  Generated text
that relies on anything richer renders literally.
"""
from __future__ import annotations

import re
from dataclasses import replace
from typing import List, Optional, Tuple

from diva.models.document import Span

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")
_URL_RE = re.compile(r"https?://[^\s\]]+")


def render_inline(text: str, base: Span) -> Tuple[Span, ...]:
    """
    Split *text* into bold / italic / plain spans.

    Args:
        text: A single source line (or the remainder after a bullet glyph).
        base: Template span supplying font, size and color.

    Returns:
        Spans in reading order; empty if the line holds only markers/space.
    """
    spans: List[Span] = []
    for i, segment in enumerate(_BOLD_RE.split(text)):
        if not segment.strip():
            continue
        if i % 2 == 1:
            spans.append(replace(base, text=segment, bold=True))
            continue
        for j, piece in enumerate(_ITALIC_RE.split(segment)):
            if not piece.strip():
                continue
            spans.append(replace(base, text=piece, italic=(j % 2 == 1)))
    return tuple(spans)


def split_url(line: str) -> Optional[Tuple[str, str, str]]:
    """
    Return ``(before, url, after)`` for the first http(s) URL in *line*.

    Closing parentheses glued to the end of the URL belong to the prose
    (``(see https://x.io)``) and are moved to ``after``.
    """
    match = _URL_RE.search(line)
    if not match:
        return None
    url = match.group(0).rstrip(")")
    if not url or url in ("http://", "https://"):
        return None
    start = match.start()
    return line[:start], url, line[start + len(url):]


def split_parenthetical(cell: str) -> Tuple[str, str, str]:
    """
    Split a table cell around its first ``(...)`` note.

    ``"React (with Vite)"`` → ``("React ", "(with Vite)", "")``.  Cells
    without a well-formed pair come back as ``(cell, "", "")``.
    """
    open_at = cell.find("(")
    close_at = cell.find(")", open_at + 1) if open_at >= 0 else -1
    if open_at < 0 or close_at < 0:
        return cell, "", ""
    return cell[:open_at], cell[open_at:close_at + 1], cell[close_at + 1:]
