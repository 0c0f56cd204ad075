"""
Markdown-to-document transcoder.

Walks generated Markdown one line at a time and emits the styled block tree
described in ``diva.models.document``.  The walk is a small state machine:

    TranscoderState(sections, fence, table)

``fence`` holds buffered code lines while a ``` fence is open and ``table``
holds buffered rows while pipe-delimited lines are being accumulated; the
two are never set at the same time.  ``Transcoder.step`` advances the state
by one line and returns the blocks that line released.

Each line is dispatched to the first rule in ``build_rules`` whose
``can_handle`` accepts it.  The order matters: later rules are looser
versions of earlier ones (a feature-emoji line is also a plain paragraph,
a marker heading may contain "***", ...).

Nothing in here raises on odd input.  Unrecognized lines are dropped and
tables without rows are omitted so one malformed section never blanks the
whole document.

Public API
----------
Transcoder(style, mode).transcode(markdown, metadata, today) -> OutputDocument
transcode_markdown(markdown, metadata, ...)                 -> OutputDocument
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from datetime import date
from typing import List, Optional, Sequence, Tuple

from diva.models.document import (
    Alignment,
    Block,
    Cell,
    DocumentMetadata,
    InputMode,
    OutputDocument,
    PageBreak,
    Paragraph,
    Row,
    Span,
    Table,
)
from diva.services.inline import render_inline, split_parenthetical, split_url
from diva.services.styles import DEFAULT_STYLE, StyleConfig
from diva.services.title_page import build_title_page

logger = logging.getLogger(__name__)

FENCE = "```"

_SECTION_RE = re.compile(r"^[1-4]\s+[A-Z]")
_SUBSECTION_RE = re.compile(r"^[1-4]\.[1-9]")
_LIST_MARKER_RE = re.compile(r"^[>*-]\s*")
_HEADING_RUN_RE = re.compile(r"^#+\s*")

_HEADER_LABELS = ("Category", "Tool/Technology")


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TranscoderState:
    """Cross-line state threaded through ``Transcoder.step``."""

    sections: int = 0                          # top-level headings seen
    fence: Optional[Tuple[str, ...]] = None    # open fence → buffered lines
    table: Optional[Tuple[Row, ...]] = None    # open table → buffered rows

    @property
    def in_fence(self) -> bool:
        return self.fence is not None

    @property
    def in_table(self) -> bool:
        return self.table is not None


StepResult = Tuple[List[Block], TranscoderState]


def _flush_table(state: TranscoderState, style: StyleConfig) -> StepResult:
    """Close the open table; rowless tables are dropped."""
    rows = state.table or ()
    blocks: List[Block] = [Table(rows=rows, border=style.table_border)] if rows else []
    return blocks, replace(state, table=None)


def _flush_fence(state: TranscoderState, style: StyleConfig) -> StepResult:
    """Close the open fence: one code paragraph per line, then a spacer."""
    lines = state.fence or ()
    blocks: List[Block] = [_code_paragraph(line, style, before=0, after=0) for line in lines]
    if blocks:
        blocks.append(Paragraph(spans=(), spacing_after=120))
    return blocks, replace(state, fence=None)


def _code_paragraph(line: str, style: StyleConfig, before: int, after: int) -> Paragraph:
    span = Span(
        text=line,
        font=style.code_font,
        size=style.code_size,
        color=style.code_text_color,
        fill=style.code_background,
    )
    return Paragraph(spans=(span,), spacing_before=before, spacing_after=after)


def _body_span(style: StyleConfig) -> Span:
    return Span(text="", font=style.font, size=style.body_size)


def _body_paragraph(spans: Sequence[Span], style: StyleConfig) -> Paragraph:
    return Paragraph(
        spans=tuple(spans),
        alignment=Alignment.JUSTIFIED,
        line_spacing=style.body_line_spacing,
        spacing_after=180,
    )


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

class LineRule:
    """
    One dispatch rule: a predicate plus a renderer.

    ``closes_table`` tells the dispatcher whether a buffered table must be
    emitted before this rule's own output.
    """

    closes_table: bool = True

    def __init__(self, style: StyleConfig) -> None:
        self.style = style

    def can_handle(self, line: str, state: TranscoderState) -> bool:
        raise NotImplementedError

    def render(self, line: str, state: TranscoderState) -> StepResult:
        raise NotImplementedError


class HeadingMarkerRule(LineRule):
    """``#`` headings carry no content of their own; drop them."""

    closes_table = False

    def can_handle(self, line, state):
        return line.startswith("#")

    def render(self, line, state):
        return [], state


class FenceToggleRule(LineRule):
    def can_handle(self, line, state):
        return line.startswith(FENCE) or line.endswith(FENCE)

    def render(self, line, state):
        if state.in_fence:
            return _flush_fence(state, self.style)
        return [], replace(state, fence=())


class FenceBodyRule(LineRule):
    def can_handle(self, line, state):
        return state.in_fence

    def render(self, line, state):
        return [], replace(state, fence=state.fence + (line,))


class SectionHeadingRule(LineRule):
    """``1 OVERVIEW`` style headings; every one but the first starts a page."""

    def can_handle(self, line, state):
        return bool(_SECTION_RE.match(line))

    def render(self, line, state):
        state = replace(state, sections=state.sections + 1)
        blocks: List[Block] = [PageBreak()] if state.sections > 1 else []
        blocks.append(Paragraph(
            spans=(Span(
                text=line,
                bold=True,
                font=self.style.font,
                size=self.style.section_size,
                color=self.style.section_title_color,
            ),),
            heading_level=1,
            spacing_before=240,
            spacing_after=240,
        ))
        return blocks, state


class SubsectionHeadingRule(LineRule):
    def can_handle(self, line, state):
        return bool(_SUBSECTION_RE.match(line))

    def render(self, line, state):
        return [Paragraph(
            spans=(Span(
                text=line,
                bold=True,
                font=self.style.font,
                size=self.style.subsection_size,
                color=self.style.subtitle_color,
            ),),
            heading_level=2,
            spacing_before=240,
            spacing_after=120,
        )], state


class MarkerHeadingRule(LineRule):
    """Setup-step headings led by a colored glyph, e.g. ``🟣 ***GitHub***``."""

    def _marker(self, line: str) -> Optional[Tuple[str, str]]:
        for glyph, color in self.style.marker_colors:
            if glyph in line:
                return glyph, color
        return None

    def can_handle(self, line, state):
        return self._marker(line) is not None

    def render(self, line, state):
        glyph, color = self._marker(line)
        size = self.style.marker_heading_size
        spans = [Span(text=f"{glyph} ", font=self.style.font, size=size, color=color)]

        rest = line.replace(glyph, "", 1).strip()
        italic = len(rest) >= 6 and rest.startswith("***") and rest.endswith("***")
        if italic:
            rest = rest[3:-3]
        if rest:
            spans.append(Span(
                text=rest,
                bold=True,
                italic=italic,
                font=self.style.font,
                size=size,
                color=self.style.text_color,
            ))

        return [Paragraph(
            spans=tuple(spans),
            heading_level=3,
            spacing_before=180,
            spacing_after=120,
        )], state


class EmphasisHeadingRule(LineRule):
    """A whole line wrapped in ``***`` is a bold-italic minor heading."""

    def can_handle(self, line, state):
        return line.startswith("***") and line.endswith("***")

    def render(self, line, state):
        text = line[3:-3] if len(line) >= 6 else ""
        if not text.strip():
            return [], state
        return [Paragraph(
            spans=(Span(
                text=text,
                bold=True,
                italic=True,
                font=self.style.font,
                size=self.style.marker_heading_size,
            ),),
            spacing_before=180,
            spacing_after=120,
        )], state


class BulletRule(LineRule):
    """Prerequisite bullets: ``➢ **Tool** *why it is needed*``."""

    def can_handle(self, line, state):
        return self.style.bullet_glyph in line

    def render(self, line, state):
        glyph = self.style.bullet_glyph
        content = _LIST_MARKER_RE.sub("", line, count=1).replace(glyph, "", 1)
        base = _body_span(self.style)
        spans = (replace(base, text=f"{glyph} "),) + render_inline(content, base)
        return [_body_paragraph(spans, self.style)], state


class FeatureEmojiRule(LineRule):
    """Feature / step lines led by an emoji, which becomes an accent span."""

    def _leading_emoji(self, line: str) -> Optional[str]:
        for emoji in self.style.feature_emojis:
            # Generated text sometimes drops the variation selector
            for candidate in (emoji, emoji.rstrip("\ufe0f")):
                if line.startswith(candidate):
                    return candidate
        return None

    def can_handle(self, line, state):
        return self._leading_emoji(line) is not None

    def render(self, line, state):
        emoji = self._leading_emoji(line)
        content = line[len(emoji):].strip()
        base = _body_span(self.style)
        accent = replace(base, text=f"{emoji} ", color=self.style.feature_emoji_color)
        spans = (accent,) + render_inline(content, base)
        return [_body_paragraph(spans, self.style)], state


class TableRowRule(LineRule):
    """Accumulate pipe-delimited rows; rows with fewer than two cells are ignored."""

    closes_table = False

    def can_handle(self, line, state):
        return "|" in line

    def _widths(self, count: int) -> List[float]:
        if count == 1:
            return [100.0]
        first = self.style.first_column_pct
        rest = (100.0 - first) / (count - 1)
        return [first] + [rest] * (count - 1)

    def _cell(self, text: str, width: float, header: bool) -> Cell:
        color = self.style.table_header_text_color if header else self.style.text_color
        base = Span(text="", bold=header, font=self.style.font, size=self.style.body_size, color=color)
        before, note, after = split_parenthetical(text)
        spans = []
        if before:
            spans.append(replace(base, text=before))
        if note:
            spans.append(replace(base, text=note, italic=not header))
        if after:
            spans.append(replace(base, text=after))
        return Cell(
            spans=tuple(spans),
            width_pct=width,
            alignment=Alignment.CENTER if header else Alignment.LEFT,
            fill=self.style.table_header_fill if header else None,
        )

    def render(self, line, state):
        rows = state.table if state.in_table else ()
        cells = [cell.strip() for cell in line.split("|") if cell.strip()]
        if len(cells) >= 2:
            header = any(label in line for label in _HEADER_LABELS)
            widths = self._widths(len(cells))
            row = Row(
                cells=tuple(self._cell(text, width, header) for text, width in zip(cells, widths)),
                is_header=header,
            )
            rows = rows + (row,)
        return [], replace(state, table=rows)


class CommandRule(LineRule):
    """Shell / SQL / property lines the model emitted without a fence."""

    def can_handle(self, line, state):
        return line.startswith(self.style.command_prefixes)

    def render(self, line, state):
        return [_code_paragraph(line, self.style, before=60, after=60)], state


class LinkRule(LineRule):
    def can_handle(self, line, state):
        return ("http://" in line or "https://" in line) and split_url(line) is not None

    def render(self, line, state):
        before, url, after = split_url(line)
        base = _body_span(self.style)
        spans = []
        if before:
            spans.append(replace(base, text=before))
        spans.append(replace(base, text=url, color=self.style.link_color, underline=True, link=url))
        if after:
            spans.append(replace(base, text=after))
        return [Paragraph(
            spans=tuple(spans),
            line_spacing=self.style.body_line_spacing,
            spacing_after=120,
        )], state


class ParagraphRule(LineRule):
    """Fallback: justified body text with inline emphasis."""

    def can_handle(self, line, state):
        return True

    def render(self, line, state):
        if line == "---" or FENCE in line:
            return [], state
        spans = render_inline(line, _body_span(self.style))
        if not spans:
            return [], state
        return [_body_paragraph(spans, self.style)], state


def build_rules(style: StyleConfig) -> List[LineRule]:
    """Dispatch rules in priority order (first match wins)."""
    return [
        HeadingMarkerRule(style),
        FenceToggleRule(style),
        FenceBodyRule(style),
        SectionHeadingRule(style),
        SubsectionHeadingRule(style),
        MarkerHeadingRule(style),
        EmphasisHeadingRule(style),
        BulletRule(style),
        FeatureEmojiRule(style),
        TableRowRule(style),
        CommandRule(style),
        LinkRule(style),
        ParagraphRule(style),
    ]


# ---------------------------------------------------------------------------
# Transcoder
# ---------------------------------------------------------------------------

class Transcoder:
    """
    Converts generated Markdown plus form metadata into an OutputDocument.

    Instances hold only configuration (style, input mode, rule list), so one
    transcoder can serve any number of sequential or concurrent calls.
    """

    def __init__(
        self,
        style: StyleConfig = DEFAULT_STYLE,
        mode: InputMode = InputMode.MARKDOWN,
    ) -> None:
        self.style = style
        self.mode = mode
        self.rules = build_rules(style)

    def normalize(self, text: str) -> List[str]:
        """Trimmed, non-blank source lines, adjusted for the input mode."""
        lines = [line.strip() for line in (text or "").splitlines()]
        if self.mode is InputMode.RAW:
            lines = [_HEADING_RUN_RE.sub("", line).strip() for line in lines]
            lines = [line for line in lines if line != "---"]
        return [line for line in lines if line]

    def _match(self, line: str, state: TranscoderState) -> LineRule:
        for rule in self.rules:
            if rule.can_handle(line, state):
                return rule
        return self.rules[-1]

    def step(self, state: TranscoderState, line: str) -> StepResult:
        """Advance *state* by one line, returning the blocks it released."""
        rule = self._match(line, state)
        blocks: List[Block] = []
        if state.in_table and rule.closes_table:
            blocks, state = _flush_table(state, self.style)
        emitted, state = rule.render(line, state)
        blocks.extend(emitted)
        return blocks, state

    def finish(self, state: TranscoderState) -> List[Block]:
        """Flush whatever is still buffered at end of input."""
        blocks: List[Block] = []
        if state.in_table:
            flushed, state = _flush_table(state, self.style)
            blocks.extend(flushed)
        if state.in_fence:
            logger.debug("transcode: unclosed code fence at end of input, flushing")
            flushed, state = _flush_fence(state, self.style)
            blocks.extend(flushed)
        return blocks

    def render_body(self, markdown: str) -> List[Block]:
        """Blocks for the Markdown body alone (no title page)."""
        state = TranscoderState()
        blocks: List[Block] = []
        for line in self.normalize(markdown):
            emitted, state = self.step(state, line)
            blocks.extend(emitted)
        blocks.extend(self.finish(state))
        return blocks

    def transcode(
        self,
        markdown: str,
        metadata: DocumentMetadata,
        today: Optional[date] = None,
    ) -> OutputDocument:
        """Title page, then the rendered body."""
        blocks = build_title_page(metadata, self.style, today=today)
        body = self.render_body(markdown)
        blocks.extend(body)

        document = OutputDocument(blocks=blocks, margin_inches=self.style.margin_inches)
        logger.debug(
            "transcode: %d body blocks, %d tables, %d page breaks (mode=%s)",
            len(body),
            len(document.tables),
            document.page_breaks,
            self.mode.value,
        )
        return document


def transcode_markdown(
    markdown: str,
    metadata: DocumentMetadata,
    style: StyleConfig = DEFAULT_STYLE,
    mode: InputMode = InputMode.MARKDOWN,
    today: Optional[date] = None,
) -> OutputDocument:
    """Convenience wrapper around ``Transcoder(style, mode).transcode``."""
    return Transcoder(style, mode).transcode(markdown, metadata, today=today)
