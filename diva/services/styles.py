"""
Visual style for generated guides.

Every color, font, size and spacing the transcoder uses lives in one frozen
``StyleConfig``.  ``DEFAULT_STYLE`` reproduces the institutional layout;
tests and callers may pass a ``dataclasses.replace``-d copy instead.

Sizes are half-points, spacings are twips (see ``diva.models.document``).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from diva.models.document import BorderStyle


@dataclass(frozen=True)
class StyleConfig:
    # Fonts
    font: str = "Arial"
    code_font: str = "Courier New"

    # Colors (hex RGB)
    section_title_color: str = "1F4E79"
    text_color: str = "000000"
    subtitle_color: str = "2F5496"
    code_background: str = "000000"
    code_text_color: str = "00FF00"
    link_color: str = "0563C1"
    table_header_fill: str = "4472C4"
    table_header_text_color: str = "FFFFFF"
    feature_emoji_color: str = "FFA500"

    # Marker glyph → color, checked in this order
    marker_colors: Tuple[Tuple[str, str], ...] = (
        ("🟣", "800080"),   # GitHub setup
        ("🔵", "0000FF"),   # database configuration
        ("🟡", "FFD700"),   # external APIs
        ("▶️", "FFA500"),   # running instructions
    )

    # Leading glyphs that mark feature / step lines in user guides
    feature_emojis: Tuple[str, ...] = (
        "🌟", "🔧", "💬", "🤖", "👤", "🔔", "📊", "📚", "📱", "🔄",
        "📲", "📷", "📍", "🚀", "⚙️", "🔍", "🛠️", "💡", "👆", "🔋",
    )

    bullet_glyph: str = "➢"

    # Title page sizes
    institution_size: int = 35      # 17.5pt
    document_label_size: int = 28   # 14pt
    for_size: int = 22              # 11pt
    app_name_size: int = 28         # 14pt
    people_label_size: int = 26     # 13pt
    person_size: int = 24           # 12pt
    date_size: int = 21             # 10.5pt

    # Body sizes
    section_size: int = 28          # 14pt
    subsection_size: int = 26       # 13pt
    marker_heading_size: int = 24   # 12pt
    body_size: int = 22             # 11pt
    code_size: int = 22             # 11pt

    body_line_spacing: float = 1.5
    margin_inches: float = 1.0

    # Text width available to tables: 8.5in letter minus both margins
    text_width_inches: float = 6.5
    first_column_pct: float = 40.0

    table_border: BorderStyle = field(default_factory=BorderStyle)

    # Lines outside a fence that are rendered as code anyway
    command_prefixes: Tuple[str, ...] = ("git ", "cd ", "npm ", "mvn ", "CREATE ", "spring.")


DEFAULT_STYLE = StyleConfig()
