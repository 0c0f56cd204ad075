"""
Common utility functions and helpers.
"""
from datetime import date
from typing import List, Optional
import re


def sanitize_filename_segment(text: str) -> str:
    """
    Make text safe for use inside a download filename.

    Args:
        text: Raw text (usually the application name)

    Returns:
        Text with every character outside [A-Za-z0-9] replaced by "_"
    """
    return re.sub(r'[^A-Za-z0-9]', '_', text or '')


def build_docx_filename(app_name: str, document_type: str, on: Optional[date] = None) -> str:
    """
    Build the attachment filename for a generated guide.

    Args:
        app_name: Application name from the form
        document_type: Document type tag ("dev-setup" / "user-guide")
        on: Date stamp (default: today)

    Returns:
        "{sanitized-app-name}_{document_type}_{YYYY-MM-DD}.docx"
    """
    stamp = (on or date.today()).isoformat()
    return f"{sanitize_filename_segment(app_name)}_{document_type}_{stamp}.docx"


def format_long_date(value: date) -> str:
    """
    Format a date the way the title page prints it.

    Args:
        value: Date to format

    Returns:
        e.g. "October 5, 2026" (full month name, unpadded day)
    """
    return f"{value:%B} {value.day}, {value.year}"


def split_developers(raw: Optional[str]) -> List[str]:
    """
    Split the free-text developers field into names.

    Args:
        raw: One developer per line, possibly with blank lines

    Returns:
        Trimmed, non-empty names in input order
    """
    if not raw:
        return []
    return [line.strip() for line in raw.splitlines() if line.strip()]


def slugify(text: str, separator: str = "-") -> str:
    """
    Lowercase text and collapse whitespace runs into a separator.

    Args:
        text: Text to convert
        separator: Replacement for whitespace runs

    Returns:
        Slug used for default repository / database names in prompts
    """
    return re.sub(r'\s+', separator, (text or '').strip().lower())


def truncate_text(text: str, max_length: int = 200, suffix: str = "...") -> str:
    """
    Truncate text to maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
