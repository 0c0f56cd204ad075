"""Tests for diva.utils.helpers."""
from datetime import date

from diva.utils.helpers import (
    build_docx_filename,
    format_long_date,
    sanitize_filename_segment,
    slugify,
    split_developers,
    truncate_text,
)


def test_sanitize_filename_segment():
    assert sanitize_filename_segment("My App! 2.0") == "My_App__2_0"
    assert sanitize_filename_segment("") == ""


def test_build_docx_filename():
    name = build_docx_filename("My App! 2.0", "dev-setup", date(2026, 3, 9))
    assert name == "My_App__2_0_dev-setup_2026-03-09.docx"


def test_format_long_date_unpadded_day():
    assert format_long_date(date(2026, 10, 5)) == "October 5, 2026"


def test_split_developers_skips_blank_lines():
    assert split_developers("  Ana Cruz \n\n Ben Reyes\n") == ["Ana Cruz", "Ben Reyes"]
    assert split_developers(None) == []


def test_slugify():
    assert slugify("  Inventory   Tracker ") == "inventory-tracker"
    assert slugify("Inventory Tracker", "_") == "inventory_tracker"


def test_truncate_text():
    assert truncate_text("short", 10) == "short"
    assert truncate_text("a" * 20, 10) == "aaaaaaa..."
