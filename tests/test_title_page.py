"""Tests for the title page builder."""
from datetime import date

from diva.models.document import Alignment, DocumentMetadata, DocumentType, PageBreak
from diva.services.title_page import build_title_page

TODAY = date(2026, 10, 5)


def _texts(blocks):
    return [block.text for block in blocks if not isinstance(block, PageBreak)]


def test_full_title_page_order():
    metadata = DocumentMetadata(
        application_name="Inventory Tracker",
        document_type=DocumentType.DEV_SETUP,
        institution_name="Cebu Institute of Technology University",
        developers=("Ana Cruz", "Ben Reyes"),
        supervisor_name="Dr. Lim",
    )
    blocks = build_title_page(metadata, today=TODAY)

    assert _texts(blocks) == [
        "CEBU INSTITUTE OF TECHNOLOGY UNIVERSITY",
        "UNIVERSITY",
        "Developer Setup Guide",
        "for",
        "Inventory Tracker",
        "Developers",
        "Ana Cruz",
        "Ben Reyes",
        "Project Supervisor",
        "Dr. Lim",
        "October 5, 2026",
    ]
    assert isinstance(blocks[-1], PageBreak)
    assert all(b.alignment is Alignment.CENTER for b in blocks[:-1])


def test_minimal_title_page_uses_default_institution():
    metadata = DocumentMetadata(application_name="App", document_type=DocumentType.USER_GUIDE)
    blocks = build_title_page(metadata, today=TODAY)

    # default institution contains "institute", so the UNIVERSITY line follows
    assert _texts(blocks) == [
        "CEBU INSTITUTE OF TECHNOLOGY",
        "UNIVERSITY",
        "User Guide",
        "for",
        "App",
        "October 5, 2026",
    ]


def test_plain_company_has_no_university_line():
    metadata = DocumentMetadata(application_name="App", institution_name="Acme Corp")
    texts = _texts(build_title_page(metadata, today=TODAY))
    assert texts[0] == "ACME CORP"
    assert "UNIVERSITY" not in texts


def test_blank_fields_are_omitted():
    metadata = DocumentMetadata(
        application_name="  ",
        institution_name="Acme",
        developers=("", "  "),
        supervisor_name="   ",
    )
    texts = _texts(build_title_page(metadata, today=TODAY))
    assert texts == ["ACME", "Developer Setup Guide", "for", "October 5, 2026"]


def test_title_page_sizes():
    metadata = DocumentMetadata(application_name="App", institution_name="Acme")
    blocks = build_title_page(metadata, today=TODAY)
    institution, label, for_line, app, when = blocks[:-1]
    assert institution.spans[0].size == 35 and institution.spans[0].bold
    assert label.spans[0].size == 28 and label.spans[0].bold
    assert for_line.spans[0].size == 22 and not for_line.spans[0].bold
    assert app.spans[0].size == 28
    assert when.spans[0].size == 21
    assert app.spacing_after == 360
