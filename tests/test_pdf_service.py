"""Tests for Appearance form rendering."""

from datetime import date

from legal_navigator.services.pdf_service import (
    format_form_date,
    render_appearance_form,
    split_address,
)

FULL_FORM = {
    "county": "Marion",
    "court": "Superior Court",
    "caseNumber": "49D01-2024-EV-001234",
    "plaintiff": "ABC Property Management",
    "defendant": "John Smith",
    "agreeToNotify": True,
    "mailingAddress": "123 Main St, Indianapolis, IN 46202",
    "phone": "(317) 555-0123",
    "email": "john.smith@email.com",
}


def test_renders_pdf():
    content = render_appearance_form(FULL_FORM, today=date(2026, 1, 5))
    assert content.startswith(b"%PDF")
    assert content.rstrip().endswith(b"%%EOF")


def test_renders_empty_form():
    """Absent fields simply stay blank."""
    assert render_appearance_form({}).startswith(b"%PDF")


def test_renders_declined_notification():
    form = dict(FULL_FORM, agreeToNotify=False)
    assert render_appearance_form(form).startswith(b"%PDF")


# ── split_address ────────────────────────────────────────────


def test_short_address_single_line():
    assert split_address("123 Main St, Indianapolis, IN 46202") == ("123 Main St, Indianapolis, IN 46202", None)


def test_long_address_split_at_first_comma():
    address = "4567 North Meridian Street Apartment 12B, Indianapolis, Indiana 46208-1234"
    assert len(address) > 60
    assert split_address(address) == (
        "4567 North Meridian Street Apartment 12B",
        "Indianapolis, Indiana 46208-1234",
    )


def test_long_address_without_comma():
    address = "4567 North Meridian Street Apartment 12B Indianapolis Indiana 46208"
    assert split_address(address) == (address, None)


def test_multi_line_address():
    assert split_address("123 Main St\nIndianapolis, IN 46202\nUSA") == ("123 Main St", "Indianapolis, IN 46202")


def test_format_form_date():
    assert format_form_date(date(2026, 1, 5)) == "1/5/2026"
    assert format_form_date(date(2025, 12, 31)) == "12/31/2025"
