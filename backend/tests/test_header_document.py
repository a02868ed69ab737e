from __future__ import annotations

from datetime import date

from models import ExportRequest, Orientation, PageSize
from models_branding import DEFAULT_THEME_COLOR, BrandProfile, LetterheadConfig
from reporting.document import compose_document
from reporting.header import DEFAULT_DISCLAIMER, compose_footer, compose_header


def _brand(**letterhead) -> BrandProfile:
    return BrandProfile(
        brand_id="rfc",
        name="Riverside Family Clinic",
        type="clinic",
        logo_url="https://cdn.example/logo.png",
        theme_color="#047857",
        address="42 Riverside Drive",
        phone="+1 555 0100",
        email="desk@riverside.example",
        letterhead=LetterheadConfig(
            tagline="Family medicine, close to home",
            accreditation="Accredited Primary Care",
            certifications=("ISO 9001", "JCI"),
            footer_note="Bring this to your next visit.",
            **letterhead,
        ),
    )


def test_header_is_deterministic():
    brand = _brand()
    a = compose_header(brand, "Prescription", document_id="RX-1", document_date="2026-03-04", subject="Ada Obi")
    b = compose_header(brand, "Prescription", document_id="RX-1", document_date="2026-03-04", subject="Ada Obi")
    assert a == b
    assert compose_footer(brand) == compose_footer(brand)


def test_header_contains_branding_and_meta():
    html = compose_header(_brand(), "Prescription", document_id="RX-1", document_date=date(2026, 3, 4), subject="Ada Obi")
    assert "Riverside Family Clinic" in html
    assert "Medical Clinic" in html
    assert "Family medicine, close to home" in html
    assert "Accredited Primary Care" in html
    assert 'src="https://cdn.example/logo.png"' in html
    assert "#047857" in html
    assert "Doc ID: RX-1" in html
    assert "Patient: Ada Obi" in html
    assert "Date: Wednesday 4 March 2026" in html
    assert "42 Riverside Drive" in html
    assert "desk@riverside.example" in html


def test_header_omits_date_when_not_supplied():
    html = compose_header(_brand(), "Invoice", document_id="INV-9")
    assert "Date:" not in html


def test_absent_contact_fields_are_omitted():
    brand = BrandProfile(brand_id="x", name="Bare Clinic")
    html = compose_header(brand, "Invoice")
    assert "contact-info" not in html
    assert "contact-item" not in html


def test_visibility_flags_suppress_blocks_independently():
    html = compose_header(_brand(show_tagline=False), "T")
    assert "Family medicine" not in html
    assert "Accredited Primary Care" in html

    html = compose_header(_brand(show_accreditation=False), "T")
    assert "Accredited Primary Care" not in html
    assert "Family medicine" in html

    html = compose_header(_brand(show_logo=False), "T")
    assert "org-logo" not in html

    footer = compose_footer(_brand(show_certifications=False))
    assert "ISO 9001" not in footer
    assert "Bring this to your next visit." in footer


def test_logo_falls_back_to_initials():
    brand = BrandProfile(brand_id="x", name="Zenith Health")
    html = compose_header(brand, "T")
    assert '<div class="org-logo-text">ZE</div>' in html


def test_header_without_brand_is_minimal():
    html = compose_header(None, "Referral Letter", document_id="REF-2")
    assert "Referral Letter" in html
    assert "Doc ID: REF-2" in html
    assert DEFAULT_THEME_COLOR in html
    assert "header-gradient" not in html
    assert compose_footer(None) == ""


def test_footer_uses_default_disclaimer():
    brand = BrandProfile(brand_id="x", name="X")
    assert DEFAULT_DISCLAIMER in compose_footer(brand)


def test_brand_text_is_escaped():
    brand = BrandProfile(brand_id="x", name="<script>alert(1)</script>")
    html = compose_header(brand, "T & C")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "T &amp; C" in html


# --- DocumentComposer ---
def test_compose_document_wraps_content_with_page_geometry():
    request = ExportRequest(filename="RX-1", title="Prescription", page_size=PageSize.A5, orientation=Orientation.LANDSCAPE)
    html = compose_document('<div id="body">Amoxicillin</div>', request, _brand())
    assert html.lstrip().startswith("<!DOCTYPE html>")
    assert "@page { size: A5 landscape; margin: 10mm 15mm; }" in html
    assert '<div class="document-content">\n<div id="body">Amoxicillin</div>\n</div>' in html
    assert "<title>Prescription - Riverside Family Clinic</title>" in html
    assert 'class="organization-footer"' in html
    assert "__" not in html.split("<body>")[1]


def test_compose_document_without_footer():
    request = ExportRequest(filename="f", title="T", show_footer=False)
    html = compose_document("<p>x</p>", request, _brand())
    assert 'class="organization-footer"' not in html


def test_compose_document_letter_uses_letter_keyword():
    request = ExportRequest(filename="f", title="T", page_size="Letter")
    assert "size: letter portrait" in compose_document("", request, None)


def test_content_placeholders_are_not_rescanned():
    request = ExportRequest(filename="f", title="T")
    html = compose_document("literal __FOOTER_HTML__ text", request, None)
    assert "literal __FOOTER_HTML__ text" in html


# --- date formatting ---
def test_format_document_date_variants():
    from datetime import datetime

    from reporting.format_utils import format_document_date

    assert format_document_date(None) == ""
    assert format_document_date(datetime(2026, 12, 1, 9, 30)) == "Tuesday 1 December 2026"
    assert format_document_date("2026-03-04T10:00:00Z") == "Wednesday 4 March 2026"
    assert format_document_date("04/03/2026") == "Wednesday 4 March 2026"
    assert format_document_date("04.03.2026") == "Wednesday 4 March 2026"
    assert format_document_date("12/31/2026") == "Thursday 31 December 2026"
    assert format_document_date("next Tuesday") == "next Tuesday"
