"""
Branded letterhead header and footer fragments.

Both functions are pure: identical inputs give byte-identical markup. Nothing
here reads the clock; a date line is rendered only when the caller passes one.
"""
from __future__ import annotations

from typing import Any

from models_branding import DEFAULT_THEME_COLOR, BrandProfile, LetterheadConfig

from .format_utils import escape, format_document_date

DEFAULT_DISCLAIMER = (
    "This document is confidential and intended solely for the addressed recipient. "
    "Unauthorized disclosure, copying, or distribution is strictly prohibited."
)

_NO_LETTERHEAD = LetterheadConfig()


def _letterhead(brand: BrandProfile) -> LetterheadConfig:
    return brand.letterhead or _NO_LETTERHEAD


def _logo_block(brand: BrandProfile, config: LetterheadConfig) -> str:
    if not config.show_logo:
        return ""
    if brand.logo_url:
        inner = f'<img src="{escape(brand.logo_url)}" alt="{escape(brand.name)}" class="org-logo-img">'
    else:
        inner = f'<div class="org-logo-text">{escape(brand.initials)}</div>'
    return f'<div class="org-logo-container">{inner}</div>'


def _contact_block(brand: BrandProfile) -> str:
    items = [
        ("address", brand.address),
        ("phone", brand.phone),
        ("email", brand.email),
        ("website", brand.website),
    ]
    lines = "".join(
        f'<div class="contact-item contact-{kind}">{escape(value)}</div>'
        for kind, value in items
        if value
    )
    return f'<div class="contact-info">{lines}</div>' if lines else ""


def _title_bar(
    title: str,
    accent: str,
    document_id: str | None,
    document_date: Any,
    subject: str | None,
) -> str:
    meta = []
    if document_id:
        meta.append(f'<span class="meta-item">Doc ID: {escape(document_id)}</span>')
    if subject:
        meta.append(f'<span class="meta-item">Patient: {escape(subject)}</span>')
    date_text = format_document_date(document_date)
    if date_text:
        meta.append(f'<span class="meta-item">Date: {escape(date_text)}</span>')
    return (
        f'<div class="document-title-bar" style="border-left-color: {escape(accent)};">'
        f'<div class="title-content">'
        f'<h2 class="document-title" style="color: {escape(accent)};">{escape(title)}</h2>'
        f'<div class="document-meta">{"".join(meta)}</div>'
        f"</div></div>"
    )


def compose_header(
    brand: BrandProfile | None,
    title: str,
    *,
    document_id: str | None = None,
    document_date: Any = None,
    subject: str | None = None,
) -> str:
    """Letterhead band plus document title bar. Without a brand only the title bar is emitted."""
    if brand is None:
        bar = _title_bar(title, DEFAULT_THEME_COLOR, document_id, document_date, subject)
        return f'<div class="organization-header">{bar}</div>'

    config = _letterhead(brand)
    primary = brand.primary_color
    secondary = brand.secondary_color

    identity = [f'<h1 class="org-name">{escape(brand.name)}</h1>', f'<p class="org-type">{escape(brand.type_label)}</p>']
    if config.show_tagline and config.tagline:
        identity.append(f'<p class="org-tagline">{escape(config.tagline)}</p>')
    if config.show_accreditation and config.accreditation:
        identity.append(f'<span class="org-accreditation">{escape(config.accreditation)}</span>')

    band = (
        f'<div class="header-gradient" style="background: linear-gradient(135deg, {escape(primary)} 0%, {escape(secondary)} 100%);">'
        f'<div class="header-content">'
        f'<div class="org-identity">{_logo_block(brand, config)}<div class="org-info">{"".join(identity)}</div></div>'
        f"{_contact_block(brand)}"
        f"</div></div>"
    )
    bar = _title_bar(title, primary, document_id, document_date, subject)
    return f'<div class="organization-header">{band}{bar}</div>'


def compose_footer(brand: BrandProfile | None) -> str:
    """Certification badges, footer note, organization line and disclaimer. Empty without a brand."""
    if brand is None:
        return ""
    config = _letterhead(brand)
    primary = escape(brand.primary_color)

    certifications = ""
    if config.show_certifications and config.certifications:
        badges = "".join(
            f'<span class="certification-badge" style="background: {primary};">{escape(c)}</span>'
            for c in config.certifications
        )
        certifications = f'<div class="certifications">{badges}</div>'

    note = f'<div class="footer-note">{escape(config.footer_note)}</div>' if config.footer_note else ""
    disclaimer = escape(config.disclaimer or DEFAULT_DISCLAIMER)
    return (
        f'<div class="organization-footer" style="border-top-color: {primary};">'
        f"{certifications}"
        f'<div class="footer-content"><div>{note}'
        f'<span class="footer-org-name" style="color: {primary};">{escape(brand.name)}</span> | {escape(brand.type_label)}'
        f"</div></div>"
        f'<div class="disclaimer">{disclaimer}</div>'
        f"</div>"
    )
