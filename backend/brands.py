"""In-repo brand registry for development and white-labeling."""
from __future__ import annotations

from models_branding import BrandProfile, LetterheadConfig

BRANDS: dict[str, BrandProfile] = {
    "default": BrandProfile(
        brand_id="default",
        name="Healthcare Facility",
        type="clinic",
        logo_url=None,
        theme_color="#1e40af",
        address="123 Healthcare Avenue",
        phone="+234 802 123 4567",
        email="info@clinic.com",
        website="www.clinic.com",
        letterhead=LetterheadConfig(
            tagline="Excellence in Healthcare Services",
            accreditation="Licensed Healthcare Facility",
            primary_color="#1e40af",
            secondary_color="#3b82f6",
        ),
    ),
    "sample": BrandProfile(
        brand_id="sample",
        name="Riverside Family Clinic",
        type="specialist_center",
        logo_url=None,
        theme_color="#047857",
        address="42 Riverside Drive, Suite 3",
        phone="+1 (555) 010-2020",
        email="frontdesk@riversideclinic.example",
        website="riversideclinic.example",
        letterhead=LetterheadConfig(
            tagline="Family medicine, close to home",
            accreditation="Accredited Primary Care Provider",
            certifications=("ISO 9001", "JCI Accredited"),
            footer_note="Please bring this document to your next visit.",
            disclaimer="This document contains confidential medical information intended for the named patient and their care providers only.",
            secondary_color="#10b981",
            show_certifications=True,
        ),
    ),
}


def get_brand(brand_id: str) -> BrandProfile | None:
    return BRANDS.get(brand_id)


def list_brands() -> list[BrandProfile]:
    return list(BRANDS.values())


def default_brand() -> BrandProfile:
    return BRANDS["default"]
