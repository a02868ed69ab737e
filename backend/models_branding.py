"""Organization branding for letterheaded clinical documents."""
from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_THEME_COLOR = "#1e40af"
DEFAULT_SECONDARY_COLOR = "#3b82f6"

ORG_TYPE_LABELS: dict[str, str] = {
    "clinic": "Medical Clinic",
    "hospital": "Hospital",
    "health_center": "Health Center",
    "pharmacy": "Pharmacy",
    "diagnostic_center": "Diagnostic Center",
    "dental_clinic": "Dental Clinic",
    "eye_clinic": "Eye Clinic",
    "specialist_center": "Specialist Center",
}


class LetterheadConfig(BaseModel):
    """Letterhead text blocks and the flags that hide them."""
    model_config = ConfigDict(frozen=True)

    tagline: str | None = None
    accreditation: str | None = None
    certifications: Tuple[str, ...] = ()
    footer_note: str | None = None
    disclaimer: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    show_logo: bool = True
    show_tagline: bool = True
    show_accreditation: bool = True
    show_certifications: bool = True


class BrandProfile(BaseModel):
    """Read-only snapshot of an organization's identity, supplied per export."""
    model_config = ConfigDict(frozen=True)

    brand_id: str
    name: str
    type: str = "clinic"
    logo_url: str | None = None
    theme_color: str = DEFAULT_THEME_COLOR
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    letterhead: LetterheadConfig | None = Field(default=None)

    @field_validator("theme_color", mode="before")
    @classmethod
    def _theme_color_fallback(cls, v):
        if v is None or not str(v).strip():
            return DEFAULT_THEME_COLOR
        return str(v).strip()

    @property
    def primary_color(self) -> str:
        if self.letterhead and self.letterhead.primary_color:
            return self.letterhead.primary_color
        return self.theme_color

    @property
    def secondary_color(self) -> str:
        if self.letterhead and self.letterhead.secondary_color:
            return self.letterhead.secondary_color
        return DEFAULT_SECONDARY_COLOR

    @property
    def type_label(self) -> str:
        return ORG_TYPE_LABELS.get(self.type, "Healthcare Facility")

    @property
    def initials(self) -> str:
        return (self.name or "HC")[:2].upper()
