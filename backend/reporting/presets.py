"""Default export parameters for each clinical document type."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict

from models import PageSize


class DocumentType(str, Enum):
    PRESCRIPTION = "prescription"
    LAB_ORDER = "lab_order"
    LAB_RESULT = "lab_result"
    CONSULTATION = "consultation"
    DISCHARGE = "discharge"
    CERTIFICATE = "certificate"
    INVOICE = "invoice"
    RECEIPT = "receipt"
    REFERRAL = "referral"
    APPOINTMENT = "appointment"


class PresetEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    id_prefix: str
    page_size: PageSize


PRESETS: Mapping[DocumentType, PresetEntry] = MappingProxyType({
    DocumentType.PRESCRIPTION: PresetEntry(title="Prescription", id_prefix="RX", page_size=PageSize.A5),
    DocumentType.LAB_ORDER: PresetEntry(title="Laboratory Order", id_prefix="LAB", page_size=PageSize.A4),
    DocumentType.LAB_RESULT: PresetEntry(title="Laboratory Result Report", id_prefix="LAB", page_size=PageSize.A4),
    DocumentType.CONSULTATION: PresetEntry(title="Consultation Record", id_prefix="CON", page_size=PageSize.A4),
    DocumentType.DISCHARGE: PresetEntry(title="Discharge Summary", id_prefix="DIS", page_size=PageSize.A4),
    DocumentType.CERTIFICATE: PresetEntry(title="Medical Certificate", id_prefix="CERT", page_size=PageSize.A4),
    DocumentType.INVOICE: PresetEntry(title="Invoice", id_prefix="INV", page_size=PageSize.A4),
    DocumentType.RECEIPT: PresetEntry(title="Payment Receipt", id_prefix="REC", page_size=PageSize.A5),
    DocumentType.REFERRAL: PresetEntry(title="Referral Letter", id_prefix="REF", page_size=PageSize.A4),
    DocumentType.APPOINTMENT: PresetEntry(title="Appointment Confirmation", id_prefix="APT", page_size=PageSize.A5),
})


def get_preset(document_type: DocumentType | str) -> PresetEntry:
    try:
        key = DocumentType(document_type)
    except ValueError:
        raise ValueError(f"Unknown document type: {document_type}") from None
    return PRESETS[key]


def list_presets() -> list[tuple[DocumentType, PresetEntry]]:
    return list(PRESETS.items())
