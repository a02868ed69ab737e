"""
Generate sample branded documents for every preset:
1) default clinic letterhead
2) sample clinic with certifications and footer note

HTML previews are always written; PDFs and the CSV sample are written through
the export pipeline (PDFs need Playwright + Chromium).

Usage:
  cd backend
  python3 scripts/generate_document_fixtures.py
"""
from __future__ import annotations

import asyncio
import os
import sys
from datetime import date
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from brands import get_brand
from models import ExportFormat
from reporting.csv_export import export_tabular
from reporting.facade import DocumentExporter, preview_document
from reporting.presets import list_presets
from reporting.surfaces import DirectorySink

OUT_DIR = Path(os.getenv("EXPORT_OUTPUT_DIR", str(BACKEND_DIR / "exports" / "fixtures")))

SAMPLE_CONTENT = """
<div class="section">
  <div class="section-title">Patient Information</div>
  <p><strong>Name:</strong> Ada Obi</p>
  <p><strong>DOB:</strong> 1988-02-14</p>
</div>
<div class="medication">
  <h4>Amoxicillin 500mg</h4>
  <p><strong>Dosage:</strong> 1 capsule</p>
  <p><strong>Frequency:</strong> Three times daily</p>
  <p><strong>Duration:</strong> 7 days</p>
</div>
<div class="signature-section">
  <div class="signature-box"><div class="signature-line">Healthcare Provider Signature</div></div>
  <div class="signature-box"><div class="signature-line">Date &amp; Stamp</div></div>
</div>
"""

SAMPLE_RECORDS = [
    {"patient": "Ada Obi", "test": "Full Blood Count", "status": "completed", "notes": 'Hb low, "repeat" in 2 weeks'},
    {"patient": "Tunde Bello", "test": "Lipid Panel", "status": "pending", "notes": "Fasting, 12h"},
]


def _write_previews(brand_id: str) -> None:
    brand = get_brand(brand_id)
    for kind, preset in list_presets():
        html = preview_document(kind, brand, "Ada Obi", 1001, SAMPLE_CONTENT, document_date=date.today())
        path = OUT_DIR / brand_id / f"{preset.id_prefix}-1001-{kind.value}.html"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    print(f"[fixture] wrote previews for brand={brand_id}")


async def _write_pdfs(brand_id: str) -> None:
    from reporting.browser import open_render_host

    brand = get_brand(brand_id)
    sink = DirectorySink(OUT_DIR / brand_id)
    async with open_render_host() as host:
        exporter = DocumentExporter(host, sink)
        for kind, _preset in list_presets():
            await exporter.export_document(
                kind, brand, "Ada Obi", 1001, SAMPLE_CONTENT,
                output=ExportFormat.PDF, document_date=date.today(),
            )
    print(f"[fixture] wrote PDFs for brand={brand_id}")


def main() -> None:
    OUT_DIR.mkdir(parents=True, exist_ok=True)
    export_tabular(SAMPLE_RECORDS, "lab-worklist", DirectorySink(OUT_DIR))
    for brand_id in ("default", "sample"):
        _write_previews(brand_id)
        try:
            asyncio.run(_write_pdfs(brand_id))
        except Exception as exc:  # pragma: no cover - local tooling fallback
            print(f"[fixture] {brand_id}: PDF generation skipped ({exc})")
    print(f"[fixture] complete. Outputs in {OUT_DIR}")


if __name__ == "__main__":
    main()
