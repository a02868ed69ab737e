"""Consistent formatting for document dates and escaped letterhead text."""
from __future__ import annotations

import html
from datetime import date, datetime
from typing import Any

# day-first before month-first: 04/03/2026 is 4 March
_DATE_INPUT_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d.%m.%Y", "%Y/%m/%d", "%m/%d/%Y", "%m.%d.%Y")


def escape(s: Any) -> str:
    return html.escape("" if s is None else str(s), quote=True)


def parse_date(d: Any) -> date | None:
    if d is None:
        return None
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    text = str(d).strip()
    if not text:
        return None
    for fmt in _DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text[:10], fmt).date()
        except ValueError:
            continue
    return None


def format_document_date(d: Any) -> str:
    """Long form used on letterheads, e.g. 'Wednesday 4 March 2026'. Unparseable text is shown as given."""
    parsed = parse_date(d)
    if parsed is None:
        return "" if d is None else str(d).strip()
    return f"{parsed.strftime('%A')} {parsed.day} {parsed.strftime('%B')} {parsed.year}"
