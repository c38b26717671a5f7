"""CSV export of attendance rows."""
from __future__ import annotations
from datetime import date, datetime
from typing import Any, Mapping, Sequence

EXPORT_COLUMNS = (
    "person_id",
    "name",
    "registered_at",
    "service_date",
    "service_weekday",
    "attended",
    "declared_frequency",
    "registration_type",
)


def _render(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        text = value.isoformat()
    elif isinstance(value, str):
        text = value.replace('"', '""')
    else:
        text = str(value)
    return f'"{text}"' if "," in text else text


def serialize_attendance(rows: Sequence[Mapping[str, Any]]) -> str:
    """Render *rows* as CSV. The first row's keys, in order, form the header."""
    if not rows:
        return ""
    headers = list(rows[0].keys())
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(_render(row.get(header)) for header in headers))
    return "\n".join(lines)
