"""
Export formats for stored kill records.

All exports list records sorted by record key so the output is stable.
"""

import csv
import io
import json
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from .database.models import KillRecord, utc_now

RecordItems = Iterable[Tuple[str, KillRecord]]

PET_YES = "✅"
PET_NO = "❌"


def _sorted(records: RecordItems) -> List[Tuple[str, KillRecord]]:
    return sorted(records, key=lambda item: item[0])


def build_export_text(records: RecordItems, generated_at: Optional[datetime] = None) -> str:
    """
    Build the plain text export.

    Args:
        records: (record key, record) pairs
        generated_at: Timestamp printed in the header (defaults to now)

    Returns:
        Export text
    """
    generated_at = generated_at or utc_now()

    out = ["KillTracker export", f"Generated: {generated_at.isoformat()}", ""]
    for _, record in _sorted(records):
        out.append(record.label)
        out.append(f"  KC: {record.kill_count}")
        out.append(f"  Pet: {PET_YES if record.pet_acquired else PET_NO}")
        out.append("")

    return "\n".join(out)


def export_json(records: RecordItems) -> str:
    """Export records as a JSON list."""
    data = []
    for key, record in _sorted(records):
        data.append(
            {
                "key": key,
                "boss": record.subject,
                "mode": record.mode.tag,
                "kill_count": record.kill_count,
                "pet": record.pet_acquired,
                "updated_at": record.updated_at.isoformat(),
            }
        )

    return json.dumps(data, indent=2)


def export_csv(records: RecordItems) -> str:
    """Export records as CSV."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Key", "Boss", "Mode", "KC", "Pet", "Updated"])

    for key, record in _sorted(records):
        writer.writerow(
            [
                key,
                record.subject,
                record.mode.tag or "",
                record.kill_count,
                "yes" if record.pet_acquired else "no",
                record.updated_at.isoformat(),
            ]
        )

    return buffer.getvalue()


EXPORTERS = {
    "text": build_export_text,
    "json": export_json,
    "csv": export_csv,
}


def default_export_filename(fmt: str = "text", today: Optional[datetime] = None) -> str:
    """File name used when exporting without an explicit output path."""
    today = today or utc_now()
    extension = {"text": "txt"}.get(fmt, fmt)
    return f"killtracker_export_{today.strftime('%Y-%m-%d')}.{extension}"
