"""
Tests for record export formats.
"""

import csv
import io
import json
from datetime import datetime, timezone

import pytest

from killtracker.database.models import KillRecord
from killtracker.export import (
    PET_NO,
    PET_YES,
    build_export_text,
    default_export_filename,
    export_csv,
    export_json,
)
from killtracker.parser.events import Mode

STAMP = datetime(2025, 9, 15, 21, 30, tzinfo=timezone.utc)


@pytest.fixture
def records():
    """Unsorted (key, record) pairs."""
    return [
        ("vorkath_hm", KillRecord(subject="vorkath", mode=Mode.HARD, kill_count=5, updated_at=STAMP)),
        (
            "general_graardor_nm",
            KillRecord(
                subject="general graardor",
                mode=Mode.NORMAL,
                kill_count=1234,
                pet_acquired=True,
                updated_at=STAMP,
            ),
        ),
        ("kreearra", KillRecord(subject="kreearra", kill_count=0, updated_at=STAMP)),
    ]


class TestTextExport:
    """Test the plain text export."""

    def test_layout(self, records):
        text = build_export_text(records, generated_at=STAMP)

        assert text.splitlines() == [
            "KillTracker export",
            "Generated: 2025-09-15T21:30:00+00:00",
            "",
            "general graardor (nm)",
            "  KC: 1234",
            f"  Pet: {PET_YES}",
            "",
            "kreearra",
            "  KC: 0",
            f"  Pet: {PET_NO}",
            "",
            "vorkath (hm)",
            "  KC: 5",
            f"  Pet: {PET_NO}",
        ]

    def test_empty(self):
        text = build_export_text([], generated_at=STAMP)

        assert "KC:" not in text


class TestStructuredExport:
    """Test JSON and CSV exports."""

    def test_json(self, records):
        data = json.loads(export_json(records))

        assert [row["key"] for row in data] == ["general_graardor_nm", "kreearra", "vorkath_hm"]
        assert data[0] == {
            "key": "general_graardor_nm",
            "boss": "general graardor",
            "mode": "nm",
            "kill_count": 1234,
            "pet": True,
            "updated_at": "2025-09-15T21:30:00+00:00",
        }
        assert data[1]["mode"] is None

    def test_csv(self, records):
        rows = list(csv.reader(io.StringIO(export_csv(records))))

        assert rows[0] == ["Key", "Boss", "Mode", "KC", "Pet", "Updated"]
        assert rows[1][:5] == ["general_graardor_nm", "general graardor", "nm", "1234", "yes"]
        assert rows[2][:5] == ["kreearra", "kreearra", "", "0", "no"]
        assert len(rows) == 4


def test_default_export_filename():
    assert default_export_filename("text", STAMP) == "killtracker_export_2025-09-15.txt"
    assert default_export_filename("csv", STAMP) == "killtracker_export_2025-09-15.csv"
