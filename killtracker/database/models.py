"""
Pydantic models for stored kill records.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field

from ..parser.events import Mode, build_record_key


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class KillRecord(BaseModel):
    """Aggregate kill count and pet status for one boss and mode."""

    subject: str = Field(..., description="Normalized boss name")
    mode: Mode = Field(Mode.NONE, description="Difficulty mode")
    kill_count: int = Field(0, ge=0, description="Latest kill count seen in chat")
    pet_acquired: bool = Field(False, description="Pet drop seen for this boss and mode")
    updated_at: datetime = Field(default_factory=utc_now)

    class Config:
        json_schema_extra = {
            "example": {
                "subject": "vorkath",
                "mode": "hm",
                "kill_count": 5,
                "pet_acquired": False,
                "updated_at": "2025-09-15T21:30:21.462000Z",
            }
        }

    @property
    def record_key(self) -> str:
        """Aggregation key for this record."""
        return build_record_key(self.subject, self.mode)

    @property
    def label(self) -> str:
        """Boss label including the mode tag when there is one."""
        return f"{self.subject} ({self.mode.tag})" if self.mode.tag else self.subject
