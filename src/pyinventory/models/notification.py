"""Transient user-facing notification model."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NotificationLevel(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notification(BaseModel):
    """A one-shot message, auto-dismissed after ``ttl`` seconds."""

    model_config = ConfigDict(frozen=True)

    message: str
    level: NotificationLevel = NotificationLevel.INFO
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    ttl: float = 6.0

    @field_validator("created_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(seconds=self.ttl)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
