"""Persisted player snapshot."""
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from cadence.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlayerSave(Base):
    """One row per player; ``state`` holds the serialized GameState."""

    __tablename__ = "player_saves"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # player UUID
    external_token: Mapped[str | None] = mapped_column(String(255), unique=True, index=True, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[dict] = mapped_column(JSON, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )
