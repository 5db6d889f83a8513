"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    # square name ("a1") -> FEN letter of the piece, or null for an empty square
    squares: Mapped[dict[str, Optional[str]]] = mapped_column(JSON)
    side_to_move: Mapped[str]
    phase: Mapped[str]
    end_reason: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
