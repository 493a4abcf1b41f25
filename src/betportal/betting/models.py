"""
SQLAlchemy models for games and bets.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum as PyEnum
from typing import Any

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from betportal.auth.models import User
from betportal.shared.database import Base


class GameStatus(str, PyEnum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BetStatus(str, PyEnum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    CANCELLED = "cancelled"


def _enum_values(enum_cls: type[PyEnum]) -> list[str]:
    return [member.value for member in enum_cls]


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class Game(TimestampMixin, Base):
    """A drawing users can bet on. ``type`` is the game family (single, jodi, panna, ...)."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(255), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    result: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[GameStatus] = mapped_column(
        Enum(GameStatus, name="game_status", values_callable=_enum_values),
        nullable=False,
        default=GameStatus.UPCOMING,
        server_default=GameStatus.UPCOMING.value,
    )
    min_bet: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("10.00"),
        server_default="10.00",
    )
    max_bet: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("10000.00"),
        server_default="10000.00",
    )
    # bet type -> payout multiplier
    odds: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    bets: Mapped[list["Bet"]] = relationship(
        "Bet",
        back_populates="game",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Game(id={self.id}, name={self.name}, status={self.status})>"


class Bet(TimestampMixin, Base):
    """One user's stake on a number in a game."""

    __tablename__ = "bets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    game_id: Mapped[int] = mapped_column(
        ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bet_number: Mapped[str] = mapped_column(String(255), nullable=False)
    bet_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    potential_payout: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    actual_payout: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    status: Mapped[BetStatus] = mapped_column(
        Enum(BetStatus, name="bet_status", values_callable=_enum_values),
        nullable=False,
        default=BetStatus.PENDING,
        server_default=BetStatus.PENDING.value,
    )
    bet_type: Mapped[str] = mapped_column(String(255), nullable=False)

    game: Mapped[Game] = relationship("Game", back_populates="bets")
    user: Mapped[User] = relationship("User")

    def __repr__(self) -> str:
        return f"<Bet(id={self.id}, game_id={self.game_id}, status={self.status})>"
