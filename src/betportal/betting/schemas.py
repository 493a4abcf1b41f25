"""
Pydantic schemas for games and bets.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from betportal.betting.models import BetStatus, GameStatus


class GameCreate(BaseModel):
    """Schema for creating a game."""

    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=255, description="single, jodi, panna, ...")
    start_time: datetime
    end_time: datetime
    min_bet: Decimal = Field(default=Decimal("10.00"), gt=0, max_digits=10, decimal_places=2)
    max_bet: Decimal = Field(default=Decimal("10000.00"), gt=0, max_digits=10, decimal_places=2)
    odds: dict[str, Decimal] | None = Field(
        default=None,
        description="Payout multiplier per bet type",
    )

    @field_validator("odds")
    @classmethod
    def validate_odds(cls, v: dict[str, Decimal] | None) -> dict[str, Decimal] | None:
        if v is None:
            return v
        for bet_type, multiplier in v.items():
            if multiplier <= 0:
                raise ValueError(f"Odds for '{bet_type}' must be positive")
        return v

    @model_validator(mode="after")
    def validate_window_and_limits(self) -> "GameCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        if self.min_bet > self.max_bet:
            raise ValueError("min_bet must not exceed max_bet")
        return self


class GameResponse(BaseModel):
    """Schema for game response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    start_time: datetime
    end_time: datetime
    result: str | None
    status: GameStatus
    min_bet: Decimal
    max_bet: Decimal
    odds: dict[str, Decimal] | None


class BetCreate(BaseModel):
    """Schema for placing a bet."""

    game_id: int = Field(..., gt=0)
    bet_number: str = Field(..., min_length=1, max_length=255)
    bet_amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    bet_type: str = Field(..., min_length=1, max_length=255)

    @field_validator("bet_number", "bet_type")
    @classmethod
    def strip_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class BetResponse(BaseModel):
    """Schema for bet response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    game_id: int
    bet_number: str
    bet_amount: Decimal
    potential_payout: Decimal
    actual_payout: Decimal | None
    status: BetStatus
    bet_type: str
