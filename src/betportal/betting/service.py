"""
Betting service: game lifecycle, bet placement and settlement.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from betportal.betting.models import Bet, BetStatus, Game, GameStatus
from betportal.betting.repository import BetRepositoryProtocol, GameRepositoryProtocol
from betportal.betting.schemas import BetCreate, GameCreate
from betportal.shared.exceptions import (
    InvalidStatusTransitionError,
    NotFoundError,
    ValidationError,
)
from betportal.shared.logging import get_logger, log_with_context

logger = get_logger(__name__)

CENTS = Decimal("0.01")

VALID_TRANSITIONS: dict[GameStatus, set[GameStatus]] = {
    GameStatus.UPCOMING: {GameStatus.ACTIVE, GameStatus.CANCELLED},
    GameStatus.ACTIVE: {GameStatus.COMPLETED, GameStatus.CANCELLED},
    GameStatus.COMPLETED: set(),
    GameStatus.CANCELLED: set(),
}


def compute_payout(amount: Decimal, multiplier: Decimal | float | str) -> Decimal:
    """Stake times multiplier, rounded half-up to cents."""
    return (Decimal(amount) * Decimal(str(multiplier))).quantize(CENTS, rounding=ROUND_HALF_UP)


class BettingService:
    """Service for game and bet operations."""

    def __init__(
        self,
        game_repository: GameRepositoryProtocol,
        bet_repository: BetRepositoryProtocol,
    ) -> None:
        self._games = game_repository
        self._bets = bet_repository

    async def create_game(self, data: GameCreate) -> Game:
        game = Game(
            name=data.name,
            type=data.type,
            start_time=data.start_time,
            end_time=data.end_time,
            min_bet=data.min_bet,
            max_bet=data.max_bet,
            odds={k: str(v) for k, v in data.odds.items()} if data.odds else None,
            status=GameStatus.UPCOMING,
        )
        game = await self._games.create(game)
        logger.info("Game created", extra={"game_id": game.id, "type": game.type})
        return game

    async def get_game(self, game_id: int) -> Game:
        """Return the game or raise ``NotFoundError``."""
        game = await self._games.get_by_id(game_id)
        if game is None:
            raise NotFoundError("Game", game_id)
        return game

    async def list_games(self, status: GameStatus | None = None) -> Sequence[Game]:
        return await self._games.list_by_status(status)

    async def open_game(self, game_id: int) -> Game:
        """Move an upcoming game to active so it accepts bets."""
        game = await self.get_game(game_id)
        self._transition(game, GameStatus.ACTIVE)
        return await self._games.update(game)

    async def place_bet(self, user_id: int, data: BetCreate) -> Bet:
        """Place a bet on an active game.

        Raises:
            NotFoundError: If the game does not exist.
            ValidationError: If the game is not active, the amount is outside
                the game's limits, or the game has no odds for the bet type.
        """
        game = await self.get_game(data.game_id)

        if game.status != GameStatus.ACTIVE:
            raise ValidationError(
                "Game is not accepting bets",
                details={"game_id": game.id, "status": game.status.value},
            )

        if data.bet_amount < game.min_bet or data.bet_amount > game.max_bet:
            raise ValidationError(
                f"Bet amount must be between {game.min_bet} and {game.max_bet}",
                details={
                    "bet_amount": str(data.bet_amount),
                    "min_bet": str(game.min_bet),
                    "max_bet": str(game.max_bet),
                },
            )

        multiplier = (game.odds or {}).get(data.bet_type)
        if multiplier is None:
            raise ValidationError(
                f"No odds defined for bet type '{data.bet_type}'",
                details={"bet_type": data.bet_type, "game_id": game.id},
            )

        bet = Bet(
            user_id=user_id,
            game_id=game.id,
            bet_number=data.bet_number,
            bet_amount=data.bet_amount,
            bet_type=data.bet_type,
            potential_payout=compute_payout(data.bet_amount, multiplier),
            status=BetStatus.PENDING,
        )
        bet = await self._bets.create(bet)

        logger.info(
            "Bet placed",
            extra={
                "bet_id": bet.id,
                "game_id": game.id,
                "user_id": user_id,
                "bet_type": bet.bet_type,
                "amount": str(bet.bet_amount),
            },
        )
        return bet

    async def settle_game(self, game_id: int, result: str) -> Game:
        """Record the result, complete the game and resolve its pending bets."""
        result = result.strip()
        if not result:
            raise ValidationError("Result must not be blank", details={"game_id": game_id})

        game = await self.get_game(game_id)
        self._transition(game, GameStatus.COMPLETED)
        game.result = result

        won = lost = 0
        for bet in await self._bets.list_by_game(game.id, status=BetStatus.PENDING):
            if bet.bet_number == result:
                bet.status = BetStatus.WON
                bet.actual_payout = bet.potential_payout
                won += 1
            else:
                bet.status = BetStatus.LOST
                bet.actual_payout = Decimal("0.00")
                lost += 1

        await self._bets.flush()
        game = await self._games.update(game)
        log_with_context(
            logger,
            logging.INFO,
            "Game settled",
            game_id=game.id,
            result=result,
            won=won,
            lost=lost,
        )
        return game

    async def cancel_game(self, game_id: int) -> Game:
        """Cancel a game that has not completed; its pending bets are cancelled."""
        game = await self.get_game(game_id)
        self._transition(game, GameStatus.CANCELLED)

        for bet in await self._bets.list_by_game(game.id, status=BetStatus.PENDING):
            bet.status = BetStatus.CANCELLED

        await self._bets.flush()
        game = await self._games.update(game)
        logger.info("Game cancelled", extra={"game_id": game.id})
        return game

    @staticmethod
    def _transition(game: Game, target: GameStatus) -> None:
        if target not in VALID_TRANSITIONS[game.status]:
            raise InvalidStatusTransitionError(game.status, target)
        game.status = target
