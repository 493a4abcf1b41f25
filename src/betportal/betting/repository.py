"""
Game and bet repositories for database operations.
"""

from typing import Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from betportal.betting.models import Bet, BetStatus, Game, GameStatus


class GameRepositoryProtocol(Protocol):
    """Protocol for game repository operations."""

    async def create(self, game: Game) -> Game: ...
    async def get_by_id(self, game_id: int) -> Game | None: ...
    async def list_by_status(self, status: GameStatus | None = None) -> Sequence[Game]: ...
    async def update(self, game: Game) -> Game: ...


class BetRepositoryProtocol(Protocol):
    """Protocol for bet repository operations."""

    async def create(self, bet: Bet) -> Bet: ...
    async def list_by_game(self, game_id: int, status: BetStatus | None = None) -> Sequence[Bet]: ...
    async def list_by_user(self, user_id: int) -> Sequence[Bet]: ...
    async def flush(self) -> None: ...


class GameRepository:
    """Repository for game database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session.
        """
        self._session = session

    async def create(self, game: Game) -> Game:
        """Create a game.

        Args:
            game: Game to create.

        Returns:
            Created game with ID.
        """
        self._session.add(game)
        await self._session.flush()
        await self._session.refresh(game)
        return game

    async def get_by_id(self, game_id: int) -> Game | None:
        return await self._session.get(Game, game_id)

    async def list_by_status(self, status: GameStatus | None = None) -> Sequence[Game]:
        """List games ordered by start time, optionally filtered by status."""
        stmt = select(Game).order_by(Game.start_time, Game.id)
        if status is not None:
            stmt = stmt.where(Game.status == status)
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def update(self, game: Game) -> Game:
        await self._session.flush()
        await self._session.refresh(game)
        return game


class BetRepository:
    """Repository for bet database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, bet: Bet) -> Bet:
        self._session.add(bet)
        await self._session.flush()
        await self._session.refresh(bet)
        return bet

    async def list_by_game(
        self,
        game_id: int,
        status: BetStatus | None = None,
    ) -> Sequence[Bet]:
        """List bets of a game in placement order, optionally filtered by status."""
        stmt = select(Bet).where(Bet.game_id == game_id).order_by(Bet.id)
        if status is not None:
            stmt = stmt.where(Bet.status == status)
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def list_by_user(self, user_id: int) -> Sequence[Bet]:
        stmt = select(Bet).where(Bet.user_id == user_id).order_by(Bet.id.desc())
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def flush(self) -> None:
        await self._session.flush()
