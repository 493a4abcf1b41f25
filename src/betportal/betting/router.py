"""
Read-only games API router.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from betportal.betting.models import GameStatus
from betportal.betting.repository import BetRepository, GameRepository
from betportal.betting.schemas import GameResponse
from betportal.betting.service import BettingService
from betportal.shared.database import get_db_session
from betportal.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/games", tags=["games"])


def get_betting_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> BettingService:
    """Dependency for the betting service."""
    return BettingService(
        game_repository=GameRepository(session),
        bet_repository=BetRepository(session),
    )


@router.get("", response_model=list[GameResponse])
async def list_games(
    service: Annotated[BettingService, Depends(get_betting_service)],
    status: Annotated[GameStatus | None, Query(description="Filter by game status")] = None,
) -> list[GameResponse]:
    """List games ordered by start time."""
    games = await service.list_games(status)
    return [GameResponse.model_validate(g) for g in games]


@router.get(
    "/{game_id}",
    response_model=GameResponse,
    responses={404: {"description": "Game not found"}},
)
async def get_game(
    game_id: int,
    service: Annotated[BettingService, Depends(get_betting_service)],
) -> GameResponse:
    game = await service.get_game(game_id)
    return GameResponse.model_validate(game)
