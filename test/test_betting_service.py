"""Tests for the betting service against an in-memory SQLite database."""

from datetime import datetime
from decimal import Decimal

import pytest
import pytest_asyncio
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from betportal.auth.models import User
from betportal.betting.models import BetStatus, Game, GameStatus
from betportal.betting.repository import BetRepository, GameRepository
from betportal.betting.schemas import BetCreate, GameCreate, GameResponse
from betportal.betting.service import BettingService, compute_payout
from betportal.shared.exceptions import (
    InvalidStatusTransitionError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def service(db_session: AsyncSession) -> BettingService:
    return BettingService(GameRepository(db_session), BetRepository(db_session))


@pytest.fixture
def bets(db_session: AsyncSession) -> BetRepository:
    return BetRepository(db_session)


@pytest_asyncio.fixture
async def active_game(
    service: BettingService,
    game_window: tuple[datetime, datetime],
    default_odds: dict[str, Decimal],
) -> Game:
    start, end = game_window
    game = await service.create_game(
        GameCreate(name="Kalyan Morning", type="single", start_time=start, end_time=end, odds=default_odds)
    )
    return await service.open_game(game.id)


def bet(game_id: int, number: str = "7", amount: str = "100", bet_type: str = "single") -> BetCreate:
    return BetCreate(game_id=game_id, bet_number=number, bet_amount=Decimal(amount), bet_type=bet_type)


class TestComputePayout:
    def test_multiplies_and_rounds_to_cents(self) -> None:
        assert compute_payout(Decimal("100"), "9") == Decimal("900.00")
        assert compute_payout(Decimal("10.01"), Decimal("140.5")) == Decimal("1406.41")

    def test_rounds_half_up(self) -> None:
        assert compute_payout(Decimal("0.05"), "0.5") == Decimal("0.03")


class TestGames:
    @pytest.mark.asyncio
    async def test_create_game_defaults(
        self, service: BettingService, game_window: tuple[datetime, datetime]
    ) -> None:
        start, end = game_window

        game = await service.create_game(
            GameCreate(name="Milan Day", type="jodi", start_time=start, end_time=end)
        )

        assert game.id is not None
        assert game.status == GameStatus.UPCOMING
        assert game.min_bet == Decimal("10.00")
        assert game.max_bet == Decimal("10000.00")
        assert game.odds is None
        assert game.result is None

    @pytest.mark.asyncio
    async def test_response_schema(self, active_game: Game) -> None:
        response = GameResponse.model_validate(active_game)

        assert response.status == GameStatus.ACTIVE
        assert response.odds == {
            "single": Decimal("9"),
            "jodi": Decimal("90"),
            "panna": Decimal("140.5"),
        }

    @pytest.mark.asyncio
    async def test_get_missing_game_raises_not_found(self, service: BettingService) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await service.get_game(999)

        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.details == {"entity": "Game", "id": "999"}

    @pytest.mark.asyncio
    async def test_list_games_filters_by_status(
        self,
        service: BettingService,
        active_game: Game,
        game_window: tuple[datetime, datetime],
    ) -> None:
        start, end = game_window
        upcoming = await service.create_game(
            GameCreate(name="Night", type="single", start_time=start, end_time=end)
        )

        assert {g.id for g in await service.list_games()} == {active_game.id, upcoming.id}
        assert [g.id for g in await service.list_games(GameStatus.UPCOMING)] == [upcoming.id]
        assert [g.id for g in await service.list_games(GameStatus.ACTIVE)] == [active_game.id]

    @pytest.mark.asyncio
    async def test_open_active_game_is_invalid_transition(
        self, service: BettingService, active_game: Game
    ) -> None:
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            await service.open_game(active_game.id)

        assert exc_info.value.code == "INVALID_STATUS_TRANSITION"
        assert exc_info.value.details == {"current_status": "active", "target_status": "active"}


class TestPlaceBet:
    @pytest.mark.asyncio
    async def test_places_bet_with_payout(
        self, service: BettingService, active_game: Game, user: User
    ) -> None:
        placed = await service.place_bet(user.id, bet(active_game.id))

        assert placed.id is not None
        assert placed.status == BetStatus.PENDING
        assert placed.potential_payout == Decimal("900.00")
        assert placed.actual_payout is None
        assert placed.user_id == user.id

    @pytest.mark.asyncio
    async def test_upcoming_game_rejects_bets(
        self,
        service: BettingService,
        user: User,
        game_window: tuple[datetime, datetime],
        default_odds: dict[str, Decimal],
    ) -> None:
        start, end = game_window
        game = await service.create_game(
            GameCreate(name="Later", type="single", start_time=start, end_time=end, odds=default_odds)
        )

        with pytest.raises(ValidationError) as exc_info:
            await service.place_bet(user.id, bet(game.id))

        assert exc_info.value.details["status"] == "upcoming"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["5", "10000.01"])
    async def test_amount_outside_limits(
        self, service: BettingService, active_game: Game, user: User, amount: str
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.place_bet(user.id, bet(active_game.id, amount=amount))

        assert "between" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_limits_are_inclusive(
        self, service: BettingService, active_game: Game, user: User
    ) -> None:
        low = await service.place_bet(user.id, bet(active_game.id, amount="10"))
        high = await service.place_bet(user.id, bet(active_game.id, amount="10000"))

        assert low.potential_payout == Decimal("90.00")
        assert high.potential_payout == Decimal("90000.00")

    @pytest.mark.asyncio
    async def test_bet_type_without_odds(
        self, service: BettingService, active_game: Game, user: User
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.place_bet(user.id, bet(active_game.id, bet_type="sangam"))

        assert exc_info.value.details["bet_type"] == "sangam"

    @pytest.mark.asyncio
    async def test_missing_game(self, service: BettingService, user: User) -> None:
        with pytest.raises(NotFoundError):
            await service.place_bet(user.id, bet(404))


class TestSettlement:
    @pytest.mark.asyncio
    async def test_settle_resolves_pending_bets(
        self,
        service: BettingService,
        bets: BetRepository,
        active_game: Game,
        user: User,
    ) -> None:
        winner = await service.place_bet(user.id, bet(active_game.id, number="7"))
        loser = await service.place_bet(user.id, bet(active_game.id, number="3", amount="50"))

        game = await service.settle_game(active_game.id, " 7 ")

        assert game.status == GameStatus.COMPLETED
        assert game.result == "7"
        assert winner.status == BetStatus.WON
        assert winner.actual_payout == Decimal("900.00")
        assert loser.status == BetStatus.LOST
        assert loser.actual_payout == Decimal("0.00")
        assert await bets.list_by_game(game.id, status=BetStatus.PENDING) == []
        assert [b.id for b in await bets.list_by_user(user.id)] == [loser.id, winner.id]

    @pytest.mark.asyncio
    async def test_blank_result_rejected(self, service: BettingService, active_game: Game) -> None:
        with pytest.raises(ValidationError):
            await service.settle_game(active_game.id, "   ")

    @pytest.mark.asyncio
    async def test_settle_upcoming_game_is_invalid(
        self,
        service: BettingService,
        game_window: tuple[datetime, datetime],
    ) -> None:
        start, end = game_window
        game = await service.create_game(
            GameCreate(name="Later", type="single", start_time=start, end_time=end)
        )

        with pytest.raises(InvalidStatusTransitionError):
            await service.settle_game(game.id, "7")

    @pytest.mark.asyncio
    async def test_cancel_cancels_pending_bets(
        self,
        service: BettingService,
        active_game: Game,
        user: User,
    ) -> None:
        placed = await service.place_bet(user.id, bet(active_game.id))

        game = await service.cancel_game(active_game.id)

        assert game.status == GameStatus.CANCELLED
        assert placed.status == BetStatus.CANCELLED
        assert placed.actual_payout is None

    @pytest.mark.asyncio
    async def test_completed_game_cannot_be_cancelled(
        self, service: BettingService, active_game: Game
    ) -> None:
        await service.settle_game(active_game.id, "7")

        with pytest.raises(InvalidStatusTransitionError):
            await service.cancel_game(active_game.id)


class TestSchemas:
    def test_end_must_follow_start(self, game_window: tuple[datetime, datetime]) -> None:
        start, _ = game_window

        with pytest.raises(PydanticValidationError):
            GameCreate(name="X", type="single", start_time=start, end_time=start)

    def test_min_bet_must_not_exceed_max(self, game_window: tuple[datetime, datetime]) -> None:
        start, end = game_window

        with pytest.raises(PydanticValidationError):
            GameCreate(
                name="X",
                type="single",
                start_time=start,
                end_time=end,
                min_bet=Decimal("500"),
                max_bet=Decimal("100"),
            )

    def test_odds_must_be_positive(self, game_window: tuple[datetime, datetime]) -> None:
        start, end = game_window

        with pytest.raises(PydanticValidationError):
            GameCreate(name="X", type="single", start_time=start, end_time=end, odds={"single": 0})

    def test_bet_fields_are_stripped(self) -> None:
        data = BetCreate(game_id=1, bet_number=" 07 ", bet_amount=Decimal("10"), bet_type=" jodi ")

        assert data.bet_number == "07"
        assert data.bet_type == "jodi"

    @pytest.mark.parametrize("field", ["bet_number", "bet_type"])
    def test_blank_bet_fields_rejected(self, field: str) -> None:
        payload = {"game_id": 1, "bet_number": "7", "bet_amount": "10", "bet_type": "single"}
        payload[field] = "   "

        with pytest.raises(PydanticValidationError):
            BetCreate(**payload)
