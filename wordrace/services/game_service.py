import logging
import random
import string
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime

from wordrace.core.error import DomainErrorCode, WordRaceDomainError
from wordrace.core.room_locks import RoomLockManager
from wordrace.models.player import MAX_ATTEMPTS, Player, PlayerStatus
from wordrace.models.room import (
    DEFAULT_MAX_PLAYERS,
    DEFAULT_TIME_LIMIT,
    Room,
    RoomStatus,
)
from wordrace.repositories.base_repository import GameRepository
from wordrace.schemas.guess import BoardResponse, GuessResponse, GuessRow
from wordrace.schemas.room import (
    GameStateResponse,
    LeaderboardEntry,
    PlayerResponse,
    RoomResponse,
)
from wordrace.services.word_source import WordSource
from wordrace.util.evaluator import evaluate_guess, is_winning, keyboard_state
from wordrace.util.time import seconds_since, utc_now
from wordrace.util.validators import validate_guess, validate_player_name

logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits
ROOM_CODE_LENGTH = 6

SOLVE_SCORE = 100
ATTEMPT_BONUS = 10
TIME_BONUS_WINDOW = 300
ATTEMPT_CREDIT = 5


def calculate_score(player: Player) -> int:
    if player.solved:
        return (
            SOLVE_SCORE
            + (MAX_ATTEMPTS - player.attempts) * ATTEMPT_BONUS
            + max(0, TIME_BONUS_WINDOW - player.time_elapsed)
        )
    if player.attempts > 0:
        return player.attempts * ATTEMPT_CREDIT
    return 0


class GameService:
    def __init__(
        self,
        repository: GameRepository,
        word_source: WordSource,
        room_locks: RoomLockManager | None = None,
        clock: Callable[[], datetime] = utc_now,
        rng: random.Random | None = None,
        max_players: int = DEFAULT_MAX_PLAYERS,
        time_limit: int = DEFAULT_TIME_LIMIT,
    ):
        self.repository = repository
        self.word_source = word_source
        self.room_locks = room_locks or RoomLockManager()
        self.clock = clock
        self.rng = rng or random.Random()
        self.max_players = max_players
        self.time_limit = time_limit

    def _generate_room_code(self) -> str:
        return "".join(self.rng.choices(ROOM_CODE_ALPHABET, k=ROOM_CODE_LENGTH))

    async def _get_room_player(
        self,
        room: Room,
        player_id: int | None,
        error_code: DomainErrorCode = DomainErrorCode.PLAYER_NOT_IN_ROOM,
    ) -> Player:
        player = (
            await self.repository.get_player(player_id)
            if player_id is not None
            else None
        )
        if not player or player.room_id != room.id:
            raise WordRaceDomainError(
                code=error_code,
                message="Player not in this room",
                details={"player_id": player_id, "code": room.code},
            )
        return player

    @asynccontextmanager
    async def _locked_room(self, code: str) -> AsyncIterator[Room]:
        try:
            async with self.room_locks.hold(code):
                yield await self.repository.get_room_or_raise(code)
        except WordRaceDomainError as exc:
            if exc.code == DomainErrorCode.ROOM_NOT_FOUND:
                self.room_locks.discard(code)
            raise

    async def _finish_room(self, room: Room, reason: str) -> Room:
        finished = await self.repository.update_room(
            room.id, status=RoomStatus.FINISHED, ended_at=self.clock()
        )
        logger.info("Room %s finished (%s)", room.code, reason)
        return finished or room

    async def create_room(
        self, player_name: str | None, max_attempts: int = 20
    ) -> tuple[Room, Player]:
        player_name = validate_player_name(player_name)

        for _ in range(max_attempts):
            code = self._generate_room_code()
            async with self.room_locks.hold(code):
                if await self.repository.get_room(code):
                    continue

                room = await self.repository.create_room(
                    Room(
                        code=code,
                        word=self.word_source.random_answer(),
                        status=RoomStatus.WAITING,
                        max_players=self.max_players,
                        time_limit=self.time_limit,
                    )
                )
                player = await self.repository.create_player(
                    Player(
                        room_id=room.id,
                        name=player_name,
                        is_host=True,
                        status=PlayerStatus.WAITING,
                    )
                )

            logger.info("Room %s created by %s", room.code, player.name)
            return room, player

        raise WordRaceDomainError(
            code=DomainErrorCode.ROOM_CODE_GENERATION_FAILED,
            message=f"Cannot create room code after {max_attempts} tries",
            details={"max_attempts": max_attempts},
        )

    async def join_room(self, code: str, player_name: str | None) -> tuple[Room, Player]:
        player_name = validate_player_name(player_name)
        code = code.upper()

        async with self._locked_room(code) as room:
            if room.status != RoomStatus.WAITING:
                raise WordRaceDomainError(
                    code=DomainErrorCode.ROOM_NOT_WAITING,
                    message="Game has already started",
                    details={"code": code, "status": room.status.value},
                )

            players = await self.repository.get_players_by_room(room.id)
            if len(players) >= room.max_players:
                raise WordRaceDomainError(
                    code=DomainErrorCode.ROOM_IS_FULL,
                    message="Room is full",
                    details={"code": code, "max_players": room.max_players},
                )

            if any(player.name == player_name for player in players):
                raise WordRaceDomainError(
                    code=DomainErrorCode.NAME_TAKEN,
                    message="Player name already taken",
                    details={"code": code, "player_name": player_name},
                )

            player = await self.repository.create_player(
                Player(
                    room_id=room.id,
                    name=player_name,
                    is_host=False,
                    status=PlayerStatus.WAITING,
                )
            )

        logger.info("%s joined room %s", player.name, room.code)
        return room, player

    async def get_game_state(self, code: str) -> GameStateResponse:
        code = code.upper()

        async with self._locked_room(code) as room:
            time_remaining = 0
            if room.status == RoomStatus.PLAYING and room.started_at:
                elapsed = seconds_since(room.started_at, self.clock())
                time_remaining = max(0, room.time_limit - elapsed)
                if time_remaining == 0:
                    room = await self._finish_room(room, "time limit reached")

            players = await self.repository.get_players_by_room(room.id)

        return GameStateResponse(
            room=RoomResponse.from_room(room),
            players=[PlayerResponse.from_player(player) for player in players],
            time_remaining=time_remaining,
        )

    async def start_game(self, code: str, player_id: int | None) -> Room:
        code = code.upper()

        async with self._locked_room(code) as room:
            player = await self._get_room_player(
                room, player_id, error_code=DomainErrorCode.NOT_HOST
            )
            if not player.is_host:
                raise WordRaceDomainError(
                    code=DomainErrorCode.NOT_HOST,
                    message="Only the host can start the game",
                    details={"player_id": player_id, "code": code},
                )

            if room.status != RoomStatus.WAITING:
                raise WordRaceDomainError(
                    code=DomainErrorCode.ROOM_NOT_WAITING,
                    message="Game has already started",
                    details={"code": code, "status": room.status.value},
                )

            players = await self.repository.get_players_by_room(room.id)
            if not players:
                raise WordRaceDomainError(
                    code=DomainErrorCode.NO_PLAYERS,
                    message="Need at least 1 player to start",
                    details={"code": code},
                )

            started = await self.repository.update_room(
                room.id, status=RoomStatus.PLAYING, started_at=self.clock()
            )
            for room_player in players:
                await self.repository.update_player(
                    room_player.id, status=PlayerStatus.PLAYING
                )

        logger.info("Room %s started with %d players", code, len(players))
        return started or room

    async def submit_guess(
        self, code: str, player_id: int | None, guess: str | None
    ) -> GuessResponse:
        word = validate_guess(guess)
        if not self.word_source.is_valid_guess(word):
            raise WordRaceDomainError(
                code=DomainErrorCode.INVALID_WORD,
                message="Not a valid word",
                details={"guess": word},
            )

        code = code.upper()

        async with self._locked_room(code) as room:
            player = await self._get_room_player(room, player_id)

            if room.status != RoomStatus.PLAYING:
                raise WordRaceDomainError(
                    code=DomainErrorCode.ROOM_NOT_PLAYING,
                    message="Game is not in progress",
                    details={"code": code, "status": room.status.value},
                )

            if player.solved or player.attempts >= MAX_ATTEMPTS:
                raise WordRaceDomainError(
                    code=DomainErrorCode.PLAYER_ALREADY_FINISHED,
                    message="Player has already finished",
                    details={"player_id": player.id, "attempts": player.attempts},
                )

            if word in player.guesses:
                raise WordRaceDomainError(
                    code=DomainErrorCode.DUPLICATE_GUESS,
                    message="Word already guessed",
                    details={"player_id": player.id, "guess": word},
                )

            result = evaluate_guess(word, room.word)
            is_win = is_winning(result)
            attempts = player.attempts + 1

            time_elapsed = player.time_elapsed
            if is_win and room.started_at:
                time_elapsed = seconds_since(room.started_at, self.clock())

            await self.repository.update_player(
                player.id,
                guesses=[*player.guesses, word],
                attempts=attempts,
                solved=is_win,
                time_elapsed=time_elapsed,
                status=(
                    PlayerStatus.FINISHED
                    if is_win or attempts >= MAX_ATTEMPTS
                    else PlayerStatus.PLAYING
                ),
                current_guess="",
            )

            players = await self.repository.get_players_by_room(room.id)
            if all(room_player.is_done for room_player in players):
                await self._finish_room(room, "all players finished")

        return GuessResponse(word=word, result=result, is_valid=True, is_win=is_win)

    async def update_current_guess(
        self, code: str, player_id: int | None, current_guess: str | None
    ) -> Player:
        code = code.upper()

        async with self._locked_room(code) as room:
            player = await self._get_room_player(room, player_id)
            updated = await self.repository.update_player(
                player.id, current_guess=current_guess or ""
            )

        return updated or player

    async def leave_room(self, code: str, player_id: int | None) -> None:
        code = code.upper()
        room_deleted = False

        async with self._locked_room(code) as room:
            player = await self._get_room_player(room, player_id)

            await self.repository.remove_player(player.id)

            remaining = await self.repository.get_players_by_room(room.id)
            if not remaining:
                await self.repository.delete_room(room.id)
                room_deleted = True
                logger.info("Room %s deleted after last player left", code)
            elif player.is_host:
                new_host = remaining[0]
                await self.repository.update_player(new_host.id, is_host=True)
                logger.info("Host of room %s passed to %s", code, new_host.name)

        if room_deleted:
            self.room_locks.discard(code)

    async def get_leaderboard(self, code: str) -> list[LeaderboardEntry]:
        room = await self.repository.get_room_or_raise(code.upper())
        players = await self.repository.get_players_by_room(room.id)

        scored = sorted(
            ((player, calculate_score(player)) for player in players),
            key=lambda entry: (not entry[0].solved, -entry[1], entry[0].time_elapsed),
        )

        return [
            LeaderboardEntry(
                player=PlayerResponse.from_player(player),
                rank=rank,
                score=score,
            )
            for rank, (player, score) in enumerate(scored, start=1)
        ]

    async def get_player_board(self, code: str, player_id: int | None) -> BoardResponse:
        room = await self.repository.get_room_or_raise(code.upper())
        player = await self._get_room_player(room, player_id)

        return BoardResponse(
            guesses=[
                GuessRow(word=guess, result=evaluate_guess(guess, room.word))
                for guess in player.guesses
            ],
            keyboard=keyboard_state(player.guesses, room.word),
        )
