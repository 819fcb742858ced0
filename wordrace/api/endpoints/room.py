from fastapi import APIRouter, Depends, status

from wordrace.dependencies.services import get_game_service
from wordrace.schemas.common import BaseResponse
from wordrace.schemas.guess import (
    BoardResponse,
    CurrentGuessRequest,
    GuessRequest,
    GuessResponse,
)
from wordrace.schemas.room import (
    GameStateResponse,
    LeaderboardEntry,
    PlayerNameRequest,
    PlayerResponse,
    RoomJoinResponse,
    RoomResponse,
    StartGameRequest,
)
from wordrace.services.game_service import GameService

router = APIRouter()


@router.post(
    "",
    response_model=RoomJoinResponse,
    status_code=status.HTTP_200_OK,
)
async def create_room(
    body: PlayerNameRequest,
    game_service: GameService = Depends(get_game_service),
):
    room, player = await game_service.create_room(body.player_name)
    return RoomJoinResponse(
        room=RoomResponse.from_room(room),
        player=PlayerResponse.from_player(player),
    )


@router.post(
    "/{code}/join",
    response_model=RoomJoinResponse,
    status_code=status.HTTP_200_OK,
)
async def join_room(
    code: str,
    body: PlayerNameRequest,
    game_service: GameService = Depends(get_game_service),
):
    room, player = await game_service.join_room(code, body.player_name)
    return RoomJoinResponse(
        room=RoomResponse.from_room(room),
        player=PlayerResponse.from_player(player),
    )


@router.get(
    "/{code}",
    response_model=GameStateResponse,
    status_code=status.HTTP_200_OK,
)
async def read_game_state(
    code: str,
    game_service: GameService = Depends(get_game_service),
):
    return await game_service.get_game_state(code)


@router.post(
    "/{code}/start",
    response_model=BaseResponse,
    status_code=status.HTTP_200_OK,
)
async def start_game(
    code: str,
    body: StartGameRequest,
    game_service: GameService = Depends(get_game_service),
):
    await game_service.start_game(code, body.player_id)
    return BaseResponse(message="Game started")


@router.post(
    "/{code}/guess",
    response_model=GuessResponse,
    status_code=status.HTTP_200_OK,
)
async def submit_guess(
    code: str,
    body: GuessRequest,
    game_service: GameService = Depends(get_game_service),
):
    return await game_service.submit_guess(code, body.player_id, body.guess)


@router.post(
    "/{code}/current-guess",
    response_model=BaseResponse,
    status_code=status.HTTP_200_OK,
)
async def update_current_guess(
    code: str,
    body: CurrentGuessRequest,
    game_service: GameService = Depends(get_game_service),
):
    await game_service.update_current_guess(code, body.player_id, body.current_guess)
    return BaseResponse(message="Current guess updated")


@router.delete(
    "/{code}/players/{player_id}",
    response_model=BaseResponse,
    status_code=status.HTTP_200_OK,
)
async def leave_room(
    code: str,
    player_id: int,
    game_service: GameService = Depends(get_game_service),
):
    await game_service.leave_room(code, player_id)
    return BaseResponse(message="Left room successfully")


@router.get(
    "/{code}/leaderboard",
    response_model=list[LeaderboardEntry],
    status_code=status.HTTP_200_OK,
)
async def read_leaderboard(
    code: str,
    game_service: GameService = Depends(get_game_service),
):
    return await game_service.get_leaderboard(code)


@router.get(
    "/{code}/players/{player_id}/board",
    response_model=BoardResponse,
    status_code=status.HTTP_200_OK,
)
async def read_player_board(
    code: str,
    player_id: int,
    game_service: GameService = Depends(get_game_service),
):
    return await game_service.get_player_board(code, player_id)
