from wordrace.schemas.common import CamelModel
from wordrace.util.evaluator import LetterState


class GuessRequest(CamelModel):
    player_id: int | None = None
    guess: str | None = None


class CurrentGuessRequest(CamelModel):
    player_id: int | None = None
    current_guess: str | None = None


class GuessResponse(CamelModel):
    word: str
    result: list[LetterState]
    is_valid: bool
    is_win: bool


class GuessRow(CamelModel):
    word: str
    result: list[LetterState]


class BoardResponse(CamelModel):
    guesses: list[GuessRow]
    keyboard: dict[str, LetterState]
