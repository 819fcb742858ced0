from wordrace.core.error import DomainErrorCode, WordRaceDomainError
from wordrace.util.evaluator import WORD_LENGTH


def validate_player_name(player_name: str | None) -> str:
    if not player_name or player_name.isspace():
        raise WordRaceDomainError(
            code=DomainErrorCode.INVALID_PLAYER_NAME,
            message="Player name is required",
            details={"player_name": player_name},
        )
    return player_name


def validate_guess(guess: str | None) -> str:
    if not guess or len(guess) != WORD_LENGTH:
        raise WordRaceDomainError(
            code=DomainErrorCode.INVALID_GUESS_LENGTH,
            message=f"Guess must be a {WORD_LENGTH}-letter word",
            details={"guess": guess},
        )
    return guess.upper()
