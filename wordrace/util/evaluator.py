"""Wordle-style scoring of a guess against the secret word.

Scoring runs in two passes. The first pass marks exact position matches and
consumes those answer letters. The second pass walks the remaining guess
letters left to right and marks a letter present only while an unconsumed
copy of it is left in the answer, so a letter is never credited more times
than it occurs in the answer.
"""

from collections.abc import Iterable
from enum import Enum

WORD_LENGTH = 5


class LetterState(str, Enum):
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"


def evaluate_guess(guess: str, answer: str) -> list[LetterState]:
    remaining: list[str | None] = list(answer)
    result = [LetterState.ABSENT] * len(guess)

    for index, letter in enumerate(guess):
        if index < len(remaining) and remaining[index] == letter:
            result[index] = LetterState.CORRECT
            remaining[index] = None

    for index, letter in enumerate(guess):
        if result[index] == LetterState.CORRECT:
            continue
        if letter in remaining:
            result[index] = LetterState.PRESENT
            remaining[remaining.index(letter)] = None

    return result


def is_winning(result: list[LetterState]) -> bool:
    return bool(result) and all(state == LetterState.CORRECT for state in result)


def keyboard_state(guesses: Iterable[str], answer: str) -> dict[str, LetterState]:
    """Best-known state of every letter used across ``guesses``.

    A letter already known correct keeps that state, and a present letter is
    not downgraded by a later absent verdict. Any other verdict replaces the
    one recorded before it.
    """
    states: dict[str, LetterState] = {}

    for guess in guesses:
        for letter, state in zip(guess, evaluate_guess(guess, answer), strict=True):
            current = states.get(letter, LetterState.UNKNOWN)
            if current == LetterState.CORRECT:
                continue
            if current == LetterState.PRESENT and state == LetterState.ABSENT:
                continue
            states[letter] = state

    return states
