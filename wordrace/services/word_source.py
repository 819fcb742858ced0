import logging
import random
from collections.abc import Iterable
from pathlib import Path

from wordrace.util.evaluator import WORD_LENGTH

logger = logging.getLogger(__name__)

FALLBACK_WORDS = ("HELLO", "WORLD", "GAMES", "PLAYS", "FUNNY")


def normalize_words(lines: Iterable[str]) -> list[str]:
    words = []
    for line in lines:
        word = line.strip().upper()
        if len(word) == WORD_LENGTH and word.isalpha():
            words.append(word)
    return words


class WordSource:
    """Answer pool plus the wider set of words accepted as guesses."""

    def __init__(
        self,
        answers: Iterable[str],
        extra_guesses: Iterable[str] = (),
        rng: random.Random | None = None,
    ):
        self.answers = normalize_words(answers)
        if not self.answers:
            raise ValueError("Answer list contains no usable words")

        self.valid_words = set(self.answers) | set(normalize_words(extra_guesses))
        self.rng = rng or random.Random()

    @classmethod
    def fallback(cls, rng: random.Random | None = None) -> "WordSource":
        return cls(FALLBACK_WORDS, rng=rng)

    @classmethod
    def from_files(
        cls,
        answers_path: Path,
        guesses_path: Path,
        rng: random.Random | None = None,
    ) -> "WordSource":
        try:
            answers = answers_path.read_text(encoding="utf-8").splitlines()
            extra_guesses = guesses_path.read_text(encoding="utf-8").splitlines()
            source = cls(answers, extra_guesses, rng=rng)
        except (OSError, ValueError):
            logger.exception(
                "Error loading word files %s and %s, using built-in words",
                answers_path,
                guesses_path,
            )
            return cls.fallback(rng=rng)

        logger.info("Loaded %d words for the answer pool", len(source.answers))
        logger.info("Loaded %d total valid words for guessing", len(source.valid_words))
        return source

    def random_answer(self) -> str:
        return self.rng.choice(self.answers)

    def is_valid_guess(self, word: str) -> bool:
        return len(word) == WORD_LENGTH and word.upper() in self.valid_words
