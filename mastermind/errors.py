"""
errors.py

Exceptions raised by the Mastermind solver core.
"""


class MastermindError(Exception):
    """Base class for solver errors."""


class CombinationLengthError(MastermindError, ValueError):
    """Guess and answer do not have the same number of spaces."""

    def __init__(self, guess_len: int, answer_len: int) -> None:
        super().__init__(
            f"guess and answer must be the same length (got {guess_len} and {answer_len})"
        )
        self.guess_len = guess_len
        self.answer_len = answer_len


class NoConsistentAnswerError(MastermindError):
    """No combination in the universe fits the feedback observed so far."""
