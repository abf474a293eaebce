"""Abstract base class for Wordle strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class GameConfig:
    """Word lists and settings shared by every game of a run.

    Attributes
    ----------
    allowed : tuple[str, ...]
        Legal guesses, sorted and lowercase.
    solutions : tuple[str, ...]
        Possible secrets, sorted and lowercase.
    max_guesses : int
        Guesses allowed before the game is lost.
    candidate_pool : str
        ``"solutions"`` or ``"allowed"``: which list a game starts from.
    first_guess : str or None
        Fixed opening guess. When None the strategy picks the opener.
    score_allowed : bool
        If True, strategies may probe with allowed words that are no
        longer candidates.
    candidates_only_below : int
        Once fewer candidates than this remain, only candidates are scored.
    """

    allowed: tuple[str, ...]
    solutions: tuple[str, ...]
    max_guesses: int = 6
    candidate_pool: str = "solutions"
    first_guess: str | None = None
    score_allowed: bool = True
    candidates_only_below: int = 3

    def __post_init__(self) -> None:
        if self.candidate_pool not in ("solutions", "allowed"):
            raise ValueError(
                f"candidate_pool must be 'solutions' or 'allowed', "
                f"got {self.candidate_pool!r}"
            )
        if self.max_guesses < 1:
            raise ValueError(f"max_guesses must be positive, got {self.max_guesses}")

    @property
    def starting_candidates(self) -> tuple[str, ...]:
        if self.candidate_pool == "allowed":
            return self.allowed
        return self.solutions


class ScoredGuess(NamedTuple):
    word: str
    score: float


class Strategy(ABC):
    """Interface that every Wordle strategy must implement."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy name (used on the command line and in reports)."""
        ...

    def begin_game(self, config: GameConfig) -> None:
        """Called at the start of each game.

        Use this to pick up settings from *config*. The default
        implementation does nothing.
        """

    @abstractmethod
    def select_guess(
        self,
        candidates: tuple[str, ...],
        allowed: tuple[str, ...],
        history_length: int,
    ) -> str:
        """Return the next guess for the current candidate set.

        Must be deterministic. Raises ContradictoryFeedback when
        *candidates* is empty.
        """
        ...

    def rank_guesses(
        self,
        candidates: tuple[str, ...],
        allowed: tuple[str, ...],
        history_length: int,
        top_n: int = 5,
    ) -> list[ScoredGuess]:
        """Return up to *top_n* suggestions, best first.

        The default only knows the selected guess.
        """
        return [ScoredGuess(self.select_guess(candidates, allowed, history_length), 0.0)]
