"""Wordle environment: feedback, candidate filtering and game sessions."""

from __future__ import annotations

import enum
import logging
import re
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from strategy import GameConfig, Strategy

log = logging.getLogger(__name__)

WORD_LENGTH = 5
MAX_GUESSES = 6
NUM_PATTERNS = 3 ** WORD_LENGTH

_WORD_RE = re.compile(rf"^[a-z]{{{WORD_LENGTH}}}$")


# ------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------

class WordleError(Exception):
    """Base class for solver errors."""


class MalformedWord(WordleError, ValueError):
    """A word is not exactly five alphabetic characters."""


class ContradictoryFeedback(WordleError):
    """No candidate is consistent with the feedback received."""

    def __init__(
        self,
        guess: str | None = None,
        pattern: tuple[int, ...] | None = None,
    ) -> None:
        if guess is None or pattern is None:
            msg = "no candidate words remain"
        else:
            msg = (
                f"no candidate word is consistent with {guess!r} -> "
                f"{format_pattern(pattern)}"
            )
        super().__init__(msg)
        self.guess = guess
        self.pattern = pattern


class GameOver(WordleError, RuntimeError):
    """A guess was attempted after the game reached a terminal state."""


# ------------------------------------------------------------------
# Feedback model
# ------------------------------------------------------------------

class Tile(enum.IntEnum):
    ABSENT = 0
    PRESENT = 1
    CORRECT = 2


ALL_CORRECT = (Tile.CORRECT,) * WORD_LENGTH

_TILE_CHARS = {
    "g": Tile.CORRECT, "2": Tile.CORRECT,
    "y": Tile.PRESENT, "1": Tile.PRESENT,
    "b": Tile.ABSENT, "0": Tile.ABSENT, ".": Tile.ABSENT, "-": Tile.ABSENT,
}
_TILE_LETTERS = {Tile.CORRECT: "g", Tile.PRESENT: "y", Tile.ABSENT: "b"}


def normalize_word(word: str) -> str:
    """Return *word* lowercased and stripped, or raise MalformedWord."""
    if not isinstance(word, str):
        raise MalformedWord(f"expected a string, got {type(word).__name__}")
    w = word.strip().lower()
    if not _WORD_RE.match(w):
        raise MalformedWord(
            f"{word!r} is not a {WORD_LENGTH}-letter alphabetic word"
        )
    return w


def compute_feedback(guess: str, secret: str) -> tuple[Tile, ...]:
    """Return the tile pattern for *guess* against *secret*.

    Correct tiles are assigned first and consume their letter; the
    remaining guess letters are then matched left to right against the
    letters the secret has left, so a letter is never credited more often
    than it occurs in the secret.
    """
    guess = normalize_word(guess)
    secret = normalize_word(secret)

    pat = [Tile.ABSENT] * WORD_LENGTH
    remaining = Counter(secret)

    # Pass 1 - correct positions
    for i, (g, s) in enumerate(zip(guess, secret)):
        if g == s:
            pat[i] = Tile.CORRECT
            remaining[g] -= 1

    # Pass 2 - misplaced letters
    for i, g in enumerate(guess):
        if pat[i] == Tile.CORRECT:
            continue
        if remaining[g] > 0:
            pat[i] = Tile.PRESENT
            remaining[g] -= 1

    return tuple(pat)


def encode_pattern(pattern: Iterable[int]) -> int:
    """Encode a feedback pattern as a single integer in ``[0, 243)``."""
    val = 0
    for i, c in enumerate(pattern):
        val += int(c) * (3 ** i)
    return val


def decode_pattern(code: int) -> tuple[Tile, ...]:
    if not 0 <= code < NUM_PATTERNS:
        raise ValueError(f"pattern code out of range: {code}")
    tiles = []
    for _ in range(WORD_LENGTH):
        code, c = divmod(code, 3)
        tiles.append(Tile(c))
    return tuple(tiles)


def parse_pattern(text: str) -> tuple[Tile, ...]:
    """Parse a pattern such as ``"bgyyb"`` (also ``"-GY.."`` or ``"02110"``).

    Raises
    ------
    ValueError
        If *text* is not exactly five recognised tile characters.
    """
    chars = text.strip().lower()
    if len(chars) != WORD_LENGTH:
        raise ValueError(
            f"pattern must have {WORD_LENGTH} tiles, got {len(chars)}: {text!r}"
        )
    try:
        return tuple(_TILE_CHARS[c] for c in chars)
    except KeyError as exc:
        raise ValueError(
            f"unknown tile {exc.args[0]!r}; use g = correct, y = present, "
            f"b = absent"
        ) from None


def format_pattern(pattern: Iterable[int]) -> str:
    return "".join(_TILE_LETTERS[Tile(c)] for c in pattern)


def is_consistent(guess: str, candidate: str, observed: tuple[int, ...]) -> bool:
    """True iff *candidate* as the secret would have produced *observed*."""
    return compute_feedback(guess, candidate) == tuple(observed)


# ------------------------------------------------------------------
# Candidate filter
# ------------------------------------------------------------------

def narrow(
    candidates: Iterable[str],
    guess: str,
    observed: tuple[int, ...],
) -> tuple[str, ...]:
    """Keep only candidates consistent with the observed pattern.

    Returns a new tuple; an empty result means the feedback contradicts
    every candidate and is left for the caller to report.
    """
    observed = tuple(observed)
    return tuple(w for w in candidates if is_consistent(guess, w, observed))


# ------------------------------------------------------------------
# Game session
# ------------------------------------------------------------------

class GameState(enum.Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class GuessRecord:
    word: str
    pattern: tuple[Tile, ...]

    @property
    def is_win(self) -> bool:
        return self.pattern == ALL_CORRECT


class GameSession:
    """A single game, driven by a strategy.

    In play mode the secret is known and feedback is computed with
    :meth:`guess`. In assist mode there is no secret and the caller supplies
    each pattern through :meth:`record`.

    Parameters
    ----------
    strategy : Strategy
        Selects guesses; ``begin_game`` is called once here.
    config : GameConfig
        Word lists and game settings shared (read-only) across sessions.
    secret : str or None
        The hidden word for play mode; must be in the starting candidates.
    """

    def __init__(
        self,
        strategy: Strategy,
        config: GameConfig,
        secret: str | None = None,
    ) -> None:
        self._strategy = strategy
        self._config = config
        self._candidates: tuple[str, ...] = config.starting_candidates
        if secret is not None:
            secret = normalize_word(secret)
            if secret not in set(self._candidates):
                raise ValueError(f"secret {secret!r} is not a candidate word")
        self._secret = secret
        self._history: list[GuessRecord] = []
        self._state = GameState.IN_PROGRESS
        strategy.begin_game(config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def suggest(self) -> str:
        """Return the strategy's next guess without recording it."""
        self._check_in_progress()
        if not self._history and self._config.first_guess:
            return self._config.first_guess
        return self._strategy.select_guess(
            self._candidates, self._config.allowed, len(self._history)
        )

    def guess(self, word: str) -> GuessRecord:
        """Score *word* against the secret and record the result."""
        if self._secret is None:
            raise RuntimeError("no secret in assist mode; use record()")
        self._check_in_progress()
        word = normalize_word(word)
        return self.record(word, compute_feedback(word, self._secret))

    def record(self, word: str, pattern: Iterable[int]) -> GuessRecord:
        """Apply externally observed feedback for *word*.

        Raises
        ------
        ContradictoryFeedback
            If no candidate survives; the session is left unchanged.
        GameOver
            If the game has already been won or lost.
        """
        self._check_in_progress()
        word = normalize_word(word)
        pattern = tuple(Tile(int(c)) for c in pattern)
        if len(pattern) != WORD_LENGTH:
            raise ValueError(f"pattern must have {WORD_LENGTH} tiles")

        rec = GuessRecord(word, pattern)
        remaining = narrow(self._candidates, word, pattern)
        if not remaining:
            raise ContradictoryFeedback(word, pattern)

        log.debug(
            "guess %d: %s %s -> %d candidates",
            len(self._history) + 1, word, format_pattern(pattern), len(remaining),
        )
        self._candidates = remaining
        self._history.append(rec)
        if rec.is_win:
            self._state = GameState.WON
        elif len(self._history) >= self._config.max_guesses:
            self._state = GameState.LOST
        return rec

    def play_turn(self) -> GuessRecord:
        return self.guess(self.suggest())

    def play(self) -> GameState:
        """Play turns until the game is won or lost."""
        while not self.game_over:
            self.play_turn()
        return self._state

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def game_over(self) -> bool:
        return self._state is not GameState.IN_PROGRESS

    @property
    def is_solved(self) -> bool:
        return self._state is GameState.WON

    @property
    def history(self) -> tuple[GuessRecord, ...]:
        return tuple(self._history)

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates

    @property
    def guess_count(self) -> int:
        return len(self._history)

    @property
    def remaining_guesses(self) -> int:
        return self._config.max_guesses - len(self._history)

    @property
    def secret(self) -> str | None:
        """Reveal the secret word (only after game over)."""
        if not self.game_over:
            raise RuntimeError("Game is still in progress")
        return self._secret

    def _check_in_progress(self) -> None:
        if self.game_over:
            raise GameOver(f"game is already {self._state.value}")
