"""Word-list loading utilities.

Word lists are plain text, one five-letter word per line, case-insensitive.
Blank lines and lines starting with ``#`` are ignored. Anything else that
is not a five-letter alphabetic word is an error: loading fails fast with
:class:`wordle_env.MalformedWord` rather than silently dropping entries.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path

from wordle_env import MalformedWord, normalize_word

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lexicon:
    """Allowed guesses and possible secrets, both sorted and lowercase."""
    allowed: tuple[str, ...]
    solutions: tuple[str, ...]


def load_words(path: str | Path) -> tuple[str, ...]:
    """Load a word list, returning sorted unique lowercase words.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    MalformedWord
        On the first line that is not a five-letter word.
    """
    src = Path(path)
    if not src.exists():
        raise FileNotFoundError(f"Word list not found: {src}")

    seen: set[str] = set()
    for lno, raw in enumerate(src.read_text(encoding="utf-8").splitlines(), 1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            seen.add(normalize_word(line))
        except MalformedWord as exc:
            raise MalformedWord(f"{src}:{lno}: {exc}") from None

    if not seen:
        raise ValueError(f"No words found in {src}")
    log.info("Loaded %d words from %s", len(seen), src)
    return tuple(sorted(seen))


def load_lexicon(
    words_path: str | Path,
    solutions_path: str | Path | None = None,
) -> Lexicon:
    """Load the allowed list and (optionally) a separate solution list.

    Solutions default to the word list itself. Solution words are always
    legal guesses, so the allowed list is the union of both files.
    """
    words = load_words(words_path)
    if solutions_path is None:
        return Lexicon(allowed=words, solutions=words)
    solutions = load_words(solutions_path)
    allowed = tuple(sorted(set(words).union(solutions)))
    return Lexicon(allowed=allowed, solutions=solutions)


def sample_secrets(
    solutions: tuple[str, ...],
    num: int | None = None,
    seed: int = 42,
) -> tuple[str, ...]:
    """Return *num* secrets drawn reproducibly from *solutions* (all if None)."""
    if num is None or num >= len(solutions):
        return tuple(solutions)
    rng = random.Random(seed)
    return tuple(sorted(rng.sample(list(solutions), num)))
