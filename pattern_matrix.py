"""Bulk feedback computation on integer letter arrays.

Words are held as ``(n, 5)`` uint8 arrays of letter indices (``a`` = 0) and
feedback patterns as integer codes ``sum(tile_i * 3**i)``, the same encoding
as :func:`wordle_env.encode_pattern`. Scoring a guess against a candidate set
then needs only array comparisons and a ``bincount``.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from wordle_env import NUM_PATTERNS, WORD_LENGTH

# Upper bound on guess x secret cells evaluated at once. The working set of
# one block is a few bytes per cell per letter, tens of MB at this size.
_CHUNK_CELLS = 2_000_000

_POWERS = (3 ** np.arange(WORD_LENGTH)).astype(np.int16)


@lru_cache(maxsize=64)
def word_array(words: tuple[str, ...]) -> np.ndarray:
    """Convert a tuple of lowercase words to a read-only (n, 5) uint8 array."""
    arr = np.array(words, dtype=f"<U{WORD_LENGTH}")
    codes = arr.view(np.uint32).reshape(-1, WORD_LENGTH)
    out = (codes - ord("a")).astype(np.uint8)
    out.flags.writeable = False
    return out


def _codes_block(g: np.ndarray, s: np.ndarray) -> np.ndarray:
    """Feedback codes for guesses ``g`` (G, 5) against secrets ``s`` (N, 5)."""
    g3 = g[:, None, :]
    s3 = s[None, :, :]
    green = g3 == s3                      # (G, N, 5)
    unmatched = ~green                    # secret letters not used by greens
    yellow = np.zeros_like(green)

    for i in range(WORD_LENGTH):
        letter = g3[:, :, i:i + 1]         # (G, 1, 1)
        avail = np.count_nonzero((s3 == letter) & unmatched, axis=2)
        used = np.zeros(avail.shape, dtype=np.intp)
        for j in range(i):
            same = g[:, j] == g[:, i]      # (G,)
            used += same[:, None] & yellow[:, :, j]
        yellow[:, :, i] = ~green[:, :, i] & (avail > used)

    tiles = green.astype(np.int16) * 2 + yellow
    return (tiles * _POWERS).sum(axis=2, dtype=np.int16)


def _row_step(n_secrets: int) -> int:
    return max(1, _CHUNK_CELLS // max(n_secrets, 1))


def feedback_codes(guesses: tuple[str, ...], secrets: tuple[str, ...]) -> np.ndarray:
    """Return a (len(guesses), len(secrets)) array of encoded patterns."""
    g = word_array(tuple(guesses))
    s = word_array(tuple(secrets))
    out = np.empty((len(g), len(s)), dtype=np.int16)
    step = _row_step(len(s))
    for start in range(0, len(g), step):
        out[start:start + step] = _codes_block(g[start:start + step], s)
    return out


def partition_counts(guesses: tuple[str, ...], secrets: tuple[str, ...]) -> np.ndarray:
    """Count, for each guess, how many secrets fall into each pattern.

    Returns an int64 array of shape (len(guesses), 243). Codes are binned
    one row block at a time; the full guess x secret matrix is never held.
    """
    g = word_array(tuple(guesses))
    s = word_array(tuple(secrets))
    counts = np.zeros((len(g), NUM_PATTERNS), dtype=np.int64)
    step = _row_step(len(s))
    for start in range(0, len(g), step):
        block = _codes_block(g[start:start + step], s).astype(np.intp)
        rows = block.shape[0]
        block += np.arange(rows, dtype=np.intp)[:, None] * NUM_PATTERNS
        binned = np.bincount(block.ravel(), minlength=rows * NUM_PATTERNS)
        counts[start:start + rows] = binned.reshape(rows, NUM_PATTERNS)
    return counts
