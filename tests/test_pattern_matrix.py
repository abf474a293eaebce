from __future__ import annotations

import numpy as np
import pytest

import pattern_matrix
from pattern_matrix import feedback_codes, partition_counts, word_array
from wordle_env import compute_feedback, encode_pattern

EXTRA = ("speed", "erase", "atttt", "xaaaa", "aattt", "txxxx", "eerie", "geese", "sissy")


def test_word_array():
    arr = word_array(("abcde", "zzzzz"))
    assert arr.shape == (2, 5)
    assert arr.dtype == np.uint8
    assert arr.tolist() == [[0, 1, 2, 3, 4], [25] * 5]


def test_codes_match_scalar_feedback(words):
    pool = tuple(words) + EXTRA
    codes = feedback_codes(pool, pool)
    for i, g in enumerate(pool):
        for j, s in enumerate(pool):
            assert codes[i, j] == encode_pattern(compute_feedback(g, s)), (g, s)


def test_chunking_gives_same_result(words, monkeypatch):
    full = feedback_codes(words, words)
    monkeypatch.setattr(pattern_matrix, "_CHUNK_CELLS", 7)
    np.testing.assert_array_equal(feedback_codes(words, words), full)


def test_partition_counts(words):
    counts = partition_counts(words[:4], words)
    assert counts.shape == (4, 243)
    assert (counts.sum(axis=1) == len(words)).all()
    # each word meets itself exactly once among distinct words
    assert (counts[:, 242] == 1).all()


def test_empty_inputs():
    assert feedback_codes((), ("crane",)).shape == (0, 1)
    assert partition_counts(("crane",), ()).sum() == 0


def _counts_from_codes(guesses, secrets):
    codes = feedback_codes(guesses, secrets)
    return np.array([np.bincount(row, minlength=243) for row in codes])


def test_partition_counts_match_codes(words):
    pool = tuple(words) + EXTRA
    np.testing.assert_array_equal(
        partition_counts(pool, words), _counts_from_codes(pool, words)
    )


def test_partition_counts_bins_in_row_blocks(words, monkeypatch):
    pool = tuple(words) + EXTRA
    expected = _counts_from_codes(pool, words)

    monkeypatch.setattr(pattern_matrix, "_CHUNK_CELLS", 3 * len(words))
    seen = []
    real_block = pattern_matrix._codes_block

    def recording_block(g, s):
        seen.append(g.shape[0] * s.shape[0])
        return real_block(g, s)

    monkeypatch.setattr(pattern_matrix, "_codes_block", recording_block)
    counts = partition_counts(pool, words)

    np.testing.assert_array_equal(counts, expected)
    assert len(seen) == -(-len(pool) // 3)
    assert max(seen) <= 3 * len(words)
