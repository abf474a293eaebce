from __future__ import annotations

from collections import Counter
from itertools import product

import pytest

from wordle_env import (
    ALL_CORRECT,
    MalformedWord,
    Tile,
    compute_feedback,
    decode_pattern,
    encode_pattern,
    format_pattern,
    is_consistent,
    narrow,
    normalize_word,
    parse_pattern,
)

A, P, C = Tile.ABSENT, Tile.PRESENT, Tile.CORRECT


@pytest.mark.parametrize("guess,secret,expected", [
    ("trace", "crane", "bggyg"),
    ("erase", "speed", "ybbyy"),
    ("tears", "bears", "bgggg"),
    ("tears", "stear", "yyyyy"),
    ("atttt", "xaaaa", "ybbbb"),
    ("aattt", "txxxx", "bbybb"),
    ("belle", "level", "bgyyy"),
    ("cools", "scoop", "yygby"),
    ("lemon", "level", "ggbbb"),
    ("house", "house", "ggggg"),
])
def test_feedback_golden(guess, secret, expected):
    assert format_pattern(compute_feedback(guess, secret)) == expected


def test_feedback_tiles_trace_crane():
    assert compute_feedback("trace", "crane") == (A, C, C, P, C)


def test_duplicate_guess_letter_credited_once():
    # SPEED has two E's; ERASE guesses two E's, both are credited
    pat = compute_feedback("ERASE", "SPEED")
    assert pat == (P, A, A, P, P)
    # a single E in the secret credits only one of the guessed E's
    assert compute_feedback("eerie", "crane") == (A, A, P, A, C)


def test_feedback_is_case_insensitive():
    assert compute_feedback("TRACE", "Crane") == compute_feedback("trace", "crane")


@pytest.mark.parametrize("bad", ["abc", "cranes", "cran3", "", "cr ne", "naïve"])
def test_malformed_words_rejected(bad):
    with pytest.raises(MalformedWord):
        compute_feedback(bad, "crane")
    with pytest.raises(ValueError):
        normalize_word(bad)


def test_normalize_word_strips_and_lowercases():
    assert normalize_word("  HoUsE\n") == "house"


def test_self_feedback_all_correct(words):
    for w in words:
        assert compute_feedback(w, w) == ALL_CORRECT


def test_no_over_crediting(words):
    for guess, secret in product(words, repeat=2):
        pat = compute_feedback(guess, secret)
        credited = Counter(g for g, t in zip(guess, pat) if t != Tile.ABSENT)
        assert not credited - Counter(secret)


def test_encode_decode():
    assert encode_pattern(ALL_CORRECT) == 242
    assert encode_pattern((A,) * 5) == 0
    assert encode_pattern((P, A, A, A, A)) == 1
    assert encode_pattern((A, C, A, A, A)) == 6
    pat = (A, C, C, P, C)
    assert decode_pattern(encode_pattern(pat)) == pat
    with pytest.raises(ValueError):
        decode_pattern(243)


@pytest.mark.parametrize("text", ["bgyyb", "BGYYB", "-GYY.", "02110", " bgyyb\n"])
def test_parse_pattern(text):
    assert parse_pattern(text) == (A, C, P, P, A)


@pytest.mark.parametrize("text", ["bgyy", "bgyybb", "bgxyb", ""])
def test_parse_pattern_invalid(text):
    with pytest.raises(ValueError):
        parse_pattern(text)


def test_is_consistent():
    observed = compute_feedback("trace", "crane")
    assert is_consistent("trace", "crane", observed)
    assert not is_consistent("trace", "trace", observed)


def test_narrow_keeps_secret_and_does_not_mutate(words):
    cands = list(words)
    pat = compute_feedback("raise", "house")
    out = narrow(cands, "raise", pat)
    assert "house" in out
    assert isinstance(out, tuple)
    assert cands == list(words)
    assert all(compute_feedback("raise", w) == pat for w in out)


def test_narrow_idempotent(words):
    pat = compute_feedback("stare", "tears")
    once = narrow(words, "stare", pat)
    assert narrow(once, "stare", pat) == once


def test_narrow_monotonic(words):
    secret = "mouse"
    cands = words
    for guess in ["crane", "spoon", "horse", "louse"]:
        nxt = narrow(cands, guess, compute_feedback(guess, secret))
        assert len(nxt) <= len(cands)
        assert set(nxt) <= set(cands)
        assert secret in nxt
        cands = nxt


def test_narrow_contradiction_is_empty(words):
    assert narrow(words, "house", parse_pattern("ggggb")) == ()
