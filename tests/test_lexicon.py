from __future__ import annotations

import pytest

from lexicon import load_lexicon, load_words, sample_secrets
from wordle_env import MalformedWord


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_load_words(tmp_path):
    src = _write(tmp_path / "words.txt", "CRANE\n\n# comment\nhouse\n  crane \n")
    assert load_words(src) == ("crane", "house")


def test_malformed_line_names_location(tmp_path):
    src = _write(tmp_path / "words.txt", "crane\nhouse\ncranes\n")
    with pytest.raises(MalformedWord, match=r"words\.txt:3"):
        load_words(src)


def test_missing_and_empty(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_words(tmp_path / "nope.txt")
    with pytest.raises(ValueError):
        load_words(_write(tmp_path / "empty.txt", "\n# nothing\n"))


def test_load_lexicon(tmp_path):
    words = _write(tmp_path / "allowed.txt", "crane\nroate\n")
    sols = _write(tmp_path / "answers.txt", "house\ncrane\n")
    lex = load_lexicon(words, sols)
    assert lex.solutions == ("crane", "house")
    assert lex.allowed == ("crane", "house", "roate")

    lex = load_lexicon(words)
    assert lex.solutions == lex.allowed == ("crane", "roate")


def test_sample_secrets(words):
    assert sample_secrets(words) == words
    assert sample_secrets(words, 100) == words
    picked = sample_secrets(words, 5, seed=7)
    assert len(picked) == 5
    assert set(picked) <= set(words)
    assert sample_secrets(words, 5, seed=7) == picked
