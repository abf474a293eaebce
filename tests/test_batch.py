from __future__ import annotations

import json
from dataclasses import replace

import pytest

from batch import BatchStats, GameResult, aggregate, opening_guess, run_batch


def test_aggregate_counts_only_wins_in_mean():
    results = [
        GameResult("crane", ("raise", "crane"), True),
        GameResult("house", ("raise", "mouse", "louse", "house"), True),
        GameResult("aaaaj", ("a",) * 6, False),
    ]
    stats = aggregate(results)
    assert (stats.games, stats.wins, stats.losses) == (3, 2, 1)
    assert stats.mean_guesses == pytest.approx(3.0)
    assert stats.distribution == {2: 1, 4: 1}
    assert stats.failed == ["aaaaj"]
    assert stats.win_rate == pytest.approx(2 / 3)


def test_aggregate_without_wins():
    stats = aggregate([GameResult("aaaaj", ("a",) * 6, False)])
    assert stats.wins == 0
    assert stats.mean_guesses == 0.0
    assert stats.distribution == {}
    assert aggregate([]).win_rate == 0.0


def test_run_batch_small_list(config, words):
    stats = run_batch(config, "entropy", workers=1)
    assert isinstance(stats, BatchStats)
    assert stats.games == len(words)
    assert stats.wins <= stats.games
    assert stats.wins + stats.losses == stats.games
    assert [r.secret for r in stats.results] == list(words)
    won = [r.num_guesses for r in stats.results if r.solved]
    assert stats.mean_guesses == pytest.approx(sum(won) / len(won))
    assert sum(stats.distribution.values()) == stats.wins
    # every game opens with the same shared guess
    assert len({r.guesses[0] for r in stats.results}) == 1
    json.dumps(stats.to_dict())


def test_run_batch_ladder(ladder_config):
    stats = run_batch(ladder_config, "first-candidate", secrets=["aaaaj", "AAAAB"], workers=1)
    assert stats.games == 2
    assert stats.wins == 1
    assert stats.distribution == {1: 1}
    assert stats.mean_guesses == 1.0
    assert stats.failed == ["aaaaj"]


def test_run_batch_zero_wins(ladder_config):
    stats = run_batch(ladder_config, "first-candidate", secrets=["aaaaj"])
    assert stats.wins == 0
    assert stats.losses == 1
    assert stats.mean_guesses == 0.0


def test_run_batch_empty(config):
    stats = run_batch(config, "entropy", secrets=[])
    assert stats.games == 0


def test_run_batch_process_pool_matches_sequential(config):
    seq = run_batch(config, "first-candidate", workers=1)
    progress = []
    par = run_batch(config, "first-candidate", workers=2, chunk_size=3,
                    progress=lambda done, total: progress.append((done, total)))
    assert par.results == seq.results
    assert par.to_dict() == seq.to_dict()
    assert progress[-1] == (seq.games, seq.games)


def test_opening_guess(config):
    assert opening_guess("entropy", replace(config, first_guess="Roate")) == "roate"
    assert opening_guess("first-candidate", config) == "abbey"


def test_first_guess_used_by_every_game(config):
    stats = run_batch(replace(config, first_guess="roate"), "entropy", secrets=["house", "speed"])
    assert all(r.guesses[0] == "roate" for r in stats.results)
