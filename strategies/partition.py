"""Shared machinery for strategies that score guesses by feedback partition."""

from __future__ import annotations

import logging
from abc import abstractmethod

import numpy as np

from pattern_matrix import partition_counts
from strategy import GameConfig, ScoredGuess, Strategy
from wordle_env import ContradictoryFeedback

log = logging.getLogger(__name__)

# Decisions remembered per (candidates, pool); cleared when full.
_MEMO_LIMIT = 4096

# Scores equal to this many decimals count as tied.
_TIE_DECIMALS = 9


class PartitionStrategy(Strategy):
    """Score each word in the guess pool by how it splits the candidates.

    For a guess ``w`` the candidates are partitioned by the pattern ``w``
    would receive if each candidate were the secret. Subclasses turn the
    partition sizes into a score (higher is better). The best score wins;
    ties go to a word that is itself a candidate, then to the
    lexicographically smallest word.
    """

    def __init__(self) -> None:
        self._score_allowed = True
        self._candidates_only_below = 3
        self._memo: dict[tuple[tuple[str, ...], tuple[str, ...]], list[ScoredGuess]] = {}

    def begin_game(self, config: GameConfig) -> None:
        self._score_allowed = config.score_allowed
        self._candidates_only_below = config.candidates_only_below

    @abstractmethod
    def _score(self, counts: np.ndarray, n: int) -> np.ndarray:
        """Map (guesses, 243) partition counts over *n* candidates to scores."""
        ...

    def _guess_pool(
        self,
        candidates: tuple[str, ...],
        allowed: tuple[str, ...],
    ) -> tuple[str, ...]:
        if not self._score_allowed or len(candidates) < self._candidates_only_below:
            return tuple(sorted(candidates))
        return tuple(sorted(set(allowed).union(candidates)))

    def _ranked(
        self,
        candidates: tuple[str, ...],
        allowed: tuple[str, ...],
    ) -> list[ScoredGuess]:
        pool = self._guess_pool(candidates, allowed)
        key = (candidates, pool)
        hit = self._memo.get(key)
        if hit is not None:
            return hit

        counts = partition_counts(pool, candidates)
        scores = np.round(self._score(counts, len(candidates)), _TIE_DECIMALS)
        cand_set = set(candidates)
        is_cand = np.fromiter((w in cand_set for w in pool), dtype=bool, count=len(pool))
        # pool is sorted, so a stable sort on (-score, not candidate) keeps
        # lexicographic order within ties
        order = np.lexsort((~is_cand, -scores))
        ranked = [ScoredGuess(pool[i], float(scores[i])) for i in order]

        if len(self._memo) >= _MEMO_LIMIT:
            self._memo.clear()
        self._memo[key] = ranked
        log.debug(
            "%s: scored %d guesses against %d candidates, best %s (%.3f)",
            self.name, len(pool), len(candidates), ranked[0].word, ranked[0].score,
        )
        return ranked

    def select_guess(
        self,
        candidates: tuple[str, ...],
        allowed: tuple[str, ...],
        history_length: int,
    ) -> str:
        candidates = tuple(candidates)
        if not candidates:
            raise ContradictoryFeedback()
        if len(candidates) == 1:
            return candidates[0]
        return self._ranked(candidates, tuple(allowed))[0].word

    def rank_guesses(
        self,
        candidates: tuple[str, ...],
        allowed: tuple[str, ...],
        history_length: int,
        top_n: int = 5,
    ) -> list[ScoredGuess]:
        candidates = tuple(candidates)
        if not candidates:
            raise ContradictoryFeedback()
        if len(candidates) == 1:
            return [ScoredGuess(candidates[0], 0.0)]
        return self._ranked(candidates, tuple(allowed))[:top_n]
