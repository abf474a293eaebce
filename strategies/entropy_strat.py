"""Entropy strategy: maximise expected information gain per guess."""

from __future__ import annotations

import numpy as np

from strategies.partition import PartitionStrategy


class EntropyStrategy(PartitionStrategy):
    """Select the guess that maximises Shannon entropy of the feedback partition.

    With ``n`` candidates split into groups of sizes ``c_k``, the score is
    ``-sum(p_k * log2(p_k))`` where ``p_k = c_k / n``: the expected number of
    bits the feedback will reveal.
    """

    @property
    def name(self) -> str:
        return "entropy"

    def _score(self, counts: np.ndarray, n: int) -> np.ndarray:
        p = counts / float(n)
        with np.errstate(divide="ignore", invalid="ignore"):
            terms = np.where(p > 0, p * np.log2(p), 0.0)
        return -terms.sum(axis=1)
