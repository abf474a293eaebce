"""Expected-size strategy: minimise the expected number of remaining candidates."""

from __future__ import annotations

import numpy as np

from strategies.partition import PartitionStrategy


class ExpectedSizeStrategy(PartitionStrategy):
    """Pick the guess leaving the fewest candidates on average.

    If the secret is uniform over ``n`` candidates, a group of size ``c``
    is hit with probability ``c / n`` and leaves ``c`` words, so the
    expectation is ``sum(c^2) / n``. Scores are reported as the expected
    number of words eliminated, ``n - sum(c^2) / n``.
    """

    @property
    def name(self) -> str:
        return "expected-size"

    def _score(self, counts: np.ndarray, n: int) -> np.ndarray:
        c = counts.astype(np.float64)
        return n - (c * c).sum(axis=1) / n
