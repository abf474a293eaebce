"""First-candidate strategy: always guess the alphabetically first candidate."""

from __future__ import annotations

from strategy import Strategy
from wordle_env import ContradictoryFeedback


class FirstCandidateStrategy(Strategy):
    """Baseline that never probes: guess ``min(candidates)``.

    Useful as a floor when comparing strategies in batch runs.
    """

    @property
    def name(self) -> str:
        return "first-candidate"

    def select_guess(
        self,
        candidates: tuple[str, ...],
        allowed: tuple[str, ...],
        history_length: int,
    ) -> str:
        if not candidates:
            raise ContradictoryFeedback()
        return min(candidates)
