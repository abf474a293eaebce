"""Run the solver over many secrets and aggregate the outcomes.

Each game is an independent :class:`wordle_env.GameSession`; sessions share
only the read-only word lists in :class:`strategy.GameConfig`. With more
than one worker, chunks of secrets run in a process pool and the parent
collects the per-game results before aggregating them.
"""

from __future__ import annotations

import logging
import os
import time
from collections import Counter
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Callable, Iterable

from strategies import DEFAULT_STRATEGY, get_strategy
from strategy import GameConfig
from wordle_env import GameSession, normalize_word

log = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Result containers
# ------------------------------------------------------------------

@dataclass(frozen=True)
class GameResult:
    secret: str
    guesses: tuple[str, ...]
    solved: bool

    @property
    def num_guesses(self) -> int:
        return len(self.guesses)


@dataclass
class BatchStats:
    """Aggregate statistics for a batch run.

    ``mean_guesses`` and ``distribution`` cover winning games only.
    """
    games: int = 0
    wins: int = 0
    losses: int = 0
    mean_guesses: float = 0.0
    distribution: dict[int, int] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)
    results: list[GameResult] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.games else 0.0

    def to_dict(self) -> dict:
        return {
            "games": self.games,
            "wins": self.wins,
            "losses": self.losses,
            "win_rate": round(self.win_rate, 4),
            "mean_guesses": round(self.mean_guesses, 4),
            "distribution": {str(k): v for k, v in sorted(self.distribution.items())},
            "failed": list(self.failed),
            "results": [
                {**asdict(r), "guesses": list(r.guesses), "num_guesses": r.num_guesses}
                for r in self.results
            ],
        }


def aggregate(results: Iterable[GameResult]) -> BatchStats:
    """Fold per-game results into a :class:`BatchStats`."""
    results = list(results)
    won = [r.num_guesses for r in results if r.solved]
    wins = len(won)
    return BatchStats(
        games=len(results),
        wins=wins,
        losses=len(results) - wins,
        mean_guesses=sum(won) / wins if wins else 0.0,
        distribution=dict(sorted(Counter(won).items())),
        failed=[r.secret for r in results if not r.solved],
        results=results,
    )


# ------------------------------------------------------------------
# Worker function (runs in a child process when workers > 1)
# ------------------------------------------------------------------

def _play_secrets(
    strategy_name: str,
    config: GameConfig,
    secrets: tuple[str, ...],
) -> list[GameResult]:
    """Play one game per secret with a single strategy instance."""
    strat = get_strategy(strategy_name)
    results: list[GameResult] = []
    for secret in secrets:
        session = GameSession(strat, config, secret=secret)
        session.play()
        if not session.is_solved:
            log.warning("%s: not solved in %d guesses", secret, session.guess_count)
        results.append(GameResult(
            secret=secret,
            guesses=tuple(r.word for r in session.history),
            solved=session.is_solved,
        ))
    return results


# ------------------------------------------------------------------
# Batch runner
# ------------------------------------------------------------------

def opening_guess(strategy_name: str, config: GameConfig) -> str:
    """Compute the strategy's first guess once for the whole batch."""
    if config.first_guess:
        return normalize_word(config.first_guess)
    strat = get_strategy(strategy_name)
    strat.begin_game(config)
    t0 = time.time()
    word = strat.select_guess(config.starting_candidates, config.allowed, 0)
    log.info("Opening guess %s (%.1fs)", word, time.time() - t0)
    return word


def run_batch(
    config: GameConfig,
    strategy_name: str = DEFAULT_STRATEGY,
    secrets: Iterable[str] | None = None,
    workers: int | None = 1,
    chunk_size: int | None = None,
    progress: Callable[[int, int], None] | None = None,
) -> BatchStats:
    """Play one game per secret and aggregate the outcomes.

    Parameters
    ----------
    config : GameConfig
        Word lists and settings, shared by every session.
    strategy_name : str
        Name of a built-in strategy; each worker builds its own instance.
    secrets : iterable of str or None
        Secrets to play; defaults to ``config.solutions``.
    workers : int or None
        ``1`` (or less) runs in-process. ``None`` uses every CPU.
    chunk_size : int or None
        Secrets per worker task; defaults to an even split into
        four tasks per worker.
    progress : callable or None
        Called as ``progress(done, total)`` after each finished chunk.
    """
    if secrets is None:
        secrets = config.solutions
    secrets = tuple(normalize_word(s) for s in secrets)
    total = len(secrets)
    if total == 0:
        return aggregate([])

    config = replace(config, first_guess=opening_guess(strategy_name, config))

    if workers is None:
        workers = os.cpu_count() or 1
    workers = max(1, min(workers, total))
    if chunk_size is None:
        chunk_size = max(1, -(-total // (workers * 4)))
    chunks = [secrets[i:i + chunk_size] for i in range(0, total, chunk_size)]

    log.info(
        "Running %s on %d secrets (workers: %d, chunks: %d)",
        strategy_name, total, workers, len(chunks),
    )
    t0 = time.time()
    results: list[GameResult] = []

    if workers == 1:
        for chunk in chunks:
            results.extend(_play_secrets(strategy_name, config, chunk))
            if progress is not None:
                progress(len(results), total)
    else:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_play_secrets, strategy_name, config, chunk)
                for chunk in chunks
            ]
            for fut in as_completed(futures):
                results.extend(fut.result())
                if progress is not None:
                    progress(len(results), total)

    order = {s: i for i, s in enumerate(secrets)}
    results.sort(key=lambda r: order[r.secret])
    stats = aggregate(results)
    log.info(
        "Batch done in %.1fs: %d/%d solved, mean %.3f",
        time.time() - t0, stats.wins, stats.games, stats.mean_guesses,
    )
    return stats


# ------------------------------------------------------------------
# Plotting
# ------------------------------------------------------------------

def plot_distribution(stats: BatchStats, path: str | Path, title: str = "") -> Path | None:
    """Save a histogram of guesses-to-win; returns the path written."""
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        log.warning("matplotlib not installed - skipping plot")
        return None

    won = [r.num_guesses for r in stats.results if r.solved]
    mx = max(won) if won else 6
    bins = list(range(1, mx + 2))

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.hist(won, bins=bins, edgecolor="black", align="left")
    ax.set_title(title or "Guess distribution")
    ax.set_xlabel("Guesses")
    ax.set_ylabel("Games won")
    fig.tight_layout()

    dest = Path(path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(dest, dpi=150)
    plt.close(fig)
    return dest
