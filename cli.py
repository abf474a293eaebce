#!/usr/bin/env python3
"""Wordle solver command line.

Usage:
    wordle-solver assist words.txt                  # help with a game you are playing
    wordle-solver play words.txt --secret house     # watch the solver play
    wordle-solver play words.txt --human            # guess yourself, the program scores
    wordle-solver batch allowed.txt answers.txt     # benchmark over all answers
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
import time
from pathlib import Path

from batch import BatchStats, plot_distribution, run_batch
from lexicon import load_lexicon, sample_secrets
from strategies import DEFAULT_STRATEGY, get_strategy, strategy_names
from strategy import GameConfig
from wordle_env import (
    ContradictoryFeedback,
    GameSession,
    GuessRecord,
    MalformedWord,
    Tile,
    normalize_word,
    parse_pattern,
)

_PREVIEW = 5

_TILE_COLORS = {
    Tile.CORRECT: "48;2;40;200;40",    # green
    Tile.PRESENT: "48;2;200;150;40",   # orange
    Tile.ABSENT: "48;2;120;120;120",   # grey
}
_TILE_PLAIN = {Tile.CORRECT: str.upper, Tile.PRESENT: str.lower, Tile.ABSENT: lambda c: "."}


# ------------------------------------------------------------------
# Console formatting
# ------------------------------------------------------------------

def _bold(text: str) -> str:
    return f"\033[1m{text}\033[0m" if sys.stdout.isatty() else text


def format_guess(rec: GuessRecord) -> str:
    """Render a guess as coloured tiles (plain ``HO.s.`` style off a tty)."""
    if not sys.stdout.isatty():
        return "".join(_TILE_PLAIN[t](c) for c, t in zip(rec.word, rec.pattern))
    out = [f"\033[38;2;0;0;0m\033[{_TILE_COLORS[t]}m {c.upper()} " for c, t in zip(rec.word, rec.pattern)]
    return "".join(out) + "\033[0m"


def _preview(words, max_length: int = _PREVIEW) -> str:
    shown = ", ".join(str(w) for w in words[:max_length])
    return shown + (", ..." if len(words) > max_length else "")


def print_summary(stats: BatchStats, strategy_name: str) -> None:
    print(f"\n=== {strategy_name} - {stats.games} games ===")
    print(f"  Solved: {stats.wins}/{stats.games} ({100 * stats.win_rate:.1f}%)")
    print(f"  Mean guesses (solved games): {stats.mean_guesses:.3f}")
    for n, count in sorted(stats.distribution.items()):
        bar = "#" * max(1, round(40 * count / stats.wins))
        print(f"  {n}: {count:>6} {bar}")
    if stats.failed:
        print(f"  Failed ({len(stats.failed)}): {_preview(stats.failed, 10)}")
    print()


# ------------------------------------------------------------------
# Prompts
# ------------------------------------------------------------------

def _prompt_word(prompt: str, allowed: tuple[str, ...] | None = None) -> str:
    while True:
        raw = input(_bold(prompt))
        try:
            word = normalize_word(raw)
        except MalformedWord as exc:
            print(f"  {exc}. Try again.")
            continue
        if allowed is not None and word not in allowed:
            print(f"  {word!r} is not in the word list. Try again.")
            continue
        return word


def _prompt_pattern(prompt: str) -> tuple[Tile, ...]:
    while True:
        raw = input(_bold(prompt))
        try:
            return parse_pattern(raw)
        except ValueError as exc:
            print(f"  {exc}. Try again.")


# ------------------------------------------------------------------
# Subcommands
# ------------------------------------------------------------------

def cmd_assist(args: argparse.Namespace, config: GameConfig) -> int:
    strat = get_strategy(args.strategy)
    session = GameSession(strat, config)
    print("Enter each guess and its result: g = correct, y = present, b = absent "
          "(e.g. bgyyb). Ctrl-D to abort.")

    while not session.game_over:
        cands = session.candidates
        print(f"{_bold(f'Solution space ({len(cands)} entries):')} {_preview(cands)}")
        if len(cands) == 1:
            print(_bold(f"Success!   -> {cands[0]}"))
            return 0

        if session.guess_count == 0 and config.first_guess:
            ranked = [config.first_guess]
        else:
            ranked = [
                f"{s.word} ({s.score:.3f})"
                for s in strat.rank_guesses(cands, config.allowed, session.guess_count)
            ]
        print(f"{_bold('Suggested guesses:')} {_preview(ranked)}")

        try:
            word = _prompt_word("Enter guessed word: ")
            pattern = _prompt_pattern("Enter resulting pattern: ")
        except EOFError:
            print("  Aborted.")
            return 0

        try:
            rec = session.record(word, pattern)
        except ContradictoryFeedback as exc:
            print(f"  [warn] {exc}. Check the pattern and enter it again.",
                  file=sys.stderr)
            continue
        print(f"  {format_guess(rec)}")

    if session.is_solved:
        print(_bold(f"Success!   -> {session.history[-1].word}"))
    else:
        print(f"{_bold('Failure!')}   Rounds exhausted! "
              f"Remaining: {_preview(session.candidates)}")
    print(f"Score {session.guess_count}")
    return 0


def cmd_play(args: argparse.Namespace, config: GameConfig) -> int:
    strat = get_strategy(args.strategy)
    if args.secret:
        secret = normalize_word(args.secret)
    else:
        secret = random.Random(args.seed).choice(config.solutions)
    session = GameSession(strat, config, secret=secret)
    allowed = frozenset(config.allowed)

    while not session.game_over:
        n = session.guess_count + 1
        if args.human:
            try:
                word = _prompt_word(f"Guess {n}: ", allowed)
            except EOFError:
                print("  Aborted.")
                return 0
            rec = session.guess(word)
        else:
            rec = session.play_turn()
        print(f"{n}. {format_guess(rec)}  ({len(session.candidates)} left)")

    if session.is_solved:
        print(_bold(f"Success!   -> {session.secret}"))
    else:
        print(f"{_bold('Failure!')}   Rounds exhausted! The word was {session.secret}.")
    print(f"Score {session.guess_count}")
    return 0


def cmd_batch(args: argparse.Namespace, config: GameConfig) -> int:
    secrets = sample_secrets(config.solutions, args.num_games, args.seed)
    print(f"Running {args.strategy} on {len(secrets)} secrets "
          f"({len(config.allowed)} allowed words) ...", flush=True)

    def progress(done: int, total: int) -> None:
        print(f"\r  {done}/{total} games", end="", flush=True)

    t0 = time.time()
    stats = run_batch(
        config,
        strategy_name=args.strategy,
        secrets=secrets,
        workers=args.workers,
        progress=progress,
    )
    print(f"\nElapsed: {time.time() - t0:.1f}s")
    print_summary(stats, args.strategy)

    if args.json:
        json_path = Path(args.json)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        output = {"strategy": args.strategy, "summary": stats.to_dict()}
        json_path.write_text(json.dumps(output, indent=2), encoding="utf-8")
        print(f"JSON saved to {json_path}")
    if args.plot:
        dest = plot_distribution(stats, args.plot, title=f"{args.strategy} - guess distribution")
        if dest is not None:
            print(f"Plot saved to {dest}")
    return 0


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--strategy", default=DEFAULT_STRATEGY, choices=strategy_names(),
                        help=f"Guess strategy (default: {DEFAULT_STRATEGY})")
    common.add_argument("--pool", choices=["solutions", "allowed"], default="solutions",
                        help="Word list the candidates start from (default: solutions)")
    common.add_argument("--no-probe", action="store_true",
                        help="Only guess words that could still be the answer")
    common.add_argument("--first-guess", default=None,
                        help="Fixed opening guess (skips the expensive first search)")
    common.add_argument("-v", "--verbose", action="store_true", help="Log progress")

    parser = argparse.ArgumentParser(
        prog="wordle-solver",
        description="A program to solve Wordle for you.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("assist", parents=[common],
                       help="Help with a game you are playing")
    p.add_argument("words", help="List of allowed five-letter words")
    p.add_argument("--solutions", default=None, help="List of possible answers")
    p.set_defaults(func=cmd_assist)

    p = sub.add_parser("play", parents=[common],
                       help="Play a full game against a secret word")
    p.add_argument("words", help="List of allowed five-letter words")
    p.add_argument("--solutions", default=None, help="List of possible answers")
    p.add_argument("--secret", default=None, help="Secret word (default: random answer)")
    p.add_argument("--seed", type=int, default=None, help="Seed for the random secret")
    p.add_argument("--human", action="store_true", help="You guess, the program scores")
    p.set_defaults(func=cmd_play)

    p = sub.add_parser("batch", parents=[common],
                       help="Run many games to measure the strategy")
    p.add_argument("words", help="List of allowed five-letter words")
    p.add_argument("solutions", help="List of words to use as secrets")
    p.add_argument("--num-games", type=int, default=None, help="Limit number of secrets")
    p.add_argument("--seed", type=int, default=42, help="Seed for --num-games sampling")
    p.add_argument("--workers", type=int, default=None,
                   help="Parallel worker processes (default: all CPUs)")
    p.add_argument("--json", default=None, help="Save results JSON to this path")
    p.add_argument("--plot", default=None, help="Save histogram to this path")
    p.set_defaults(func=cmd_batch)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        lex = load_lexicon(args.words, args.solutions)
        config = GameConfig(
            allowed=lex.allowed,
            solutions=lex.solutions,
            candidate_pool=args.pool,
            first_guess=normalize_word(args.first_guess) if args.first_guess else None,
            score_allowed=not args.no_probe,
        )
        return args.func(args, config)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
