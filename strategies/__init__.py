"""Auto-discovery of the built-in Strategy subclasses in this package."""

from __future__ import annotations

import importlib
import inspect
import pkgutil
from pathlib import Path

from strategy import Strategy

_PKG_DIR = Path(__file__).resolve().parent

DEFAULT_STRATEGY = "entropy"


def _subclasses_in_module(mod) -> list[type[Strategy]]:
    found: list[type[Strategy]] = []
    for attr_name in dir(mod):
        obj = getattr(mod, attr_name)
        if (
            isinstance(obj, type)
            and issubclass(obj, Strategy)
            and obj.__module__ == mod.__name__
            and not inspect.isabstract(obj)
        ):
            found.append(obj)
    return found


def discover_strategies() -> list[type[Strategy]]:
    """Return all concrete Strategy classes defined in this package."""
    found: list[type[Strategy]] = []
    for info in pkgutil.iter_modules([str(_PKG_DIR)]):
        mod = importlib.import_module(f"strategies.{info.name}")
        found.extend(_subclasses_in_module(mod))
    return found


def strategy_names() -> list[str]:
    return sorted(cls().name for cls in discover_strategies())


def get_strategy(name: str = DEFAULT_STRATEGY) -> Strategy:
    """Instantiate the strategy called *name* (case-insensitive)."""
    for cls in discover_strategies():
        inst = cls()
        if inst.name.lower() == name.lower():
            return inst
    raise ValueError(
        f"Strategy {name!r} not found. Available: {strategy_names()}"
    )
