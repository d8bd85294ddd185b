"""
Threshold ordering for the two sweep directions.

A comparator returns a negative number, zero or a positive number when its
first argument comes before, together with or after the second one in the
sweep. ``ComputeDelta`` policies step a threshold ``delta`` levels back
against the sweep direction.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

Comparator = Callable[[float, float], int]


def dark_to_bright(a: float, b: float) -> int:
    return int(a > b) - int(a < b)


def bright_to_dark(a: float, b: float) -> int:
    return int(b > a) - int(b < a)


def as_scalar(value: float) -> float:
    """Widen a numpy scalar threshold so ``value +/- delta`` cannot wrap around."""
    item = getattr(value, "item", None)
    return item() if item is not None else value


@dataclass(frozen=True)
class ComputeDeltaDarkToBright:
    delta: float

    def value_minus_delta(self, value: float) -> float:
        return as_scalar(value) - as_scalar(self.delta)


@dataclass(frozen=True)
class ComputeDeltaBrightToDark:
    delta: float

    def value_minus_delta(self, value: float) -> float:
        return as_scalar(value) + as_scalar(self.delta)


ComputeDelta = ComputeDeltaDarkToBright | ComputeDeltaBrightToDark


def sweep_policy(delta: float, dark_to_bright_sweep: bool = True) -> Tuple[Comparator, ComputeDelta]:
    """Return the comparator and delta policy for one sweep direction."""
    if dark_to_bright_sweep:
        return dark_to_bright, ComputeDeltaDarkToBright(delta)
    return bright_to_dark, ComputeDeltaBrightToDark(delta)


__all__ = [
    "Comparator",
    "ComputeDelta",
    "ComputeDeltaBrightToDark",
    "ComputeDeltaDarkToBright",
    "as_scalar",
    "bright_to_dark",
    "dark_to_bright",
    "sweep_policy",
]
