from __future__ import annotations

from typing import Callable


class MserConfigError(ValueError):
    """Raised for MSER parameters that can never produce a meaningful tree."""


class SweepContractError(AssertionError):
    """Raised when the region sweep feeding the tree breaks its ordering contract."""


def assert_valid_delta(delta: float) -> None:
    if delta < 0:
        raise MserConfigError(f"delta must be non-negative, got {delta}")


def assert_valid_bounds(
    min_size: int,
    max_size: int,
    max_var: float,
    min_diversity: float,
) -> None:
    if min_size < 0 or max_size < 0:
        raise MserConfigError(
            f"Region size bounds must be non-negative, got min_size={min_size} max_size={max_size}"
        )
    if min_size > max_size:
        raise MserConfigError(f"min_size ({min_size}) exceeds max_size ({max_size})")
    if max_var < 0:
        raise MserConfigError(f"max_var must be non-negative, got {max_var}")
    if min_diversity < 0:
        raise MserConfigError(f"min_diversity must be non-negative, got {min_diversity}")


def assert_sweep_order(
    previous: object | None,
    value: object,
    comparator: Callable[[object, object], int],
) -> None:
    if previous is not None and comparator(value, previous) < 0:
        raise SweepContractError(
            f"Region emitted at {value!r} after a region at {previous!r}; "
            "thresholds must be emitted in sweep order"
        )


def assert_emitted(child: object) -> None:
    if getattr(child, "evaluation_node", None) is None:
        raise SweepContractError(
            f"Merged region {child!r} was never emitted before its parent"
        )


def assert_non_empty(component: object) -> None:
    if len(getattr(component, "pixels", ())) == 0:
        raise SweepContractError(f"Region {component!r} was emitted without pixels")


__all__ = [
    "MserConfigError",
    "SweepContractError",
    "assert_valid_bounds",
    "assert_valid_delta",
    "assert_sweep_order",
    "assert_emitted",
    "assert_non_empty",
]
