from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

import numpy as np

if TYPE_CHECKING:
    from .evaluation import EvaluationNode


@dataclass(eq=False)
class RegionSnapshot:
    """
    A connected component as handed over by the threshold sweep.

    The same snapshot object is emitted again each time its component grows
    to a new threshold. Between emissions the sweep replaces ``pixels`` with
    the enlarged coordinate array and appends every component it swallowed
    to ``children``. ``evaluation_node`` remembers the node built at the most
    recent emission and is how history is threaded from one level to the next.
    """

    value: float
    pixels: np.ndarray
    children: List["RegionSnapshot"] = field(default_factory=list)
    evaluation_node: Optional["EvaluationNode"] = None

    @property
    def size(self) -> int:
        return int(len(self.pixels))

    def merge(self, other: "RegionSnapshot") -> None:
        """Record that ``other`` was absorbed into this component."""
        self.children.append(other)

    def grow(self, value: float, pixels: np.ndarray) -> None:
        self.value = value
        self.pixels = pixels

    def __repr__(self) -> str:
        return (
            f"RegionSnapshot(value={self.value!r}, size={self.size}, "
            f"merged={len(self.children)})"
        )


__all__ = ["RegionSnapshot"]
