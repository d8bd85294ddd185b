from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

import numpy as np

if TYPE_CHECKING:
    from .evaluation import EvaluationNode


@dataclass(eq=False)
class Mser:
    """An accepted maximally stable region stored in the tree's arena."""

    index: int
    value: float
    score: float
    size: int
    pixels: np.ndarray
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)

    @classmethod
    def from_node(cls, index: int, node: "EvaluationNode") -> "Mser":
        return cls(
            index=index,
            value=node.value,
            score=float(node.score),
            size=int(node.size),
            pixels=node.pixels,
        )

    def mean(self) -> np.ndarray:
        """Return the centroid of the region's pixel coordinates."""
        return self.pixels.mean(axis=0)

    def cov(self) -> np.ndarray:
        """Return the (population) covariance matrix of the pixel coordinates."""
        coords = self.pixels.astype(np.float64)
        centered = coords - coords.mean(axis=0)
        return centered.T @ centered / float(len(coords) or 1)

    def __len__(self) -> int:
        return self.size

    def __iter__(self):
        return iter(self.pixels)

    def __repr__(self) -> str:
        return (
            f"Mser(index={self.index}, value={self.value!r}, size={self.size}, "
            f"score={self.score:.4f}, parent={self.parent}, children={self.children})"
        )


__all__ = ["Mser"]
