"""
Assembly of maximally stable extremal regions into a tree.

``MserTree`` is the handler a threshold sweep emits its regions into. Each
region is scored incrementally by ``EvaluationNode``; regions whose
instability score is a local minimum are handed back through
``found_new_minimum`` and, if they pass the size and score bounds, stored as
``Mser`` records. After the sweep, ``prune_duplicates`` removes regions that
are too similar to their accepted parent:

    A (child of B) is discarded if (|B| - |A|) / |B| <= min_diversity

Accepted regions live in an arena and refer to each other by index.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Set

from .evaluation import EvaluationNode
from .guard import assert_sweep_order, assert_valid_bounds, assert_valid_delta
from .mser import Mser
from .params import MserParams
from .region import RegionSnapshot
from .thresholds import Comparator, ComputeDelta, sweep_policy

logger = logging.getLogger(__name__)


class MserTree:
    def __init__(
        self,
        comparator: Comparator,
        delta: ComputeDelta,
        min_size: int,
        max_size: int,
        max_var: float,
        min_diversity: float,
    ) -> None:
        assert_valid_delta(getattr(delta, "delta", 0))
        assert_valid_bounds(min_size, max_size, max_var, min_diversity)
        self.comparator = comparator
        self.delta = delta
        self.min_size = min_size
        self.max_size = max_size
        self.max_var = max_var
        self.min_diversity = min_diversity

        self._arena: List[Mser] = []
        self._roots: Set[int] = set()
        self._nodes: List[int] = []
        self._last_value: Optional[float] = None
        self.emitted = 0

    @classmethod
    def from_params(cls, params: MserParams) -> "MserTree":
        params.validate()
        comparator, delta = sweep_policy(params.delta, params.dark_to_bright)
        return cls(
            comparator,
            delta,
            params.min_size,
            params.max_size,
            params.max_var,
            params.min_diversity,
        )

    def emit(self, component: RegionSnapshot) -> None:
        """Consume one region of the sweep; regions must arrive in threshold order."""
        assert_sweep_order(self._last_value, component.value, self.comparator)
        self._last_value = component.value
        EvaluationNode.from_component(component, self.comparator, self.delta, self)
        component.children.clear()
        self.emitted += 1

    def found_new_minimum(self, node: EvaluationNode) -> None:
        """Accept or reject a local minimum of the instability score."""
        if not (self.min_size <= node.size <= self.max_size and node.score <= self.max_var):
            logger.debug(
                "Rejected candidate at %r (size=%d, score=%.4f)",
                node.value,
                node.size,
                node.score,
            )
            return

        mser = Mser.from_node(len(self._arena), node)
        self._arena.append(mser)
        for child in node.mser_this_or_children:
            mser.children.append(child.index)
            child.parent = mser.index
            self._roots.discard(child.index)
        node.mser_this_or_children.clear()
        node.mser_this_or_children.append(mser)

        self._roots.add(mser.index)
        self._nodes.append(mser.index)
        logger.debug(
            "Accepted MSER #%d at %r (size=%d, score=%.4f, children=%d)",
            mser.index,
            mser.value,
            mser.size,
            mser.score,
            len(mser.children),
        )

    def prune_duplicates(self) -> None:
        """
        Remove regions too similar to their parent, working top-down from the roots.

        Children of a discarded region are handed to its parent and judged
        against that parent in the same pass, so running this again is a no-op.
        """
        before = len(self._nodes)
        survivors: List[int] = []
        pending = [self._arena[index] for index in sorted(self._roots)]
        while pending:
            mser = pending.pop()
            valid = self._prune_children(mser)
            survivors.extend(valid)
            pending.extend(self._arena[index] for index in valid)
        survivors.extend(sorted(self._roots))
        self._nodes = survivors
        logger.debug("Pruned %d near-duplicate regions", before - len(survivors))

    def _prune_children(self, mser: Mser) -> List[int]:
        valid: List[int] = []
        candidates = mser.children
        position = 0
        while position < len(candidates):
            child = self._arena[candidates[position]]
            position += 1
            diversity = (mser.size - child.size) / float(mser.size)
            if diversity > self.min_diversity:
                valid.append(child.index)
                continue
            candidates.extend(child.children)
            for index in child.children:
                self._arena[index].parent = mser.index
            child.parent = None
            child.children = []
        mser.children = valid
        return valid

    def size(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Mser]:
        return (self._arena[index] for index in self._nodes)

    def roots(self) -> List[Mser]:
        return [self._arena[index] for index in sorted(self._roots)]

    def parent(self, mser: Mser) -> Optional[Mser]:
        return None if mser.parent is None else self._arena[mser.parent]

    def children(self, mser: Mser) -> List[Mser]:
        return [self._arena[index] for index in mser.children]

    def summary(self) -> dict:
        return {
            "emitted": self.emitted,
            "regions": len(self._nodes),
            "roots": len(self._roots),
            "accepted": len(self._arena),
        }


def build_mser_tree(
    components: Iterable[RegionSnapshot],
    params: MserParams | None = None,
) -> MserTree:
    """
    Run every region of a threshold sweep through a new ``MserTree``.

    ``components`` is typically a generator driven by a component-tree
    builder: each snapshot is consumed before the builder resumes, so the
    builder may keep growing and re-yielding the same snapshot object.
    """
    tree = MserTree.from_params(params or MserParams())
    for component in components:
        tree.emit(component)
    tree.prune_duplicates()
    logger.info(
        "Built MSER tree: %d regions (%d roots) from %d emitted components",
        len(tree),
        len(tree.roots()),
        tree.emitted,
    )
    return tree


__all__ = ["MserTree", "build_mser_tree"]
