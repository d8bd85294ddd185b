"""
Incremental instability scoring of the regions emitted by a threshold sweep.

Every emitted region becomes an ``EvaluationNode``. Between a region and each
region it grew from, an *intermediate* node is inserted: it carries the
predecessor's pixels at the new threshold level and therefore represents the
predecessor just before it changed. Intermediate nodes are the ones judged as
local minima, one step late, once the score of the node above them is known.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import numpy as np

from .guard import assert_emitted, assert_non_empty
from .region import RegionSnapshot
from .thresholds import Comparator, ComputeDelta, as_scalar

if TYPE_CHECKING:
    from .mser import Mser
    from .tree import MserTree


def _frozen_view(pixels: np.ndarray) -> np.ndarray:
    coords = np.asarray(pixels)
    if coords.ndim == 1:
        coords = coords.reshape(-1, 1)
    view = coords.view()
    view.flags.writeable = False
    return view


class EvaluationNode:
    def __init__(
        self,
        value: float,
        pixels: np.ndarray,
        children: List["EvaluationNode"],
        history_child: Optional["EvaluationNode"],
    ) -> None:
        self.value = value
        self.pixels = pixels
        self.size = int(len(pixels))
        self.children = children
        # Largest predecessor; a back reference, never owned.
        self.history_child = history_child
        self.parent: Optional[EvaluationNode] = None
        self.score = float("nan")
        self.is_score_valid = False
        self.mser_this_or_children: List["Mser"] = []
        for child in children:
            child.parent = self

    @classmethod
    def from_component(
        cls,
        component: RegionSnapshot,
        comparator: Comparator,
        delta: ComputeDelta,
        tree: "MserTree",
    ) -> "EvaluationNode":
        """
        Build the node for a freshly emitted region and link it into history.

        Scoring this node may confirm local minima among its intermediate
        children, in which case ``tree.found_new_minimum`` is called before
        this method returns.
        """
        assert_non_empty(component)
        value = as_scalar(component.value)
        history: List[EvaluationNode] = []
        winner: Optional[EvaluationNode] = None
        winner_size = 0

        previous = component.evaluation_node
        if previous is not None:
            winner = cls._between(previous, value, comparator, delta)
            winner_size = previous.size
            history.append(winner)

        for child in component.children:
            assert_emitted(child)
            node = cls._between(child.evaluation_node, value, comparator, delta)
            history.append(node)
            if node.size > winner_size:
                winner = node
                winner_size = node.size

        this = cls(value, _frozen_view(component.pixels), history, winner)
        component.evaluation_node = this

        this.is_score_valid = this._compute_score(comparator, delta, intermediate=False)
        if this.is_score_valid:
            for node in history:
                node._evaluate_local_minimum(tree, comparator, delta)

        # Set only after minima were registered so a lineage's list already
        # holds any Mser accepted just now.
        if len(history) == 1:
            this.mser_this_or_children = history[0].mser_this_or_children
        else:
            this.mser_this_or_children = [
                mser for node in history for mser in node.mser_this_or_children
            ]
        return this

    @classmethod
    def _between(
        cls,
        child: "EvaluationNode",
        value: float,
        comparator: Comparator,
        delta: ComputeDelta,
    ) -> "EvaluationNode":
        node = cls(value, child.pixels, [child], child)
        node.is_score_valid = node._compute_score(comparator, delta, intermediate=True)
        node.mser_this_or_children = child.mser_this_or_children
        return node

    def _compute_score(
        self,
        comparator: Comparator,
        delta: ComputeDelta,
        intermediate: bool,
    ) -> bool:
        """
        Score against the ancestor ``delta`` levels back: |R_i \\ R_{i-delta}| / |R_i|.

        Returns False while the history is still too short to reach that level.
        """
        target = delta.value_minus_delta(self.value)
        node = self.history_child
        while node is not None and comparator(node.value, target) > 0:
            node = node.history_child
        if node is None:
            return False
        # An intermediate sits just below its own level, so an ancestor
        # exactly at the target is one step too recent.
        if intermediate and comparator(node.value, target) == 0 and node.history_child is not None:
            node = node.history_child
        self.score = (self.size - node.size) / float(self.size)
        return True

    def _evaluate_local_minimum(
        self,
        tree: "MserTree",
        comparator: Comparator,
        delta: ComputeDelta,
    ) -> None:
        if not self.is_score_valid:
            return

        below = self.history_child
        while below.is_score_valid and below.size == self.size:
            below = below.history_child

        if below.is_score_valid:
            below = self.history_child
            if self.score <= below.score and self.score < self.parent.score:
                tree.found_new_minimum(self)
        elif comparator(delta.value_minus_delta(self.value), below.value) > 0:
            # Bottom of a branch that stayed unchanged for more than delta
            # levels: its score is zero and nothing below can undercut it.
            tree.found_new_minimum(self)

    def __repr__(self) -> str:
        score = f"{self.score:.4f}" if self.is_score_valid else "invalid"
        return f"EvaluationNode(value={self.value!r}, size={self.size}, score={score})"


__all__ = ["EvaluationNode"]
