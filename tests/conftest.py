"""Shared test fixtures: a small level-by-level threshold sweep over synthetic images."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Iterator, List, Sequence

import cv2
import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mser_tree.region import RegionSnapshot


def profile(values: Sequence[int]) -> np.ndarray:
    """A 1-D intensity profile as a single-row 8-bit image."""
    return np.asarray(values, dtype=np.uint8).reshape(1, -1)


def sweep_image(
    image: np.ndarray,
    dark_to_bright: bool = True,
    connectivity: int = 4,
) -> Iterator[RegionSnapshot]:
    """
    Yield components of ``image`` level by level, the way a component-tree
    builder would emit them: a component is yielded when it first appears and
    again whenever it grows; absorbed components are recorded via ``merge``.
    """
    levels = np.unique(image)
    if not dark_to_bright:
        levels = levels[::-1]

    owner = np.full(image.shape, -1, dtype=np.int64)
    components: List[RegionSnapshot] = []
    for level in levels:
        mask = image <= level if dark_to_bright else image >= level
        count, labels = cv2.connectedComponents(mask.astype(np.uint8), connectivity=connectivity)
        next_owner = np.full(image.shape, -1, dtype=np.int64)
        value = level.item()

        for label in range(1, count):
            region = labels == label
            coords = np.argwhere(region)
            previous = [int(idx) for idx in np.unique(owner[region]) if idx >= 0]

            if not previous:
                component = RegionSnapshot(value, coords)
                components.append(component)
                next_owner[region] = len(components) - 1
                yield component
                continue

            keep = max(previous, key=lambda idx: components[idx].size)
            next_owner[region] = keep
            component = components[keep]
            if len(previous) == 1 and component.size == len(coords):
                continue
            for idx in previous:
                if idx != keep:
                    component.merge(components[idx])
            component.grow(value, coords)
            yield component

        owner = next_owner


@pytest.fixture
def sweep():
    return sweep_image


@pytest.fixture
def make_profile():
    return profile
