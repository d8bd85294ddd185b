from __future__ import annotations

import json
from pathlib import Path

import pytest

from mser_tree import MserConfigError, MserParams, MserTree, from_json_file
from mser_tree.thresholds import ComputeDeltaDarkToBright, dark_to_bright


def test_default_params_are_valid() -> None:
    params = MserParams().validate()
    assert params.min_size <= params.max_size
    assert params.dark_to_bright is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"min_size": 50, "max_size": 10},
        {"min_size": -1},
        {"min_diversity": -0.1},
        {"max_var": -0.5},
        {"delta": -2},
    ],
)
def test_invalid_params_rejected_eagerly(overrides: dict) -> None:
    with pytest.raises(MserConfigError):
        MserTree.from_params(MserParams(**overrides))


def test_config_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        MserParams(min_size=5, max_size=4).validate()


def test_tree_constructor_validates_bounds() -> None:
    with pytest.raises(MserConfigError):
        MserTree(dark_to_bright, ComputeDeltaDarkToBright(1), 10, 5, 1.0, 0.0)


def test_tree_constructor_validates_delta() -> None:
    with pytest.raises(MserConfigError):
        MserTree(dark_to_bright, ComputeDeltaDarkToBright(-1), 1, 10, 1.0, 0.0)


def test_from_json_file_loads_params(tmp_path: Path) -> None:
    path = tmp_path / "params.json"
    payload = {
        "delta": 4,
        "min_size": 10,
        "max_size": 500,
        "max_var": 0.25,
        "min_diversity": 0.3,
        "dark_to_bright": False,
    }
    path.write_text(json.dumps(payload), encoding="utf-8")

    params = from_json_file(path)

    assert params == MserParams(**payload)
    assert params.to_dict() == payload


def test_from_json_file_rejects_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"delta": 2, "threshold": 9}), encoding="utf-8")

    with pytest.raises(MserConfigError, match="threshold"):
        from_json_file(path)


def test_from_json_file_validates(tmp_path: Path) -> None:
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"min_size": 100, "max_size": 20}), encoding="utf-8")

    with pytest.raises(MserConfigError):
        from_json_file(str(path))


@pytest.mark.parametrize(
    "payload",
    [{"min_size": "3"}, {"max_var": None}, {"delta": True}, {"dark_to_bright": "false"}],
)
def test_from_json_file_rejects_wrongly_typed_values(tmp_path: Path, payload: dict) -> None:
    path = tmp_path / "params.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(MserConfigError, match=next(iter(payload))):
        from_json_file(path)
