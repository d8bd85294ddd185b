from __future__ import annotations

import json
import numbers
import sys
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from .guard import MserConfigError, assert_valid_bounds, assert_valid_delta


@dataclass
class MserParams:
    delta: float = 1
    min_size: int = 1
    max_size: int = sys.maxsize
    max_var: float = 1.0
    min_diversity: float = 0.0
    dark_to_bright: bool = True

    def validate(self) -> "MserParams":
        for item in fields(self):
            value = getattr(self, item.name)
            if item.name == "dark_to_bright":
                if not isinstance(value, bool):
                    raise MserConfigError(f"dark_to_bright must be a boolean, got {value!r}")
            elif isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise MserConfigError(f"{item.name} must be a number, got {value!r}")
        assert_valid_delta(self.delta)
        assert_valid_bounds(self.min_size, self.max_size, self.max_var, self.min_diversity)
        return self

    def to_dict(self) -> dict:
        return asdict(self)


def from_json_file(path: str | Path) -> MserParams:
    file_path = Path(path)
    with file_path.open("r", encoding="utf-8") as fp:
        payload = json.load(fp)

    if not isinstance(payload, dict):
        raise MserConfigError(f"Expected a JSON object of MSER parameters in {file_path}")
    unknown = sorted(set(payload) - {item.name for item in fields(MserParams)})
    if unknown:
        raise MserConfigError(f"Unknown MSER parameter(s) in {file_path}: {', '.join(unknown)}")

    return MserParams(**payload).validate()


__all__ = ["MserParams", "from_json_file"]
