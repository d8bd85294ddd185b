from .evaluation import EvaluationNode
from .guard import MserConfigError, SweepContractError
from .mser import Mser
from .params import MserParams, from_json_file
from .region import RegionSnapshot
from .thresholds import (
    ComputeDeltaBrightToDark,
    ComputeDeltaDarkToBright,
    bright_to_dark,
    dark_to_bright,
    sweep_policy,
)
from .tree import MserTree, build_mser_tree

__all__ = [
    "build_mser_tree",
    "MserTree",
    "Mser",
    "EvaluationNode",
    "RegionSnapshot",
    "MserParams",
    "from_json_file",
    "MserConfigError",
    "SweepContractError",
    "dark_to_bright",
    "bright_to_dark",
    "ComputeDeltaDarkToBright",
    "ComputeDeltaBrightToDark",
    "sweep_policy",
]
