"""Target Allocation Model Layer.

Components:
- Model: Immutable weighted allocation with equivalence groups
- ModelAsset: Weight and equivalents of one model asset
- load_model*: Parse-then-validate loaders for JSON and YAML definitions
"""

from rebalancer.model.base import Model, ModelAsset
from rebalancer.model.loader import (
    load_model,
    load_model_from_file,
    load_model_from_json,
    load_model_from_yaml,
)

__all__ = [
    "Model",
    "ModelAsset",
    "load_model",
    "load_model_from_file",
    "load_model_from_json",
    "load_model_from_yaml",
]
