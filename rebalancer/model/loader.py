"""Model definition loading.

Definitions are parsed fully, then validated as a whole: a malformed or
rule-violating definition never produces a usable Model.

Definition format (JSON or YAML):

    {
        "assets": {
            "VOO": {"weight": 10, "equivalents": ["CSPX"]},
            "TLT": {"weight": 5}
        }
    }
"""

import json
from pathlib import Path
from typing import IO, Any, Dict, Union

import yaml

from rebalancer.model.base import Model, ModelAsset
from rebalancer.utils.exceptions import ModelFormatError, ModelValidationError
from rebalancer.utils.logging import get_logger

logger = get_logger(__name__)

Source = Union[str, bytes, IO[str], IO[bytes]]


def load_model(data: Any) -> Model:
    """Build a validated Model from a parsed definition.

    Args:
        data: Parsed definition with an "assets" mapping

    Returns:
        Validated Model

    Raises:
        ModelFormatError: If the definition structure is malformed
        ModelValidationError: If the definition violates a model rule
    """
    if not isinstance(data, dict):
        raise ModelFormatError(
            f"model definition must be a mapping, got {type(data).__name__}"
        )

    raw_assets = data.get("assets")
    if raw_assets is None:
        raw_assets = {}
    if not isinstance(raw_assets, dict):
        raise ModelFormatError("model definition 'assets' must be a mapping")

    assets: Dict[str, ModelAsset] = {}
    for symbol, raw_asset in raw_assets.items():
        assets[str(symbol)] = _parse_asset(str(symbol), raw_asset)

    try:
        model = Model(assets)
    except ModelValidationError as e:
        logger.warning("Model validation failed: %s", e)
        raise

    logger.debug("Loaded model with %d assets", len(assets))
    return model


def load_model_from_json(source: Source) -> Model:
    """Load a model from JSON text or a readable stream.

    Raises:
        ModelFormatError: If the JSON is invalid or malformed
        ModelValidationError: If the definition violates a model rule
    """
    try:
        if hasattr(source, "read"):
            data = json.load(source)
        else:
            data = json.loads(source)
    except json.JSONDecodeError as e:
        raise ModelFormatError(f"invalid model JSON: {e}") from e

    return load_model(data)


def load_model_from_yaml(source: Source) -> Model:
    """Load a model from YAML text or a readable stream.

    Raises:
        ModelFormatError: If the YAML is invalid or malformed
        ModelValidationError: If the definition violates a model rule
    """
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise ModelFormatError(f"invalid model YAML: {e}") from e

    return load_model(data)


def load_model_from_file(filepath: str | Path) -> Model:
    """Load a model from a .json, .yaml or .yml file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ModelFormatError: If the suffix is unsupported or content malformed
        ModelValidationError: If the definition violates a model rule
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Model file not found: {filepath}")

    suffix = path.suffix.lower()
    with open(path, "r", encoding="utf-8") as f:
        if suffix == ".json":
            return load_model_from_json(f)
        if suffix in (".yaml", ".yml"):
            return load_model_from_yaml(f)

    raise ModelFormatError(f"unsupported model file type: {path.suffix}")


def _parse_asset(symbol: str, raw_asset: Any) -> ModelAsset:
    if not isinstance(raw_asset, dict):
        raise ModelFormatError(f"asset {symbol} must be a mapping")

    weight = raw_asset.get("weight")
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise ModelFormatError(f"asset {symbol} weight must be a number, got {weight!r}")

    equivalents = raw_asset.get("equivalents")
    if equivalents is None:
        equivalents = []
    if not isinstance(equivalents, list) or not all(
        isinstance(e, str) for e in equivalents
    ):
        raise ModelFormatError(f"asset {symbol} equivalents must be a list of symbols")

    return ModelAsset(weight=float(weight), equivalents=tuple(equivalents))
