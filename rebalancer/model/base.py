"""Target allocation model.

A Model is an immutable weighted allocation of assets. Each asset may declare
equivalents: other symbols considered the same holding as the asset itself
(for example an Irish-domiciled S&P 500 ETF held in place of a US one).

Rules enforced at construction:
- The model holds at least one asset
- No weight is negative
- An equivalent never appears as an asset by itself in the same model
- An equivalent is linked to at most one asset
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Tuple

from rebalancer.symbols import Symbol, SymbolSet
from rebalancer.utils.exceptions import (
    DuplicateEquivalentOwnershipError,
    EmptyModelError,
    EquivalentAlsoPrimaryError,
    NonPositiveWeightError,
)


@dataclass(frozen=True)
class ModelAsset:
    """An asset entry in a Model.

    Attributes:
        weight: Relative target weight (not normalised)
        equivalents: Symbols folded into this asset when rebalancing
    """

    weight: float
    equivalents: Tuple[Symbol, ...] = ()

    def __post_init__(self):
        if isinstance(self.equivalents, str):
            raise TypeError(
                f"equivalents must be a sequence of symbols, not a string: {self.equivalents!r}"
            )
        object.__setattr__(self, "equivalents", tuple(self.equivalents))


@dataclass(frozen=True)
class Model:
    """Immutable target weighted allocation of assets.

    Validation runs on construction, so an invalid Model never exists.

    Attributes:
        assets: Primary asset entries keyed by symbol

    Example:
        >>> model = Model({
        ...     "VOO": ModelAsset(weight=60, equivalents=("CSPX",)),
        ...     "TLT": ModelAsset(weight=40),
        ... })
        >>> model.target_proportion("VOO")
        0.6
        >>> model.is_relevant("CSPX")
        True
    """

    assets: Mapping[Symbol, ModelAsset] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "assets", MappingProxyType(dict(self.assets)))
        self.validate()

    def symbols(self) -> SymbolSet:
        """Primary asset symbols (equivalents excluded)."""
        return SymbolSet(self.assets)

    def total_weight(self) -> float:
        return sum(a.weight for a in self.assets.values())

    def target_proportion(self, symbol: Symbol) -> float:
        """Weight share of a symbol, 0 for symbols outside the model."""
        if not self.contains(symbol):
            return 0.0
        return self.assets[symbol].weight / self.total_weight()

    def equivalents(self, symbol: Symbol) -> SymbolSet:
        if not self.contains(symbol):
            return SymbolSet()
        return SymbolSet(self.assets[symbol].equivalents)

    def contains(self, symbol: Symbol) -> bool:
        return symbol in self.assets

    def is_relevant(self, symbol: Symbol) -> bool:
        """True for primary symbols and their declared equivalents."""
        return symbol in self.relevant_symbols()

    def relevant_symbols(self) -> SymbolSet:
        return self.symbols().union(self.equivalent_symbols())

    def equivalent_symbols(self) -> SymbolSet:
        equivalents: List[Symbol] = []
        for asset in self.assets.values():
            equivalents.extend(asset.equivalents)
        return SymbolSet(equivalents)

    def validate(self) -> None:
        """Run model rules in order and raise on the first violation.

        Order: non-empty, non-negative weights, no equivalent declared as
        an asset, no equivalent shared between assets.

        Raises:
            EmptyModelError: If no assets are declared
            NonPositiveWeightError: If a weight is negative
            EquivalentAlsoPrimaryError: If an equivalent is also an asset
            DuplicateEquivalentOwnershipError: If an equivalent has two parents
        """
        checks: List[Callable[[], None]] = [
            self._check_not_empty,
            self._check_positive_weights,
            self._check_no_equivalent,
            self._check_equivalent_one_to_many,
        ]

        for check in checks:
            check()

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the model definition format."""
        return {
            "assets": {
                symbol: {
                    "weight": asset.weight,
                    "equivalents": list(asset.equivalents),
                }
                for symbol, asset in self.assets.items()
            }
        }

    def _check_not_empty(self) -> None:
        if not self.assets:
            raise EmptyModelError("model is empty")

    def _check_positive_weights(self) -> None:
        for symbol, asset in self.assets.items():
            if asset.weight < 0:
                raise NonPositiveWeightError(
                    f"model contains non-positive weight: {symbol}={asset.weight}"
                )

    def _check_no_equivalent(self) -> None:
        for symbol, asset in self.assets.items():
            for equivalent in asset.equivalents:
                if self.contains(equivalent):
                    raise EquivalentAlsoPrimaryError(
                        f"model contains equivalent {equivalent} of {symbol} as an asset"
                    )

    def _check_equivalent_one_to_many(self) -> None:
        owners: Dict[Symbol, Symbol] = {}
        for symbol, asset in self.assets.items():
            for equivalent in asset.equivalents:
                if equivalent in owners:
                    raise DuplicateEquivalentOwnershipError(
                        f"equivalent {equivalent} is linked to both "
                        f"{owners[equivalent]} and {symbol}"
                    )
                owners[equivalent] = symbol
