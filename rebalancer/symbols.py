"""Immutable set of ticker symbols.

Symbols are plain strings. SymbolSet wraps a frozenset so every operation
returns a new set and the receiver is never modified.
"""

from typing import FrozenSet, Iterable, Iterator, List

Symbol = str


class SymbolSet:
    """Unordered, immutable collection of ticker symbols.

    Example:
        >>> ss = SymbolSet(["VOO", "QQQ"])
        >>> ss.add("TLT").contains("TLT")
        True
        >>> ss.contains("TLT")
        False
    """

    __slots__ = ("_symbols",)

    def __init__(self, symbols: Iterable[Symbol] = ()) -> None:
        self._symbols: FrozenSet[Symbol] = frozenset(symbols)

    def add(self, *symbols: Symbol) -> "SymbolSet":
        """Return a new set with the given symbols added."""
        return SymbolSet(self._symbols.union(symbols))

    def contains(self, symbol: Symbol) -> bool:
        return symbol in self._symbols

    def union(self, other: "SymbolSet") -> "SymbolSet":
        """Return a new set holding the symbols of both sets."""
        return SymbolSet(self._symbols | other._symbols)

    def to_list(self) -> List[Symbol]:
        """Return the symbols as a list.

        Order is unspecified; sort the result when order matters.
        """
        return list(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymbolSet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolSet({sorted(self._symbols)!r})"
