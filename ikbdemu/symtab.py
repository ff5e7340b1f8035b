"""A bounded table mapping addresses to symbol names."""

from __future__ import annotations

from typing import List, Optional, Tuple

MAX_SYMBOL_SIZE = 32
MAX_SYMBOLS = 1024


class SymbolTableFull(Exception):
    """Raised when a symbol is added to a table that has no room left."""


class SymbolTable:
    """Symbols in insertion order; lookups return the first match."""

    def __init__(self, capacity: int = MAX_SYMBOLS) -> None:
        self._capacity = capacity
        self._symbols: List[Tuple[int, str]] = []

    def __len__(self) -> int:
        return len(self._symbols)

    def add(self, value: int, name: str) -> None:
        """Add ``name`` for ``value``; names longer than 32 characters are cut."""
        if len(self._symbols) >= self._capacity:
            raise SymbolTableFull("symbol table full")
        self._symbols.append((value, name[:MAX_SYMBOL_SIZE]))

    def find_name(self, value: int) -> Optional[str]:
        """Return the name of the first symbol with ``value``, or None."""
        return next((name for sym_value, name in self._symbols if sym_value == value), None)

    def find_value(self, name: str) -> Optional[int]:
        """Return the value of the first symbol called ``name``, or None."""
        return next((value for value, sym_name in self._symbols if sym_name == name), None)