"""
Literal and Identifier Interning
================================

The scanner never hands raw text to the parser for identifiers, integer
literals or string constants. Each such lexeme is interned: equal text in
the same category always maps to the same Symbol, so later compiler stages
can compare handles instead of strings.

Three independent tables are kept, one per SymbolCategory:

| Category   | Holds                                   |
|------------|-----------------------------------------|
| STRING     | decoded string constant contents        |
| INTEGER    | integer literal digit text (unparsed)   |
| IDENTIFIER | object and type identifiers             |

Integer literals are stored as text, exactly as written. No numeric
conversion or range check happens here.

Example Usage
-------------
>>> from coolscan.interning import InternTables, SymbolCategory
>>> tables = InternTables()
>>> a = tables.intern("Main", SymbolCategory.IDENTIFIER)
>>> b = tables.intern("Main", SymbolCategory.IDENTIFIER)
>>> a is b
True
>>> a
Symbol(IDENTIFIER, 'Main', #0)
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional


logger = logging.getLogger(__name__)


class SymbolCategory(Enum):
    """Which intern table a lexeme belongs to."""

    STRING = auto()
    INTEGER = auto()
    IDENTIFIER = auto()


# =============================================================================
# Symbol Table Entry
# =============================================================================

@dataclass(frozen=True)
class Symbol:
    """
    Interned handle for a piece of source text.

    Attributes:
        text: The canonical text
        index: Position of the entry in its table (0-based, dense)
        category: The table the symbol lives in
    """
    text: str
    index: int
    category: SymbolCategory

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Symbol({self.category.name}, {self.text!r}, #{self.index})"


# =============================================================================
# Symbol Tables
# =============================================================================

class SymbolTable:
    """
    Deduplicating table for one category of text.

    Entries are never removed; indexes are assigned in insertion order.

    Usage:
        table = SymbolTable(SymbolCategory.STRING)
        sym = table.add("hello")
        assert table.add("hello") is sym
    """

    def __init__(self, category: SymbolCategory):
        self.category = category
        self._symbols: dict[str, Symbol] = {}
        self._entries: list[Symbol] = []

    def add(self, text: str) -> Symbol:
        """
        Intern text, returning the existing Symbol if already present.

        Raises:
            TypeError: If text is not a str
        """
        if not isinstance(text, str):
            raise TypeError(
                f"can only intern str, not {type(text).__name__}"
            )

        existing = self._symbols.get(text)
        if existing is not None:
            return existing

        symbol = Symbol(text, len(self._entries), self.category)
        self._symbols[text] = symbol
        self._entries.append(symbol)
        logger.debug(f"Interned {self.category.name.lower()} #{symbol.index}: {text!r}")
        return symbol

    def lookup(self, text: str) -> Optional[Symbol]:
        """Return the Symbol for text, or None if it was never interned."""
        return self._symbols.get(text)

    def __contains__(self, text: object) -> bool:
        return text in self._symbols

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Symbol:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"SymbolTable({self.category.name}, {len(self)} entries)"


class InternTables:
    """
    The default interning service used by the scanner.

    Owns one SymbolTable per category. Any object with a compatible
    intern(text, category) method can be given to the scanner instead.

    Attributes:
        strings: String constant table
        integers: Integer literal table
        identifiers: Identifier table
    """

    def __init__(self):
        self.strings = SymbolTable(SymbolCategory.STRING)
        self.integers = SymbolTable(SymbolCategory.INTEGER)
        self.identifiers = SymbolTable(SymbolCategory.IDENTIFIER)

    def table(self, category: SymbolCategory) -> SymbolTable:
        """Return the table holding symbols of the given category."""
        if category is SymbolCategory.STRING:
            return self.strings
        if category is SymbolCategory.INTEGER:
            return self.integers
        return self.identifiers

    def intern(self, text: str, category: SymbolCategory) -> Symbol:
        """Intern text into the table for category."""
        return self.table(category).add(text)
