"""
COOL Token Model
================

Token kinds, keyword and operator tables, and the immutable Token value
produced by the scanner.

Token Categories
----------------
- Keywords: class, else, fi, if, in, inherits, isvoid, let, loop, pool,
  then, while, case, esac, new, of, not (case-insensitive)
- Literals: STR_CONST, INT_CONST, BOOL_CONST
- Identifiers: TYPEID (uppercase first letter), OBJECTID (lowercase)
- Operators: =>, <=, <-, and single characters + - * / = < . ~ , ; : ( ) @ { }
- ERROR: a lexical error, payload is a LexicalError
- EOF: end of input

Payloads
--------
| Kind                        | Payload      |
|-----------------------------|--------------|
| STR_CONST, INT_CONST        | Symbol       |
| TYPEID, OBJECTID            | Symbol       |
| BOOL_CONST                  | bool         |
| ERROR                       | LexicalError |
| everything else             | None         |
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from coolscan.errors import LexicalError
from coolscan.interning import Symbol


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for the COOL language.

    Keywords are distinguished from identifiers to simplify parsing.
    Single-character operators get their own kinds rather than being
    passed through as raw characters.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input
    ERROR = auto()          # Lexical error

    # === Keywords ===
    CLASS = auto()          # class
    ELSE = auto()           # else
    FI = auto()             # fi
    IF = auto()             # if
    IN = auto()             # in
    INHERITS = auto()       # inherits
    ISVOID = auto()         # isvoid
    LET = auto()            # let
    LOOP = auto()           # loop
    POOL = auto()           # pool
    THEN = auto()           # then
    WHILE = auto()          # while
    CASE = auto()           # case
    ESAC = auto()           # esac
    NEW = auto()            # new
    OF = auto()             # of
    NOT = auto()            # not

    # === Literals ===
    STR_CONST = auto()      # "..."
    INT_CONST = auto()      # 123
    BOOL_CONST = auto()     # true / false

    # === Identifiers ===
    TYPEID = auto()         # Uppercase first letter
    OBJECTID = auto()       # Lowercase first letter

    # === Multi-character Operators ===
    DARROW = auto()         # =>
    LE = auto()             # <=
    ASSIGN = auto()         # <-

    # === Single-character Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /
    EQ = auto()             # =
    LT = auto()             # <
    DOT = auto()            # .
    TILDE = auto()          # ~
    COMMA = auto()          # ,
    SEMICOLON = auto()      # ;
    COLON = auto()          # :
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    AT = auto()             # @
    LBRACE = auto()         # {
    RBRACE = auto()         # }


# =============================================================================
# Keyword and Operator Tables
# =============================================================================

# Keys are lower case; the scanner case-folds words before lookup.
KEYWORDS: dict[str, TokenKind] = {
    "class": TokenKind.CLASS,
    "else": TokenKind.ELSE,
    "fi": TokenKind.FI,
    "if": TokenKind.IF,
    "in": TokenKind.IN,
    "inherits": TokenKind.INHERITS,
    "isvoid": TokenKind.ISVOID,
    "let": TokenKind.LET,
    "loop": TokenKind.LOOP,
    "pool": TokenKind.POOL,
    "then": TokenKind.THEN,
    "while": TokenKind.WHILE,
    "case": TokenKind.CASE,
    "esac": TokenKind.ESAC,
    "new": TokenKind.NEW,
    "of": TokenKind.OF,
    "not": TokenKind.NOT,
}

BOOLEANS: dict[str, bool] = {
    "true": True,
    "false": False,
}

# Two-character operators, tried before their one-character prefixes
MULTI_CHAR_OPERATORS: dict[str, TokenKind] = {
    "=>": TokenKind.DARROW,
    "<=": TokenKind.LE,
    "<-": TokenKind.ASSIGN,
}

SINGLE_CHAR_OPERATORS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "=": TokenKind.EQ,
    "<": TokenKind.LT,
    ".": TokenKind.DOT,
    "~": TokenKind.TILDE,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    ":": TokenKind.COLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "@": TokenKind.AT,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}


# =============================================================================
# Token Data Class
# =============================================================================

Payload = Union[Symbol, bool, LexicalError, None]


@dataclass(frozen=True)
class Token:
    """
    A single token from COOL source.

    Attributes:
        kind: The TokenKind classification
        payload: Interned Symbol, bool, LexicalError, or None (see module docs)
        line: Line number at which the token began (1-indexed)
    """
    kind: TokenKind
    payload: Payload
    line: int

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.payload is None:
            return f"Token({self.kind.name}, {self.line})"
        return f"Token({self.kind.name}, {self.value!r}, {self.line})"

    @property
    def value(self) -> Union[str, bool, None]:
        """
        The plain value carried by the token.

        Symbol text for literals and identifiers, the bool for BOOL_CONST,
        the message for ERROR, None otherwise.
        """
        if isinstance(self.payload, Symbol):
            return self.payload.text
        if isinstance(self.payload, LexicalError):
            return self.payload.message
        return self.payload

    @property
    def error(self) -> LexicalError:
        """Return the LexicalError of an ERROR token."""
        if not isinstance(self.payload, LexicalError):
            raise AttributeError(f"{self.kind.name} token carries no lexical error")
        return self.payload

    def is_error(self) -> bool:
        return self.kind is TokenKind.ERROR

    def is_eof(self) -> bool:
        return self.kind is TokenKind.EOF

    def is_keyword(self) -> bool:
        """Return True if this token is a keyword."""
        return self.kind in _KEYWORD_KINDS


_KEYWORD_KINDS = frozenset(KEYWORDS.values())
