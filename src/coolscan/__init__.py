"""
coolscan - Lexical Analyzer for COOL
====================================

This package implements the scanner for COOL (Classroom Object-Oriented
Language). It turns source text into the token stream a COOL parser
consumes.

Main Components
---------------
- **scanner**: the Scanner pull interface and its options
- **tokens**: token kinds, keyword/operator tables and the Token value
- **interning**: deduplicating tables for identifiers, integer literal
  text and string constants
- **errors**: lexical error taxonomy and the exception hierarchy

Quick Start
-----------
    >>> from coolscan import Scanner, TokenKind
    >>> scanner = Scanner('x <- "hi";', "demo.cl")
    >>> token = scanner.next_token()
    >>> token.kind is TokenKind.OBJECTID
    True

Lexical errors are returned as ERROR tokens rather than raised:

    >>> from coolscan import scan
    >>> [t.kind.name for t in scan("*)")]
    ['ERROR', 'EOF']
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from coolscan.errors import (
    CoolError,
    LexicalError,
    ScanErrorKind,
    ScannerError,
    ScannerInvariantError,
    SourceLocation,
)
from coolscan.interning import (
    InternTables,
    Symbol,
    SymbolCategory,
    SymbolTable,
)
from coolscan.scanner import (
    MAX_STR_CONST,
    Scanner,
    ScannerMode,
    ScannerOptions,
    scan,
)
from coolscan.tokens import (
    KEYWORDS,
    Token,
    TokenKind,
)

__all__ = [
    # Version info
    "__version__",
    # Scanner
    "Scanner",
    "ScannerMode",
    "ScannerOptions",
    "MAX_STR_CONST",
    "scan",
    # Tokens
    "Token",
    "TokenKind",
    "KEYWORDS",
    # Interning
    "InternTables",
    "Symbol",
    "SymbolCategory",
    "SymbolTable",
    # Errors
    "CoolError",
    "ScannerError",
    "ScannerInvariantError",
    "SourceLocation",
    "LexicalError",
    "ScanErrorKind",
]
