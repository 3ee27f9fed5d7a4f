"""
COOL Scanner Error Hierarchy
============================

This module defines two distinct kinds of error for the scanner:

1. **Lexical errors** in the COOL source being scanned. These are *not*
   exceptions. The scanner reports them as ordinary ERROR tokens whose
   payload is a LexicalError record, and leaves it to the caller to decide
   whether they are fatal.

2. **Exceptions** for programming errors: bad construction arguments, or
   an internal scanner bug (the catch-all rule being reached).

Exception Hierarchy
-------------------
CoolError (base)
└── ScannerError - invalid scanner usage
    └── ScannerInvariantError - internal invariant violated (scanner bug)

Lexical Error Taxonomy
----------------------
| Kind                     | Message                          | Latches |
|--------------------------|----------------------------------|---------|
| MISMATCHED_COMMENT_CLOSE | mismatched close comment         | no      |
| UNTERMINATED_COMMENT     | EOF in block comment             | yes     |
| STRING_TOO_LONG          | string constant too long         | no      |
| NULL_IN_STRING           | string contains null character   | yes     |
| UNTERMINATED_STRING      | unterminated string constant     | no      |
| UNEXPECTED_CHARACTER     | (the offending character)        | no      |
| EOF_IN_STRING            | EOF in string constant           | yes     |

A latching error suppresses everything after it: the scanner returns only
EOF tokens once one has been reported.

Diagnostics follow this format:
    filename:line: error: description
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class CoolError(Exception):
    """
    Base exception for all coolscan errors.

    Lexical errors in scanned source never raise; only misuse of the API
    and internal bugs do. Callers can still catch everything with:

        try:
            tokens = scan(source)
        except CoolError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in COOL source for error reporting.

    COOL diagnostics are line-oriented, so only the line is tracked.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        """Format as 'filename:line' for error messages."""
        return f"{self.filename}:{self.line}"


# =============================================================================
# Scanner Exceptions
# =============================================================================

class ScannerError(CoolError):
    """
    Base exception for scanner misuse.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            hello.cl:3: error: scanner reached the catch-all rule on '?'
            hint: this is a scanner bug, please report it
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class ScannerInvariantError(ScannerError):
    """
    An internal scanner invariant was violated.

    Raised when no lexical rule matched the remaining input. The
    unexpected-character rule covers every non-newline character, so this
    can only happen through a bug in the scanner itself.
    """
    pass


# =============================================================================
# Lexical Errors (reported as tokens)
# =============================================================================

class ScanErrorKind(Enum):
    """
    Categories of lexical error reported by the scanner.

    Each member's value is its fixed diagnostic message. The message of
    UNEXPECTED_CHARACTER is replaced by the offending character itself.
    """

    MISMATCHED_COMMENT_CLOSE = "mismatched close comment"
    UNTERMINATED_COMMENT = "EOF in block comment"
    STRING_TOO_LONG = "string constant too long"
    NULL_IN_STRING = "string contains null character"
    UNTERMINATED_STRING = "unterminated string constant"
    UNEXPECTED_CHARACTER = "unexpected character"
    EOF_IN_STRING = "EOF in string constant"

    @property
    def latches(self) -> bool:
        """Return True if this error ends scanning for the rest of the input."""
        return self in _LATCHING_KINDS


_LATCHING_KINDS = frozenset({
    ScanErrorKind.UNTERMINATED_COMMENT,
    ScanErrorKind.NULL_IN_STRING,
    ScanErrorKind.EOF_IN_STRING,
})


@dataclass(frozen=True)
class LexicalError:
    """
    A lexical error carried as the payload of an ERROR token.

    Attributes:
        kind: The error category
        message: Human-readable description (for UNEXPECTED_CHARACTER,
                 the offending character's text)
        location: Where the offending lexeme began
    """
    kind: ScanErrorKind
    message: str
    location: SourceLocation

    @property
    def latches(self) -> bool:
        return self.kind.latches

    def format(self) -> str:
        """Render as 'filename:line: error: message'."""
        return f"{self.location}: error: {self.message}"

    def __str__(self) -> str:
        return self.message
