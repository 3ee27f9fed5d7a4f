"""
COOL Scanner
============

This module implements the lexical analyzer for COOL. It converts source
text into tokens for the parser, one token per call.

Scanning Model
--------------
The scanner is a pull interface: the caller asks for the next token until
it receives EOF. Internally it runs in one of three exclusive modes:

| Mode              | Entered on | Left on                                 |
|-------------------|------------|-----------------------------------------|
| INITIAL           | (start)    | (* or "                                 |
| IN_BLOCK_COMMENT  | (*         | the matching *)                         |
| IN_STRING         | "          | closing " or an unescaped line break    |

In INITIAL mode the longest match wins, and among matches of equal length
the earlier rule wins:

1. (*  "  *)           comment open, string open, unmatched comment close
2. keywords           case-insensitive
3. =>  <=  <-         before their one-character prefixes
4. + - * / = < . ~ , ; : ( ) @ { }
5. --                 line comment
6. true / false       case-insensitive
7. digits             integer literal, kept as text
8. a-z...             object identifier
9. A-Z...             type identifier
10. any other character is reported as an error token

Comments nest: (* a (* b *) c *) is one comment.

Strings
-------
Escape sequences \\b \\t \\n \\f are decoded; any other escaped character is
kept as itself. A backslash before a line break continues the string on the
next line. An unescaped line break ends the string with an error, and
scanning resumes on the next line.

Errors
------
Lexical errors come back as ERROR tokens (see coolscan.errors). End of input
inside a comment or string, and a NUL inside a string, latch: every request
after one of these returns EOF.

Example Usage
-------------
>>> from coolscan.scanner import Scanner
>>> scanner = Scanner('class Main { x <- 1; };', "main.cl")
>>> for token in scanner.tokenize():
...     print(token)
Token(CLASS, 1)
Token(TYPEID, 'Main', 1)
Token(LBRACE, 1)
Token(OBJECTID, 'x', 1)
Token(ASSIGN, 1)
Token(INT_CONST, '1', 1)
Token(SEMICOLON, 1)
Token(RBRACE, 1)
Token(SEMICOLON, 1)
Token(EOF, 1)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, NoReturn, Optional

from coolscan.errors import (
    LexicalError,
    ScanErrorKind,
    ScannerError,
    ScannerInvariantError,
    SourceLocation,
)
from coolscan.interning import InternTables, SymbolCategory
from coolscan.tokens import (
    BOOLEANS,
    KEYWORDS,
    MULTI_CHAR_OPERATORS,
    SINGLE_CHAR_OPERATORS,
    Payload,
    Token,
    TokenKind,
)


logger = logging.getLogger(__name__)


# Maximum string constant size, counting an implicit terminator
MAX_STR_CONST = 1025


# =============================================================================
# Scanner Configuration
# =============================================================================

class ScannerMode(Enum):
    """The scanner's current sub-grammar."""

    INITIAL = auto()
    IN_STRING = auto()
    IN_BLOCK_COMMENT = auto()


@dataclass
class ScannerOptions:
    """
    Scanner configuration options.

    Attributes:
        max_string_length: A string constant whose length reaches this value
                           is rejected. The default of 1025 counts an implicit
                           terminator, so at most 1024 characters are accepted.
        line_number: Line number of the first line of the source.
        trace: Log every produced token at DEBUG level.
    """
    max_string_length: int = MAX_STR_CONST
    line_number: int = 1
    trace: bool = False

    def __post_init__(self):
        if self.max_string_length < 1:
            raise ScannerError(
                f"max_string_length must be positive, got {self.max_string_length}"
            )
        if self.line_number < 1:
            raise ScannerError(
                f"line_number must be positive, got {self.line_number}"
            )


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes COOL source code.

    One Scanner holds all the state for scanning one source unit. Scanners
    share nothing, so several can be used side by side (for example over
    different files), but a single instance must not be used from more
    than one thread.

    Usage:
        scanner = Scanner(source_text, filename)
        token = scanner.next_token()
        ...
        tokens = list(scanner.tokenize())

    Attributes:
        source: The source text being tokenized
    """

    WHITESPACE = " \t\f\v"
    LINE_TERMINATORS = "\n\r"

    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    # Escapes that decode to something other than the escaped character
    ESCAPE_SEQUENCES = {
        "b": "\b",      # Backspace
        "t": "\t",      # Tab
        "n": "\n",      # Newline
        "f": "\f",      # Form feed
    }

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        tables=None,
        options: Optional[ScannerOptions] = None,
    ):
        """
        Initialize the scanner with source code.

        Args:
            source: The COOL source code to tokenize
            filename: Name of the source file (for error messages only)
            tables: Interning service with an intern(text, category) method.
                    A fresh InternTables is created if omitted.
            options: Scanner configuration

        Raises:
            ScannerError: If source is not a str
        """
        if not isinstance(source, str):
            raise ScannerError(
                f"source must be str, not {type(source).__name__}",
                hint="decode the file contents before scanning",
            )

        self.source = source
        self._filename = filename
        self._tables = tables if tables is not None else InternTables()
        self._options = options if options is not None else ScannerOptions()

        # Read position and line tracking
        self._pos = 0
        self._line = self._options.line_number

        # Sub-grammar state
        self._mode = ScannerMode.INITIAL
        self._string_buffer: list[str] = []
        self._string_line = self._line
        self._comment_depth = 0
        self._eof_latched = False

        logger.debug(f"Scanning {filename} ({len(source)} characters)")

    # =========================================================================
    # Public Interface
    # =========================================================================

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def line(self) -> int:
        """The current line number."""
        return self._line

    @property
    def mode(self) -> ScannerMode:
        return self._mode

    @property
    def tables(self):
        """The interning service used for literals and identifiers."""
        return self._tables

    @property
    def options(self) -> ScannerOptions:
        return self._options

    def location(self) -> SourceLocation:
        """Return the current position as a SourceLocation."""
        return SourceLocation(self._filename, self._line)

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Whitespace and comments are skipped. Once the input is exhausted,
        every call returns an EOF token.

        Raises:
            ScannerInvariantError: If no lexical rule matched (scanner bug)
        """
        token = self._next_token()
        if self._options.trace:
            logger.debug(f"{self._filename}: {token!r}")
        return token

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, ending with (and including) the first EOF token
        """
        while True:
            token = self.next_token()
            yield token
            if token.is_eof():
                return

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()

    def peek_token(self) -> Token:
        """
        Peek at the next token without consuming it.

        This saves the scanner state, scans the next token, then restores
        the original state. Interned symbols created while peeking stay in
        the intern tables.

        Returns:
            The next token
        """
        # Save state
        saved_pos = self._pos
        saved_line = self._line
        saved_mode = self._mode
        saved_buffer = list(self._string_buffer)
        saved_string_line = self._string_line
        saved_depth = self._comment_depth
        saved_latched = self._eof_latched

        try:
            return self._next_token()
        finally:
            # Restore state
            self._pos = saved_pos
            self._line = saved_line
            self._mode = saved_mode
            self._string_buffer = saved_buffer
            self._string_line = saved_string_line
            self._comment_depth = saved_depth
            self._eof_latched = saved_latched

    # =========================================================================
    # Mode Dispatch
    # =========================================================================

    def _next_token(self) -> Token:
        """Run the current mode's rules until one of them produces a token."""
        while True:
            if self._eof_latched:
                return self._make_token(TokenKind.EOF)

            if self._mode is ScannerMode.INITIAL:
                token = self._scan_initial()
            elif self._mode is ScannerMode.IN_STRING:
                token = self._scan_string()
            else:
                token = self._scan_comment()

            if token is not None:
                return token

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at character at current position + offset without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character."""
        if self._at_end():
            return ""
        char = self.source[self._pos]
        self._pos += 1
        return char

    def _match(self, expected: str) -> bool:
        """
        Consume expected if the remaining input starts with it.

        Returns:
            True if matched and consumed, False otherwise
        """
        if self.source.startswith(expected, self._pos):
            self._pos += len(expected)
            return True
        return False

    def _consume_while(self, chars: str) -> str:
        """Consume and return the longest run of characters in chars."""
        start = self._pos
        while self._pos < len(self.source) and self.source[self._pos] in chars:
            self._pos += 1
        return self.source[start:self._pos]

    def _consume_until(self, stops: str) -> str:
        """Consume and return the longest run of characters not in stops."""
        start = self._pos
        while self._pos < len(self.source) and self.source[self._pos] not in stops:
            self._pos += 1
        return self.source[start:self._pos]

    def _consume_line_terminator(self) -> bool:
        """
        Consume one line terminator (\\n, \\r or \\r\\n) if present.

        Each terminator counts as exactly one line, whatever its form.

        Returns:
            True if a terminator was consumed
        """
        char = self._peek()
        if char == "\r":
            self._pos += 1
            if self._peek() == "\n":
                self._pos += 1
        elif char == "\n":
            self._pos += 1
        else:
            return False

        self._line += 1
        return True

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        kind: TokenKind,
        payload: Payload = None,
        line: Optional[int] = None,
    ) -> Token:
        """
        Create a token at the current or specified line.

        Args:
            kind: The kind of token
            payload: The token payload
            line: Override line number (for lexemes spanning lines)
        """
        return Token(kind, payload, self._line if line is None else line)

    def _error_token(
        self,
        kind: ScanErrorKind,
        message: Optional[str] = None,
        line: Optional[int] = None,
    ) -> Token:
        """
        Create an ERROR token, latching end of input for fatal kinds.

        Args:
            kind: The error category
            message: Override the category's fixed message
            line: Override line number
        """
        if line is None:
            line = self._line
        error = LexicalError(
            kind,
            kind.value if message is None else message,
            SourceLocation(self._filename, line),
        )

        if kind.latches:
            self._eof_latched = True
            logger.debug(f"{error.format()} (ignoring rest of input)")

        return Token(TokenKind.ERROR, error, line)

    def _invariant_violation(self) -> NoReturn:
        """Report that no rule matched the remaining input."""
        location = self.location()
        char = self._peek()
        logger.error(
            f"{location}: no lexical rule matched {char!r} in {self._mode.name} mode"
        )
        raise ScannerInvariantError(
            f"no lexical rule matched {char!r}",
            location,
            hint="this is a scanner bug, please report it",
        )

    # =========================================================================
    # INITIAL Mode
    # =========================================================================

    def _scan_initial(self) -> Optional[Token]:
        """
        Apply one INITIAL-mode rule.

        Returns:
            The token produced, or None if the rule produced nothing
            (whitespace, comments, mode changes)
        """
        if self._at_end():
            return self._make_token(TokenKind.EOF)

        if self._consume_line_terminator():
            return None

        char = self._peek()

        if char in self.WHITESPACE:
            self._consume_while(self.WHITESPACE)
            return None

        # Structural transitions
        if self._match("(*"):
            self._mode = ScannerMode.IN_BLOCK_COMMENT
            self._comment_depth = 0
            return None

        if self._match('"'):
            self._mode = ScannerMode.IN_STRING
            self._string_buffer = []
            self._string_line = self._line
            return None

        if self._match("*)"):
            return self._error_token(ScanErrorKind.MISMATCHED_COMMENT_CLOSE)

        # Line comment, longer than the "-" operator
        if self._match("--"):
            self._consume_until(self.LINE_TERMINATORS)
            return None

        # Keywords, booleans and identifiers
        if char in string.ascii_letters:
            return self._scan_word()

        # Integer literal
        if char in string.digits:
            text = self._consume_while(string.digits)
            symbol = self._tables.intern(text, SymbolCategory.INTEGER)
            return self._make_token(TokenKind.INT_CONST, symbol)

        # Operators
        for text, kind in MULTI_CHAR_OPERATORS.items():
            if self._match(text):
                return self._make_token(kind)

        if char in SINGLE_CHAR_OPERATORS:
            self._advance()
            return self._make_token(SINGLE_CHAR_OPERATORS[char])

        # Unknown character
        if char not in self.LINE_TERMINATORS:
            self._advance()
            return self._error_token(ScanErrorKind.UNEXPECTED_CHARACTER, char)

        self._invariant_violation()

    def _scan_word(self) -> Token:
        """
        Scan a keyword, boolean literal or identifier.

        The whole word is consumed first, so a keyword prefix of a longer
        word ("classify") stays part of the identifier.
        """
        word = self._consume_while(self.IDENT_CHARS)
        folded = word.lower()

        if folded in KEYWORDS:
            return self._make_token(KEYWORDS[folded])

        if folded in BOOLEANS:
            return self._make_token(TokenKind.BOOL_CONST, BOOLEANS[folded])

        kind = TokenKind.OBJECTID if word[0].islower() else TokenKind.TYPEID
        symbol = self._tables.intern(word, SymbolCategory.IDENTIFIER)
        return self._make_token(kind, symbol)

    # =========================================================================
    # IN_BLOCK_COMMENT Mode
    # =========================================================================

    def _scan_comment(self) -> Optional[Token]:
        """
        Apply one block-comment rule.

        Returns:
            An ERROR token at end of input, otherwise None
        """
        if self._at_end():
            return self._error_token(ScanErrorKind.UNTERMINATED_COMMENT)

        if self._consume_line_terminator():
            return None

        if self._match("(*"):
            self._comment_depth += 1
            return None

        if self._match("*)"):
            if self._comment_depth > 0:
                self._comment_depth -= 1
            else:
                self._mode = ScannerMode.INITIAL
            return None

        # A lone (, ) or * is just comment text
        if self._peek() in "()*":
            self._advance()
            return None

        self._consume_until("()*" + self.LINE_TERMINATORS)
        return None

    # =========================================================================
    # IN_STRING Mode
    # =========================================================================

    def _scan_string(self) -> Optional[Token]:
        """
        Apply one string-literal rule.

        Returns:
            The STR_CONST or ERROR token when the string ends, otherwise None
        """
        if self._at_end():
            if "\0" in "".join(self._string_buffer):
                return self._error_token(ScanErrorKind.NULL_IN_STRING)
            return self._error_token(ScanErrorKind.EOF_IN_STRING)

        char = self._peek()

        if char == '"':
            self._advance()
            self._mode = ScannerMode.INITIAL
            return self._finish_string()

        if char == "\\":
            self._advance()
            if self._at_end():
                return None

            # Escaped line break continues the string
            if self._consume_line_terminator():
                self._string_buffer.append("\n")
                return None

            escaped = self._advance()
            self._string_buffer.append(self.ESCAPE_SEQUENCES.get(escaped, escaped))
            return None

        if self._consume_line_terminator():
            self._mode = ScannerMode.INITIAL
            return self._error_token(
                ScanErrorKind.UNTERMINATED_STRING, line=self._string_line
            )

        self._string_buffer.append(self._consume_until('"\\' + self.LINE_TERMINATORS))
        return None

    def _finish_string(self) -> Token:
        """Check and intern a string constant after its closing quote."""
        text = "".join(self._string_buffer)
        line = self._string_line

        if len(text) >= self._options.max_string_length:
            return self._error_token(ScanErrorKind.STRING_TOO_LONG, line=line)

        if "\0" in text:
            return self._error_token(ScanErrorKind.NULL_IN_STRING, line=line)

        symbol = self._tables.intern(text, SymbolCategory.STRING)
        return self._make_token(TokenKind.STR_CONST, symbol, line)


# =============================================================================
# Convenience Functions
# =============================================================================

def scan(
    source: str,
    filename: str = "<input>",
    tables=None,
    options: Optional[ScannerOptions] = None,
) -> list[Token]:
    """
    Scan a complete source text.

    Args:
        source: The COOL source code
        filename: Name of the source file (for error messages)
        tables: Interning service (a fresh InternTables if omitted)
        options: Scanner configuration

    Returns:
        All tokens, ending with one EOF token
    """
    return list(Scanner(source, filename, tables, options).tokenize())
