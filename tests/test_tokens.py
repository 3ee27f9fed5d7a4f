# =============================================================================
# test_tokens.py - Token Model and Error Record Tests
# =============================================================================

import dataclasses

import pytest

from coolscan.errors import LexicalError, ScanErrorKind, ScannerError, SourceLocation
from coolscan.interning import Symbol, SymbolCategory
from coolscan.tokens import KEYWORDS, MULTI_CHAR_OPERATORS, SINGLE_CHAR_OPERATORS, Token, TokenKind


class TestTokenTables:
    """Keyword and operator tables."""

    def test_keyword_count(self):
        assert len(KEYWORDS) == 17

    def test_keywords_are_lowercase(self):
        assert all(word == word.lower() for word in KEYWORDS)

    def test_multi_char_operators_extend_single_char_ones(self):
        for text in MULTI_CHAR_OPERATORS:
            assert len(text) == 2
            assert text[0] in SINGLE_CHAR_OPERATORS


class TestToken:
    """Token values are immutable and expose their payload."""

    def test_frozen(self):
        token = Token(TokenKind.SEMICOLON, None, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.line = 2

    def test_repr_without_payload(self):
        assert repr(Token(TokenKind.LBRACE, None, 4)) == "Token(LBRACE, 4)"

    def test_repr_with_symbol(self):
        sym = Symbol("x", 0, SymbolCategory.IDENTIFIER)
        assert repr(Token(TokenKind.OBJECTID, sym, 2)) == "Token(OBJECTID, 'x', 2)"

    def test_value(self):
        sym = Symbol("42", 0, SymbolCategory.INTEGER)
        assert Token(TokenKind.INT_CONST, sym, 1).value == "42"
        assert Token(TokenKind.BOOL_CONST, False, 1).value is False
        assert Token(TokenKind.EOF, None, 1).value is None

    def test_error_token(self):
        error = LexicalError(
            ScanErrorKind.UNTERMINATED_STRING,
            ScanErrorKind.UNTERMINATED_STRING.value,
            SourceLocation("a.cl", 7),
        )
        token = Token(TokenKind.ERROR, error, 7)
        assert token.is_error()
        assert token.error is error
        assert token.value == "unterminated string constant"
        assert str(error) == "unterminated string constant"
        assert error.format() == "a.cl:7: error: unterminated string constant"

    def test_error_property_on_non_error(self):
        with pytest.raises(AttributeError):
            Token(TokenKind.EOF, None, 1).error


class TestErrors:
    """Exception formatting and error taxonomy."""

    def test_scanner_error_message(self):
        error = ScannerError("bad", SourceLocation("f.cl", 3), hint="fix it")
        assert str(error) == "f.cl:3: error: bad\nhint: fix it"

    def test_scanner_error_without_location(self):
        assert str(ScannerError("bad")) == "error: bad"

    def test_latching_kinds(self):
        latching = {kind for kind in ScanErrorKind if kind.latches}
        assert latching == {
            ScanErrorKind.UNTERMINATED_COMMENT,
            ScanErrorKind.NULL_IN_STRING,
            ScanErrorKind.EOF_IN_STRING,
        }
