"""Error-path tests.

Exception construction and formatting, the exception hierarchy, and the
way every scan failure surfaces as the single terminal token.
"""

import pytest

from kvline import parse_records
from kvline.errors import (
    EndOfSource,
    KvlineError,
    RenderError,
    ScanError,
    SourceError,
    SourceReadError,
    UnterminatedQuoteError,
)
from kvline.scanner import Scanner
from kvline.tokens import Token, TokenKind

# =========================================================================
# ScanError construction and formatting
# =========================================================================


class TestScanErrorFormatting:
    def test_message_only(self) -> None:
        err = ScanError("bad input")
        assert str(err) == "bad input"
        assert err.lineno is None
        assert err.col is None

    def test_with_line_number(self) -> None:
        err = ScanError("bad input", lineno=42)
        assert str(err) == "42 bad input"

    def test_with_line_and_column(self) -> None:
        err = ScanError("bad input", lineno=10, col=5)
        assert str(err) == "10:5 bad input"

    def test_end_of_source(self) -> None:
        assert str(EndOfSource(lineno=3, col=1)) == "3:1 end of source"

    def test_unterminated_quote(self) -> None:
        err = UnterminatedQuoteError('"', lineno=2, col=7)
        assert err.delimiter == '"'
        assert str(err).startswith("2:7 unterminated quoted value")


# =========================================================================
# Hierarchy
# =========================================================================


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [EndOfSource, UnterminatedQuoteError, SourceReadError],
    )
    def test_scan_errors(self, exc_type: type) -> None:
        assert issubclass(exc_type, ScanError)
        assert issubclass(exc_type, KvlineError)

    def test_other_errors(self) -> None:
        assert issubclass(SourceError, KvlineError)
        assert not issubclass(SourceError, ScanError)
        assert issubclass(RenderError, KvlineError)

    def test_render_error_names_template(self) -> None:
        err = RenderError("{x", "expected '}'")
        assert err.template == "{x"
        assert "{x" in str(err)


# =========================================================================
# Terminal token
# =========================================================================


class TestTerminalToken:
    def test_carries_error_and_description(self) -> None:
        err = EndOfSource(lineno=1, col=1)
        token = Token.terminal(err, 1, 1)
        assert token.type is TokenKind.ERROR
        assert token.is_terminal
        assert token.value == "1:1 end of source"
        assert token.error is err

    @pytest.mark.parametrize(
        "source,exc_type",
        [
            ("a=1", EndOfSource),
            ("a='1", UnterminatedQuoteError),
            ('"', UnterminatedQuoteError),
        ],
    )
    def test_every_failure_is_one_error_token(self, source: str, exc_type: type) -> None:
        tokens = list(Scanner(source))
        assert [t for t in tokens if t.is_terminal] == [tokens[-1]]
        assert isinstance(tokens[-1].error, exc_type)

    def test_malformed_grammar_is_not_an_error(self) -> None:
        assert parse_records("= = a = = b\n== ==\n") == [{}, {}]
