"""Single-token scan rules for the kvline scanner.

Each rule consumes exactly one token from the source and returns it. Rules
assume the caller already classified the next code point; called directly on
input of the wrong class they push the offending code point back and raise
ScanError.
"""

from collections.abc import Callable
from logging import Logger

from kvline.errors import EndOfSource, ScanError, UnterminatedQuoteError
from kvline.scanner.charsets import (
    EQUAL,
    ESCAPE,
    NEWLINE,
    QUOTES,
    is_atom,
    is_unidentified,
    is_whitespace,
)
from kvline.source import CodePointSource
from kvline.tokens import Token, TokenKind


class RuleScannerMixin:
    """Mixin providing the per-class scan rules.

    Rules come in two shapes: single code point tokens (newline, equal),
    and maximal runs (whitespace, atom, unidentified). Quoted strings have
    their own small state machine for the delimiter and escapes.

    """

    # These will be set by the Scanner class
    _source: CodePointSource
    _log: Logger

    def scan_newline(self) -> Token:
        """Scan exactly one ``\\n``."""
        return self._scan_single(TokenKind.NEWLINE, NEWLINE, "did not scan a newline")

    def scan_equal(self) -> Token:
        """Scan exactly one ``=``; a run of them takes one call each."""
        return self._scan_single(TokenKind.EQUAL, EQUAL, "did not scan an equal sign")

    def scan_whitespace(self) -> Token:
        """Scan a maximal run of non-newline whitespace."""
        return self._scan_run(TokenKind.WHITESPACE, is_whitespace, "is not whitespace")

    def scan_atom(self) -> Token:
        """Scan a maximal run of atom-class code points."""
        return self._scan_run(TokenKind.ATOM, is_atom, "is not in the atom class")

    def scan_unidentified(self) -> Token:
        """Scan a maximal run of code points no other class accepts."""
        return self._scan_run(
            TokenKind.UNIDENTIFIED, is_unidentified, "is not part of an unidentified run"
        )

    def scan_quoted_string(self) -> Token:
        """Scan a quoted value, dropping the delimiters and escape backslashes.

        The first code point picks the delimiter. A backslash makes the next
        code point literal, whatever it is.

        Raises:
            UnterminatedQuoteError: The source ended before the closing quote.
        """
        src = self._source
        lineno, col = src.lineno, src.col
        delimiter = src.read()
        if delimiter not in QUOTES:
            src.unread()
            raise ScanError(f"{delimiter!r} does not open a quoted value", lineno, col)
        self._log.debug(
            "HANDLING %s QUOTED STRING", "DOUBLE" if delimiter == '"' else "SINGLE"
        )

        value: list[str] = []
        escaped = False
        while True:
            try:
                char = src.read()
            except EndOfSource:
                raise UnterminatedQuoteError(delimiter, lineno, col) from None
            if escaped:
                escaped = False
                value.append(char)
            elif char == ESCAPE:
                escaped = True
            elif char == delimiter:
                self._log.debug("GOT ENDING QUOTE (%s)", char)
                break
            else:
                value.append(char)
        return Token(TokenKind.QUOTED_STRING, "".join(value), lineno, col)

    def _scan_single(self, kind: TokenKind, expected: str, failure: str) -> Token:
        src = self._source
        lineno, col = src.lineno, src.col
        char = src.read()
        if char != expected:
            src.unread()
            raise ScanError(failure, lineno, col)
        return Token(kind, char, lineno, col)

    def _scan_run(
        self, kind: TokenKind, accept: Callable[[str], bool], failure: str
    ) -> Token:
        """Scan a maximal run of code points satisfying ``accept``.

        End of source closes the run; the next scan reports it.
        """
        src = self._source
        lineno, col = src.lineno, src.col
        run: list[str] = []
        while True:
            try:
                char = src.read()
            except EndOfSource:
                if not run:
                    raise
                break
            if not accept(char):
                src.unread()
                break
            run.append(char)
        if not run:
            raise ScanError(f"{char!r} {failure}", lineno, col)
        return Token(kind, "".join(run), lineno, col)
