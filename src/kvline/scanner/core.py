"""Streaming scanner: code points in, tokens out.

The scanner peeks at one code point, picks a scan rule from its class, and
lets that rule consume exactly one token. There is no backtracking beyond the
single code point of pushback the source provides.

The token stream always ends with one ERROR token: the end of the input and
every scan failure are reported the same way, through the token's ``error``.

Thread Safety:
Scanner instances are single-use. Create one per source.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator
from logging import Logger
from typing import IO

from kvline.errors import ScanError
from kvline.profiling import get_scan_accumulator
from kvline.scanner.charsets import EQUAL, NEWLINE, QUOTES, is_atom, is_whitespace
from kvline.scanner.rules import RuleScannerMixin
from kvline.source import CodePointSource
from kvline.tokens import Token
from kvline.utils.logger import get_logger


class Scanner(RuleScannerMixin):
    """Single-pass scanner producing a lazy token stream.

    Usage:
            >>> for token in Scanner("key=value\\n"):
            ...     print(token)
        Token(ATOM, 'key', 1:1)
        Token(EQUAL, '=', 1:4)
        Token(ATOM, 'value', 1:5)
        Token(NEWLINE, '\\n', 1:10)
        Token(ERROR, '2:1 end of source', 2:1)

    """

    __slots__ = ("_source", "_log", "_done", "_accumulator")

    def __init__(
        self,
        source: CodePointSource | str | IO[str] | IO[bytes],
        *,
        logger: Logger | None = None,
    ) -> None:
        """Initialize scanner over one source.

        Args:
            source: A CodePointSource, or anything CodePointSource accepts
            logger: Diagnostics sink for trace output (package logger if None)
        """
        if not isinstance(source, CodePointSource):
            source = CodePointSource(source)
        self._source = source
        self._log = logger if logger is not None else get_logger(__name__)
        self._done = False
        self._accumulator = get_scan_accumulator()

    @property
    def exhausted(self) -> bool:
        """True once the terminal ERROR token has been produced."""
        return self._done

    def __iter__(self) -> Scanner:
        return self

    def __next__(self) -> Token:
        if self._done:
            raise StopIteration
        token = self.scan()
        if token.is_terminal:
            self._done = True
        if self._accumulator is not None:
            self._accumulator.record_token(token.type)
        self._log.debug("val: %r", token)
        return token

    def tokenize(self) -> Iterator[Token]:
        """Yield the remaining tokens, ending with the ERROR token.

        Yields:
            Token objects one at a time; nothing if already exhausted.
        """
        yield from self

    def scan(self) -> Token:
        """Scan one token, converting any ScanError into an ERROR token."""
        src = self._source
        lineno, col = src.lineno, src.col
        try:
            return self._classify()
        except ScanError as exc:
            self._log.debug("scan stopped: %s", exc)
            return Token.terminal(exc, lineno, col)

    def _classify(self) -> Token:
        char = self._source.peek()
        self._log.debug("PEEKED AT %r (%d)", char, ord(char))
        if char == NEWLINE:
            return self.scan_newline()
        if char in QUOTES:
            return self.scan_quoted_string()
        if is_whitespace(char):
            return self.scan_whitespace()
        if char == EQUAL:
            return self.scan_equal()
        if is_atom(char):
            return self.scan_atom()
        return self.scan_unidentified()
