"""Forward-only code point cursor over a string or stream.

The scanner needs exactly three things from its input: read one code point,
push the last one back, and know where it is. CodePointSource provides that
over a ``str``, a text stream, or a binary stream (decoded on the fly).

Each read takes what the stream has ready, up to ``read_size``, so a line
written to a pipe reaches the scanner without waiting for more input. End of
input is remembered: a finished stream is never read again.

Thread Safety:
Not thread-safe. A source is owned by exactly one Scanner.

"""

from __future__ import annotations

import codecs
import io
from collections.abc import Callable
from typing import IO, Any

from kvline.config import get_scan_config
from kvline.errors import EndOfSource, SourceError, SourceReadError


class CodePointSource:
    """Code point cursor with one code point of pushback.

    Usage:
        >>> src = CodePointSource("ab")
        >>> src.read(), src.peek(), src.read()
        ('a', 'b', 'b')

    """

    __slots__ = (
        "_read",
        "_decoder",
        "_eof",
        "_read_size",
        "_buffer",
        "_pos",
        "_last",
        "_pushed_back",
        "_lineno",
        "_col",
        "_prev_lineno",
        "_prev_col",
    )

    def __init__(
        self,
        source: str | IO[str] | IO[bytes],
        *,
        read_size: int | None = None,
        encoding: str | None = None,
    ) -> None:
        """Initialize the cursor.

        Args:
            source: Text, a text stream, or a binary stream
            read_size: Upper bound per stream read (config default if None)
            encoding: Encoding for binary streams (config default if None)

        Raises:
            ValueError: If read_size is less than 1.
        """
        config = get_scan_config()
        read_size = config.read_size if read_size is None else read_size
        if read_size < 1:
            raise ValueError(f"read_size must be at least 1, got {read_size}")

        self._read, self._decoder = _chunk_reader(source, encoding or config.encoding)
        self._eof = False
        self._read_size = read_size
        self._buffer = ""
        self._pos = 0
        self._last: str | None = None
        self._pushed_back = False
        self._lineno = 1
        self._col = 1
        self._prev_lineno = 1
        self._prev_col = 1

    @property
    def lineno(self) -> int:
        """Line number of the next code point (1-indexed)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column of the next code point (1-indexed)."""
        return self._col

    def read(self) -> str:
        """Consume and return the next code point.

        Raises:
            EndOfSource: The stream is exhausted (raised again on every call
                without touching the stream).
            SourceReadError: The stream failed or was closed.
        """
        if self._pushed_back:
            self._pushed_back = False
            char = self._last
        else:
            if self._pos >= len(self._buffer):
                self._fill()
            char = self._buffer[self._pos]
            self._pos += 1
            self._last = char

        self._prev_lineno = self._lineno
        self._prev_col = self._col
        if char == "\n":
            self._lineno += 1
            self._col = 1
        else:
            self._col += 1
        return char

    def unread(self) -> None:
        """Push the last code point read back onto the cursor.

        Raises:
            SourceError: Nothing has been read, or it was already pushed back.
        """
        if self._last is None or self._pushed_back:
            raise SourceError("only one code point can be pushed back")
        self._pushed_back = True
        self._lineno = self._prev_lineno
        self._col = self._prev_col

    def peek(self) -> str:
        """Return the next code point without consuming it."""
        char = self.read()
        self.unread()
        return char

    def _fill(self) -> None:
        """Replace the exhausted buffer with whatever the stream has ready."""
        if self._eof:
            raise EndOfSource(lineno=self._lineno, col=self._col)
        try:
            chunk = self._next_chunk()
        except (OSError, ValueError) as exc:
            # UnicodeDecodeError is a ValueError; so is reading a closed file
            raise SourceReadError(
                f"read failed: {exc}", lineno=self._lineno, col=self._col
            ) from exc
        if not chunk:
            self._eof = True
            raise EndOfSource(lineno=self._lineno, col=self._col)
        self._buffer = chunk
        self._pos = 0

    def _next_chunk(self) -> str:
        if self._decoder is None:
            return self._read(self._read_size)
        while True:
            data = self._read(self._read_size)
            text = self._decoder.decode(data or b"", final=not data)
            # A chunk can end inside a multi-byte sequence
            if text or not data:
                return text


def _chunk_reader(
    source: str | IO[str] | IO[bytes], encoding: str
) -> tuple[Callable[[int], Any], codecs.IncrementalDecoder | None]:
    """Pick the read call that returns as soon as any input is available.

    Binary streams are read with ``read1`` where they have it and decoded
    incrementally; text streams are read a line at a time. The stream itself
    is never wrapped, so it is left open for its owner.
    """
    if isinstance(source, str):
        return io.StringIO(source).read, None
    if isinstance(source, (io.RawIOBase, io.BufferedIOBase)):
        decoder = codecs.getincrementaldecoder(encoding)()
        return getattr(source, "read1", source.read), decoder
    if not hasattr(source, "read"):
        raise TypeError(f"cannot read code points from {type(source).__name__}")
    return getattr(source, "readline", source.read), None
