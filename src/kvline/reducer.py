"""Token stream reducer: tokens in, one record per line out.

The grammar, in its entirety:

    binding := ATOM EQUAL ATOM

The reducer shifts every non-whitespace token onto a window and reduces as
soon as the last three entries form a binding. A NEWLINE (or the terminal
ERROR) ends the line and emits the record built so far.

The window only ever looks back two tokens once a three-token match fails.
Older tokens are dropped without being reported, so ``a = b = c`` binds
``a`` to ``b`` and nothing else: after the reduction the second ``=`` starts
from an empty window with no key in front of it. Quoted strings never take
part in a binding.

Thread Safety:
Reducer instances are single-use. Create one per token stream.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from logging import Logger

from kvline.errors import KvlineError
from kvline.profiling import get_scan_accumulator
from kvline.tokens import Token, TokenKind
from kvline.utils.logger import get_logger

Record = dict[str, str]

_BINDING = (TokenKind.ATOM, TokenKind.EQUAL, TokenKind.ATOM)
_LINE_END = frozenset({TokenKind.NEWLINE, TokenKind.ERROR})


class Reducer:
    """Reduce a token stream into per-line key/value records.

    Usage:
        >>> list(Reducer(Scanner("a=1 b=2\\nc=3\\n")))
        [{'a': '1', 'b': '2'}, {'c': '3'}]

    A line cut short by the end of input is still flushed when it produced
    any token, so ``"a=1"`` yields ``[{'a': '1'}]``; an input that ends right
    after a newline (or in trailing whitespace) adds no extra record.

    """

    __slots__ = ("_tokens", "_log", "_accumulator", "_terminal_error", "_started")

    def __init__(self, tokens: Iterable[Token], *, logger: Logger | None = None) -> None:
        """Initialize reducer over a token stream.

        Args:
            tokens: Token stream, normally a Scanner
            logger: Diagnostics sink for trace output (package logger if None)
        """
        self._tokens = tokens
        self._log = logger if logger is not None else get_logger(__name__)
        self._accumulator = get_scan_accumulator()
        self._terminal_error: KvlineError | None = None
        self._started = False

    @property
    def terminal_error(self) -> KvlineError | None:
        """Error carried by the terminal token, once it has been consumed.

        EndOfSource for a clean end of input.
        """
        return self._terminal_error

    def __iter__(self) -> Iterator[Record]:
        return self.records()

    def records(self) -> Iterator[Record]:
        """Yield one record per terminated line.

        Yields:
            dict mapping key to value; empty for lines without bindings.

        Raises:
            RuntimeError: If records() is called a second time.
        """
        if self._started:
            raise RuntimeError("a Reducer can only be consumed once")
        self._started = True

        log = self._log
        acc = self._accumulator
        window: list[Token] = []
        record: Record = {}
        # Whether the current line has shown any non-whitespace token
        line_open = False

        for token in self._tokens:
            if token.type is TokenKind.WHITESPACE:
                continue

            window.append(token)
            log.debug("tokens: %r", window)

            if len(window) >= 3:
                top = window[-3:]
                log.debug(">>> TOP THREE TOKENS: %r", top)
                if tuple(t.type for t in top) == _BINDING:
                    record[top[0].value] = top[2].value
                    log.debug("reducing tokens after parsing a key/value pair")
                    log.debug("record is now %r", record)
                    if acc is not None:
                        acc.record_binding()
                    window.clear()
                    line_open = True
                    continue

            if token.type in _LINE_END:
                window.pop()
                if token.type is TokenKind.NEWLINE or line_open:
                    log.debug("SENDING RECORD TO CALLER: %r", record)
                    if acc is not None:
                        acc.record_emit()
                    yield record
                    record = {}
                line_open = False
                if token.type is TokenKind.ERROR:
                    self._terminal_error = token.error
                    log.debug("token stream ended: %s", token.value)
                    return
                continue

            line_open = True
            if len(window) > 2:
                del window[:-2]
