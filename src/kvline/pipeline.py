"""Scanner → Reducer composition.

Two ways to run the same pipeline:

- Generator chain (default): the reducer pulls each token from the scanner
  on demand. Backpressure is implicit; nothing is read ahead.
- Threaded: the scanner runs on a worker thread and hands tokens over a
  ``queue.Queue(maxsize=1)``. Each put waits until the reducer has taken the
  previous token, so a slow consumer stalls the scanner.

Either way records come out in the order their lines ended in the input.

Example:
    >>> from kvline.pipeline import iter_records
    >>> list(iter_records("level=info msg=ok\\n"))
    [{'level': 'info', 'msg': 'ok'}]

"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterator
from logging import Logger
from typing import IO

from kvline.config import get_scan_config
from kvline.reducer import Record, Reducer
from kvline.scanner import Scanner
from kvline.source import CodePointSource
from kvline.tokens import Token
from kvline.utils.logger import get_logger

# How often a blocked worker re-checks whether the consumer went away
_HANDOFF_POLL_SECONDS = 0.1

_DONE = object()

_logger = get_logger(__name__)


def iter_records(
    source: CodePointSource | str | IO[str] | IO[bytes],
    *,
    logger: Logger | None = None,
    threaded: bool | None = None,
) -> Iterator[Record]:
    """Scan and reduce one source, yielding a record per terminated line.

    The pipeline is built (and the active config and profiling context
    captured) when this is called; nothing is read until the first record
    is requested.

    Args:
        source: Text, a stream, or a prepared CodePointSource
        logger: Diagnostics sink shared by scanner and reducer
        threaded: Run the scanner on a worker thread (config default if None)

    Returns:
        Iterator of one dict per line, empty when the line held no bindings.
    """
    if threaded is None:
        threaded = get_scan_config().threaded

    scanner = Scanner(source, logger=logger)
    tokens = threaded_tokens(scanner) if threaded else iter(scanner)
    return Reducer(tokens, logger=logger).records()


def threaded_tokens(scanner: Scanner) -> Iterator[Token]:
    """Run ``scanner`` on a worker thread and yield its tokens.

    Closing the returned generator early stops the worker at its next
    handoff. An exception raised inside the worker is re-raised here once
    the tokens produced before it have been yielded.

    Yields:
        The scanner's tokens, in order.
    """
    handoff: queue.Queue[object] = queue.Queue(maxsize=1)
    stop = threading.Event()
    failure: list[BaseException] = []

    def offer(item: object) -> bool:
        while not stop.is_set():
            try:
                handoff.put(item, timeout=_HANDOFF_POLL_SECONDS)
            except queue.Full:
                continue
            return True
        return False

    def produce() -> None:
        _logger.debug("scanner worker started")
        try:
            for token in scanner:
                if not offer(token):
                    _logger.debug("consumer went away; scanner worker stopping")
                    return
        except Exception as exc:
            failure.append(exc)
        finally:
            offer(_DONE)
            _logger.debug("scanner worker finished")

    worker = threading.Thread(target=produce, name="kvline-scanner", daemon=True)
    worker.start()
    finished = False
    try:
        while True:
            item = handoff.get()
            if item is _DONE:
                finished = True
                break
            yield item  # type: ignore[misc]
    finally:
        stop.set()
        # An abandoned worker may be blocked reading the source; it is a daemon
        if finished:
            worker.join()

    if failure:
        raise failure[0]


def scan(text: str, *, logger: Logger | None = None) -> list[Token]:
    """Scan ``text`` into a list of tokens, ending with the ERROR token."""
    return list(Scanner(text, logger=logger))


def parse_records(text: str, *, logger: Logger | None = None) -> list[Record]:
    """Scan and reduce ``text``, returning every record."""
    return list(iter_records(text, logger=logger, threaded=False))
