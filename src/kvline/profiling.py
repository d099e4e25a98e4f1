"""kvline ScanAccumulator — opt-in profiling for scanning and reduction.

This module provides accumulated metrics during a run:
- Total elapsed time
- Tokens scanned (overall and per kind)
- Key/value bindings and records produced

Zero overhead when disabled (get_scan_accumulator() returns None).

Scanner and Reducer look the accumulator up once, when they are constructed,
so a scanner running on a worker thread still reports into the accumulator
of the context that built it.

Example:
    from kvline import parse_records
    from kvline.profiling import profiled_scan

    with profiled_scan() as metrics:
        parse_records("a=1 b=2\\n")

    print(metrics.summary())
    # {"total_ms": 0.3, "tokens": 9, "bindings": 2, "records": 1, ...}

"""

from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any

from kvline.tokens import TokenKind


@dataclass
class ScanAccumulator:
    """Accumulated metrics during scanning.

    Attributes:
        start_time: Profiling start timestamp.
        tokens: Number of tokens scanned.
        bindings: Number of key/value reductions.
        records: Number of records emitted.
        kinds: Token count per TokenKind.

    """

    start_time: float = field(default_factory=perf_counter)
    tokens: int = 0
    bindings: int = 0
    records: int = 0
    kinds: Counter = field(default_factory=Counter)

    def record_token(self, kind: TokenKind) -> None:
        """Record a scanned token."""
        self.tokens += 1
        self.kinds[kind] += 1

    def record_binding(self) -> None:
        """Record a key/value reduction."""
        self.bindings += 1

    def record_emit(self) -> None:
        """Record an emitted record."""
        self.records += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics.

        Returns:
            Dict with total_ms, tokens, bindings, records and a per-kind
            breakdown keyed by token label.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "tokens": self.tokens,
            "bindings": self.bindings,
            "records": self.records,
            "kinds": {kind.label: count for kind, count in self.kinds.items()},
        }


_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Creates a ScanAccumulator and makes it available via
    get_scan_accumulator() for the duration of the with block.

    Yields:
        ScanAccumulator that will be populated by scanners and reducers
        constructed inside the block.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
