"""Token and TokenKind definitions for the kvline scanner.

The scanner produces a stream of Token objects that the reducer consumes.
Each Token has a kind, a string value, and the position where it started.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenKind is an enum (inherently immutable).

"""

from dataclasses import dataclass, field
from enum import Enum

from kvline.errors import KvlineError


class TokenKind(Enum):
    """Token kinds produced by the scanner.

    The value of each member is its display label.

    """

    ATOM = "ATOM"  # key or value: printable run without '=' or spaces
    EQUAL = "EQUAL"  # a single '='
    ERROR = "ERROR"  # terminal token: end of source or scan failure
    NEWLINE = "NEWLINE"  # a single '\n'
    NUMBER = "NUMBER"  # reserved, never produced
    QUOTED_STRING = "QUOTED-STRING"  # '...' or "..." with escapes removed
    WHITESPACE = "WHITE-SPACE"  # run of spaces other than '\n'
    UNIDENTIFIED = "UNIDENTIFIED"  # run of code points in no other class

    @property
    def label(self) -> str:
        """Display label (e.g. ``"QUOTED-STRING"``)."""
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the scanner.

    Tokens are the atomic units passed from scanner to reducer. Equality
    only considers ``type`` and ``value`` so tests and callers can compare
    against bare ``Token(TokenKind.ATOM, "key")`` literals.

    Attributes:
        type: The token kind
        value: The scanned text; for ERROR tokens, the error description
        lineno: Start line number (1-indexed, 0 if unknown)
        col: Start column (1-indexed, 0 if unknown)
        error: The exception carried by an ERROR token

    """

    type: TokenKind
    value: str
    lineno: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)
    error: KvlineError | None = field(default=None, compare=False, repr=False)

    @classmethod
    def terminal(cls, error: KvlineError, lineno: int = 0, col: int = 0) -> "Token":
        """Build the ERROR token that ends a token stream."""
        return cls(TokenKind.ERROR, str(error), lineno, col, error)

    @property
    def is_terminal(self) -> bool:
        """True for the ERROR token that ends a stream."""
        return self.type is TokenKind.ERROR

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.lineno}:{self.col})"
