"""Code point classes for O(1) token classification.

Every code point falls into exactly one scan class, tested in this order:
newline, quote, whitespace, equal sign, atom, unidentified. The quote test
only matters at the start of a token; inside an atom run a quote is an
ordinary atom code point.

Usage:
    from kvline.scanner.charsets import is_atom

    if is_atom(char):
        ...
"""

NEWLINE = "\n"
EQUAL = "="
ESCAPE = "\\"
QUOTES: frozenset[str] = frozenset("'\"")


def is_whitespace(char: str) -> bool:
    """Whitespace other than the newline."""
    return char != NEWLINE and char.isspace()


def is_atom(char: str) -> bool:
    """Printable, not a newline, not ``=`` and not whitespace."""
    return char != NEWLINE and char != EQUAL and char.isprintable() and not char.isspace()


def is_unidentified(char: str) -> bool:
    """Anything on a line that no other class claims (control characters etc.)."""
    return char != NEWLINE and char != EQUAL and not char.isspace() and not is_atom(char)
