"""Streaming scanner for kvline.

Turns a source of Unicode code points into a lazy stream of tokens,
one token per request, ending with a single ERROR token.

Architecture:
scanner/
├── __init__.py          # Re-exports Scanner
├── core.py              # Scanner class (classification + token stream)
├── rules.py             # Per-class scan rules (mixin)
└── charsets.py          # Code point class predicates

Usage:
    >>> from kvline.scanner import Scanner
    >>> [t.value for t in Scanner("a=1")]
    ['a', '=', '1', '1:4 end of source']

"""

from kvline.scanner.core import Scanner

__all__ = ["Scanner"]
