"""
kvline — streaming key=value record extraction for log lines

Scans a stream of text into tokens and reduces each line's ``key=value``
pairs into a dict. Records come out one per line, as the input arrives.

Quick Start:
    >>> from kvline import parse_records
    >>> parse_records("level=info msg=started port=8080\\n")
    [{'level': 'info', 'msg': 'started', 'port': '8080'}]

    >>> # Streaming from a file
    >>> from kvline import iter_records
    >>> with open("app.log", "rb") as f:
    ...     for record in iter_records(f):
    ...         print(record.get("level"))

Lower Level:
    >>> from kvline import Reducer, Scanner
    >>> scanner = Scanner("a=1\\n")
    >>> list(Reducer(scanner))
    [{'a': '1'}]

Installation:
    pip install kvline
"""

from kvline.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from kvline.errors import (
    EndOfSource,
    KvlineError,
    RenderError,
    ScanError,
    SourceError,
    SourceReadError,
    UnterminatedQuoteError,
)
from kvline.pipeline import iter_records, parse_records, scan, threaded_tokens
from kvline.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from kvline.reducer import Record, Reducer
from kvline.renderers import JsonRenderer, RecordRenderer, TemplateRenderer
from kvline.scanner import Scanner
from kvline.source import CodePointSource
from kvline.tokens import Token, TokenKind

__version__ = "0.1.0"

__all__ = [
    # Core
    "CodePointSource",
    "Scanner",
    "Reducer",
    "Record",
    "Token",
    "TokenKind",
    # Pipeline
    "iter_records",
    "parse_records",
    "scan",
    "threaded_tokens",
    # Configuration
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
    # Profiling
    "ScanAccumulator",
    "get_scan_accumulator",
    "profiled_scan",
    # Rendering
    "RecordRenderer",
    "JsonRenderer",
    "TemplateRenderer",
    # Errors
    "KvlineError",
    "ScanError",
    "EndOfSource",
    "UnterminatedQuoteError",
    "SourceReadError",
    "SourceError",
    "RenderError",
]
