"""Exception classes for kvline.

Provides standardized exceptions for error handling throughout kvline.

The scanner never lets a ScanError escape its token stream: every scan
failure, including the ordinary end of input, becomes the terminal ERROR
token that carries the exception to the reducer.
"""

from __future__ import annotations


class KvlineError(Exception):
    """Base exception for all kvline errors.

    Subclass this for specific error categories.
    """

    pass


class ScanError(KvlineError):
    """Error while scanning code points into tokens.

    Raised by the individual scan rules when the input does not belong to
    the class being scanned, and carried by the terminal ERROR token.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col: int | None = None,
    ) -> None:
        """Initialize scan error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col: Column where error occurred (1-indexed)
        """
        self.message = message
        self.lineno = lineno
        self.col = col

        location = ""
        if lineno is not None:
            location = f"{lineno}:"
            if col is not None:
                location += f"{col}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class EndOfSource(ScanError):
    """The source has no more code points.

    This is the normal way for a token stream to end.
    """

    def __init__(self, lineno: int | None = None, col: int | None = None) -> None:
        super().__init__("end of source", lineno=lineno, col=col)


class UnterminatedQuoteError(ScanError):
    """End of source reached inside a quoted value."""

    def __init__(
        self,
        delimiter: str,
        lineno: int | None = None,
        col: int | None = None,
    ) -> None:
        """Initialize unterminated quote error.

        Args:
            delimiter: The quote character that opened the value
            lineno: Line number of the opening quote
            col: Column of the opening quote
        """
        self.delimiter = delimiter
        super().__init__(
            f"unterminated quoted value (missing closing {delimiter})",
            lineno=lineno,
            col=col,
        )


class SourceReadError(ScanError):
    """The underlying stream failed to deliver code points.

    Wraps decode errors, I/O errors and reads from a closed stream.
    """

    pass


class SourceError(KvlineError):
    """Misuse of a code point source (e.g. pushing back twice)."""

    pass


class RenderError(KvlineError):
    """Error while rendering a record through a template."""

    def __init__(self, template: str, message: str) -> None:
        """Initialize render error.

        Args:
            template: The template being rendered
            message: Description of the failure
        """
        self.template = template
        super().__init__(f"Template {template!r}: {message}")
