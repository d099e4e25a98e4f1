"""RecordRenderer protocol — stable interface for record renderers.

Any renderer that implements ``render(record) -> str`` conforms to this
protocol. ``JsonRenderer`` and ``TemplateRenderer`` are the built-ins.

Example:
    from kvline.renderers.protocol import RecordRenderer

    def write_all(renderer: RecordRenderer, records, out) -> None:
        for record in records:
            out.write(renderer.render(record) + "\\n")

"""

from typing import Protocol


class RecordRenderer(Protocol):
    """Protocol for record renderers."""

    def render(self, record: dict[str, str]) -> str:
        """Render one record to a string (without a trailing newline)."""
        ...
