"""Template renderer using ``str.format`` fields.

Each ``{name}`` field is replaced by the record's value for ``name``. Keys a
record does not have render as an empty string, so one template can serve
lines with different fields. ``{_record}`` expands to the whole record.

Example:
    >>> TemplateRenderer("{level}: {msg}").render({"level": "warn", "msg": "disk"})
    'warn: disk'
    >>> TemplateRenderer("{level}: {msg}").render({"msg": "disk"})
    ': disk'

"""

from string import Formatter

from kvline.errors import RenderError

WHOLE_RECORD_FIELD = "_record"


class _RecordFields(dict):
    """Mapping handed to format_map: missing keys render empty."""

    def __missing__(self, key: str) -> str:
        return ""


class TemplateRenderer:
    """Render records through a ``str.format`` template.

    Thread Safety:
        Immutable after construction. Safe to share across threads.

    """

    __slots__ = ("_template",)

    def __init__(self, template: str) -> None:
        """Validate and store the template.

        Args:
            template: Format string, e.g. ``"{ts} {level} {msg}"``

        Raises:
            RenderError: If the template is malformed or uses positional fields.
        """
        try:
            fields = [name for _, name, _, _ in Formatter().parse(template) if name is not None]
        except ValueError as exc:
            raise RenderError(template, str(exc)) from exc
        for name in fields:
            if name == "" or name.isdigit():
                raise RenderError(template, "positional fields are not supported; name a key")
        self._template = template

    @property
    def template(self) -> str:
        return self._template

    def render(self, record: dict[str, str]) -> str:
        """Render one record.

        Raises:
            RenderError: If a field's conversion or format spec fails.
        """
        fields = _RecordFields(record)
        fields[WHOLE_RECORD_FIELD] = record
        try:
            return self._template.format_map(fields)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
            raise RenderError(self._template, str(exc)) from exc
