"""JSON renderer: one object per record.

Output is deterministic (sorted keys) so identical records always render to
identical lines.
"""

import json


class JsonRenderer:
    """Render a record as a single-line JSON object."""

    __slots__ = ()

    def render(self, record: dict[str, str]) -> str:
        return json.dumps(record, sort_keys=True, ensure_ascii=False)
