"""kvline renderers.

Renderers convert records into output lines.

Available Renderers:
- JsonRenderer: One JSON object per record (the CLI default)
- TemplateRenderer: ``str.format`` template filled from the record

Thread Safety:
Renderers hold no per-call state. Safe for concurrent use.

"""

from kvline.renderers.json import JsonRenderer
from kvline.renderers.protocol import RecordRenderer
from kvline.renderers.template import TemplateRenderer

__all__ = ["JsonRenderer", "RecordRenderer", "TemplateRenderer"]
