"""
Conditional blocks in HTML comments: <!-- if EXPR --> ... <!-- endif -->.
"""

from .errors import TemplateConditionError, TemplateError, TemplateStructureError
from .renderer import TemplateRenderer, render_template
from .scanner import ControlMarker, TemplateScanner, TextSegment, scan_template

__all__ = [
    # Main entry point
    "render_template",
    "TemplateRenderer",

    # Errors
    "TemplateError",
    "TemplateStructureError",
    "TemplateConditionError",

    # Low-level (tests and debugging)
    "ControlMarker",
    "TextSegment",
    "TemplateScanner",
    "scan_template",
]
