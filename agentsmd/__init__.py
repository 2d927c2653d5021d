"""
agentsmd: render AGENTS.md from project-aware conditional templates.
"""

from .templating import render_template
from .version import tool_version

__all__ = ["render_template", "tool_version"]
