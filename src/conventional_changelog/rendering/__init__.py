"""
Changelog rendering.

Groups classified commits into sections and serializes them as Markdown,
plain text or Slack markup.
"""

from .formats import Format  # noqa: F401
from .renderer import RenderOptions, group_sections, render  # noqa: F401
