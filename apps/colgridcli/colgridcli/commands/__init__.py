"""CLI commands"""

from .layout import layout_command
from .render import render_command

__all__ = ["layout_command", "render_command"]
