"""CLI command handlers."""

from .render import render_template
from .inspect import inspect_template

__all__ = ['render_template', 'inspect_template']
