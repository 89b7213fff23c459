"""
Interpolation module.

Splits a translation string into literal text and rich nodes produced from
named bindings.
"""

from .interpolator import (
    HTML_VOID_ELEMENTS,
    Interpolator,
    InterpolatorConfig,
    MarkupForm,
    MarkupMatch,
    interpolate,
)
from .diagnostics import CollectingReporter, DiagnosticReporter, LoggingReporter

__all__ = [
    'HTML_VOID_ELEMENTS',
    'Interpolator',
    'InterpolatorConfig',
    'MarkupForm',
    'MarkupMatch',
    'interpolate',
    'CollectingReporter',
    'DiagnosticReporter',
    'LoggingReporter',
]
