"""
Rich-content interpolation for localized templates.

Splits a resolved translation string into literal text and rich nodes built
from named bindings. See ``richinterp.interpolation`` for the engine and
``richinterp.loader`` for YAML profiles.
"""

from .bindings import Binding, BindingKind, BindingRegistry, wrapper, value
from .interpolation import (
    HTML_VOID_ELEMENTS,
    CollectingReporter,
    Interpolator,
    InterpolatorConfig,
    LoggingReporter,
    interpolate,
)
from .nodes import Element, segments_to_data, segments_to_text

__version__ = '0.1.0'

__all__ = [
    'Binding',
    'BindingKind',
    'BindingRegistry',
    'wrapper',
    'value',
    'HTML_VOID_ELEMENTS',
    'CollectingReporter',
    'Interpolator',
    'InterpolatorConfig',
    'LoggingReporter',
    'interpolate',
    'Element',
    'segments_to_data',
    'segments_to_text',
]
