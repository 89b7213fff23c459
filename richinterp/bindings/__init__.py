"""
Binding management module.

Provides the tagged-union binding type and the registry that holds named
bindings for an interpolation call.
"""

from .types import Binding, BindingKind, wrapper, value
from .registry import BindingRegistry


__all__ = [
    "Binding",
    "BindingKind",
    "BindingRegistry",
    "wrapper",
    "value",
]
