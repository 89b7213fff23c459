"""
Binding registry.

Holds the named bindings for an interpolation call. The registry is a
read-only ``Mapping`` from the interpolator's point of view, so it can be
passed anywhere a plain ``dict`` of bindings is accepted.
"""

import logging
import re
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional

from richinterp.exceptions import BindingError
from .types import Binding


logger = logging.getLogger(__name__)


class BindingRegistry(Mapping):
    """
    Registry of named bindings.

    Names follow the same identifier class the interpolator matches
    (``\\w+``); a binding registered under any other name could never be
    reached from a template.
    """

    NAME_PATTERN = re.compile(r'\w+', re.ASCII)

    def __init__(self, bindings: Optional[Dict[str, Binding]] = None):
        """Initialize registry, optionally seeded with ``bindings``."""
        self._bindings: Dict[str, Binding] = {}
        if bindings:
            for name, binding in bindings.items():
                self.register(name, binding)

    def register(self, name: str, binding: Binding) -> None:
        """
        Register a binding under ``name``, replacing any previous one.

        Raises:
            BindingError: If the name or the binding is invalid
        """
        if not isinstance(name, str) or not self.NAME_PATTERN.fullmatch(name):
            raise BindingError(f"Invalid binding name: {name!r}")
        if not isinstance(binding, Binding):
            raise BindingError(
                f"Binding '{name}' must be a Binding, got {type(binding).__name__}"
            )

        errors = binding.validate()
        if errors:
            raise BindingError(f"Invalid binding '{name}': {'; '.join(errors)}")

        if name in self._bindings:
            logger.debug(f"Replacing binding: {name}")
        self._bindings[name] = binding
        logger.debug(f"Registered {binding.kind.value} binding: {name}")

    def has(self, name: str) -> bool:
        """Check if a binding is registered under ``name``."""
        return name in self._bindings

    def names(self) -> List[str]:
        """List registered binding names in sorted order."""
        return sorted(self._bindings)

    def merge(self, other: Mapping) -> "BindingRegistry":
        """
        Return a new registry with ``other`` layered over this one.

        Entries in ``other`` win on name collisions.
        """
        merged = BindingRegistry(dict(self._bindings))
        for name, binding in other.items():
            merged.register(name, binding)
        return merged

    def validate_all(self) -> List[str]:
        """
        Validate every registered binding.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        for name, binding in self._bindings.items():
            for error in binding.validate():
                errors.append(f"Binding '{name}': {error}")
        return errors

    def __getitem__(self, name: str) -> Binding:
        return self._bindings[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"BindingRegistry({self.names()!r})"
