"""
Binding type definitions.

A binding tells the interpolator what to put in place of a named tag or
placeholder. Bindings are a tagged union: the kind is explicit and the
interpolator dispatches on it, never on the runtime type of the payload.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional


class BindingKind(str, Enum):
    """How a binding produces its rich node."""
    WRAPPER = "wrapper"
    VALUE = "value"


@dataclass(frozen=True)
class Binding:
    """
    Named substitution entry.

    Attributes:
        kind: WRAPPER or VALUE
        fn: For wrappers, called with the text enclosed by the tag pair
        node: For values, the pre-built node emitted as-is
    """
    kind: BindingKind
    fn: Optional[Callable[[str], Any]] = None
    node: Any = None

    @classmethod
    def wrapper(cls, fn: Callable[[str], Any]) -> "Binding":
        """Build a binding that wraps tag content through ``fn``."""
        return cls(kind=BindingKind.WRAPPER, fn=fn)

    @classmethod
    def value(cls, node: Any) -> "Binding":
        """Build a binding that substitutes ``node`` wholesale."""
        return cls(kind=BindingKind.VALUE, node=node)

    @property
    def is_wrapper(self) -> bool:
        return self.kind == BindingKind.WRAPPER

    @property
    def is_value(self) -> bool:
        return self.kind == BindingKind.VALUE

    def validate(self) -> List[str]:
        """
        Validate the binding payload against its kind.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not isinstance(self.kind, BindingKind):
            errors.append(f"unknown binding kind {self.kind!r}")
            return errors

        if self.kind == BindingKind.WRAPPER:
            if not callable(self.fn):
                errors.append("wrapper binding requires a callable 'fn'")
            if self.node is not None:
                errors.append("wrapper binding must not carry a 'node'")
        else:
            if self.fn is not None:
                errors.append("value binding must not carry an 'fn'")
            if self.node is None:
                errors.append("value binding requires a 'node'")

        return errors


def wrapper(fn: Callable[[str], Any]) -> Binding:
    """Shorthand for :meth:`Binding.wrapper`."""
    return Binding.wrapper(fn)


def value(node: Any) -> Binding:
    """Shorthand for :meth:`Binding.value`."""
    return Binding.value(node)
