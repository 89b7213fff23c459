"""richinterp exceptions."""

from typing import List
from dataclasses import dataclass


@dataclass
class ValidationError:
    """Single profile validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class ProfileValidationError(Exception):
    """Raised when an interpolation profile fails validation.

    The loader collects every problem it finds before raising, so the CLI
    can print them all and map the failure to an exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error at {error.path}: {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))


class BindingError(ValueError):
    """Raised when a binding or binding name is rejected by the registry."""
