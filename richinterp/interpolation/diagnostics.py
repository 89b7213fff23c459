"""
Diagnostic sinks for the interpolator.

Reporting is the interpolator's only side effect. A missing binding in
localized content must never break rendering, so problems are reported here
and the call carries on.
"""

import logging
from typing import List, Optional, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticReporter(Protocol):
    """Anything that accepts interpolation diagnostics."""

    def report(self, message: str) -> None:
        ...


class LoggingReporter:
    """Report diagnostics as warnings on a logger."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self._log = log if log is not None else logger

    def report(self, message: str) -> None:
        self._log.warning(f"translate error: {message}")


class CollectingReporter:
    """
    Keep diagnostics in memory.

    Optionally forwards each message to another reporter so that collecting
    (for a strict check, say) does not silence the log.
    """

    def __init__(self, forward: Optional[DiagnosticReporter] = None):
        self.messages: List[str] = []
        self._forward = forward

    def report(self, message: str) -> None:
        self.messages.append(message)
        if self._forward is not None:
            self._forward.report(message)

    def clear(self) -> None:
        self.messages.clear()

    def __len__(self) -> int:
        return len(self.messages)
