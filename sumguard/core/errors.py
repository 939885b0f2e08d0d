"""
Exceptions raised by the sumguard validator and its collaborators.
"""

from __future__ import annotations

from typing import Any, Sequence


class SumguardError(Exception):
    """Base exception for all sumguard errors."""

    pass


class WindowInvariantError(SumguardError):
    """The arrival and sorted views of a window no longer hold the same elements.

    This is never a user error: it means the window bookkeeping is corrupt and
    the run cannot continue safely.
    """

    pass


class PairSumMismatchError(SumguardError):
    """Two pair-sum strategies disagreed on the same window and target."""

    def __init__(
        self,
        target: Any,
        primary: bool,
        reference: bool,
        window: Sequence[Any],
    ) -> None:
        self.target = target
        self.primary = primary
        self.reference = reference
        self.window = list(window)
        super().__init__(
            f"pair-sum mismatch for target {target}: primary={primary} "
            f"reference={reference} window={self.window}"
        )


class InputParseError(SumguardError, ValueError):
    """A line of input could not be decoded or parsed as an integer."""

    def __init__(self, lineno: int, line: str, reason: str = "cannot parse as an integer") -> None:
        self.lineno = lineno
        self.line = line
        self.reason = reason
        super().__init__(f"line {lineno}: {reason}: {line!r}")


class ConfigurationError(SumguardError):
    """Exception raised for configuration errors."""

    pass
