"""Pattern-based validation of candidate text."""

from __future__ import annotations

import re
from typing import Pattern


class Validators:
    """Ready-made patterns for common numeric inputs."""

    ALL = ".*"
    INT = "[+-]?[0-9]*"
    UINT = "[0-9]*"
    FLOAT = r"[+-]?[0-9]*\.?[0-9]*"


class InvalidPatternError(ValueError):
    """Raised when a validator pattern does not compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid validator pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


def _compile(pattern: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc


class TextValidator:
    """Full-match test of candidate text against a pattern.

    The pattern string and its compiled form are swapped together, so a
    failed ``set_pattern`` leaves the previous validator fully usable.
    """

    def __init__(self, pattern: str = Validators.ALL) -> None:
        self._compiled = _compile(pattern)
        self._pattern = pattern

    @property
    def pattern(self) -> str:
        return self._pattern

    def matches(self, candidate: str) -> bool:
        return self._compiled.fullmatch(candidate) is not None

    def set_pattern(self, pattern: str) -> None:
        compiled = _compile(pattern)
        self._compiled, self._pattern = compiled, pattern

    def __repr__(self) -> str:
        return f"TextValidator({self._pattern!r})"


__all__ = ["InvalidPatternError", "TextValidator", "Validators"]
