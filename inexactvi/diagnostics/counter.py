"""Inner-step telemetry shared by one outer solver run."""

from __future__ import annotations


class IterationCounter:
    """
    Mutable count of conditional-gradient steps.

    One counter is created per outer iterator, reset when that iterator
    starts, and passed by reference into every projection it performs. The
    value is diagnostic only; no algorithm reads it. Not thread-safe.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int = 0) -> None:
        if value < 0:
            raise ValueError(f"counter value must be non-negative, got {value}")
        self._value = int(value)

    @property
    def value(self) -> int:
        """Number of inner steps recorded since the last reset."""
        return self._value

    def increment(self) -> None:
        self._value += 1

    def reset(self) -> None:
        self._value = 0

    def __repr__(self) -> str:
        return f"IterationCounter(value={self._value})"


__all__ = ["IterationCounter"]
