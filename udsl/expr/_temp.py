"""
Temp ids — synthetic identifiers for entities that do not exist yet.
"""

from __future__ import annotations

from typing import Protocol


class TempIdSource(Protocol):
    """Anything callable that yields a fresh id per call."""

    def __call__(self) -> str: ...


class TempIds:
    """
    Monotonic temp id generator: temp_1, temp_2, ...

    One shared instance backs `$temp` unless a run supplies its own.

    Example:
        ids = TempIds()
        ids()  # "temp_1"
        ids()  # "temp_2"
    """

    __slots__ = ("_prefix", "_counter")

    def __init__(self, prefix: str = "temp") -> None:
        self._prefix = prefix
        self._counter = 0

    def __call__(self) -> str:
        self._counter += 1
        return f"{self._prefix}_{self._counter}"

    @property
    def issued(self) -> int:
        """How many ids were handed out since the last reset."""
        return self._counter

    def reset(self) -> None:
        self._counter = 0


shared_temp_ids = TempIds()


def reset_temp_ids() -> None:
    """Restart the shared sequence (tests)."""
    shared_temp_ids.reset()


__all__ = ("TempIdSource", "TempIds", "shared_temp_ids", "reset_temp_ids")
