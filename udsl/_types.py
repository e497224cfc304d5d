"""
Core types for udsl.

Re-exports from kungfu + the JSON value aliases and the MISSING sentinel.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final, final

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# JSON Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Json = Any
"""Any JSON-compatible value (expressions are plain JSON trees)."""

type JsonObject = Mapping[str, Json]
"""A JSON object, e.g. the `$with` block of an operation."""

# ═══════════════════════════════════════════════════════════════════════════════
# Missing — the "undefined" of the DSL
# ═══════════════════════════════════════════════════════════════════════════════


@final
class Missing:
    """
    Value of a reference that points nowhere.

    Distinct from JSON null: `{"a": None}` at path "a" gives None,
    at path "a.b" gives MISSING. Always falsy.
    """

    __slots__ = ()
    _instance: Missing | None = None

    def __new__(cls) -> Missing:
        if cls._instance is None:
            cls._instance = object.__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = Missing()

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # JSON
    "Json",
    "JsonObject",
    # Missing
    "Missing",
    "MISSING",
)
