"""
Evaluation errors.

Every failure raised by udsl itself derives from EvaluationError.
Errors raised by effect handlers are never wrapped.
"""

from __future__ import annotations

from dataclasses import dataclass


class EvaluationError(Exception):
    """Base class for pipeline evaluation failures."""


@dataclass(eq=False)
class UnknownNamespace(EvaluationError):
    """No plugin is registered for the namespace of an effect."""

    namespace: str

    def __str__(self) -> str:
        return f"Unknown plugin namespace: {self.namespace}"


@dataclass(eq=False)
class UnknownEffect(EvaluationError):
    """The namespace exists but has no handler under that name."""

    effect: str

    def __str__(self) -> str:
        return f"Unknown effect: {self.effect}"


@dataclass(eq=False)
class UnresolvedReference(EvaluationError):
    """A `$ref` pointed at nothing while running in strict mode."""

    path: str

    def __str__(self) -> str:
        return f"Unresolved reference: $ref {self.path!r}"


@dataclass(eq=False)
class InvalidDSL(EvaluationError):
    """Document is neither a valid operation nor a valid pipeline."""

    reason: str

    def __str__(self) -> str:
        return f"Invalid DSL: {self.reason}"


__all__ = (
    "EvaluationError",
    "UnknownNamespace",
    "UnknownEffect",
    "UnresolvedReference",
    "InvalidDSL",
)
