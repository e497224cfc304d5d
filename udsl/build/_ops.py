"""
Operation and pipeline builders.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from udsl._types import MISSING, Json
from udsl.build._values import serialize
from udsl.run import Branch, Operation, Pipeline

# ═══════════════════════════════════════════════════════════════════════════════
# OpBuilder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OpBuilder:
    """
    Fluent operation builder.

    Example:
        op("entity.create", {"type": "User", "name": from_input("name")})
            .named("user")
            .only(from_input("shouldCreate"))
            .build()
    """

    effect: str
    args: Mapping[str, Any] = field(default_factory=dict)
    name: str | None = None
    condition: Any = MISSING

    def named(self, name: str) -> OpBuilder:
        """Set `$as`."""
        return OpBuilder(self.effect, self.args, name, self.condition)

    def only(self, condition: Any) -> OpBuilder:
        """Set `$when`."""
        return OpBuilder(self.effect, self.args, self.name, condition)

    def operation(self) -> Operation:
        return Operation(
            effect=self.effect,
            args=serialize(self.args),
            result_name=self.name,
            condition=MISSING if self.condition is MISSING else serialize(self.condition),
        )

    def build(self) -> dict[str, Json]:
        return self.operation().to_json()


def op(effect: str, args: Mapping[str, Any] | None = None) -> OpBuilder:
    """op("custom.greet", {"name": from_input("name")}).named("greeting")"""
    return OpBuilder(effect, dict(args or {}))


# ═══════════════════════════════════════════════════════════════════════════════
# Branch + Pipeline
# ═══════════════════════════════════════════════════════════════════════════════

type StepBuilder = OpBuilder | BranchBuilder


@dataclass(frozen=True, slots=True)
class BranchBuilder:
    condition: Any
    then: tuple[StepBuilder, ...]
    otherwise: tuple[StepBuilder, ...] = ()

    def operation(self) -> Branch:
        return Branch(
            condition=serialize(self.condition),
            then=tuple(s.operation() for s in self.then),
            otherwise=tuple(s.operation() for s in self.otherwise),
        )

    def build(self) -> dict[str, Json]:
        return self.operation().to_json()


def branch(
    condition: Any,
    then: list[StepBuilder] | tuple[StepBuilder, ...],
    otherwise: list[StepBuilder] | tuple[StepBuilder, ...] = (),
) -> BranchBuilder:
    """branch(from_input("isNew"), then=[create...], otherwise=[update...])"""
    return BranchBuilder(condition, tuple(then), tuple(otherwise))


def pipe(*steps: StepBuilder, returning: Mapping[str, Any] | None = None) -> dict[str, Json]:
    """
    Build a pipeline document.

    Example:
        pipe(
            entity.create("Session", {"title": from_input("title")}).named("session"),
            entity.create("Message", {"sessionId": ref("session").at("id")}).named("message"),
        )
    """
    return Pipeline(
        steps=tuple(s.operation() for s in steps),
        return_expr=serialize(returning) if returning is not None else None,
    ).to_json()


def single(step: OpBuilder) -> dict[str, Json]:
    """Build a single-operation document."""
    return step.build()


# ═══════════════════════════════════════════════════════════════════════════════
# Entity Sugar
# ═══════════════════════════════════════════════════════════════════════════════


class _Entity:
    """Sugar for the entity plugin: entity.create("User", {...})."""

    __slots__ = ()

    def create(self, type: str, data: Mapping[str, Any] | None = None) -> OpBuilder:
        return op("entity.create", {"type": type, **(data or {})})

    def update(self, type: str, data: Mapping[str, Any]) -> OpBuilder:
        return op("entity.update", {"type": type, **data})

    def upsert(self, type: str, data: Mapping[str, Any]) -> OpBuilder:
        return op("entity.upsert", {"type": type, **data})

    def delete(self, type: str, id: Any) -> OpBuilder:
        return op("entity.delete", {"type": type, "id": id})


entity = _Entity()


__all__ = (
    "OpBuilder",
    "op",
    "StepBuilder",
    "BranchBuilder",
    "branch",
    "pipe",
    "single",
    "entity",
)
