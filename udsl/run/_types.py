"""
Run types — the typed form of the wire format, results and options.

Wire format:
    Operation: {"$do": str, "$with"?: object, "$as"?: str, "$when"?: any}
    Branch:    {"$if": any, "$then": [Operation...], "$else"?: [Operation...]}
    Pipeline:  {"$pipe": [Operation | Branch...], "$return"?: object}
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any

from udsl._errors import InvalidDSL
from udsl._types import MISSING, Json, JsonObject
from udsl.expr import TempIdSource
from udsl.plugins import PluginRegistry

# ═══════════════════════════════════════════════════════════════════════════════
# Operation — Single Effect Invocation
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Operation:
    """
    One step: effect + arguments, optionally named and conditional.

    `condition` is MISSING when the step is unconditional; an explicit
    `"$when": null` is kept as None and evaluates falsy. `args` is a
    read-only view.
    """

    effect: str
    args: JsonObject = field(default_factory=dict)
    result_name: str | None = None
    condition: Json = MISSING

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", MappingProxyType(dict(self.args)))

    @classmethod
    def from_json(cls, data: Json) -> Operation:
        if not is_operation(data):
            raise InvalidDSL("operation must be an object with a '$do' key")
        effect = data["$do"]
        if not isinstance(effect, str) or not effect:
            raise InvalidDSL(f"'$do' must be a non-empty string, got {effect!r}")
        args = data.get("$with", {})
        if args is None:
            args = {}
        if not isinstance(args, Mapping):
            raise InvalidDSL(f"'$with' of {effect!r} must be an object")
        name = data.get("$as")
        if name is not None and not isinstance(name, str):
            raise InvalidDSL(f"'$as' of {effect!r} must be a string")
        return cls(
            effect=effect,
            args=dict(args),
            result_name=name or None,
            condition=data["$when"] if "$when" in data else MISSING,
        )

    def to_json(self) -> dict[str, Json]:
        out: dict[str, Json] = {"$do": self.effect, "$with": dict(self.args)}
        if self.result_name:
            out["$as"] = self.result_name
        if self.condition is not MISSING:
            out["$when"] = self.condition
        return out


# ═══════════════════════════════════════════════════════════════════════════════
# Branch — Conditional Step Group
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Branch:
    """Runs `then` when the condition is truthy, `otherwise` when not."""

    condition: Json
    then: tuple[Step, ...]
    otherwise: tuple[Step, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "then", tuple(parse_step(s) for s in self.then))
        object.__setattr__(self, "otherwise", tuple(parse_step(s) for s in self.otherwise))

    @classmethod
    def from_json(cls, data: Json) -> Branch:
        if not is_branch(data):
            raise InvalidDSL("branch must be an object with '$if' and '$then' keys")
        return cls(
            condition=data["$if"],
            then=_parse_steps(data["$then"], "$then"),
            otherwise=_parse_steps(data.get("$else", []), "$else"),
        )

    def to_json(self) -> dict[str, Json]:
        out: dict[str, Json] = {
            "$if": self.condition,
            "$then": [s.to_json() for s in self.then],
        }
        if self.otherwise:
            out["$else"] = [s.to_json() for s in self.otherwise]
        return out


type Step = Operation | Branch

# ═══════════════════════════════════════════════════════════════════════════════
# Pipeline — Ordered Steps
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Pipeline:
    """
    Ordered steps plus an optional return expression.

    Built once, executed any number of times. Wire-dict steps are parsed
    on construction.
    """

    steps: tuple[Step, ...]
    return_expr: JsonObject | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(parse_step(s) for s in self.steps))

    @classmethod
    def from_json(cls, data: Json) -> Pipeline:
        if not is_pipeline(data):
            raise InvalidDSL("pipeline must be an object with a '$pipe' list")
        returning = data.get("$return")
        if returning is not None and not isinstance(returning, Mapping):
            raise InvalidDSL("'$return' must be an object")
        return cls(steps=_parse_steps(data["$pipe"], "$pipe"), return_expr=returning)

    def to_json(self) -> dict[str, Json]:
        out: dict[str, Json] = {"$pipe": [s.to_json() for s in self.steps]}
        if self.return_expr is not None:
            out["$return"] = dict(self.return_expr)
        return out


type DSL = Operation | Pipeline

# ═══════════════════════════════════════════════════════════════════════════════
# Wire Shape Checks & Parsing
# ═══════════════════════════════════════════════════════════════════════════════


def is_operation(value: Json) -> bool:
    return isinstance(value, Mapping) and "$do" in value


def is_branch(value: Json) -> bool:
    return isinstance(value, Mapping) and "$if" in value and "$then" in value


def is_pipeline(value: Json) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("$pipe"), (list, tuple))


def is_dsl(value: Json) -> bool:
    return is_operation(value) or is_pipeline(value)


def parse_step(data: Json) -> Step:
    if isinstance(data, (Operation, Branch)):
        return data
    if is_operation(data):
        return Operation.from_json(data)
    if is_branch(data):
        return Branch.from_json(data)
    raise InvalidDSL(f"expected an operation or a branch step, got {data!r}")


def _parse_steps(data: Json, key: str) -> tuple[Step, ...]:
    if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
        raise InvalidDSL(f"{key!r} must be a list of steps")
    return tuple(parse_step(s) for s in data)


def parse(dsl: DSL | Json) -> DSL:
    """
    Typed form of a DSL document. Pipelines take precedence over operations.

    Raises InvalidDSL for anything else.
    """
    if isinstance(dsl, (Operation, Pipeline)):
        return dsl
    if is_pipeline(dsl):
        return Pipeline.from_json(dsl)
    if is_operation(dsl):
        return Operation.from_json(dsl)
    raise InvalidDSL("expected Operation or Pipeline")


# ═══════════════════════════════════════════════════════════════════════════════
# Results
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of one operation. Skipped steps carry result=MISSING and args={}."""

    name: str | None
    effect: str
    args: dict[str, Any]
    result: Any
    skipped: bool


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """All operation outcomes in execution order plus the return value."""

    operations: tuple[OperationResult, ...]
    result: Any


# ═══════════════════════════════════════════════════════════════════════════════
# RunOptions — Per-call Configuration
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RunOptions:
    """
    Run configuration.

    - now: fixed timestamp for `$now` (wall clock if None)
    - temp_ids: private `$temp` generator (shared sequence if None)
    - registry: plugin registry (process-wide default if None)
    - strict: raise UnresolvedReference for a `$ref` that points nowhere
    - preserve_default: keep `{"$default": v}` markers for handlers

    Example:
        opts = RunOptions(now=datetime(2024, 1, 1), temp_ids=TempIds())
        await execute(dsl, {"title": "Chat"}, opts)
    """

    now: datetime | None = None
    temp_ids: TempIdSource | None = None
    registry: PluginRegistry | None = None
    strict: bool = False
    preserve_default: bool = False


__all__ = (
    "Operation",
    "Branch",
    "Step",
    "Pipeline",
    "DSL",
    "is_operation",
    "is_branch",
    "is_pipeline",
    "is_dsl",
    "parse_step",
    "parse",
    "OperationResult",
    "PipelineResult",
    "RunOptions",
)
