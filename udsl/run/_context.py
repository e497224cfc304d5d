"""
Evaluation context — what resolution and handlers see during a step.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any

from udsl._types import Json
from udsl.expr import TempIdSource, resolve_value, shared_temp_ids
from udsl.plugins import PluginRegistry, default_registry
from udsl.run._types import RunOptions


@dataclass(frozen=True, slots=True)
class EvalContext:
    """
    Read-only view of a run at one point in time.

    `results` is a live view over the run's results dict: it always shows
    what earlier steps produced, but handlers cannot write to it.

    Handlers use it as:
        async def create(args: dict, ctx: EvalContext) -> dict:
            owner = ctx.resolve({"$ref": "user.id"})
            return {"id": ctx.temp_id(), "owner": owner, **args}
    """

    input: Mapping[str, Any]
    results: Mapping[str, Any]
    now: datetime | None = None
    temp_ids: TempIdSource | None = None
    registry: PluginRegistry = default_registry
    strict: bool = False
    preserve_default: bool = False

    @classmethod
    def create(
        cls,
        input: Mapping[str, Any] | None = None,
        results: dict[str, Any] | None = None,
        options: RunOptions | None = None,
    ) -> EvalContext:
        """Build a context over a (shared, mutable) results dict."""
        opts = options if options is not None else RunOptions()
        return cls(
            input=input if isinstance(input, MappingProxyType) else MappingProxyType(dict(input or {})),
            results=MappingProxyType(results if results is not None else {}),
            now=opts.now,
            temp_ids=opts.temp_ids,
            registry=opts.registry if opts.registry is not None else default_registry,
            strict=opts.strict,
            preserve_default=opts.preserve_default,
        )

    def resolve(self, value: Json) -> Json:
        """Resolve an expression against this context."""
        return resolve_value(value, self)

    def temp_id(self) -> str:
        """Next temp id from the run's generator, or the shared sequence."""
        source = self.temp_ids if self.temp_ids is not None else shared_temp_ids
        return source()


__all__ = ("EvalContext",)
