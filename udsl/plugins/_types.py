"""
Plugin types — a namespace and its effect handlers.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from udsl.run._context import EvalContext

# ═══════════════════════════════════════════════════════════════════════════════
# Effect Handler
# ═══════════════════════════════════════════════════════════════════════════════

type EffectHandler = Callable[[dict[str, Any], EvalContext], Any | Awaitable[Any]]
"""(resolved_args, ctx) → value, sync or async."""

# ═══════════════════════════════════════════════════════════════════════════════
# Plugin
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Plugin:
    """
    Handler set for one namespace.

    Example:
        greeter = Plugin(
            namespace="custom",
            effects={"greet": lambda args, ctx: {"message": f"Hello, {args['name']}!"}},
        )

        # or fluently
        greeter = plugin("custom").on("greet", greet)
    """

    namespace: str
    effects: Mapping[str, EffectHandler] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.namespace:
            raise ValueError("plugin namespace must be a non-empty string")
        object.__setattr__(self, "effects", MappingProxyType(dict(self.effects)))

    def on(self, name: str, handler: EffectHandler) -> Plugin:
        """Add (or replace) an effect handler. Returns a new plugin."""
        return Plugin(namespace=self.namespace, effects={**self.effects, name: handler})

    def handler(self, name: str) -> EffectHandler | None:
        return self.effects.get(name)


def plugin(namespace: str) -> Plugin:
    """Start an empty plugin: plugin("http").on("post", post)"""
    return Plugin(namespace=namespace)


__all__ = ("EffectHandler", "Plugin", "plugin")
