"""
Entity plugin — CRUD effects as mutation descriptors.

Handlers only describe the mutation; storage adapters (cache, ORM) consume
the descriptor. Operator markers ($inc, $push, ...) are passed through as-is.

    {"$do": "entity.create", "$with": {"type": "User", "name": "John"}}
    → {"$op": "create", "$type": "User", "name": "John"}
"""

from __future__ import annotations

from typing import Any

from udsl.plugins._types import EffectHandler, Plugin, plugin


def _describe(op: str) -> EffectHandler:
    def handler(args: dict[str, Any], ctx: object) -> dict[str, Any]:
        fields = {k: v for k, v in args.items() if k != "type"}
        return {"$op": op, "$type": args.get("type"), **fields}

    handler.__name__ = f"entity_{op}"
    return handler


def _delete(args: dict[str, Any], ctx: object) -> dict[str, Any]:
    return {"$op": "delete", "$type": args.get("type"), "id": args.get("id")}


entity_plugin: Plugin = (
    plugin("entity")
    .on("create", _describe("create"))
    .on("update", _describe("update"))
    .on("upsert", _describe("upsert"))
    .on("delete", _delete)
)


__all__ = ("entity_plugin",)
