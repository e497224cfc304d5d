"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any

from udsl import EvalContext, plugin, Plugin


# In-memory store that applies entity descriptors
@dataclass(slots=True)
class FakeStore:
    rows: dict[str, dict[str, dict[str, Any]]] = field(default_factory=dict)

    def apply(self, desc: dict[str, Any]) -> dict[str, Any]:
        table = self.rows.setdefault(desc["$type"], {})
        fields = {k: v for k, v in desc.items() if not k.startswith("$")}
        match desc["$op"]:
            case "create":
                table[fields["id"]] = fields
            case "update":
                row = table[fields["id"]]
                for key, value in fields.items():
                    match value:
                        case {"$inc": n}:
                            row[key] = row.get(key, 0) + n
                        case {"$push": item}:
                            row.setdefault(key, []).append(item)
                        case _:
                            row[key] = value
            case "delete":
                table.pop(fields["id"], None)
        return table.get(fields["id"], {"id": fields["id"], "deleted": True})

    def as_plugin(self) -> Plugin:
        async def persist(args: dict[str, Any], ctx: EvalContext) -> dict[str, Any]:
            await asyncio.sleep(0.01)
            return self.apply(args["mutation"])

        return plugin("store").on("apply", persist)


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())
