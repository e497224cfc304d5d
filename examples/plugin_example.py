"""
Plugins — describe with `entity`, persist with a custom `store` plugin.

Level 3: udsl.plugins (custom handlers)
Level 2: kungfu.Result via udsl.attempt
"""

from kungfu import Ok, Error

from udsl import build as B
from udsl import run as R
from udsl import plugins as P
from udsl.expr import TempIds
from examples._infra import banner, run, FakeStore


store = FakeStore()
registry = P.PluginRegistry(P.entity_plugin, store.as_plugin())


def persisted(step: B.OpBuilder, name: str) -> list[B.OpBuilder]:
    """Describe a mutation, then hand the descriptor to the store."""
    described = f"{name}_mutation"
    return [
        step.named(described),
        B.op("store.apply", {"mutation": B.ref(described)}).named(name),
    ]


dsl = B.pipe(
    *persisted(B.entity.create("User", {"id": B.temp(), "name": B.from_input("name")}), "user"),
    *persisted(B.entity.update("User", {"id": B.ref("user").at("id"), "logins": B.inc(1), "tags": B.push("new")}), "user"),
    B.op("store.vanish", {}),
)


async def main() -> None:
    banner("Plugins: Describe + Persist")
    opts = R.RunOptions(registry=registry, temp_ids=TempIds("user"))

    print("\n1. First two steps run, the third names an unknown effect:")
    match await R.attempt(dsl, {"name": "Alice"}, opts):
        case Ok(res):
            print(f"   → {res.result}")
        case Error(e):
            print(f"   → Error: {e}")

    print(f"\n2. Store contents (no rollback): {store.rows}")
    print("\nDone!")


if __name__ == "__main__":
    run(main)
