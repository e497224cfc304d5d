"""
Pipeline — create a session and its first message in one document.

Level 3: udsl.build (document)
Level 2: udsl.run (execution)
"""

import json

from udsl import build as B
from udsl import run as R
from udsl import plugins as P
from udsl.expr import TempIds
from examples._infra import banner, run


dsl = B.pipe(
    B.entity.create("Session", {"id": B.temp(), "title": B.from_input("title"), "createdAt": B.now()}).named("session"),
    B.entity.create("Message", {
        "id": B.temp(),
        "sessionId": B.ref("session").at("id"),
        "role": "user",
        "content": B.from_input("content"),
    }).named("message"),
    B.entity.update("Session", {"id": B.ref("session").at("id"), "messages": B.inc(1)})
        .only(B.from_input("countMessages")),
    returning={"sessionId": B.ref("session").at("id"), "messageId": B.ref("message").at("id")},
)


async def main() -> None:
    banner("Pipeline: Session + Message")

    print("\n1. Document (plain JSON):")
    print(json.dumps(dsl, indent=2))

    P.register_plugin(P.entity_plugin)

    print("\n2. Execute:")
    result = await R.execute(
        dsl,
        {"title": "Chat", "content": "Hello!", "countMessages": False},
        R.RunOptions(temp_ids=TempIds()),
    )
    for op in result.operations:
        status = "skipped" if op.skipped else "ran"
        print(f"   {op.effect:<14} {status:<8} → {op.result}")

    print(f"\n3. Returned: {result.result}")
    print("\nDone!")


if __name__ == "__main__":
    run(main)
