"""
Build — fluent construction of DSL documents.

    from udsl import build as B

    dsl = B.pipe(
        B.entity.create("Session", {"id": B.temp(), "title": B.from_input("title")}).named("session"),
        B.entity.create("Message", {"sessionId": B.ref("session").at("id")}).named("message"),
    )

Output is the plain JSON form; store or send it however you like.
"""

from udsl.build._values import (
    ToJson,
    serialize,
    InputRef,
    ResultRef,
    from_input,
    ref,
    Tagged,
    now,
    temp,
    inc,
    dec,
    push,
    pull,
    add_to_set,
    default_to,
    When,
    when,
)
from udsl.build._ops import (
    OpBuilder,
    op,
    StepBuilder,
    BranchBuilder,
    branch,
    pipe,
    single,
    entity,
)

__all__ = (
    "ToJson",
    "serialize",
    "InputRef",
    "ResultRef",
    "from_input",
    "ref",
    "Tagged",
    "now",
    "temp",
    "inc",
    "dec",
    "push",
    "pull",
    "add_to_set",
    "default_to",
    "When",
    "when",
    "OpBuilder",
    "op",
    "StepBuilder",
    "BranchBuilder",
    "branch",
    "pipe",
    "single",
    "entity",
)
