import asyncio

from udsl import Branch, Operation, Pipeline, execute, parse
from udsl import build as B


def test_value_builders_render_json():
    assert B.from_input("title").to_json() == {"$input": "title"}
    assert B.from_input("user").at("address", "city").to_json() == {"$input": "user.address.city"}
    assert B.ref("session").at("id").to_json() == {"$ref": "session.id"}
    assert B.ref("items").at(0).to_json() == {"$ref": "items.0"}
    assert B.now().to_json() == {"$now": True}
    assert B.temp().to_json() == {"$temp": True}
    assert B.inc(2).to_json() == {"$inc": 2}
    assert B.dec().to_json() == {"$dec": 1}
    assert B.default_to("x").to_json() == {"$default": "x"}


def test_collection_markers_normalize_items():
    assert B.push("a").to_json() == {"$push": "a"}
    assert B.push("a", "b").to_json() == {"$push": ["a", "b"]}
    assert B.pull(B.from_input("tag")).to_json() == {"$pull": {"$input": "tag"}}
    assert B.add_to_set("a", B.ref("x")).to_json() == {"$addToSet": ["a", {"$ref": "x"}]}


def test_when_omits_else_unless_given():
    assert B.when(B.from_input("ok"), "yes").to_json() == {"$if": {"cond": {"$input": "ok"}, "then": "yes"}}
    assert B.when(True, "yes", None).to_json() == {"$if": {"cond": True, "then": "yes", "else": None}}


def test_op_builder():
    built = (
        B.op("entity.create", {"type": "User", "name": B.from_input("name")})
        .named("user")
        .only(B.from_input("shouldCreate"))
        .build()
    )

    assert built == {
        "$do": "entity.create",
        "$with": {"type": "User", "name": {"$input": "name"}},
        "$as": "user",
        "$when": {"$input": "shouldCreate"},
    }


def test_op_builder_is_immutable():
    base = B.op("entity.create")
    base.named("x")

    assert base.build() == {"$do": "entity.create", "$with": {}}


def test_pipe_builds_document_that_parses():
    dsl = B.pipe(
        B.entity.create("Session", {"id": B.temp(), "title": B.from_input("title")}).named("session"),
        B.branch(
            B.from_input("greet"),
            then=[B.entity.create("Message", {"sessionId": B.ref("session").at("id")}).named("message")],
        ),
        returning={"session": B.ref("session")},
    )

    parsed = parse(dsl)

    assert isinstance(parsed, Pipeline)
    assert isinstance(parsed.steps[0], Operation)
    assert isinstance(parsed.steps[1], Branch)
    assert parsed.to_json() == dsl


def test_entity_sugar():
    assert B.entity.delete("User", B.from_input("id")).build() == {
        "$do": "entity.delete",
        "$with": {"type": "User", "id": {"$input": "id"}},
    }
    assert B.entity.update("User", {"count": B.inc(1)}).build()["$with"] == {"type": "User", "count": {"$inc": 1}}


def test_built_pipeline_executes():
    dsl = B.pipe(
        B.entity.create("Session", {"id": B.temp(), "title": B.from_input("title")}).named("session"),
        B.entity.create("Message", {"id": B.temp(), "sessionId": B.ref("session").at("id")}).named("message"),
    )

    result = asyncio.run(execute(dsl, {"title": "Test"}))

    assert result.result["session"]["id"] == "temp_1"
    assert result.result["message"] == {"$op": "create", "$type": "Message", "id": "temp_2", "sessionId": "temp_1"}


def test_single():
    dsl = B.single(B.op("custom.greet", {"name": "World"}).named("greeting"))

    assert isinstance(parse(dsl), Operation)
