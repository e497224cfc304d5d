import pytest

from udsl import MISSING, Branch, InvalidDSL, Operation, Pipeline, parse
from udsl.run import is_dsl, is_pipeline


def test_operation_from_json_defaults():
    op = Operation.from_json({"$do": "entity.create"})

    assert op.args == {}
    assert op.result_name is None
    assert op.condition is MISSING


def test_operation_keeps_explicit_null_condition():
    op = Operation.from_json({"$do": "x.y", "$when": None})

    assert op.condition is None
    assert op.to_json() == {"$do": "x.y", "$with": {}, "$when": None}


@pytest.mark.parametrize(
    "doc",
    [
        {"$do": ""},
        {"$do": 3},
        {"$do": "x.y", "$with": "nope"},
        {"$do": "x.y", "$as": 1},
        {"$pipe": [{"nope": 1}]},
        {"$pipe": [{"$do": "x.y"}], "$return": [1]},
        {"$pipe": [{"$if": True, "$then": "nope"}]},
        {"something": "else"},
        "text",
    ],
)
def test_malformed_documents(doc):
    with pytest.raises(InvalidDSL):
        parse(doc)


def test_parse_pipeline_with_branch():
    pipe = parse(
        {
            "$pipe": [
                {"$do": "a.b", "$as": "x"},
                {"$if": {"$ref": "x"}, "$then": [{"$do": "c.d"}]},
            ],
            "$return": {"x": {"$ref": "x"}},
        }
    )

    assert isinstance(pipe, Pipeline)
    assert pipe.steps[0] == Operation("a.b", {}, "x")
    assert pipe.steps[1] == Branch({"$ref": "x"}, (Operation("c.d"),))
    assert pipe.return_expr == {"x": {"$ref": "x"}}


def test_parse_passes_typed_values_through():
    op = Operation("a.b")

    assert parse(op) is op


def test_shape_checks():
    assert is_pipeline({"$pipe": []})
    assert not is_pipeline({"$pipe": "x"})
    assert is_dsl({"$do": "x"})
    assert not is_dsl({"$if": 1})


def test_operation_args_are_read_only():
    source = {"type": "S"}
    op = Operation("entity.create", source)
    source["type"] = "changed"

    assert op.args == {"type": "S"}
    with pytest.raises(TypeError):
        op.args["type"] = "T"


def test_parsed_operation_args_are_read_only():
    pipe = parse({"$pipe": [{"$do": "a.b", "$with": {"n": 1}}]})

    with pytest.raises(TypeError):
        pipe.steps[0].args["n"] = 2


def test_pipeline_parses_wire_steps_on_construction():
    pipe = Pipeline(steps=({"$do": "t.rec", "$as": "r"}, {"$if": True, "$then": [{"$do": "t.rec"}]}))

    assert pipe.steps[0] == Operation("t.rec", {}, "r")
    assert pipe.steps[1] == Branch(True, (Operation("t.rec"),))


def test_branch_parses_wire_steps_on_construction():
    br = Branch({"$input": "flag"}, [{"$do": "a.b"}], [{"$do": "c.d", "$as": "x"}])

    assert br.then == (Operation("a.b"),)
    assert br.otherwise == (Operation("c.d", {}, "x"),)


def test_pipeline_rejects_unknown_step():
    with pytest.raises(InvalidDSL):
        Pipeline(steps=({"nope": 1},))
