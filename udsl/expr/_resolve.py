"""
Expression resolution — JSON expression tree → concrete value.

Pure in (expr, context) except `$now` (wall clock when no fixed time is
given) and `$temp` (advances a generator).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from udsl._errors import InvalidDSL, UnresolvedReference
from udsl._types import MISSING, Json
from udsl.expr._tags import OPAQUE_MARKERS, RESOLVED_MARKERS, Tag, tag_of

if TYPE_CHECKING:
    from udsl.run._context import EvalContext

# ═══════════════════════════════════════════════════════════════════════════════
# Truthiness
# ═══════════════════════════════════════════════════════════════════════════════


def is_truthy(value: Json) -> bool:
    """
    DSL truthiness.

    Falsy: MISSING, None, False, numeric zero, "", empty list/tuple.
    Everything else is truthy, including an empty mapping.
    """
    if value is MISSING or value is None or value is False:
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


# ═══════════════════════════════════════════════════════════════════════════════
# Path Lookup
# ═══════════════════════════════════════════════════════════════════════════════


def get_path(root: Json, path: str) -> Json:
    """
    Walk a dot-separated path.

    Mappings are indexed by key, lists by decimal index. Anything else
    along the way gives MISSING.
    """
    current = root
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part, MISSING)
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not part.isdecimal() or int(part) >= len(current):
                return MISSING
            current = current[int(part)]
        else:
            return MISSING
    return current


# ═══════════════════════════════════════════════════════════════════════════════
# resolve_value()
# ═══════════════════════════════════════════════════════════════════════════════


def resolve_value(value: Json, ctx: EvalContext) -> Json:
    """
    Resolve a value expression against a context.

    Example:
        resolve_value({"$input": "user.name"}, ctx)         # "John"
        resolve_value({"$ref": "session.id"}, ctx)          # "temp_1"
        resolve_value({"count": {"$inc": 1}}, ctx)          # {"count": {"$inc": 1}}
        resolve_value({"$if": {"cond": 0, "then": "a", "else": "b"}}, ctx)  # "b"
    """
    if value is None or value is MISSING:
        return value

    if isinstance(value, Mapping):
        tag = tag_of(value)
        if tag is None:
            return {k: resolve_value(v, ctx) for k, v in value.items()}
        return _resolve_tagged(tag, value, ctx)

    if isinstance(value, (list, tuple)):
        return [resolve_value(v, ctx) for v in value]

    return value


def _resolve_tagged(tag: Tag, node: Mapping[str, Json], ctx: EvalContext) -> Json:
    payload = node[tag.value]

    match tag:
        case Tag.INPUT:
            return get_path(ctx.input, str(payload))
        case Tag.REF:
            found = get_path(ctx.results, str(payload))
            if found is MISSING and ctx.strict:
                raise UnresolvedReference(str(payload))
            return found
        case Tag.NOW:
            return ctx.now if ctx.now is not None else datetime.now(timezone.utc)
        case Tag.TEMP:
            return ctx.temp_id()
        case Tag.DEFAULT:
            return {tag.value: payload} if ctx.preserve_default else payload
        case Tag.IF:
            return _resolve_if(payload, ctx)
        case _ if tag in OPAQUE_MARKERS:
            return {tag.value: payload}
        case _ if tag in RESOLVED_MARKERS:
            return {tag.value: resolve_value(payload, ctx)}

    raise AssertionError(f"unhandled tag {tag}")


def _resolve_if(payload: Json, ctx: EvalContext) -> Json:
    """Only the selected branch is resolved."""
    if not isinstance(payload, Mapping):
        raise InvalidDSL(f"$if expects an object with cond/then/else, got {type(payload).__name__}")

    if is_truthy(resolve_value(payload.get("cond"), ctx)):
        return resolve_value(payload.get("then"), ctx)
    if "else" in payload:
        return resolve_value(payload["else"], ctx)
    return MISSING


__all__ = ("is_truthy", "get_path", "resolve_value")
