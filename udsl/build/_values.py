"""
Value builders — explicit constructors for the expression grammar.

Every builder value renders to plain JSON via `to_json()`; `serialize`
walks arbitrary nested data and renders builder values it finds.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from udsl._types import Json

# ═══════════════════════════════════════════════════════════════════════════════
# Protocol + serialize()
# ═══════════════════════════════════════════════════════════════════════════════


@runtime_checkable
class ToJson(Protocol):
    def to_json(self) -> Json: ...


def serialize(value: Any) -> Json:
    """Render builder values (at any depth) into the JSON form."""
    if isinstance(value, ToJson):
        return value.to_json()
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    if isinstance(value, Mapping):
        return {k: serialize(v) for k, v in value.items()}
    return value


# ═══════════════════════════════════════════════════════════════════════════════
# Path References
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class InputRef:
    """from_input("user").at("name") → {"$input": "user.name"}"""

    path: str

    def at(self, *fields: str | int) -> InputRef:
        return InputRef(_join(self.path, fields))

    def to_json(self) -> Json:
        return {"$input": self.path}


@dataclass(frozen=True, slots=True)
class ResultRef:
    """ref("session").at("id") → {"$ref": "session.id"}"""

    path: str

    def at(self, *fields: str | int) -> ResultRef:
        return ResultRef(_join(self.path, fields))

    def to_json(self) -> Json:
        return {"$ref": self.path}


def _join(base: str, fields: tuple[str | int, ...]) -> str:
    return ".".join([base, *map(str, fields)]) if base else ".".join(map(str, fields))


def from_input(path: str = "") -> InputRef:
    """Reference to run input. from_input("title") → {"$input": "title"}"""
    return InputRef(path)


def ref(path: str) -> ResultRef:
    """Reference to a named result. ref("user.id") → {"$ref": "user.id"}"""
    return ResultRef(path)


# ═══════════════════════════════════════════════════════════════════════════════
# Tagged Values
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Tagged:
    """A single-key tagged node: {tag: payload}."""

    tag: str
    payload: Any

    def to_json(self) -> Json:
        return {self.tag: serialize(self.payload)}


def now() -> Tagged:
    """now() → {"$now": True}"""
    return Tagged("$now", True)


def temp() -> Tagged:
    """temp() → {"$temp": True}"""
    return Tagged("$temp", True)


def inc(n: int | float = 1) -> Tagged:
    """inc(1) → {"$inc": 1}"""
    return Tagged("$inc", n)


def dec(n: int | float = 1) -> Tagged:
    """dec(1) → {"$dec": 1}"""
    return Tagged("$dec", n)


def _items(items: tuple[Any, ...]) -> Any:
    # One item is stored bare, several as a list.
    return items[0] if len(items) == 1 else list(items)


def push(*items: Any) -> Tagged:
    """push("a") → {"$push": "a"}; push("a", "b") → {"$push": ["a", "b"]}"""
    return Tagged("$push", _items(items))


def pull(*items: Any) -> Tagged:
    return Tagged("$pull", _items(items))


def add_to_set(*items: Any) -> Tagged:
    return Tagged("$addToSet", _items(items))


def default_to(value: Any) -> Tagged:
    """default_to("fallback") → {"$default": "fallback"}"""
    return Tagged("$default", value)


@dataclass(frozen=True, slots=True)
class When:
    """Conditional value; `else` is omitted from the JSON when not given."""

    cond: Any
    then: Any
    otherwise: Any = None
    has_otherwise: bool = False

    def to_json(self) -> Json:
        body: dict[str, Json] = {"cond": serialize(self.cond), "then": serialize(self.then)}
        if self.has_otherwise:
            body["else"] = serialize(self.otherwise)
        return {"$if": body}


_NO_ELSE: Any = object()


def when(cond: Any, then: Any, otherwise: Any = _NO_ELSE) -> When:
    """when(from_input("isAdmin"), "admin", "user") → {"$if": {...}}"""
    if otherwise is _NO_ELSE:
        return When(cond, then)
    return When(cond, then, otherwise, has_otherwise=True)


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
)
