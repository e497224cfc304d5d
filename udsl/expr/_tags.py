"""
Expression tags — which node of the grammar a JSON value is.

Value references are looked up against the context; operator markers are
kept for the effect handler to interpret, except `$if` (evaluated) and
`$default` (unwrapped).
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from udsl._types import Json


class Tag(Enum):
    """Grammar node kinds, values are the wire keys."""

    # Value references
    INPUT = "$input"
    REF = "$ref"
    NOW = "$now"
    TEMP = "$temp"
    # Operators
    INC = "$inc"
    DEC = "$dec"
    PUSH = "$push"
    PULL = "$pull"
    ADD_TO_SET = "$addToSet"
    DEFAULT = "$default"
    IF = "$if"


# Declaration order is the precedence when several tag keys are present.
_PRECEDENCE: tuple[Tag, ...] = tuple(Tag)

REFERENCES: frozenset[Tag] = frozenset({Tag.INPUT, Tag.REF, Tag.NOW, Tag.TEMP})
OPERATORS: frozenset[Tag] = frozenset(_PRECEDENCE) - REFERENCES

# Passed through as {tag: n}, never computed.
OPAQUE_MARKERS: frozenset[Tag] = frozenset({Tag.INC, Tag.DEC})

# Payload resolved, then re-wrapped under the same tag.
RESOLVED_MARKERS: frozenset[Tag] = frozenset({Tag.PUSH, Tag.PULL, Tag.ADD_TO_SET})


def tag_of(value: Json) -> Tag | None:
    """Tag of a mapping node, None for literals, plain objects and arrays."""
    if not isinstance(value, Mapping):
        return None
    for tag in _PRECEDENCE:
        if tag.value in value:
            return tag
    return None


def is_value_ref(value: Json) -> bool:
    return tag_of(value) in REFERENCES


def is_operator(value: Json) -> bool:
    return tag_of(value) in OPERATORS


__all__ = (
    "Tag",
    "REFERENCES",
    "OPERATORS",
    "OPAQUE_MARKERS",
    "RESOLVED_MARKERS",
    "tag_of",
    "is_value_ref",
    "is_operator",
)
