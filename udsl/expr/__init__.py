"""
Expr — the value-expression grammar and its resolver.

    from udsl import expr as X

    X.resolve_value({"$input": "title"}, ctx)
    X.is_truthy([])  # False

References ($input, $ref, $now, $temp) are looked up; markers ($inc, $dec,
$push, $pull, $addToSet) are preserved for the effect handler; $if is
evaluated lazily; $default is unwrapped.
"""

from udsl.expr._tags import (
    Tag,
    REFERENCES,
    OPERATORS,
    OPAQUE_MARKERS,
    RESOLVED_MARKERS,
    tag_of,
    is_value_ref,
    is_operator,
)
from udsl.expr._temp import (
    TempIdSource,
    TempIds,
    shared_temp_ids,
    reset_temp_ids,
)
from udsl.expr._resolve import (
    is_truthy,
    get_path,
    resolve_value,
)

__all__ = (
    "Tag",
    "REFERENCES",
    "OPERATORS",
    "OPAQUE_MARKERS",
    "RESOLVED_MARKERS",
    "tag_of",
    "is_value_ref",
    "is_operator",
    "TempIdSource",
    "TempIds",
    "shared_temp_ids",
    "reset_temp_ids",
    "is_truthy",
    "get_path",
    "resolve_value",
)
