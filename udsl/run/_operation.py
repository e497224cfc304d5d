"""
Operation executor — condition, arguments, dispatch.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

from udsl._types import MISSING, Json
from udsl.expr import is_truthy
from udsl.run._context import EvalContext
from udsl.run._types import Operation, OperationResult

logger = logging.getLogger("udsl.run")


async def execute_operation(
    operation: Operation | Json,
    ctx: EvalContext,
) -> OperationResult:
    """
    Execute a single operation.

    1. Falsy `$when` → skipped; args are not resolved, handler not called.
    2. Resolve `$with`.
    3. Look up the handler (UnknownNamespace / UnknownEffect propagate).
    4. Call it, awaiting the result if needed.

    No retries, no timeouts: handler errors propagate unchanged.

    Example:
        res = await execute_operation(
            {"$do": "entity.create", "$with": {"type": "User"}, "$as": "user"},
            ctx,
        )
        res.result  # {"$op": "create", "$type": "User"}
    """
    op = operation if isinstance(operation, Operation) else Operation.from_json(operation)

    if op.condition is not MISSING and not is_truthy(ctx.resolve(op.condition)):
        logger.debug("skipping %s (%s): condition is falsy", op.effect, op.result_name or "-")
        return OperationResult(
            name=op.result_name,
            effect=op.effect,
            args={},
            result=MISSING,
            skipped=True,
        )

    args: dict[str, Any] = ctx.resolve(op.args)
    handler = ctx.registry.lookup(op.effect)

    logger.debug("dispatching %s (%s)", op.effect, op.result_name or "-")
    result = handler(args, ctx)
    if inspect.isawaitable(result):
        result = await result

    return OperationResult(
        name=op.result_name,
        effect=op.effect,
        args=args,
        result=result,
        skipped=False,
    )


__all__ = ("execute_operation",)
