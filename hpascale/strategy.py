"""
Scale Strategies
Resolve the requested field and size expression into an update rule and apply it
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional

from hpascale.bounds import BoundField, BoundsRecord, reconcile
from hpascale.expressions import ExpressionError, ExpressionKind, SizeExpression, parse_expression

logger = logging.getLogger(__name__)


class InvalidArgumentsError(ValueError):
    """Raised when no field/expression was requested"""


@dataclass(frozen=True)
class Strategy:
    """Update rule: which field to write and how to compute its new value"""
    field: BoundField
    expression: SizeExpression

    def __str__(self) -> str:
        return f"{self.field.value}={self.expression}"


def resolve_strategy(cpu_target: Optional[str] = None,
                     minimum: Optional[str] = None,
                     maximum: Optional[str] = None) -> Strategy:
    """
    Build the strategy for the requested change.

    Every supplied expression is parsed up front, so a malformed one is
    rejected even if another field takes precedence. Precedence is CPU
    target, then minimum, then maximum; only the first one set is used.

    Raises:
        ExpressionError: If an expression is malformed, or the CPU target is
            not an absolute number
        InvalidArgumentsError: If nothing was requested
    """
    requested = [
        (BoundField.CPU_TARGET, parse_expression(cpu_target)),
        (BoundField.MINIMUM, parse_expression(minimum)),
        (BoundField.MAXIMUM, parse_expression(maximum)),
    ]

    cpu_expression = requested[0][1]
    if cpu_expression is not None:
        if cpu_expression.kind != ExpressionKind.ABSOLUTE:
            raise ExpressionError(f"CPU target must be an absolute percentage number, got '{cpu_target}'")
        if cpu_expression.value == 0:
            # 0 is the "not set" value of the CPU target
            requested[0] = (BoundField.CPU_TARGET, None)

    selected: List[Strategy] = [
        Strategy(field, expression) for field, expression in requested if expression is not None
    ]

    if not selected:
        raise InvalidArgumentsError("invalid arguments: set one of CPU target, minimum or maximum")

    strategy = selected[0]
    for ignored in selected[1:]:
        logger.warning(f"Ignoring {ignored} because {strategy} takes precedence")

    logger.debug(f"Resolved strategy {strategy}")
    return strategy


def apply_strategy(strategy: Strategy, record: BoundsRecord) -> BoundsRecord:
    """
    Compute the new bounds for one record.

    The input record is left untouched; a new record with the target field
    updated and the bounds reconciled is returned.
    """
    expression = strategy.expression

    if strategy.field == BoundField.CPU_TARGET:
        return replace(record, cpu_target=int(expression.value))

    if strategy.field == BoundField.MINIMUM:
        updated = replace(record, minimum=_compute(expression, record.minimum, record.maximum))
    else:
        updated = replace(record, maximum=_compute(expression, record.maximum, record.maximum))

    return reconcile(updated, strategy.field)


def _compute(expression: SizeExpression, current: int, maximum: int) -> int:
    """
    New value for a replica bound.

    Percentages are always of the maximum and round up; multipliers round
    halves up (0.5x of 3 is 2, of 5 is 3).
    """
    if expression.kind == ExpressionKind.ABSOLUTE:
        return int(expression.value)

    if expression.kind == ExpressionKind.PERCENTAGE:
        return math.ceil(expression.value * maximum / 100)

    return math.floor(current * expression.value + 0.5)
