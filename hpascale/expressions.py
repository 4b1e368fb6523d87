"""
Size Expressions
Parse human-friendly scale instructions such as "10", "50%" or "2x"
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

logger = logging.getLogger(__name__)

# Checked in this order; a string only ever matches one of them
ABSOLUTE_PATTERN = re.compile(r"^[0-9]+$")
PERCENTAGE_PATTERN = re.compile(r"^[0-9.]+%$")
MULTIPLIER_PATTERN = re.compile(r"^[0-9.]+x$")


class ExpressionError(ValueError):
    """Raised when a size expression cannot be parsed"""


class ExpressionKind(Enum):
    """Lexical shape of a size expression"""
    ABSOLUTE = "absolute"      # "10"  -> exactly 10
    PERCENTAGE = "percentage"  # "50%" -> 50% of the current maximum
    MULTIPLIER = "multiplier"  # "2x"  -> twice the current value


@dataclass(frozen=True)
class SizeExpression:
    """A parsed size expression"""
    kind: ExpressionKind
    value: Union[int, float]

    def __str__(self) -> str:
        if self.kind == ExpressionKind.ABSOLUTE:
            return str(self.value)
        suffix = "%" if self.kind == ExpressionKind.PERCENTAGE else "x"
        return f"{self.value:g}{suffix}"


def parse_expression(text: Optional[str]) -> Optional[SizeExpression]:
    """
    Parse a size expression.

    Args:
        text: Expression as entered by the user, e.g. "4", "25%" or "1.5x"

    Returns:
        The parsed expression, or None when no expression was given
        (no change requested for that field)

    Raises:
        ExpressionError: If the text matches none of the accepted shapes or
            its numeric part cannot be converted
    """
    if text is None:
        return None

    text = text.strip()
    if not text:
        return None

    if ABSOLUTE_PATTERN.match(text):
        return SizeExpression(ExpressionKind.ABSOLUTE, int(text))

    if PERCENTAGE_PATTERN.match(text):
        return SizeExpression(ExpressionKind.PERCENTAGE, _parse_number(text[:-1], text))

    if MULTIPLIER_PATTERN.match(text):
        return SizeExpression(ExpressionKind.MULTIPLIER, _parse_number(text[:-1], text))

    raise ExpressionError(
        f"Invalid size expression '{text}'. Use a number (10), a percentage (50%) or a multiplier (2x)"
    )


def _parse_number(number: str, text: str) -> float:
    try:
        value = float(number)
    except ValueError as e:
        raise ExpressionError(f"Invalid number in size expression '{text}'") from e
    if not math.isfinite(value):
        raise ExpressionError(f"Invalid number in size expression '{text}': out of range")
    return value
