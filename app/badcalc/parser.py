"""
Numeric Parser Module

Turns the text a user typed for an operand into a finite float.
Accepts a comma as decimal separator ("3,5" == "3.5").
"""

import math
import re
from typing import Optional

from .errors import InvalidInput

MAX_NUMERIC_LENGTH = 50

# Plain decimal notation with an optional exponent. No inf/nan spellings,
# no digit-group underscores.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def normalize(text: str) -> str:
    """Replace decimal commas with periods and trim surrounding whitespace."""
    return text.replace(",", ".").strip()


def parse_operand(text: Optional[str], max_length: int = MAX_NUMERIC_LENGTH) -> float:
    """
    Parse operand text into a finite float.

    Args:
        text: The raw operand text
        max_length: Longest normalized text accepted

    Returns:
        The parsed value

    Raises:
        InvalidInput: If the text is empty, too long, not a decimal
                      number, or overflows to infinity
    """
    if text is None or not text.strip():
        raise InvalidInput("Numeric input must not be empty")

    normalized = normalize(text)

    if len(normalized) > max_length:
        raise InvalidInput(f"Numeric input too long (max {max_length} characters)")

    if not _DECIMAL_RE.fullmatch(normalized):
        raise InvalidInput(f"Input is not a valid number: '{normalized}'")

    value = float(normalized)
    if math.isinf(value):
        raise InvalidInput("Numeric value out of range: infinite")

    return value
