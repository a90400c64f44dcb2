"""
badcalc - An Interactive Two-Operand Calculator

This package contains the calculator components:
- parser: Operand text to float
- evaluator: Binary arithmetic with an undefined-result sentinel
- history: In-memory and on-disk operation log
- session: The interactive menu loop
- config: Configuration loading
"""

from .config import Config
from .evaluator import compute
from .history import HistoryStore, OperationRecord
from .parser import parse_operand
from .session import CalculatorSession

__version__ = "0.1.0"
__all__ = [
    "CalculatorSession",
    "Config",
    "HistoryStore",
    "OperationRecord",
    "compute",
    "parse_operand",
]
