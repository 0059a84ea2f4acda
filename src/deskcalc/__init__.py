"""
Desk-calculator engine with validated arithmetic and a structured error taxonomy.

- Input validation that reports exactly which rule failed, on what input
- A calculator engine owning one memory register and a bounded history
- Every failure raised as a CalculatorError carrying a Rule code
"""

from deskcalc.config import (
    CalculatorSettings,
    HistoryConfig,
    ValidationPolicy,
    configure_logging,
    configure_logging_from,
)
from deskcalc.core import Calculator
from deskcalc.exceptions import (
    CalculatorError,
    ComputationFailure,
    ErrorKind,
    Rule,
    ValidationFailure,
    error_for,
)
from deskcalc.operations import format_result
from deskcalc.validators import (
    check_division,
    check_factorial,
    check_logarithm,
    check_range,
    check_safe,
    check_square_root,
    parse_integer,
    parse_number,
    parse_scientific,
    sanitize,
    validate_expression_syntax,
    validate_number,
    validate_operation_symbol,
    validate_with_policy,
)

__all__ = [
    "Calculator",
    "CalculatorError",
    "CalculatorSettings",
    "ComputationFailure",
    "ErrorKind",
    "HistoryConfig",
    "Rule",
    "ValidationFailure",
    "ValidationPolicy",
    "check_division",
    "check_factorial",
    "check_logarithm",
    "check_range",
    "check_safe",
    "check_square_root",
    "configure_logging",
    "configure_logging_from",
    "error_for",
    "format_result",
    "parse_integer",
    "parse_number",
    "parse_scientific",
    "sanitize",
    "validate_expression_syntax",
    "validate_number",
    "validate_operation_symbol",
    "validate_with_policy",
]

__version__ = "0.1.0"
