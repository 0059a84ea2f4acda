"""Input validation functions with strict type checking.

Every function here is pure. Violations raise a
:class:`~deskcalc.exceptions.CalculatorError` carrying the violated
:class:`~deskcalc.exceptions.Rule`; nothing is caught or retried here.
"""

from __future__ import annotations

import math
import re
import sys
from typing import TYPE_CHECKING, Final

from deskcalc.exceptions import Rule, error_for

if TYPE_CHECKING:
    from deskcalc.config.models import ValidationPolicy

_DECIMAL = r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)"
_EXPONENT = r"[eE][+-]?[0-9]+"
_LITERAL = rf"[+-]?{_DECIMAL}(?:{_EXPONENT})?"

NUMBER_PATTERN: Final = re.compile(_LITERAL)
INTEGER_PATTERN: Final = re.compile(r"[+-]?[0-9]+")
SCIENTIFIC_PATTERN: Final = re.compile(rf"[+-]?{_DECIMAL}{_EXPONENT}")
EXPRESSION_PATTERN: Final = re.compile(rf"{_LITERAL}(?:\s*[+\-×÷*/]\s*{_LITERAL})*")
CONSECUTIVE_OPERATORS_PATTERN: Final = re.compile(r"[+\-*/]{2,}")

VALID_OPERATIONS: Final[frozenset[str]] = frozenset(
    {"+", "-", "×", "÷", "*", "/", "^", "√", "∛", "%", "!", "sin", "cos", "tan", "log", "ln"}
)

# Constants for numerical limits
MAX_SAFE_INTEGER: Final = 2.0**53 - 1
MIN_NORMAL: Final = sys.float_info.min
INT32_MIN: Final = -(2**31)
INT32_MAX: Final = 2**31 - 1
MAX_FACTORIAL: Final = 170

STRICT_MAX_TEXT_LENGTH: Final = 15
STRICT_MIN_MAGNITUDE: Final = 1e-10
STRICT_MAX_MAGNITUDE: Final = 1e10

_GLYPHS: Final = {"×": "*", "÷": "/", "−": "-"}
_DISALLOWED_CHARS: Final = re.compile(r"[^0-9+\-*/().eE\s]")
_WHITESPACE_RUN: Final = re.compile(r"\s+")


def _as_double(value: float, rule: Rule, name: str) -> float:
    try:
        return float(value)
    except OverflowError as e:
        raise error_for(rule, f"{name} is too large to represent as a double", None, e) from e


def validate_number(value: float, name: str = "Value") -> float:
    """
    Validate that a value is a finite number and return it as a double.

    Integers are converted so that every later operation follows IEEE-754
    double arithmetic; ``validate_number(2**53 + 1)`` returns ``2.0**53``.

    Args:
        value: The value to validate
        name: Label used in the error message

    Returns:
        The validated value as a float

    Raises:
        ValidationFailure: INVALID_INPUT for non-numbers, NAN_VALUE for NaN,
            INFINITE_VALUE for either infinity or an integer beyond the
            double range
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise error_for(
            Rule.INVALID_INPUT,
            f"{name} must be a number, got {type(value).__name__}",
            repr(value),
        )

    number = _as_double(value, Rule.INFINITE_VALUE, name)
    if math.isnan(number):
        raise error_for(Rule.NAN_VALUE, f"{name} cannot be NaN", str(number))
    if math.isinf(number):
        raise error_for(Rule.INFINITE_VALUE, f"{name} cannot be infinite", str(number))

    return number


def parse_number(text: str | None) -> float:
    """
    Parse text as a finite, normal-or-zero decimal number.

    Accepts an optional sign, digits with an optional decimal point (at least
    one digit on either side) and an optional exponent.

    Args:
        text: Raw input text

    Returns:
        The parsed value

    Raises:
        ValidationFailure: NULL_INPUT, EMPTY_INPUT, INVALID_NUMBER_FORMAT,
            NAN_VALUE, INFINITE_VALUE, UNDERFLOW or PARSE_ERROR
    """
    if text is None:
        raise error_for(Rule.NULL_INPUT, "Input cannot be null")

    stripped = text.strip()
    if not stripped:
        raise error_for(Rule.EMPTY_INPUT, "Input cannot be empty", text)

    if not NUMBER_PATTERN.fullmatch(stripped):
        raise error_for(
            Rule.INVALID_NUMBER_FORMAT,
            f"Invalid number format: '{text}'. Expected format: [+-]?digits[.digits][e[+-]digits]",
            text,
        )

    try:
        value = float(stripped)
    except ValueError as e:
        raise error_for(Rule.PARSE_ERROR, f"Cannot parse '{text}' as a valid number", text, e) from e

    if math.isnan(value):
        raise error_for(Rule.NAN_VALUE, "Input results in NaN (Not a Number)", text)
    if math.isinf(value):
        raise error_for(Rule.INFINITE_VALUE, "Input results in infinite value", text)
    if value != 0.0 and abs(value) < MIN_NORMAL:
        raise error_for(Rule.UNDERFLOW, f"Number is too small (underflow): {value}", text)

    return value


def parse_integer(text: str | None) -> int:
    """
    Parse text as a 32-bit signed integer.

    Out-of-range values fail with INTEGER_OVERFLOW in both directions.
    """
    if text is None or not text.strip():
        raise error_for(Rule.NULL_OR_EMPTY, "Integer input cannot be null or empty", text)

    stripped = text.strip()
    if not INTEGER_PATTERN.fullmatch(stripped):
        raise error_for(
            Rule.INVALID_INTEGER_FORMAT,
            f"Invalid integer format: '{text}'. Expected format: [+-]?digits",
            text,
        )

    value = int(stripped)
    if not INT32_MIN <= value <= INT32_MAX:
        raise error_for(
            Rule.INTEGER_OVERFLOW,
            f"Integer value out of range: {value} (range: {INT32_MIN} to {INT32_MAX})",
            text,
        )

    return value


def validate_operation_symbol(symbol: str | None) -> str:
    """
    Validate an operation symbol against the supported set.

    Returns:
        The trimmed symbol
    """
    if symbol is None:
        raise error_for(Rule.NULL_OPERATION, "Operation cannot be null")

    stripped = symbol.strip()
    if not stripped:
        raise error_for(Rule.EMPTY_OPERATION, "Operation cannot be empty", symbol)

    if stripped not in VALID_OPERATIONS:
        raise error_for(
            Rule.INVALID_OPERATION,
            f"Invalid operation: '{symbol}'. Valid operations: {sorted(VALID_OPERATIONS)}",
            symbol,
        )

    return stripped


def _has_balanced_parentheses(expression: str) -> bool:
    depth = 0
    for char in expression:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def validate_expression_syntax(text: str | None) -> None:
    """
    Validate a flat chain of signed numeric literals joined by operators.

    Checks run in order and the first failure wins: parenthesis balance,
    consecutive operators, then the full expression grammar.

    Raises:
        ValidationFailure: NULL_EXPRESSION, EMPTY_EXPRESSION,
            UNBALANCED_PARENTHESES, CONSECUTIVE_OPERATORS or
            INVALID_EXPRESSION_SYNTAX
    """
    if text is None:
        raise error_for(Rule.NULL_EXPRESSION, "Expression cannot be null")

    stripped = text.strip()
    if not stripped:
        raise error_for(Rule.EMPTY_EXPRESSION, "Expression cannot be empty", text)

    if not _has_balanced_parentheses(stripped):
        raise error_for(
            Rule.UNBALANCED_PARENTHESES, f"Unbalanced parentheses in expression: '{text}'", text
        )

    if CONSECUTIVE_OPERATORS_PATTERN.search(stripped):
        raise error_for(
            Rule.CONSECUTIVE_OPERATORS, f"Consecutive operators found in expression: '{text}'", text
        )

    if not EXPRESSION_PATTERN.fullmatch(stripped):
        raise error_for(Rule.INVALID_EXPRESSION_SYNTAX, f"Invalid expression syntax: '{text}'", text)


def check_range(value: float, min_val: float, max_val: float) -> bool:
    """
    Validate that a value lies within ``[min_val, max_val]``.

    Returns:
        True; violations always raise

    Raises:
        ValidationFailure: NAN_RANGE_CHECK, INFINITE_RANGE_CHECK,
            INVALID_RANGE or OUT_OF_RANGE
    """
    value = _as_double(value, Rule.INFINITE_RANGE_CHECK, "Range-checked value")
    min_val = _as_double(min_val, Rule.INVALID_RANGE, "Range minimum")
    max_val = _as_double(max_val, Rule.INVALID_RANGE, "Range maximum")

    if math.isnan(value):
        raise error_for(Rule.NAN_RANGE_CHECK, "Cannot validate range for NaN value", str(value))

    if math.isinf(value):
        raise error_for(
            Rule.INFINITE_RANGE_CHECK, "Cannot validate range for infinite value", str(value)
        )

    if min_val > max_val:
        raise error_for(
            Rule.INVALID_RANGE,
            f"Invalid range: minimum ({min_val}) is greater than maximum ({max_val})",
            f"min={min_val:.2f}, max={max_val:.2f}",
        )

    if value < min_val or value > max_val:
        raise error_for(
            Rule.OUT_OF_RANGE,
            f"Number {value:.6f} is outside valid range [{min_val:.6f}, {max_val:.6f}]",
            str(value),
        )

    return True


def check_safe(value: float) -> float:
    """
    Validate that a value is safe for further arithmetic.

    Rejects NaN, infinities, magnitudes above 2**53 - 1 and non-zero
    subnormal magnitudes.
    """
    value = _as_double(value, Rule.INFINITE_UNSAFE, "Number")

    if math.isnan(value):
        raise error_for(Rule.NAN_UNSAFE, "Number is NaN (Not a Number)", str(value))

    if math.isinf(value):
        raise error_for(Rule.INFINITE_UNSAFE, "Number is infinite", str(value))

    if abs(value) > MAX_SAFE_INTEGER:
        raise error_for(
            Rule.UNSAFE_LARGE_NUMBER,
            f"Number is too large for safe calculations: {value} (max safe: {MAX_SAFE_INTEGER})",
            str(value),
        )

    if value != 0.0 and abs(value) < MIN_NORMAL:
        raise error_for(
            Rule.UNSAFE_SMALL_NUMBER, f"Number is too small for reliable calculations: {value}", str(value)
        )

    return value


def parse_scientific(text: str | None) -> float:
    """Parse text that must carry an explicit exponent, then run :func:`check_safe`."""
    if text is None or not text.strip():
        raise error_for(
            Rule.NULL_OR_EMPTY_SCIENTIFIC, "Scientific notation input cannot be null or empty", text
        )

    stripped = text.strip()
    if not SCIENTIFIC_PATTERN.fullmatch(stripped):
        raise error_for(
            Rule.INVALID_SCIENTIFIC_FORMAT,
            f"Invalid scientific notation format: '{text}'. Expected format: [+-]?digits[.digits]e[+-]digits",
            text,
        )

    try:
        value = float(stripped)
    except ValueError as e:
        raise error_for(
            Rule.SCIENTIFIC_PARSE_ERROR, f"Cannot parse scientific notation: '{text}'", text, e
        ) from e

    return check_safe(value)


def sanitize(text: str | None) -> str:
    """
    Normalize free-form input into calculator characters.

    Maps operator glyphs to ASCII, drops anything outside digits, ``+-*/().eE``
    and whitespace, collapses whitespace runs and trims. Never fails, and
    sanitizing already-sanitized text returns it unchanged.
    """
    if text is None:
        return ""

    sanitized = text.strip()
    for glyph, ascii_op in _GLYPHS.items():
        sanitized = sanitized.replace(glyph, ascii_op)
    sanitized = _DISALLOWED_CHARS.sub("", sanitized)
    sanitized = _WHITESPACE_RUN.sub(" ", sanitized)
    return sanitized.strip()


def validate_with_policy(text: str | None, policy: ValidationPolicy) -> float | None:
    """
    Parse and range-check text under a configuration policy.

    Args:
        text: Raw input text
        policy: Snapshot supplying the switches and limits

    Returns:
        The parsed value, or None when the policy disables validation

    Raises:
        ValidationFailure: any parse or range rule, plus EXCESSIVE_PRECISION,
            STRICT_MODE_TOO_SMALL or STRICT_MODE_TOO_LARGE in strict mode
    """
    if not policy.validation_enabled:
        return None

    value = parse_number(text)
    check_range(value, policy.min_number_value, policy.max_number_value)

    if policy.strict_mode:
        _check_strict(text, value)

    return value


def _check_strict(text: str | None, value: float) -> None:
    if len(repr(value)) > STRICT_MAX_TEXT_LENGTH:
        raise error_for(
            Rule.EXCESSIVE_PRECISION, f"Number has excessive precision in strict mode: '{text}'", text
        )

    if value != 0.0 and abs(value) < STRICT_MIN_MAGNITUDE:
        raise error_for(Rule.STRICT_MODE_TOO_SMALL, f"Number is too small for strict mode: {value}", text)

    if abs(value) > STRICT_MAX_MAGNITUDE:
        raise error_for(Rule.STRICT_MODE_TOO_LARGE, f"Number is too large for strict mode: {value}", text)


def check_division(dividend: float, divisor: float) -> None:
    """Check both operands are safe, the divisor non-zero and the quotient representable."""
    check_safe(dividend)
    check_safe(divisor)

    if divisor == 0.0:
        raise error_for(Rule.DIVISION_BY_ZERO, f"Division by zero: {dividend} ÷ 0", str(divisor))

    if abs(dividend) > sys.float_info.max * abs(divisor):
        raise error_for(
            Rule.DIVISION_OVERFLOW,
            f"Division would cause overflow: {dividend} ÷ {divisor}",
            f"{dividend}/{divisor}",
        )


def check_factorial(n: int) -> None:
    """Check ``n!`` is defined and fits a double (n <= 170)."""
    if n < 0:
        raise error_for(
            Rule.NEGATIVE_FACTORIAL, f"Factorial is not defined for negative numbers: {n}", str(n)
        )

    if n > MAX_FACTORIAL:
        raise error_for(
            Rule.FACTORIAL_OVERFLOW,
            f"Factorial would cause overflow for number: {n} (maximum: {MAX_FACTORIAL})",
            str(n),
        )


def check_square_root(value: float) -> None:
    check_safe(value)

    if value < 0:
        raise error_for(
            Rule.NEGATIVE_SQUARE_ROOT,
            f"Square root is not defined for negative numbers in real domain: {value}",
            str(value),
        )


def check_logarithm(value: float) -> None:
    check_safe(value)

    if value <= 0:
        raise error_for(
            Rule.NON_POSITIVE_LOGARITHM,
            f"Logarithm is not defined for non-positive numbers: {value}",
            str(value),
        )
