"""Core arithmetic operations with operand validation.

Binary arithmetic follows IEEE-754 double semantics exactly: finite operands
may still produce an infinite result, which is returned as-is. Operations
whose real result is undefined raise a computation failure instead of
returning NaN.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

from deskcalc.exceptions import Rule, error_for
from deskcalc.validators import validate_number

# Largest value a 64-bit signed accumulator can hold
INT64_MAX: Final = 2**63 - 1


def add(a: float, b: float) -> float:
    """
    Add two numbers.

    Properties:
        - Commutative: add(a, b) == add(b, a)
        - Identity: add(a, 0) == a
        - Matches native float addition exactly

    Raises:
        ValidationFailure: If either operand is not a finite number
    """
    a = validate_number(a, "First parameter")
    b = validate_number(b, "Second parameter")
    return a + b


def subtract(a: float, b: float) -> float:
    """
    Subtract b from a.

    Properties:
        - Anti-commutative: subtract(a, b) == -subtract(b, a)
        - Self-inverse: subtract(a, a) == 0
    """
    a = validate_number(a, "Minuend")
    b = validate_number(b, "Subtrahend")
    return a - b


def multiply(a: float, b: float) -> float:
    """
    Multiply two numbers.

    Properties:
        - Commutative: multiply(a, b) == multiply(b, a)
        - Identity: multiply(a, 1) == a
        - Zero: multiply(a, 0) == 0
    """
    a = validate_number(a, "Multiplicand")
    b = validate_number(b, "Multiplier")
    return a * b


def divide(a: float, b: float) -> float:
    """
    Divide a by b.

    The zero check happens before any arithmetic, so ``divide(a, 0.0)`` fails
    for every finite ``a``, including zero and negative zero divisors.

    Args:
        a: Dividend
        b: Divisor

    Returns:
        Quotient of a and b

    Raises:
        ValidationFailure: If inputs are invalid
        ComputationFailure: DIVISION_BY_ZERO if b is zero
    """
    a = validate_number(a, "Dividend")
    b = validate_number(b, "Divisor")

    if b == 0:
        raise error_for(Rule.DIVISION_BY_ZERO, f"Cannot divide {a} by zero", str(b))

    return a / b


def _checked_pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except ValueError as e:
        raise error_for(
            Rule.UNDEFINED_RESULT,
            f"{base} ^ {exponent} has no real result",
            f"{base}^{exponent}",
            e,
        ) from e
    except OverflowError as e:
        raise error_for(
            Rule.RESULT_OVERFLOW,
            f"{base} ^ {exponent} overflows the floating-point range",
            f"{base}^{exponent}",
            e,
        ) from e


def power(base: float, exponent: float) -> float:
    """
    Raise base to the power of exponent.

    Properties:
        - Identity: power(a, 1) == a
        - Zero exponent: power(a, 0) == 1

    Unlike :func:`multiply`, which returns ``inf`` when finite operands
    overflow, a power beyond the double range fails, so
    ``power(1e200, 2)`` raises while ``multiply(1e200, 1e200)`` is ``inf``.

    Raises:
        ValidationFailure: If inputs are invalid
        ComputationFailure: UNDEFINED_RESULT for a negative base with a
            non-integer exponent or zero to a negative power,
            RESULT_OVERFLOW when the result leaves the double range
    """
    base = validate_number(base, "Base")
    exponent = validate_number(exponent, "Exponent")
    return _checked_pow(base, exponent)


def percentage(number: float, percent: float) -> float:
    """Return ``percent`` percent of ``number``."""
    number = validate_number(number, "Number")
    percent = validate_number(percent, "Percent")
    return (number * percent) / 100.0


def reciprocal(number: float) -> float:
    """Return ``1 / number``; fails like :func:`divide` when number is zero."""
    return divide(1.0, number)


def absolute(number: float) -> float:
    number = validate_number(number, "Number")
    return abs(number)


def square_root(number: float) -> float:
    """
    Square root of a non-negative number.

    Raises:
        ComputationFailure: NEGATIVE_SQUARE_ROOT for negative input
    """
    number = validate_number(number, "Number")

    if number < 0:
        raise error_for(
            Rule.NEGATIVE_SQUARE_ROOT,
            f"Cannot calculate square root of negative number: {number}",
            str(number),
        )

    return math.sqrt(number)


def cube_root(number: float) -> float:
    """Real cube root; defined for every real number."""
    number = validate_number(number, "Number")
    return math.cbrt(number)


def nth_root(number: float, degree: float) -> float:
    """
    Compute ``number ** (1 / degree)``.

    Raises:
        ValidationFailure: INVALID_INPUT when degree is zero
        ComputationFailure: UNDEFINED_RESULT or RESULT_OVERFLOW as for :func:`power`
    """
    number = validate_number(number, "Number")
    degree = validate_number(degree, "Root degree")

    if degree == 0:
        raise error_for(Rule.INVALID_INPUT, "Root degree cannot be zero", str(degree))

    return _checked_pow(number, 1.0 / degree)


def factorial(number: int) -> int:
    """
    Factorial of a non-negative integer.

    The ceiling is the point where the running product would overflow a
    64-bit signed integer, so 20! succeeds and 21! fails. This is looser
    than :func:`deskcalc.validators.check_factorial`, which allows up to 170.

    Raises:
        ValidationFailure: INVALID_INPUT if number is not an integer
        ComputationFailure: NEGATIVE_FACTORIAL or FACTORIAL_OVERFLOW
    """
    if isinstance(number, bool) or not isinstance(number, int):
        raise error_for(
            Rule.INVALID_INPUT,
            f"Factorial requires an integer, got {type(number).__name__}",
            repr(number),
        )

    if number < 0:
        raise error_for(
            Rule.NEGATIVE_FACTORIAL,
            f"Factorial is not defined for negative numbers: {number}",
            str(number),
        )

    result = 1
    for i in range(2, number + 1):
        if result > INT64_MAX // i:
            raise error_for(
                Rule.FACTORIAL_OVERFLOW,
                f"Factorial calculation would overflow for number: {number}",
                str(number),
            )
        result *= i

    return result


def sine(x: float) -> float:
    x = validate_number(x, "Angle")
    return math.sin(x)


def cosine(x: float) -> float:
    x = validate_number(x, "Angle")
    return math.cos(x)


def tangent(x: float) -> float:
    x = validate_number(x, "Angle")
    return math.tan(x)


def _check_log_domain(number: float) -> float:
    number = validate_number(number, "Number")

    if number <= 0:
        raise error_for(
            Rule.NON_POSITIVE_LOGARITHM,
            f"Logarithm is not defined for non-positive numbers: {number}",
            str(number),
        )

    return number


def logarithm(number: float) -> float:
    """Base-10 logarithm."""
    number = _check_log_domain(number)
    return math.log10(number)


def natural_log(number: float) -> float:
    number = _check_log_domain(number)
    return math.log(number)


def round_half_up(value: float, places: int) -> float:
    """
    Round to ``places`` decimal digits, halves away from zero.

    Rounding works on the shortest decimal text of the double rather than
    its binary value, so ``round_half_up(2.675, 2) == 2.68``.

    Raises:
        ValidationFailure: INVALID_INPUT if places is not an integer,
            NEGATIVE_DECIMAL_PLACES if it is negative
    """
    value = validate_number(value, "Value")

    if isinstance(places, bool) or not isinstance(places, int):
        raise error_for(Rule.INVALID_INPUT, "Decimal places must be an integer", repr(places))

    if places < 0:
        raise error_for(
            Rule.NEGATIVE_DECIMAL_PLACES, f"Decimal places cannot be negative: {places}", str(places)
        )

    exact = Decimal(repr(value))
    with localcontext() as ctx:
        # room for every integer digit of a double plus the requested scale
        ctx.prec = 330 + places
        rounded = exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return float(rounded)


def is_integer(value: float) -> bool:
    return math.isfinite(value) and value == math.floor(value)


def format_result(value: float) -> str:
    """
    Render a result for display.

    Examples:
        >>> format_result(5.0)
        '5'
        >>> format_result(3.14)
        '3.14'
        >>> format_result(float("-inf"))
        '-∞'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if is_integer(value):
        return str(int(value))
    return repr(float(value))
