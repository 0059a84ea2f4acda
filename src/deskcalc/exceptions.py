"""Error taxonomy shared by the validator and the calculator engine.

Every failure carries a :class:`Rule` code from a closed enumeration.
Callers branch on ``error.rule``; the message text is for humans only.
"""

from __future__ import annotations

from enum import Enum, StrEnum


class ErrorKind(Enum):
    """Top-level failure category."""

    VALIDATION = "ValidationFailure"
    COMPUTATION = "ComputationFailure"


class Rule(StrEnum):
    """Violated-rule codes."""

    # number parsing
    NULL_INPUT = "NULL_INPUT"
    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_NUMBER_FORMAT = "INVALID_NUMBER_FORMAT"
    NAN_VALUE = "NAN_VALUE"
    INFINITE_VALUE = "INFINITE_VALUE"
    UNDERFLOW = "UNDERFLOW"
    PARSE_ERROR = "PARSE_ERROR"

    # integer parsing
    NULL_OR_EMPTY = "NULL_OR_EMPTY"
    INVALID_INTEGER_FORMAT = "INVALID_INTEGER_FORMAT"
    INTEGER_OVERFLOW = "INTEGER_OVERFLOW"

    # operation symbols
    NULL_OPERATION = "NULL_OPERATION"
    EMPTY_OPERATION = "EMPTY_OPERATION"
    INVALID_OPERATION = "INVALID_OPERATION"

    # expressions
    NULL_EXPRESSION = "NULL_EXPRESSION"
    EMPTY_EXPRESSION = "EMPTY_EXPRESSION"
    UNBALANCED_PARENTHESES = "UNBALANCED_PARENTHESES"
    CONSECUTIVE_OPERATORS = "CONSECUTIVE_OPERATORS"
    INVALID_EXPRESSION_SYNTAX = "INVALID_EXPRESSION_SYNTAX"

    # range and safety
    NAN_RANGE_CHECK = "NAN_RANGE_CHECK"
    INFINITE_RANGE_CHECK = "INFINITE_RANGE_CHECK"
    INVALID_RANGE = "INVALID_RANGE"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    NAN_UNSAFE = "NAN_UNSAFE"
    INFINITE_UNSAFE = "INFINITE_UNSAFE"
    UNSAFE_LARGE_NUMBER = "UNSAFE_LARGE_NUMBER"
    UNSAFE_SMALL_NUMBER = "UNSAFE_SMALL_NUMBER"

    # scientific notation
    NULL_OR_EMPTY_SCIENTIFIC = "NULL_OR_EMPTY_SCIENTIFIC"
    INVALID_SCIENTIFIC_FORMAT = "INVALID_SCIENTIFIC_FORMAT"
    SCIENTIFIC_PARSE_ERROR = "SCIENTIFIC_PARSE_ERROR"

    # strict mode
    EXCESSIVE_PRECISION = "EXCESSIVE_PRECISION"
    STRICT_MODE_TOO_SMALL = "STRICT_MODE_TOO_SMALL"
    STRICT_MODE_TOO_LARGE = "STRICT_MODE_TOO_LARGE"

    # engine operands
    INVALID_INPUT = "INVALID_INPUT"
    NEGATIVE_DECIMAL_PLACES = "NEGATIVE_DECIMAL_PLACES"

    # computation
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    DIVISION_OVERFLOW = "DIVISION_OVERFLOW"
    NEGATIVE_FACTORIAL = "NEGATIVE_FACTORIAL"
    FACTORIAL_OVERFLOW = "FACTORIAL_OVERFLOW"
    NEGATIVE_SQUARE_ROOT = "NEGATIVE_SQUARE_ROOT"
    NON_POSITIVE_LOGARITHM = "NON_POSITIVE_LOGARITHM"
    UNDEFINED_RESULT = "UNDEFINED_RESULT"
    RESULT_OVERFLOW = "RESULT_OVERFLOW"

    @property
    def kind(self) -> ErrorKind:
        if self in _COMPUTATION_RULES:
            return ErrorKind.COMPUTATION
        return ErrorKind.VALIDATION


_COMPUTATION_RULES = frozenset(
    {
        Rule.DIVISION_BY_ZERO,
        Rule.DIVISION_OVERFLOW,
        Rule.NEGATIVE_FACTORIAL,
        Rule.FACTORIAL_OVERFLOW,
        Rule.NEGATIVE_SQUARE_ROOT,
        Rule.NON_POSITIVE_LOGARITHM,
        Rule.UNDEFINED_RESULT,
        Rule.RESULT_OVERFLOW,
    }
)


class CalculatorError(Exception):
    """
    Base exception for all calculator errors.

    Args:
        rule: The violated rule
        message: Human-readable description
        invalid_input: Text of the offending input, if any
        cause: Underlying exception, if any
    """

    def __init__(
        self,
        rule: Rule,
        message: str,
        invalid_input: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self._rule = Rule(rule)
        self._message = message
        self._invalid_input = invalid_input
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def rule(self) -> Rule:
        return self._rule

    @property
    def kind(self) -> ErrorKind:
        return self._rule.kind

    @property
    def message(self) -> str:
        return self._message

    @property
    def invalid_input(self) -> str | None:
        return self._invalid_input

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def __str__(self) -> str:
        text = self._message
        if self._invalid_input is not None:
            text += f" [Invalid Input: '{self._invalid_input}']"
        return f"{text} [Violated Rule: {self._rule}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rule={self._rule.value!r}, message={self._message!r})"


class ValidationFailure(CalculatorError):
    """Raised when input is rejected before any computation happens."""


class ComputationFailure(CalculatorError):
    """Raised when valid input makes the requested operation undefined or overflow."""


def error_for(
    rule: Rule,
    message: str,
    invalid_input: str | None = None,
    cause: BaseException | None = None,
) -> CalculatorError:
    """Build the failure matching the rule's kind."""
    rule = Rule(rule)
    cls = ComputationFailure if rule.kind is ErrorKind.COMPUTATION else ValidationFailure
    return cls(rule, message, invalid_input, cause)
