"""Calculator engine: validated operations, memory register and history log."""

from __future__ import annotations

import math
from collections import deque
from typing import TYPE_CHECKING, Final

import structlog

from deskcalc import operations
from deskcalc.exceptions import CalculatorError, Rule, error_for
from deskcalc.validators import parse_number, validate_number, validate_operation_symbol, validate_with_policy

if TYPE_CHECKING:
    from collections.abc import Callable

    from deskcalc.config.models import ValidationPolicy
    from deskcalc.config.settings import CalculatorSettings

logger = structlog.get_logger(__name__)

BINARY_SYMBOLS: Final = frozenset({"+", "-", "×", "÷", "*", "/", "^", "%"})


class Calculator:
    """
    A desk calculator with a memory register and an operation history.

    Every operation validates its operands before touching state, so a
    failed call leaves memory and history exactly as they were. Instances
    are not thread-safe; share one across threads only behind a lock.

    Example:
        >>> calc = Calculator()
        >>> calc.add(5, 3)
        8.0
        >>> calc.last_entry()
        '5.0 + 3.0 = 8'
    """

    PI: Final = math.pi
    E: Final = math.e

    def __init__(
        self,
        max_history: int | None = None,
        policy: ValidationPolicy | None = None,
    ) -> None:
        """
        Initialize an empty calculator.

        Args:
            max_history: Keep at most this many history entries, evicting the
                oldest silently (None for no limit)
            policy: Validation policy used by :meth:`read_operand`

        Raises:
            ValueError: If max_history is negative
        """
        if max_history is not None and max_history < 0:
            raise ValueError(f"max_history must be non-negative, got {max_history}")
        self._memory = 0.0
        self._history: deque[str] = deque(maxlen=max_history)
        self._policy = policy

    @classmethod
    def from_settings(cls, settings: CalculatorSettings) -> Calculator:
        """Build a calculator from a settings snapshot."""
        return cls(max_history=settings.history.max_entries, policy=settings.validation)

    @property
    def policy(self) -> ValidationPolicy | None:
        return self._policy

    def _record(self, entry: str) -> None:
        self._history.append(entry)
        logger.debug("operation recorded", entry=entry, history_size=len(self._history))

    # Input

    def read_operand(self, text: str | None) -> float:
        """
        Turn raw operand text into a number.

        Uses the engine's policy when one was given; a policy with validation
        disabled still requires the text to be a number.
        """
        if self._policy is not None:
            value = validate_with_policy(text, self._policy)
            if value is not None:
                return value
        return parse_number(text)

    # Binary operations

    def add(self, a: float, b: float) -> float:
        result = operations.add(a, b)
        self._record(f"{float(a)} + {float(b)} = {operations.format_result(result)}")
        return result

    def subtract(self, a: float, b: float) -> float:
        result = operations.subtract(a, b)
        self._record(f"{float(a)} - {float(b)} = {operations.format_result(result)}")
        return result

    def multiply(self, a: float, b: float) -> float:
        result = operations.multiply(a, b)
        self._record(f"{float(a)} * {float(b)} = {operations.format_result(result)}")
        return result

    def divide(self, a: float, b: float) -> float:
        """
        Divide a by b.

        Raises:
            ComputationFailure: DIVISION_BY_ZERO if b is zero
        """
        result = operations.divide(a, b)
        self._record(f"{float(a)} / {float(b)} = {operations.format_result(result)}")
        return result

    def power(self, base: float, exponent: float) -> float:
        result = operations.power(base, exponent)
        self._record(f"{float(base)} ^ {float(exponent)} = {operations.format_result(result)}")
        return result

    def percentage(self, number: float, percent: float) -> float:
        result = operations.percentage(number, percent)
        self._record(f"{float(percent)}% of {float(number)} = {operations.format_result(result)}")
        return result

    def reciprocal(self, number: float) -> float:
        """Return ``1 / number``, recorded as a division."""
        return self.divide(1.0, number)

    # Unary operations

    def absolute(self, number: float) -> float:
        result = operations.absolute(number)
        self._record(f"|{float(number)}| = {operations.format_result(result)}")
        return result

    def square_root(self, number: float) -> float:
        result = operations.square_root(number)
        self._record(f"√{float(number)} = {operations.format_result(result)}")
        return result

    def cube_root(self, number: float) -> float:
        result = operations.cube_root(number)
        self._record(f"∛{float(number)} = {operations.format_result(result)}")
        return result

    def nth_root(self, number: float, degree: float) -> float:
        result = operations.nth_root(number, degree)
        self._record(f"{float(degree)}√{float(number)} = {operations.format_result(result)}")
        return result

    def factorial(self, number: int) -> int:
        """
        Factorial of a non-negative integer.

        Fails with FACTORIAL_OVERFLOW from 21 upwards, where the product
        no longer fits a 64-bit signed integer.
        """
        result = operations.factorial(number)
        self._record(f"{number}! = {result}")
        return result

    def sine(self, x: float) -> float:
        result = operations.sine(x)
        self._record(f"sin({float(x)}) = {operations.format_result(result)}")
        return result

    def cosine(self, x: float) -> float:
        result = operations.cosine(x)
        self._record(f"cos({float(x)}) = {operations.format_result(result)}")
        return result

    def tangent(self, x: float) -> float:
        result = operations.tangent(x)
        self._record(f"tan({float(x)}) = {operations.format_result(result)}")
        return result

    def logarithm(self, number: float) -> float:
        result = operations.logarithm(number)
        self._record(f"log({float(number)}) = {operations.format_result(result)}")
        return result

    def natural_log(self, number: float) -> float:
        result = operations.natural_log(number)
        self._record(f"ln({float(number)}) = {operations.format_result(result)}")
        return result

    def round(self, value: float, places: int) -> float:
        """Round half away from zero on the decimal text of value. Not recorded."""
        return operations.round_half_up(value, places)

    # Symbol dispatch

    def apply(self, symbol: str, a: float, b: float | None = None) -> float:
        """
        Run the operation named by ``symbol`` on already-tokenized operands.

        Binary symbols (``+ - × ÷ * / ^ %``) need both operands; the others
        take ``a`` only. ``%`` computes ``b`` percent of ``a``.

        Raises:
            ValidationFailure: for an unknown symbol or wrong operand count
        """
        op = validate_operation_symbol(symbol)
        try:
            if op in BINARY_SYMBOLS:
                if b is None:
                    raise error_for(Rule.INVALID_INPUT, f"Operation '{op}' needs two operands", op)
                return self._binary_operations()[op](a, b)

            if b is not None:
                raise error_for(Rule.INVALID_INPUT, f"Operation '{op}' takes a single operand", op)
            if op == "!":
                return self.factorial(self._integral(a))
            return self._unary_operations()[op](a)
        except CalculatorError as exc:
            logger.debug("operation rejected", symbol=op, rule=exc.rule.value)
            raise

    def _binary_operations(self) -> dict[str, Callable[[float, float], float]]:
        return {
            "+": self.add,
            "-": self.subtract,
            "*": self.multiply,
            "×": self.multiply,
            "/": self.divide,
            "÷": self.divide,
            "^": self.power,
            "%": self.percentage,
        }

    def _unary_operations(self) -> dict[str, Callable[[float], float]]:
        return {
            "√": self.square_root,
            "∛": self.cube_root,
            "sin": self.sine,
            "cos": self.cosine,
            "tan": self.tangent,
            "log": self.logarithm,
            "ln": self.natural_log,
        }

    @staticmethod
    def _integral(value: float) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        number = validate_number(value, "Factorial operand")
        if not number.is_integer():
            raise error_for(Rule.INVALID_INPUT, f"Factorial requires an integer: {number}", str(number))
        return int(number)

    # Memory

    def memory_store(self, value: float) -> None:
        self._memory = validate_number(value, "Memory value")

    def memory_recall(self) -> float:
        return self._memory

    def memory_add(self, value: float) -> None:
        self._memory += validate_number(value, "Memory add value")

    def memory_subtract(self, value: float) -> None:
        self._memory -= validate_number(value, "Memory subtract value")

    def memory_clear(self) -> None:
        self._memory = 0.0

    def has_memory_value(self) -> bool:
        """True when memory is non-zero; a stored zero reads as empty."""
        return self._memory != 0.0

    # History

    def get_history(self) -> list[str]:
        """Copy of the history, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def last_entry(self) -> str | None:
        return self._history[-1] if self._history else None

    # Formatting

    @staticmethod
    def format_result(value: float) -> str:
        return operations.format_result(value)

    @staticmethod
    def is_integer(value: float) -> bool:
        return operations.is_integer(value)

    def __repr__(self) -> str:
        return (
            f"Calculator(memory={operations.format_result(self._memory)}, "
            f"history_entries={len(self._history)})"
        )
