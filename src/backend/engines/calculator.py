"""
Keystroke-driven basic/scientific calculator.

A session holds one display buffer, an optional pending binary operation
and a memory register. Operations apply immediately in keystroke order:
there is no operator precedence, so ``2 + 3 * 4 =`` evaluates as
``(2 + 3) * 4 = 20``.

Non-finite results (``log(0)``, ``sqrt(-1)``, overflow) are not errors.
They are carried through to the display as ``Infinity``, ``-Infinity``
or ``NaN``, which parse back to the same float.
"""

import math
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from core.exceptions import DomainError, UnknownKeyError

HISTORY_LIMIT = 10

# Largest n whose factorial is still a finite double
MAX_FACTORIAL = 170

DIGITS = frozenset("0123456789")
NON_FINITE_TOKENS = frozenset({"Infinity", "-Infinity", "NaN"})


class BinaryOperator(str, Enum):
    """Operators that combine the accumulator with the next operand."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"
    POWER = "^"


class ScientificFunction(str, Enum):
    """Unary functions applied to the displayed value."""

    SQRT = "sqrt"
    SQUARE = "square"
    SIN = "sin"  # Degrees
    COS = "cos"  # Degrees
    TAN = "tan"  # Degrees
    LOG10 = "log"
    LN = "ln"
    EXP = "exp"
    RECIPROCAL = "1/x"
    PI = "pi"
    E = "e"
    FACTORIAL = "fact"


# ============================================================================
# Number formatting
# ============================================================================


def format_number(value: float) -> str:
    """
    Render a float the way the display shows it.

    Integral values drop the fractional part (``10`` rather than ``10.0``),
    everything else uses the shortest repr that round-trips through float().
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def parse_number(text: str) -> float:
    """Parse display text back into a float."""
    return float(text)


def _parses(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


# ============================================================================
# Arithmetic
# ============================================================================


def apply_operator(operator: BinaryOperator, a: float, b: float) -> float:
    """
    Apply a binary operator.

    Division by zero yields 0 rather than failing. Modulo follows the sign
    of the dividend. Domain and overflow failures of the math primitives
    come back as NaN or an infinity.
    """
    if operator is BinaryOperator.ADD:
        return a + b
    if operator is BinaryOperator.SUBTRACT:
        return a - b
    if operator is BinaryOperator.MULTIPLY:
        return a * b
    if operator is BinaryOperator.DIVIDE:
        return a / b if b != 0 else 0.0
    if operator is BinaryOperator.MODULO:
        try:
            return math.fmod(a, b)
        except ValueError:
            return math.nan
    if operator is BinaryOperator.POWER:
        return _power(a, b)
    raise ValueError(f"Unsupported operator: {operator}")


def _power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        negative = a < 0 and float(b).is_integer() and int(b) % 2 == 1
        return -math.inf if negative else math.inf
    except ValueError:
        # 0 ** negative diverges, negative ** fractional has no real value
        if a == 0 and b < 0:
            return math.inf
        return math.nan


def factorial(value: float) -> float:
    """
    n! of value truncated toward zero.

    Input that truncates to a negative integer raises DomainError.
    Anything whose truncation is above 170 overflows a double and yields
    infinity.
    """
    if math.isnan(value):
        return math.nan
    if math.isinf(value):
        if value < 0:
            raise DomainError(f"factorial is undefined for {format_number(value)}")
        return math.inf
    n = math.trunc(value)
    if n < 0:
        raise DomainError(f"factorial is undefined for {format_number(value)}")
    if n > MAX_FACTORIAL:
        return math.inf
    return float(math.factorial(n))


def evaluate_function(function: ScientificFunction, value: float) -> float:
    """Evaluate a scientific function. Trigonometric input is in degrees."""
    if function is ScientificFunction.SQRT:
        return math.sqrt(value) if not value < 0 else math.nan
    if function is ScientificFunction.SQUARE:
        return value * value
    if function in (ScientificFunction.SIN, ScientificFunction.COS, ScientificFunction.TAN):
        if math.isinf(value):
            return math.nan
        trig: Callable[[float], float] = {
            ScientificFunction.SIN: math.sin,
            ScientificFunction.COS: math.cos,
            ScientificFunction.TAN: math.tan,
        }[function]
        return trig(math.radians(value))
    if function in (ScientificFunction.LOG10, ScientificFunction.LN):
        if value == 0:
            return -math.inf
        if value < 0:
            return math.nan
        return math.log10(value) if function is ScientificFunction.LOG10 else math.log(value)
    if function is ScientificFunction.EXP:
        try:
            return math.exp(value)
        except OverflowError:
            return math.inf
    if function is ScientificFunction.RECIPROCAL:
        return 1 / value if value != 0 else math.copysign(math.inf, value)
    if function is ScientificFunction.PI:
        return math.pi
    if function is ScientificFunction.E:
        return math.e
    if function is ScientificFunction.FACTORIAL:
        return factorial(value)
    raise ValueError(f"Unsupported function: {function}")


# ============================================================================
# Session state
# ============================================================================


@dataclass(frozen=True)
class Idle:
    """No operator chosen yet; the display holds the only operand."""


@dataclass(frozen=True)
class OperationPending:
    """An operator has been chosen and waits for its right-hand operand."""

    accumulator: float
    operator: BinaryOperator


PendingState = Idle | OperationPending

IDLE = Idle()


class Calculator:
    """
    One calculator session.

    The accumulator and pending operator only ever exist together, so they
    are held as a single ``state`` value (``Idle`` or ``OperationPending``).
    ``memory`` and ``history`` survive clear-all.
    """

    def __init__(self, memory: float = 0.0, history_limit: int = HISTORY_LIMIT):
        self.display = "0"
        self.state: PendingState = IDLE
        self.awaiting_new_operand = False
        self.memory = float(memory)
        self._history: deque[str] = deque(maxlen=history_limit)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def value(self) -> float:
        return parse_number(self.display)

    @property
    def accumulator(self) -> float | None:
        return self.state.accumulator if isinstance(self.state, OperationPending) else None

    @property
    def pending_operation(self) -> BinaryOperator | None:
        return self.state.operator if isinstance(self.state, OperationPending) else None

    @property
    def history(self) -> list[str]:
        """History entries, most recent first."""
        return list(self._history)

    def _record(self, entry: str) -> None:
        self._history.appendleft(entry)

    # ------------------------------------------------------------------
    # Operand entry
    # ------------------------------------------------------------------

    def input_digit(self, digit: str) -> None:
        if digit not in DIGITS:
            raise UnknownKeyError(digit)
        if self.awaiting_new_operand or self.display in NON_FINITE_TOKENS:
            self.display = digit
            self.awaiting_new_operand = False
        elif self.display == "0":
            self.display = digit
        else:
            self.display += digit

    def input_decimal(self) -> None:
        if self.awaiting_new_operand or self.display in NON_FINITE_TOKENS:
            self.display = "0."
            self.awaiting_new_operand = False
        elif "." not in self.display and "e" not in self.display:
            self.display += "."

    def backspace(self) -> None:
        trimmed = self.display[:-1]
        self.display = trimmed if _parses(trimmed) else "0"

    def toggle_sign(self) -> None:
        self.display = format_number(-self.value)

    def clear(self) -> None:
        """Reset display and pending operation. Memory and history are kept."""
        self.display = "0"
        self.state = IDLE
        self.awaiting_new_operand = False

    def clear_entry(self) -> None:
        self.display = "0"

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def select_operation(self, operator: BinaryOperator | str) -> None:
        """
        Choose the next binary operator.

        If another operator is already pending it is applied first and its
        result becomes the new accumulator.
        """
        operator = BinaryOperator(operator)
        input_value = self.value

        if isinstance(self.state, OperationPending):
            result = self._commit(self.state, input_value)
            self.state = OperationPending(accumulator=result, operator=operator)
        else:
            self.state = OperationPending(accumulator=input_value, operator=operator)

        self.awaiting_new_operand = True

    def equals(self) -> None:
        if not isinstance(self.state, OperationPending):
            return
        self._commit(self.state, self.value)
        self.state = IDLE
        self.awaiting_new_operand = True

    def _commit(self, pending: OperationPending, input_value: float) -> float:
        result = apply_operator(pending.operator, pending.accumulator, input_value)
        self._record(
            f"{format_number(pending.accumulator)} {pending.operator.value} "
            f"{format_number(input_value)} = {format_number(result)}"
        )
        self.display = format_number(result)
        return result

    def apply_function(self, function: ScientificFunction | str) -> None:
        """Apply a scientific function to the display. The pending operation is untouched."""
        function = ScientificFunction(function)
        value = self.value
        result = evaluate_function(function, value)
        self._record(f"{function.value}({format_number(value)}) = {format_number(result)}")
        self.display = format_number(result)
        self.awaiting_new_operand = True

    # ------------------------------------------------------------------
    # Memory and history
    # ------------------------------------------------------------------

    def memory_add(self) -> None:
        self.memory += self.value

    def memory_subtract(self) -> None:
        self.memory -= self.value

    def memory_recall(self) -> None:
        self.display = format_number(self.memory)
        self.awaiting_new_operand = True

    def memory_clear(self) -> None:
        self.memory = 0.0

    def clear_history(self) -> None:
        self._history.clear()

    # ------------------------------------------------------------------
    # Keystroke dispatch
    # ------------------------------------------------------------------

    def press(self, key: str) -> None:
        """Dispatch a single keystroke label."""
        if key in DIGITS:
            self.input_digit(key)
        elif key in _OPERATOR_KEYS:
            self.select_operation(key)
        elif key in _FUNCTION_KEYS:
            self.apply_function(key)
        elif key in _COMMANDS:
            _COMMANDS[key](self)
        else:
            raise UnknownKeyError(key)

    def run(self, keys: Iterable[str]) -> "Calculator":
        for key in keys:
            self.press(key)
        return self


_OPERATOR_KEYS = frozenset(op.value for op in BinaryOperator)
_FUNCTION_KEYS = frozenset(fn.value for fn in ScientificFunction)

_COMMANDS: dict[str, Callable[[Calculator], None]] = {
    ".": Calculator.input_decimal,
    "=": Calculator.equals,
    "C": Calculator.clear,
    "CE": Calculator.clear_entry,
    "backspace": Calculator.backspace,
    "+/-": Calculator.toggle_sign,
    "MC": Calculator.memory_clear,
    "MR": Calculator.memory_recall,
    "M+": Calculator.memory_add,
    "M-": Calculator.memory_subtract,
    "clear-history": Calculator.clear_history,
}

SUPPORTED_KEYS = frozenset(DIGITS | _OPERATOR_KEYS | _FUNCTION_KEYS | _COMMANDS.keys())
