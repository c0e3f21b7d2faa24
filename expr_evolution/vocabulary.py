"""
expr_evolution/vocabulary.py - Default operations, terminals and regression targets

Operations are total: partial cases (division by zero, logs of negatives,
overflow) come back as inf or NaN instead of raising.
"""
import math
from typing import Callable, Dict, Optional

from .ast_nodes import Constant, InputVariable, Operation
from .registry import OperationRegistry, TerminalRegistry

INF = math.inf
NAN = math.nan


def add(a, b):
    return a + b


def subtract(a, b):
    return a - b


def multiply(a, b):
    return a * b


def divide(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return NAN
        return math.copysign(INF, a) * math.copysign(1.0, b)
    return a / b


def sqrt(a):
    return math.sqrt(a) if a >= 0 else NAN


def log(a):
    if a > 0:
        return math.log(a)
    return -INF if a == 0 else NAN


def power(a, b):
    try:
        result = math.pow(a, b)
    except OverflowError:
        return INF
    except (ValueError, ZeroDivisionError):
        return NAN
    return result


def sin(a):
    return math.sin(a) if math.isfinite(a) else NAN


def cos(a):
    return math.cos(a) if math.isfinite(a) else NAN


def floor(a):
    return float(math.floor(a)) if math.isfinite(a) else a


def ceil(a):
    return float(math.ceil(a)) if math.isfinite(a) else a


# Primitive sets
BASIC_OPERATIONS = [
    Operation("ADD", add),
    Operation("SUBTRACT", subtract),
    Operation("DIVIDE", divide),
    Operation("MULTIPLY", multiply),
]

EXTRA_OPERATIONS = [
    Operation("SQRT", sqrt),
    Operation("SIN", sin),
    Operation("COS", cos),
    Operation("LOG", log),
    Operation("POW", power),
    Operation("ABS", abs, arity=1),
    Operation("FLOOR", floor),
    Operation("CEIL", ceil),
    Operation("MAX", max, arity=2),
    Operation("MIN", min, arity=2),
]

DEFAULT_CONSTANTS = [4, 134, 42, math.pi, 10000]
DEFAULT_VARIABLE = 'X'

TARGETS: Dict[str, Callable[[float], float]] = {
    'quadratic': lambda x: x * x + x + 1,
    'cubic': lambda x: x * x * x - 2 * x,
    'linear': lambda x: 3 * x + 42,
}


def default_operations() -> OperationRegistry:
    return OperationRegistry(BASIC_OPERATIONS, max_arity=2)


def extended_operations() -> OperationRegistry:
    return OperationRegistry(BASIC_OPERATIONS + EXTRA_OPERATIONS, max_arity=2)


def default_terminals(variable: Optional[str] = DEFAULT_VARIABLE) -> TerminalRegistry:
    terminals = TerminalRegistry(Constant(value) for value in DEFAULT_CONSTANTS)
    if variable is not None:
        terminals.register(InputVariable(variable))
    return terminals
