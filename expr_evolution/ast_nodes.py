"""
expr_evolution/ast_nodes.py - Expression tree nodes, terminals and operations
"""
import inspect
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, Union

from .environment import Environment
from .errors import ConfigurationError, InvalidNodeError


def format_number(value: float) -> str:
    """Render a number as a literal, dropping the fraction of integral floats"""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Constant:
    """Terminal that always yields the same value"""
    value: float

    def __post_init__(self):
        object.__setattr__(self, 'value', float(self.value))

    def get_value(self, env: Environment) -> float:
        return self.value

    def __str__(self):
        return format_number(self.value)


@dataclass(frozen=True)
class InputVariable:
    """Terminal that reads a named value from the environment"""
    name: str

    def get_value(self, env: Environment) -> float:
        return env.get(self.name)

    def __str__(self):
        return self.name


Terminal = Union[Constant, InputVariable]
TERMINAL_TYPES = (Constant, InputVariable)


def _derive_arity(fn: Callable) -> int:
    """Count the positional parameters of fn that have no default"""
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"cannot inspect arity of {fn!r}; pass arity explicitly") from e

    arity = 0
    for param in params:
        if param.kind == param.VAR_POSITIONAL:
            raise ConfigurationError(f"{fn!r} is variadic; pass arity explicitly")
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            if param.default is not param.empty:
                break
            arity += 1
    return arity


@dataclass(frozen=True)
class Operation:
    """Internal node function with a fixed number of arguments"""
    name: str
    fn: Callable[..., float] = field(repr=False)
    arity: Optional[int] = None

    def __post_init__(self):
        arity = self.arity if self.arity is not None else _derive_arity(self.fn)
        if arity < 1:
            raise ConfigurationError(f"operation {self.name!r} must take at least one argument")
        object.__setattr__(self, 'arity', arity)

    def execute(self, args: Sequence[float]) -> float:
        return self.fn(*args)

    def __str__(self):
        return self.name


class NodeType(Enum):
    OPERATION = "operation"
    TERMINAL = "terminal"


class Node:
    """Expression tree node holding either a terminal (leaf) or an operation"""

    def __init__(self, value: Union[Terminal, Operation], children: Sequence['Node'] = ()):
        self.value = value
        self.children: List[Node] = list(children)
        self._check_shape()

    def _check_shape(self) -> None:
        expected = self.node_type_of(self.value)
        if expected is NodeType.TERMINAL and self.children:
            raise InvalidNodeError(f"terminal {self.value} cannot have children")
        if expected is NodeType.OPERATION and len(self.children) != self.value.arity:
            raise InvalidNodeError(
                f"operation {self.value} expects {self.value.arity} children, "
                f"got {len(self.children)}")

    @staticmethod
    def node_type_of(value) -> NodeType:
        if isinstance(value, Operation):
            return NodeType.OPERATION
        if isinstance(value, TERMINAL_TYPES):
            return NodeType.TERMINAL
        raise InvalidNodeError(f"invalid node value: {value!r}")

    @property
    def node_type(self) -> NodeType:
        return self.node_type_of(self.value)

    @property
    def is_leaf(self) -> bool:
        return self.node_type is NodeType.TERMINAL

    def copy(self) -> 'Node':
        """Deep copy the tree structure; terminals and operations are shared"""
        return Node(self.value, [child.copy() for child in self.children])

    def set(self, other: 'Node') -> None:
        """Overwrite this node in place with the value and children of other"""
        self.value = other.value
        self.children = other.children

    def walk(self) -> Iterator['Node']:
        """Yield every node of the subtree in pre-order"""
        yield self
        for child in self.children:
            yield from child.walk()

    def get_all_nodes(self) -> List['Node']:
        return list(self.walk())

    def get_depth(self) -> int:
        """Longest root-to-leaf path, counted in edges"""
        if not self.children:
            return 0
        return 1 + max(child.get_depth() for child in self.children)

    def get_complexity(self) -> int:
        return sum(1 for _ in self.walk())

    def __str__(self):
        from .evaluator import serialize_expression
        return serialize_expression(self)

    def __repr__(self):
        return f"Node({self})"
