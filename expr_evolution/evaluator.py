# ==========================================
# expr_evolution/evaluator.py
# ==========================================
import numpy as np
from typing import Iterable

from .ast_nodes import Node, NodeType
from .environment import Environment
from .errors import InvalidNodeError


def evaluate_expression(node: Node, env: Environment) -> float:
    """Recursively compute the value of a tree; operation results pass through untouched"""
    node_type = node.node_type
    if node_type is NodeType.OPERATION:
        args = [evaluate_expression(child, env) for child in node.children]
        return node.value.execute(args)
    elif node_type is NodeType.TERMINAL:
        return node.value.get_value(env)
    raise InvalidNodeError(f"invalid node type: {node_type!r}")


def serialize_expression(node: Node) -> str:
    """Render a tree in parenthesized prefix notation, e.g. (ADD X 4)"""
    node_type = node.node_type
    if node_type is NodeType.OPERATION:
        args = " ".join(serialize_expression(child) for child in node.children)
        return f"({node.value} {args})"
    elif node_type is NodeType.TERMINAL:
        return str(node.value)
    raise InvalidNodeError(f"invalid node type: {node_type!r}")


class Evaluator:
    """Evaluates and renders expression trees"""

    def evaluate(self, node: Node, env: Environment) -> float:
        return evaluate_expression(node, env)

    def serialize(self, node: Node) -> str:
        return serialize_expression(node)

    def evaluate_many(self, node: Node, envs: Iterable[Environment]) -> np.ndarray:
        """Evaluate one tree against several sample environments"""
        return np.array([evaluate_expression(node, env) for env in envs], dtype=float)
