"""
expr_evolution/generator.py - Random tree construction (grow, full, ramped half-and-half)
"""
import random
from enum import Enum
from typing import List

from .ast_nodes import Node
from .registry import OperationRegistry, TerminalRegistry


class GenerateMethod(Enum):
    GROW = "grow"
    FULL = "full"


def generate_expression(operations: OperationRegistry, terminals: TerminalRegistry,
                        max_depth: int, method: GenerateMethod,
                        rng: random.Random) -> Node:
    """Build a random tree no deeper than max_depth.

    GROW stops early with probability |terminals| / (|terminals| + |operations|)
    at every level; FULL only places terminals at exactly max_depth.
    Children are generated depth-first, left to right.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    terminals.ensure_not_empty()

    if max_depth == 0 or (
            method is GenerateMethod.GROW and
            rng.random() < terminals.size() / (terminals.size() + operations.size())):
        return Node(terminals.random(rng))

    operation = operations.random(rng)
    children = [generate_expression(operations, terminals, max_depth - 1, method, rng)
                for _ in range(operation.arity)]
    return Node(operation, children)


def ramped_half_and_half(operations: OperationRegistry, terminals: TerminalRegistry,
                         min_depth: int, max_depth: int, count: int,
                         rng: random.Random) -> List[Node]:
    """Build count trees, FULL at even and GROW at odd indices, cycling depth min..max"""
    if min_depth < 0 or min_depth > max_depth:
        raise ValueError(f"invalid depth range [{min_depth}, {max_depth}]")

    population = []
    depth = min_depth
    for i in range(count):
        method = GenerateMethod.FULL if i % 2 == 0 else GenerateMethod.GROW
        population.append(generate_expression(operations, terminals, depth, method, rng))

        depth += 1
        if depth > max_depth:
            depth = min_depth

    return population
