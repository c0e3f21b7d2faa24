"""
Pytest configuration and shared fixtures for expression evolution tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from expr_evolution import (
    Constant, InputVariable, Operation, OperationRegistry, TerminalRegistry,
)


class ScriptedRandom(random.Random):
    """Random source that replays a fixed list of uniform draws"""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


ADD = Operation("ADD", lambda a, b: a + b)
NEG = Operation("NEG", lambda a: -a)


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def scripted_rng():
    """Factory for a random source returning the given draws in order"""
    return ScriptedRandom


@pytest.fixture
def add_operations():
    return OperationRegistry([ADD])


@pytest.fixture
def two_three_terminals():
    return TerminalRegistry([Constant(2), Constant(3)])


@pytest.fixture
def arithmetic_operations():
    return OperationRegistry([
        ADD,
        NEG,
        Operation("MUL", lambda a, b: a * b),
        Operation("IF", lambda c, a, b: a if c > 0 else b),
    ])


@pytest.fixture
def xy_terminals():
    return TerminalRegistry([Constant(1), Constant(2.5), InputVariable("X"), InputVariable("Y")])


def leaf_depths(node, depth=0):
    """Edge distance from the root to every leaf of the tree"""
    if not node.children:
        return [depth]
    depths = []
    for child in node.children:
        depths.extend(leaf_depths(child, depth + 1))
    return depths


@pytest.fixture
def depths_of():
    return leaf_depths
