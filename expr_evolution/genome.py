"""
expr_evolution/genome.py - An individual: one expression tree paired with its fitness
"""
import math

from .ast_nodes import Node
from .evaluator import serialize_expression


class Genome:
    """Represents an individual of the population; lower fitness is better"""

    def __init__(self, tree: Node, fitness: float = math.inf):
        self.tree = tree
        self.fitness = fitness

    @property
    def expression(self) -> str:
        return serialize_expression(self.tree)

    @property
    def is_fit(self) -> bool:
        """False for infinite or NaN fitness; such genomes are never parents"""
        return math.isfinite(self.fitness)

    def get_complexity(self) -> int:
        """Number of nodes in the tree"""
        return self.tree.get_complexity()

    def get_depth(self) -> int:
        return self.tree.get_depth()

    def copy(self) -> 'Genome':
        """Create a deep copy of this genome"""
        return Genome(self.tree.copy(), self.fitness)
