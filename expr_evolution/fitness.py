"""
expr_evolution/fitness.py - Error-based fitness functions (lower is better)
"""
import math
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional

import numpy as np

from .ast_nodes import Node
from .environment import Environment
from .evaluator import evaluate_expression
from .population import normalize_fitness

DEFAULT_SAMPLES = np.arange(-50, 50)


class FitnessEvaluator(ABC):
    """Scores a tree; NaN and infinite errors are reported as +inf"""

    @abstractmethod
    def error(self, node: Node) -> float:
        """Raw error of node; may be NaN or infinite"""

    def __call__(self, node: Node) -> float:
        try:
            with np.errstate(all='ignore'):
                return normalize_fitness(self.error(node))
        except OverflowError:
            return math.inf


class TargetFunctionFitness(FitnessEvaluator):
    """Sum of absolute deviations from a target function over sample inputs"""

    def __init__(self, target_fn: Callable[[float], float],
                 samples: Optional[Iterable[float]] = None, variable: str = 'X'):
        self.target_fn = target_fn
        self.variable = variable
        self.samples = np.asarray(DEFAULT_SAMPLES if samples is None else list(samples), dtype=float)
        self.expected = np.array([target_fn(x) for x in self.samples], dtype=float)
        self.environments: List[Environment] = [
            Environment({variable: x}) for x in self.samples.tolist()
        ]

    def error(self, node: Node) -> float:
        actual = np.array([evaluate_expression(node, env) for env in self.environments], dtype=float)
        return float(np.sum(np.abs(self.expected - actual)))


class TargetValueFitness(FitnessEvaluator):
    """Absolute distance of the tree's value from a single target constant"""

    def __init__(self, target: float, env: Optional[Environment] = None):
        self.target = target
        self.env = env if env is not None else Environment()

    def error(self, node: Node) -> float:
        return abs(float(evaluate_expression(node, self.env)) - self.target)
