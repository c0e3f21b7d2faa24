"""
expr_evolution/population.py - Population management and the subtree mutation operator
"""
import logging
import math
import random
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from .ast_nodes import Node
from .generator import GenerateMethod, generate_expression, ramped_half_and_half
from .genome import Genome
from .registry import OperationRegistry, TerminalRegistry

logger = logging.getLogger(__name__)


class SamplerStrategy(Enum):
    RESERVOIR = "reservoir"
    UNIFORM = "uniform"


def select_random_node(root: Node, rng: random.Random,
                       strategy: SamplerStrategy = SamplerStrategy.RESERVOIR) -> Node:
    """Pick one node of the tree (a reference, not a copy).

    RESERVOIR walks the tree once in pre-order; the i-th visited node replaces
    the candidate when floor(u * (i + 1)) == i. The root starts as candidate.
    The result is skewed, not uniform: the last node visited wins with
    probability 1 / (n + 1). UNIFORM counts the nodes first and picks a
    pre-order index uniformly.
    """
    if strategy is SamplerStrategy.UNIFORM:
        nodes = root.get_all_nodes()
        return nodes[math.floor(rng.random() * len(nodes))]

    count = 0
    selected = root
    for node in root.walk():
        count += 1
        if math.floor(rng.random() * (count + 1)) == count:
            selected = node
    return selected


def mutate_expression(root: Node, operations: OperationRegistry, terminals: TerminalRegistry,
                      max_depth: int, method: GenerateMethod, rng: random.Random,
                      strategy: SamplerStrategy = SamplerStrategy.RESERVOIR) -> Node:
    """Return a copy of root with one subtree replaced by a fresh random one.

    The replacement depth is independent of where the subtree sits, so repeated
    mutation lets trees grow without bound. root itself is never modified.
    """
    mutant = root.copy()
    target = select_random_node(mutant, rng, strategy)
    replacement = generate_expression(operations, terminals, max_depth, method, rng)
    target.set(replacement)
    return mutant


def normalize_fitness(value: float) -> float:
    """Map NaN and -inf to +inf so broken individuals rank last"""
    value = float(value)
    if math.isnan(value) or value == -math.inf:
        return math.inf
    return value


def _rank_key(genome: Genome) -> Tuple[bool, float]:
    return (not genome.is_fit, genome.fitness if genome.is_fit else 0.0)


class Population:
    """Manages a fixed-size population of genomes and produces each next generation"""

    def __init__(self, size: int, operations: OperationRegistry, terminals: TerminalRegistry,
                 rng: random.Random, genomes: Optional[List[Genome]] = None):
        self.size = size
        self.operations = operations
        self.terminals = terminals
        self.rng = rng
        self.genomes: List[Genome] = list(genomes) if genomes else []
        self.generation = 0

    def initialize(self, min_depth: int, max_depth: int) -> None:
        """Fill the population with ramped half-and-half trees"""
        trees = ramped_half_and_half(self.operations, self.terminals,
                                     min_depth, max_depth, self.size, self.rng)
        self.genomes = [Genome(tree) for tree in trees]
        logger.debug("Initialized %d genomes with depths %d..%d", self.size, min_depth, max_depth)

    def evaluate(self, fitness_fn: Callable[[Node], float]) -> None:
        for genome in self.genomes:
            genome.fitness = normalize_fitness(fitness_fn(genome.tree))

    def ranked(self) -> List[Genome]:
        """Genomes sorted ascending by fitness; unfit genomes last"""
        return sorted(self.genomes, key=_rank_key)

    def select_parents(self, k: int) -> List[Genome]:
        """Top k genomes among those with finite fitness"""
        return [genome for genome in self.ranked() if genome.is_fit][:k]

    def mutate(self, parent: Genome, max_depth: int, method: GenerateMethod,
               sampler: SamplerStrategy = SamplerStrategy.RESERVOIR,
               max_tree_depth: Optional[int] = None, max_attempts: int = 10) -> Genome:
        """Produce one offspring by subtree mutation.

        With max_tree_depth set, oversized offspring are re-drawn up to
        max_attempts times before falling back to a plain copy of the parent.
        """
        for _ in range(max_attempts):
            tree = mutate_expression(parent.tree, self.operations, self.terminals,
                                     max_depth, method, self.rng, sampler)
            if max_tree_depth is None or tree.get_depth() <= max_tree_depth:
                return Genome(tree)

        logger.debug("Offspring exceeded depth %d after %d attempts, copying parent",
                     max_tree_depth, max_attempts)
        return Genome(parent.tree.copy())

    def evolve_generation(self, elite_count: int, mutation_max_depth: int,
                          mutation_method: GenerateMethod = GenerateMethod.GROW,
                          sampler: SamplerStrategy = SamplerStrategy.RESERVOIR,
                          max_tree_depth: Optional[int] = None,
                          max_mutation_attempts: int = 10,
                          reseed_depths: Tuple[int, int] = (2, 6)) -> List[Genome]:
        """Replace the population with elites plus mutated offspring; returns the parents"""
        parents = self.select_parents(elite_count)
        self.generation += 1

        if not parents:
            logger.warning("Generation %d has no individual with finite fitness, reseeding",
                           self.generation)
            self.initialize(*reseed_depths)
            return parents

        new_genomes = list(parents)

        while len(new_genomes) < self.size:
            parent = parents[math.floor(self.rng.random() * len(parents))]
            new_genomes.append(self.mutate(parent, mutation_max_depth, mutation_method, sampler,
                                           max_tree_depth, max_mutation_attempts))

        self.genomes = new_genomes[:self.size]
        return parents

    def get_best(self, n: int = 1) -> List[Genome]:
        return self.ranked()[:n]

    def get_stats(self) -> Dict[str, Any]:
        """Get population statistics"""
        if not self.genomes:
            return {}

        fitnesses = [g.fitness for g in self.genomes if g.is_fit]
        complexities = [g.get_complexity() for g in self.genomes]
        depths = [g.get_depth() for g in self.genomes]

        if fitnesses:
            fitness_stats = {
                'min': min(fitnesses),
                'max': max(fitnesses),
                'mean': float(np.mean(fitnesses)),
                'std': float(np.std(fitnesses))
            }
        else:
            fitness_stats = {'min': math.inf, 'max': math.inf, 'mean': math.inf, 'std': 0.0}

        return {
            'generation': self.generation,
            'population_size': len(self.genomes),
            'unfit': len(self.genomes) - len(fitnesses),
            'fitness': fitness_stats,
            'complexity': {
                'min': min(complexities),
                'max': max(complexities),
                'mean': float(np.mean(complexities)),
                'std': float(np.std(complexities))
            },
            'depth': {
                'min': min(depths),
                'max': max(depths),
                'mean': float(np.mean(depths)),
                'std': float(np.std(depths))
            }
        }

    def diversity_stats(self) -> Dict[str, float]:
        """Share of structurally distinct expressions in the population"""
        if len(self.genomes) < 2:
            return {'structural_diversity': 0.0, 'unique_structures': len(self.genomes)}

        unique_structures = len({g.expression for g in self.genomes})
        return {
            'structural_diversity': unique_structures / len(self.genomes),
            'unique_structures': unique_structures
        }

    def __len__(self) -> int:
        return len(self.genomes)
