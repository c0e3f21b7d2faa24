"""
expr_evolution/evolution.py - Generational loop: score, check convergence, select, repopulate

The loop is synchronous. Stop signals (generation cap, wall-clock timeout,
an external threading.Event) are only checked between generations.
"""
import logging
import math
import random
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

from .ast_nodes import Node
from .config import EvolutionConfig
from .genome import Genome
from .population import Population
from .registry import OperationRegistry, TerminalRegistry

logger = logging.getLogger(__name__)


class EvolutionStatus(Enum):
    EVOLVING = "evolving"
    CONVERGED = "converged"
    GENERATION_LIMIT = "generation_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"


@dataclass
class GenerationReport:
    """Outcome of scoring one generation"""
    generation: int
    best_fitness: float
    best_ever_fitness: float
    best_expression: str
    improved: bool
    stats: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EvolutionResult:
    status: EvolutionStatus
    best: Optional[Genome]
    best_fitness: float
    generations: int
    history: List[float]
    elapsed_seconds: float

    @property
    def converged(self) -> bool:
        return self.status is EvolutionStatus.CONVERGED

    @property
    def best_expression(self) -> Optional[str]:
        return self.best.expression if self.best is not None else None


class Evolver:
    """Evolves a population until a genome reaches the target fitness or a stop signal fires"""

    def __init__(self, config: EvolutionConfig, operations: OperationRegistry,
                 terminals: TerminalRegistry, fitness_fn: Callable[[Node], float],
                 rng: Optional[random.Random] = None):
        self.config = config.validate()
        operations.ensure_not_empty()
        terminals.ensure_not_empty()

        self.operations = operations
        self.terminals = terminals
        self.fitness_fn = fitness_fn
        self.rng = rng if rng is not None else config.make_rng()
        self.population = Population(config.population_size, operations, terminals, self.rng)

        self.status = EvolutionStatus.EVOLVING
        self.best: Optional[Genome] = None
        self.best_fitness = math.inf
        self.history: List[float] = []
        self._started_at: Optional[float] = None

    def is_converged(self, fitness: float) -> bool:
        return fitness <= self.config.target_fitness + self.config.tolerance

    def _score_generation(self) -> GenerationReport:
        self.population.evaluate(self.fitness_fn)
        leader = self.population.get_best(1)[0]

        improved = leader.fitness < self.best_fitness
        if improved:
            self.best_fitness = leader.fitness
            self.best = leader.copy()
            logger.info("Generation %d: closest %s", self.population.generation, leader.fitness)

        self.history.append(leader.fitness)
        if self.is_converged(leader.fitness):
            self.status = EvolutionStatus.CONVERGED
            self.best = leader.copy()
            self.best_fitness = leader.fitness
            logger.info("Converged in generation %d: %s", self.population.generation, leader.expression)

        return GenerationReport(
            generation=self.population.generation,
            best_fitness=leader.fitness,
            best_ever_fitness=self.best_fitness,
            best_expression=leader.expression,
            improved=improved,
            stats=self.population.get_stats()
        )

    def _stop_reason(self, stop_event: Optional[threading.Event]) -> Optional[EvolutionStatus]:
        if stop_event is not None and stop_event.is_set():
            return EvolutionStatus.CANCELLED
        if (self.config.max_generations is not None and
                len(self.history) >= self.config.max_generations):
            return EvolutionStatus.GENERATION_LIMIT
        if (self.config.timeout_seconds is not None and
                time.monotonic() - self._started_at >= self.config.timeout_seconds):
            return EvolutionStatus.TIMEOUT
        return None

    def generations(self, stop_event: Optional[threading.Event] = None) -> Iterator[GenerationReport]:
        """Run the loop lazily, yielding one report per scored generation"""
        cfg = self.config
        self.status = EvolutionStatus.EVOLVING
        self.best = None
        self.best_fitness = math.inf
        self.history = []
        self.population.generation = 0
        self._started_at = time.monotonic()
        self.population.initialize(cfg.initial_min_depth, cfg.initial_max_depth)
        logger.info("Starting evolution: population %d, elites %d", cfg.population_size, cfg.elite_count)

        reason = None
        if stop_event is not None and stop_event.is_set():
            reason = EvolutionStatus.CANCELLED

        while reason is None:
            yield self._score_generation()
            if self.status is EvolutionStatus.CONVERGED:
                return

            reason = self._stop_reason(stop_event)
            if reason is None:
                self.population.evolve_generation(
                    cfg.elite_count, cfg.mutation_max_depth, cfg.mutation_method, cfg.sampler,
                    cfg.max_tree_depth, cfg.max_mutation_attempts,
                    (cfg.initial_min_depth, cfg.initial_max_depth))

        self.status = reason
        logger.info("Stopped after %d generations: %s", len(self.history), reason.value)

    def run(self, on_generation: Optional[Callable[[GenerationReport], None]] = None,
            stop_event: Optional[threading.Event] = None) -> EvolutionResult:
        """Drive the loop to completion and summarize the outcome"""
        for report in self.generations(stop_event):
            if on_generation is not None:
                on_generation(report)

        return EvolutionResult(
            status=self.status,
            best=self.best,
            best_fitness=self.best_fitness,
            generations=len(self.history),
            history=list(self.history),
            elapsed_seconds=time.monotonic() - self._started_at
        )


def run_evolution(operations: OperationRegistry, terminals: TerminalRegistry,
                  fitness_fn: Callable[[Node], float],
                  config: Optional[EvolutionConfig] = None, **overrides) -> EvolutionResult:
    """Convenience wrapper: build an Evolver from a config plus keyword overrides and run it"""
    if config is None:
        config = EvolutionConfig.from_dict(overrides)
    elif overrides:
        config = EvolutionConfig.from_dict({**config.to_dict(), **overrides})
    return Evolver(config, operations, terminals, fitness_fn).run()
