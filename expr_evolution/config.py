"""
expr_evolution/config.py - Run parameters for the evolution loop
"""
import random
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional

from .errors import ConfigurationError
from .generator import GenerateMethod
from .population import SamplerStrategy


@dataclass
class EvolutionConfig:
    """Fixed parameters of one evolution run"""
    population_size: int = 10000
    elite_count: int = 100
    initial_min_depth: int = 2
    initial_max_depth: int = 6
    mutation_max_depth: int = 20
    mutation_method: GenerateMethod = GenerateMethod.GROW
    sampler: SamplerStrategy = SamplerStrategy.RESERVOIR
    max_generations: Optional[int] = None
    timeout_seconds: Optional[float] = None
    target_fitness: float = 0.0
    tolerance: float = 0.0
    max_tree_depth: Optional[int] = None  # opt-in bloat control
    max_mutation_attempts: int = 10
    seed: Optional[int] = None

    def validate(self) -> 'EvolutionConfig':
        if self.population_size <= 0:
            raise ConfigurationError(f"population_size must be positive, got {self.population_size}")
        if not 0 < self.elite_count <= self.population_size:
            raise ConfigurationError(
                f"elite_count must be in (0, {self.population_size}], got {self.elite_count}")
        if self.initial_min_depth < 0 or self.initial_min_depth > self.initial_max_depth:
            raise ConfigurationError(
                f"invalid initial depth range [{self.initial_min_depth}, {self.initial_max_depth}]")
        if self.mutation_max_depth < 0:
            raise ConfigurationError(f"mutation_max_depth must be non-negative, got {self.mutation_max_depth}")
        if self.max_generations is not None and self.max_generations <= 0:
            raise ConfigurationError(f"max_generations must be positive, got {self.max_generations}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ConfigurationError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if self.tolerance < 0:
            raise ConfigurationError(f"tolerance must be non-negative, got {self.tolerance}")
        if self.max_tree_depth is not None and self.max_tree_depth < self.mutation_max_depth:
            raise ConfigurationError(
                f"max_tree_depth ({self.max_tree_depth}) must be at least "
                f"mutation_max_depth ({self.mutation_max_depth})")
        if self.max_mutation_attempts < 1:
            raise ConfigurationError(
                f"max_mutation_attempts must be at least 1, got {self.max_mutation_attempts}")
        return self

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['mutation_method'] = self.mutation_method.name
        data['sampler'] = self.sampler.name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EvolutionConfig':
        """Build a validated config; enum fields may be given by name"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"unknown config keys: {', '.join(sorted(unknown))}")

        values = dict(data)
        try:
            if isinstance(values.get('mutation_method'), str):
                values['mutation_method'] = GenerateMethod[values['mutation_method'].upper()]
            if isinstance(values.get('sampler'), str):
                values['sampler'] = SamplerStrategy[values['sampler'].upper()]
        except KeyError as e:
            raise ConfigurationError(f"unknown option value: {e}") from e

        return cls(**values).validate()
