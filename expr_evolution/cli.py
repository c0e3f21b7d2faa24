"""
expr_evolution/cli.py - Command-line interface
"""
import logging
import random
import sys

import click

from .config import EvolutionConfig
from .environment import Environment
from .errors import EvolutionError
from .evaluator import evaluate_expression, serialize_expression
from .evolution import Evolver, GenerationReport
from .fitness import TargetFunctionFitness, TargetValueFitness
from .generator import GenerateMethod, ramped_half_and_half
from .population import SamplerStrategy
from .vocabulary import (DEFAULT_VARIABLE, TARGETS, default_operations,
                         default_terminals, extended_operations)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


@click.group()
def cli():
    """Expression Evolution - evolve symbolic expressions by subtree mutation"""
    pass


@cli.command()
@click.option('--target', '-t', type=click.Choice(sorted(TARGETS)), default='quadratic',
              help='Named target function of X to approximate')
@click.option('--target-value', type=float, default=None,
              help='Evolve an expression equal to this constant instead of a function')
@click.option('--population', '-p', default=10000, help='Population size')
@click.option('--elite', '-k', default=100, help='Number of parents carried over each generation')
@click.option('--min-depth', default=2, help='Minimum depth of initial trees')
@click.option('--max-depth', default=6, help='Maximum depth of initial trees')
@click.option('--mutation-depth', default=20, help='Depth bound of replacement subtrees')
@click.option('--method', type=click.Choice(['grow', 'full']), default='grow',
              help='Generation method for replacement subtrees')
@click.option('--sampler', type=click.Choice(['reservoir', 'uniform']), default='reservoir',
              help='How the mutated node is chosen')
@click.option('--generations', '-g', default=None, type=int, help='Maximum number of generations')
@click.option('--timeout', default=None, type=float, help='Wall-clock limit in seconds')
@click.option('--tolerance', default=0.0, help='Accept errors up to this value as converged')
@click.option('--max-tree-depth', default=None, type=int, help='Reject offspring deeper than this')
@click.option('--extended', is_flag=True, help='Add SQRT, SIN, COS, LOG, POW, ... to the operations')
@click.option('--seed', default=None, type=int, help='Random seed for reproducible runs')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def evolve(target, target_value, population, elite, min_depth, max_depth, mutation_depth,
           method, sampler, generations, timeout, tolerance, max_tree_depth, extended,
           seed, verbose):
    """Evolve an expression that matches a target function or value"""
    _setup_logging(verbose)

    try:
        config = EvolutionConfig(
            population_size=population,
            elite_count=elite,
            initial_min_depth=min_depth,
            initial_max_depth=max_depth,
            mutation_max_depth=mutation_depth,
            mutation_method=GenerateMethod[method.upper()],
            sampler=SamplerStrategy[sampler.upper()],
            max_generations=generations,
            timeout_seconds=timeout,
            tolerance=tolerance,
            max_tree_depth=max_tree_depth,
            seed=seed
        )
        operations = extended_operations() if extended else default_operations()

        if target_value is not None:
            # constants only, there is no input to bind
            terminals = default_terminals(variable=None)
            fitness_fn = TargetValueFitness(target_value)
            click.echo(f"Target value: {target_value}")
        else:
            terminals = default_terminals()
            fitness_fn = TargetFunctionFitness(TARGETS[target], variable=DEFAULT_VARIABLE)
            click.echo(f"Target function: {target}")

        evolver = Evolver(config, operations, terminals, fitness_fn)
    except EvolutionError as e:
        raise click.UsageError(str(e))

    click.echo(f"Starting evolution: population {population}, elites {elite}")

    def report(gen: GenerationReport) -> None:
        if gen.improved or verbose:
            click.echo(f"Gen {gen.generation:4d}: closest={gen.best_ever_fitness:.6g} "
                       f"mean depth={gen.stats.get('depth', {}).get('mean', 0):.1f}")

    result = evolver.run(on_generation=report)

    click.echo(f"\nFinished with status '{result.status.value}' after {result.generations} "
               f"generations in {result.elapsed_seconds:.1f}s")
    if result.best is not None:
        click.echo(f"Best fitness: {result.best_fitness:.6g}")
        click.echo(result.best_expression)

    sys.exit(0 if result.converged else 1)


@cli.command()
@click.option('--count', '-n', default=10, help='Number of trees to generate')
@click.option('--min-depth', default=1, help='Minimum tree depth')
@click.option('--max-depth', default=3, help='Maximum tree depth')
@click.option('--x', 'x_value', default=1.0, help='Value bound to X when evaluating')
@click.option('--extended', is_flag=True, help='Use the extended operation set')
@click.option('--seed', default=None, type=int, help='Random seed')
def generate(count, min_depth, max_depth, x_value, extended, seed):
    """Print ramped half-and-half trees and their values"""
    rng = random.Random(seed)
    operations = extended_operations() if extended else default_operations()
    env = Environment({DEFAULT_VARIABLE: x_value})

    try:
        trees = ramped_half_and_half(operations, default_terminals(), min_depth, max_depth, count, rng)
    except ValueError as e:
        raise click.UsageError(str(e))

    for tree in trees:
        click.echo(f"{evaluate_expression(tree, env):>14.6g}  {serialize_expression(tree)}")


if __name__ == '__main__':
    cli()
