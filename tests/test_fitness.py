"""
Tests for fitness functions and run configuration.
"""
import math

import pytest

from expr_evolution import (
    ConfigurationError, Constant, EvolutionConfig, FitnessEvaluator, GenerateMethod,
    InputVariable, Node, Operation, SamplerStrategy, TargetFunctionFitness, TargetValueFitness,
    UndefinedVariableError,
)

ADD = Operation("ADD", lambda a, b: a + b)
MUL = Operation("MUL", lambda a, b: a * b)
DIV = Operation("DIV", lambda a, b: a / b if b else math.nan)


def quadratic_tree():
    # (ADD (MUL X X) (ADD X 1)) == x*x + x + 1
    x = lambda: Node(InputVariable("X"))
    return Node(ADD, [Node(MUL, [x(), x()]), Node(ADD, [x(), Node(Constant(1))])])


class TestTargetFunctionFitness:

    def test_exact_match_scores_zero(self):
        fitness = TargetFunctionFitness(lambda x: x * x + x + 1)
        assert fitness(quadratic_tree()) == 0.0

    def test_sum_of_absolute_deviations(self):
        fitness = TargetFunctionFitness(lambda x: x, samples=[1, 2, 3])
        assert fitness(Node(Constant(0))) == 6.0

    def test_default_samples(self):
        fitness = TargetFunctionFitness(lambda x: x)
        assert len(fitness.environments) == 100
        assert fitness.samples[0] == -50 and fitness.samples[-1] == 49

    def test_nan_is_maximally_unfit(self):
        fitness = TargetFunctionFitness(lambda x: x, samples=[0, 1])
        tree = Node(DIV, [Node(InputVariable("X")), Node(Constant(0))])
        assert fitness(tree) == math.inf

    def test_overflowing_error_is_unfit(self):
        huge = Operation("HUGE", lambda a: 10 ** 400)
        fitness = TargetFunctionFitness(lambda x: x, samples=[1])
        assert fitness(Node(huge, [Node(Constant(1))])) == math.inf

    def test_other_variable_name(self):
        fitness = TargetFunctionFitness(lambda t: t, samples=[1, 2], variable="T")
        assert fitness(Node(InputVariable("T"))) == 0.0
        with pytest.raises(UndefinedVariableError):
            fitness(Node(InputVariable("X")))


class TestTargetValueFitness:

    def test_distance(self):
        fitness = TargetValueFitness(5)
        assert fitness(Node(ADD, [Node(Constant(2)), Node(Constant(3))])) == 0.0
        assert fitness(Node(Constant(8))) == 3.0


class TestEvolutionConfig:

    def test_defaults_are_valid(self):
        config = EvolutionConfig().validate()
        assert config.population_size == 10000
        assert config.elite_count == 100
        assert config.mutation_method is GenerateMethod.GROW

    @pytest.mark.parametrize("overrides", [
        {'population_size': 0},
        {'population_size': 10, 'elite_count': 11},
        {'elite_count': 0},
        {'initial_min_depth': 5, 'initial_max_depth': 2},
        {'mutation_max_depth': -1},
        {'max_generations': 0},
        {'timeout_seconds': 0},
        {'max_tree_depth': 5, 'mutation_max_depth': 10},
        {'max_mutation_attempts': 0},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ConfigurationError):
            EvolutionConfig(**overrides).validate()

    def test_from_dict_accepts_enum_names(self):
        config = EvolutionConfig.from_dict({'mutation_method': 'full', 'sampler': 'UNIFORM',
                                            'population_size': 50, 'elite_count': 5})
        assert config.mutation_method is GenerateMethod.FULL
        assert config.sampler is SamplerStrategy.UNIFORM

    def test_from_dict_rejects_unknown(self):
        with pytest.raises(ConfigurationError):
            EvolutionConfig.from_dict({'crossover_rate': 0.7})
        with pytest.raises(ConfigurationError):
            EvolutionConfig.from_dict({'sampler': 'roulette'})

    def test_round_trip_dict(self):
        config = EvolutionConfig(population_size=20, elite_count=4, seed=3)
        assert EvolutionConfig.from_dict(config.to_dict()) == config

    def test_seeded_rng(self):
        config = EvolutionConfig(seed=9)
        assert config.make_rng().random() == config.make_rng().random()


class TestFitnessEvaluator:

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            FitnessEvaluator()

    def test_subclass_must_define_error(self):
        class NoError(FitnessEvaluator):
            pass

        with pytest.raises(TypeError):
            NoError()

    def test_subclass_error_is_normalized(self):
        class AlwaysNan(FitnessEvaluator):
            def error(self, node):
                return math.nan

        assert AlwaysNan()(Node(Constant(1))) == math.inf
