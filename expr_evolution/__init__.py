"""
expr_evolution - Tree-based genetic programming for symbolic expressions

Evolves prefix-notation expression trees toward a target function or value
using ramped half-and-half initialization, subtree mutation and elitist
selection.
"""

__version__ = "0.1.0"
__author__ = "Expression Evolution Project"

from .errors import (
    EvolutionError, ConfigurationError, EmptyRegistryError,
    UndefinedVariableError, InvalidNodeError
)
from .environment import Environment
from .ast_nodes import Node, NodeType, Constant, InputVariable, Operation
from .registry import TerminalRegistry, OperationRegistry
from .generator import GenerateMethod, generate_expression, ramped_half_and_half
from .evaluator import Evaluator, evaluate_expression, serialize_expression
from .genome import Genome
from .population import Population, SamplerStrategy, select_random_node, mutate_expression
from .fitness import FitnessEvaluator, TargetFunctionFitness, TargetValueFitness
from .config import EvolutionConfig
from .evolution import Evolver, EvolutionResult, EvolutionStatus, GenerationReport, run_evolution
from .vocabulary import default_operations, extended_operations, default_terminals, TARGETS

__all__ = [
    'EvolutionError', 'ConfigurationError', 'EmptyRegistryError',
    'UndefinedVariableError', 'InvalidNodeError',
    'Environment',
    'Node', 'NodeType', 'Constant', 'InputVariable', 'Operation',
    'TerminalRegistry', 'OperationRegistry',
    'GenerateMethod', 'generate_expression', 'ramped_half_and_half',
    'Evaluator', 'evaluate_expression', 'serialize_expression',
    'Genome',
    'Population', 'SamplerStrategy', 'select_random_node', 'mutate_expression',
    'FitnessEvaluator', 'TargetFunctionFitness', 'TargetValueFitness',
    'EvolutionConfig',
    'Evolver', 'EvolutionResult', 'EvolutionStatus', 'GenerationReport', 'run_evolution',
    'default_operations', 'extended_operations', 'default_terminals', 'TARGETS'
]
