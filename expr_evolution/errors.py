"""
expr_evolution/errors.py - Exception taxonomy for the evolution engine
"""


class EvolutionError(Exception):
    """Base class for all engine errors"""


class ConfigurationError(EvolutionError, ValueError):
    """Invalid vocabulary or run parameters, raised before evolution starts"""


class EmptyRegistryError(ConfigurationError):
    """A random draw was requested from a registry with no entries"""

    def __init__(self, registry_name: str):
        super().__init__(f"cannot draw from empty {registry_name}")
        self.registry_name = registry_name


class UndefinedVariableError(EvolutionError, KeyError):
    """An input variable was read from an environment that does not bind it"""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"variable {self.name!r} is not bound in the environment"


class InvalidNodeError(EvolutionError, TypeError):
    """A node holds neither a terminal nor an operation, or has the wrong child count"""
