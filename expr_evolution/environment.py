"""
expr_evolution/environment.py - Variable bindings queried during evaluation
"""
from typing import Dict, Iterator, List, Mapping, Optional

from .errors import UndefinedVariableError


class Environment:
    """Mutable mapping from input variable names to numeric values"""

    def __init__(self, values: Optional[Mapping[str, float]] = None):
        if isinstance(values, Environment):
            values = values.values
        self.values: Dict[str, float] = dict(values) if values else {}

    def get(self, name: str) -> float:
        """Return the value bound to name, failing fast when it is unbound"""
        try:
            return self.values[name]
        except KeyError:
            raise UndefinedVariableError(name) from None

    def set(self, name: str, value: float) -> None:
        self.values[name] = value

    def update(self, values: Mapping[str, float]) -> None:
        self.values.update(values)

    def names(self) -> List[str]:
        return list(self.values)

    def copy(self) -> 'Environment':
        return Environment(self.values)

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self):
        return f"Environment({self.values!r})"
