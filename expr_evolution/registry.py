"""
expr_evolution/registry.py - Vocabularies of terminals and operations for random generation
"""
import logging
import math
import random
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

from .ast_nodes import Operation, Terminal, TERMINAL_TYPES
from .errors import ConfigurationError, EmptyRegistryError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Registry(Generic[T]):
    """Unordered collection supporting uniform random draws"""

    kind = "registry"

    def __init__(self, items: Optional[Iterable[T]] = None):
        self._items: List[T] = []
        for item in items or ():
            self.register(item)

    def register(self, item: T) -> T:
        self._items.append(item)
        return item

    def random(self, rng: random.Random) -> T:
        """Draw an entry as floor(uniform[0, 1) * size)"""
        self.ensure_not_empty()
        i = math.floor(rng.random() * len(self._items))
        return self._items[i]

    def size(self) -> int:
        return len(self._items)

    def ensure_not_empty(self) -> None:
        if not self._items:
            raise EmptyRegistryError(self.kind)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(str(item) for item in self._items)})"


class TerminalRegistry(Registry[Terminal]):
    kind = "terminal registry"

    def register(self, item: Terminal) -> Terminal:
        if not isinstance(item, TERMINAL_TYPES):
            raise ConfigurationError(f"not a terminal: {item!r}")
        return super().register(item)


class OperationRegistry(Registry[Operation]):
    """Operations available to the generator, optionally bounded in arity"""

    kind = "operation registry"

    def __init__(self, items: Optional[Iterable[Operation]] = None, max_arity: Optional[int] = None):
        self.max_arity = max_arity
        super().__init__(items)

    def register(self, item: Operation) -> Operation:
        if not isinstance(item, Operation):
            raise ConfigurationError(f"not an operation: {item!r}")
        if self.max_arity is not None and item.arity > self.max_arity:
            raise ConfigurationError(
                f"operation {item.name!r} has arity {item.arity}, "
                f"above the registry bound of {self.max_arity}")
        logger.debug("Registered operation %s/%d", item.name, item.arity)
        return super().register(item)
