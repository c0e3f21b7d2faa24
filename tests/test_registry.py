"""
Tests for the registries.
"""
import pytest

from expr_evolution import (
    ConfigurationError, Constant, EmptyRegistryError, InputVariable, Operation,
    OperationRegistry, TerminalRegistry,
)


class TestRegistries:

    def test_empty_draw_raises(self, rng):
        with pytest.raises(EmptyRegistryError):
            TerminalRegistry().random(rng)
        with pytest.raises(ConfigurationError):
            OperationRegistry().random(rng)

    def test_draw_uses_floor_of_uniform(self, scripted_rng):
        terminals = TerminalRegistry([Constant(1), Constant(2), Constant(3)])
        draws = scripted_rng([0.0, 0.34, 0.999])
        assert [terminals.random(draws).value for _ in range(3)] == [1, 2, 3]

    def test_no_duplicate_check(self):
        terminals = TerminalRegistry()
        c = Constant(1)
        terminals.register(c)
        terminals.register(c)
        assert terminals.size() == 2

    def test_draws_cover_every_item(self, rng):
        terminals = TerminalRegistry([Constant(1), InputVariable("X")])
        seen = {str(terminals.random(rng)) for _ in range(100)}
        assert seen == {"1", "X"}

    def test_max_arity_enforced(self):
        registry = OperationRegistry(max_arity=2)
        registry.register(Operation("ADD", lambda a, b: a + b))
        with pytest.raises(ConfigurationError):
            registry.register(Operation("IF", lambda c, a, b: a))

    def test_unbounded_registry_accepts_any_arity(self):
        registry = OperationRegistry([Operation("IF", lambda c, a, b: a)])
        assert registry.size() == 1

    def test_type_checks(self):
        with pytest.raises(ConfigurationError):
            TerminalRegistry().register(Operation("NEG", lambda a: -a))
        with pytest.raises(ConfigurationError):
            OperationRegistry().register(Constant(1))
