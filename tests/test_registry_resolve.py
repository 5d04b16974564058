"""Tests for Registry resolution."""

from __future__ import annotations

import pytest

from slotwire.exceptions import SlotWireInvalidKeyError
from slotwire.registry import Registry


class Shape:
    def __init__(self) -> None:
        self.label = ""


class Circle(Shape):
    pass


class Square(Shape):
    pass


class Unrelated:
    pass


class TestShapeScenario:
    @pytest.fixture()
    def shapes(self, registry: Registry) -> Registry:
        registry.register_singleton(Shape, Circle)
        registry.register_prototype(Shape, Square, key="sq")
        return registry

    def test_default_slot_is_one_shared_circle(self, shapes: Registry) -> None:
        first = shapes.resolve(Shape)
        second = shapes.resolve(Shape)

        assert isinstance(first, Circle)
        assert first is second

    def test_keyed_slot_builds_distinct_squares(self, shapes: Registry) -> None:
        first = shapes.resolve(Shape, key="sq")
        second = shapes.resolve(Shape, key="sq")

        assert isinstance(first, Square)
        assert isinstance(second, Square)
        assert first is not second

    def test_unknown_key_falls_back_to_default_slot(self, shapes: Registry) -> None:
        """A never-interned key maps to the default slot of the contract."""
        assert shapes.resolve(Shape, key="missing") is shapes.resolve(Shape)
        assert "missing" not in shapes.keys

    def test_unknown_key_without_default_slot_is_none(self, registry: Registry) -> None:
        registry.register_prototype(Shape, Square, key="sq")

        assert registry.resolve(Shape, key="missing") is None


class TestMissingRegistrations:
    def test_resolve_before_any_registration(self, registry: Registry) -> None:
        assert registry.resolve(Shape) is None
        assert registry.resolve(Shape, key="sq") is None

    def test_contract_registered_under_other_key_only(self, registry: Registry) -> None:
        """A contract registered only under a key is not reachable via the default slot."""
        registry.register_singleton(Shape, Circle, key="round")

        assert registry.resolve(Shape) is None

    def test_interned_key_of_other_contract(self, registry: Registry) -> None:
        """A key interned for another contract does not address this contract's default slot."""
        registry.register_singleton(Shape, Circle)
        registry.register_singleton(Unrelated, Unrelated, key="other")

        assert registry.resolve(Shape, key="other") is None

    def test_resolve_never_interns(self, registry: Registry) -> None:
        registry.resolve(Shape, key="ghost")

        assert len(registry.keys) == 0
        assert registry.keys.counter == 0

    def test_is_registered(self, registry: Registry) -> None:
        registry.register_prototype(Shape, Square, key="sq")

        assert registry.is_registered(Shape, key="sq")
        assert not registry.is_registered(Shape)
        assert not registry.is_registered(Unrelated)

    def test_non_string_key_is_rejected(self, registry: Registry) -> None:
        with pytest.raises(SlotWireInvalidKeyError):
            registry.resolve(Shape, key=1)  # type: ignore[arg-type]


class TestSingletonLifetime:
    def test_mutations_are_shared(self, registry: Registry) -> None:
        registry.register_singleton(Shape, Circle)

        first = registry.resolve(Shape)
        second = registry.resolve(Shape)
        assert first is not None
        assert second is not None
        first.label = "Alpha"

        assert second.label == "Alpha"

    def test_instance_is_built_lazily_once(self, registry: Registry) -> None:
        calls: list[int] = []

        def build() -> Shape:
            calls.append(1)
            return Circle()

        registry.register_singleton(Shape, build)
        assert calls == []

        registry.resolve(Shape)
        registry.resolve(Shape)
        registry.resolve(Shape)

        assert len(calls) == 1
        entry = registry.get_entry(Shape)
        assert entry is not None
        assert entry.is_cached

    def test_failed_construction_is_retried(self, registry: Registry) -> None:
        """A raising producer leaves the singleton uncached."""
        attempts: list[int] = []

        class ProducerError(Exception):
            pass

        def build() -> Shape:
            attempts.append(1)
            if len(attempts) == 1:
                msg = "first build fails"
                raise ProducerError(msg)
            return Circle()

        registry.register_singleton(Shape, build)

        with pytest.raises(ProducerError, match="first build fails"):
            registry.resolve(Shape)

        entry = registry.get_entry(Shape)
        assert entry is not None
        assert not entry.is_cached

        instance = registry.resolve(Shape)
        assert isinstance(instance, Circle)
        assert registry.resolve(Shape) is instance
        assert len(attempts) == 2

    def test_none_result_is_cached(self, registry: Registry) -> None:
        calls: list[int] = []

        def build() -> None:
            calls.append(1)

        registry.register_singleton(Shape, build)

        assert registry.resolve(Shape) is None
        assert registry.resolve(Shape) is None
        assert len(calls) == 1


class TestPrototypeLifetime:
    def test_mutations_are_not_shared(self, registry: Registry) -> None:
        registry.register_prototype(Shape, Square)

        first = registry.resolve(Shape)
        second = registry.resolve(Shape)
        assert first is not None
        assert second is not None
        first.label = "Beta"

        assert first is not second
        assert second.label == ""

    def test_producer_exception_propagates(self, registry: Registry) -> None:
        def build() -> Shape:
            msg = "broken"
            raise RuntimeError(msg)

        registry.register_prototype(Shape, build)

        with pytest.raises(RuntimeError, match="broken"):
            registry.resolve(Shape)

    def test_prototype_entry_never_caches(self, registry: Registry) -> None:
        registry.register_prototype(Shape, Square)
        registry.resolve(Shape)

        entry = registry.get_entry(Shape)
        assert entry is not None
        assert not entry.is_cached


class TestNestedResolution:
    def test_producer_can_resolve_from_same_registry(self, registry: Registry) -> None:
        """The registry lock is re-entrant for producers resolving other contracts."""

        class Engine:
            pass

        class Car:
            def __init__(self, engine: Engine) -> None:
                self.engine = engine

        registry.register_singleton(Engine, Engine)

        def build_car() -> Car:
            engine = registry.resolve(Engine)
            assert engine is not None
            return Car(engine)

        registry.register_singleton(Car, build_car)

        car = registry.resolve(Car)
        assert car is not None
        assert car.engine is registry.resolve(Engine)


def test_isolated_registries_share_nothing() -> None:
    first = Registry()
    second = Registry()
    first.register_singleton(Shape, Circle, key="a")

    assert second.resolve(Shape, key="a") is None
    assert len(second.keys) == 0
    assert len(second) == 0


def test_repr_reports_counts(registry: Registry) -> None:
    registry.register_prototype(Shape, Square, key="sq")
    registry.register_prototype(Shape, Circle)

    assert repr(registry) == "Registry(entries=2, keys=1)"
