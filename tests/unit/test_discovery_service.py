"""Tests for DiscoveryService (multi-context discovery)."""

from abc import ABC, abstractmethod
import threading
from unittest.mock import Mock

import pytest

from service_hangar.domain.discovery import DiscoveryService, ProviderEnumerator
from service_hangar.domain.exceptions import PreconditionError
from service_hangar.domain.value_objects import LoaderContext
from service_hangar.infrastructure.context_provider import (
    ContextVarSecondaryProvider,
    FixedSecondaryProvider,
    use_secondary_context,
)
from service_hangar.infrastructure.resolvers.static_table import StaticRegistryResolver


class Formatter(ABC):
    def __init__(self, origin: str):
        self.origin = origin

    @abstractmethod
    def format(self, value) -> str: ...


class FormatterA(Formatter):
    def format(self, value) -> str:
        return f"A:{value}"


class FormatterB(Formatter):
    def format(self, value) -> str:
        return f"B:{value}"


class FormatterC(Formatter):
    def format(self, value) -> str:
        return f"C:{value}"


PRIMARY = LoaderContext.named("primary")
SECONDARY = LoaderContext.named("secondary")


def _broken():
    raise RuntimeError("class initialization failed")


@pytest.fixture
def registry():
    """Registry with A, B in primary and B, C in secondary."""
    registry = StaticRegistryResolver()
    registry.register(Formatter, lambda: FormatterA("primary"), context=PRIMARY, name="a")
    registry.register(Formatter, lambda: FormatterB("primary"), context=PRIMARY, name="b")
    registry.register(Formatter, lambda: FormatterB("secondary"), context=SECONDARY, name="b")
    registry.register(Formatter, lambda: FormatterC("secondary"), context=SECONDARY, name="c")
    return registry


@pytest.fixture
def service(registry, sink):
    """Discovery service whose ambient secondary context is SECONDARY."""
    return DiscoveryService(ProviderEnumerator(registry, sink), FixedSecondaryProvider(SECONDARY))


class TestDiscover:
    """Tests for DiscoveryService.discover()."""

    def test_primary_and_secondary_merged_and_deduplicated(self, service, sink):
        """A, B from primary then C from secondary; B comes from primary."""
        result = list(service.discover(Formatter, PRIMARY, use_secondary=True))

        assert [type(r) for r in result] == [FormatterA, FormatterB, FormatterC]
        assert [r.origin for r in result] == ["primary", "primary", "secondary"]
        assert sink.warnings == []
        assert sink.errors == []

    def test_primary_only_by_default(self, service):
        """Without use_secondary only the primary context is searched."""
        result = list(service.discover(Formatter, PRIMARY))
        assert [type(r) for r in result] == [FormatterA, FormatterB]

    def test_secondary_provider_not_consulted_without_flag(self, registry, sink):
        """use_secondary=False never asks for the ambient context."""
        secondary_provider = Mock()
        service = DiscoveryService(ProviderEnumerator(registry, sink), secondary_provider)

        list(service.discover(Formatter, PRIMARY, use_secondary=False))

        secondary_provider.current_secondary_context.assert_not_called()

    def test_no_registrations_yields_empty(self, service, sink):
        """A service nobody implements yields nothing and reports nothing."""

        class Unimplemented(ABC):
            pass

        assert list(service.discover(Unimplemented, PRIMARY, use_secondary=True)) == []
        assert sink.warnings == []
        assert sink.errors == []

    def test_identical_secondary_context_enumerated_once(self, sink):
        """When secondary equals primary the context is searched only once."""
        resolver = Mock()
        resolver.resolve.side_effect = OSError("unreadable registry")
        same_scope = LoaderContext.named("primary")
        service = DiscoveryService(ProviderEnumerator(resolver, sink), FixedSecondaryProvider(same_scope))

        assert list(service.discover(Formatter, PRIMARY, use_secondary=True)) == []

        resolver.resolve.assert_called_once()
        assert len(sink.errors) == 1

    def test_broken_provider_does_not_hide_others(self, registry, sink, service):
        """Other providers survive, in their original order."""
        registry.register(Formatter, _broken, context=PRIMARY, name="broken")
        registry.register(Formatter, lambda: FormatterC("primary"), context=PRIMARY, name="c")

        result = list(service.discover(Formatter, PRIMARY, use_secondary=True))

        assert [type(r) for r in result] == [FormatterA, FormatterB, FormatterC]
        assert result[2].origin == "primary"
        assert len(sink.warnings) == 1

    def test_secondary_registry_failure_keeps_primary_results(self, registry, sink):
        """A whole-context failure in the secondary context only loses that context."""

        class FailingForSecondary(StaticRegistryResolver):
            def resolve(self, service_type, context):
                if context == SECONDARY:
                    raise PermissionError("denied")
                return registry.resolve(service_type, context)

        service = DiscoveryService(
            ProviderEnumerator(FailingForSecondary(), sink),
            FixedSecondaryProvider(SECONDARY),
        )

        result = list(service.discover(Formatter, PRIMARY, use_secondary=True))

        assert [type(r) for r in result] == [FormatterA, FormatterB]
        assert len(sink.errors) == 1

    def test_result_is_single_pass(self, service):
        """A result cannot be restarted; a new call re-instantiates."""
        first_call = service.discover(Formatter, PRIMARY)
        first = list(first_call)

        assert list(first_call) == []

        second = list(service.discover(Formatter, PRIMARY))
        assert [type(r) for r in second] == [type(r) for r in first]
        assert all(a is not b for a, b in zip(first, second))

    def test_non_verbose_call_is_silent(self, registry, sink, service):
        """verbose=False suppresses every diagnostic."""
        registry.register(Formatter, _broken, context=SECONDARY)

        list(service.discover(Formatter, PRIMARY, use_secondary=True, verbose=False))

        assert sink.warnings == []

    @pytest.mark.parametrize("service_type", [None, 42, "Formatter"])
    def test_invalid_service_type_raises_before_enumeration(self, registry, sink, service_type):
        """Precondition failures are raised at call time."""
        resolver = Mock(wraps=registry)
        service = DiscoveryService(ProviderEnumerator(resolver, sink), FixedSecondaryProvider(SECONDARY))

        with pytest.raises(PreconditionError):
            service.discover(service_type, PRIMARY, use_secondary=True)

        resolver.resolve.assert_not_called()

    def test_invalid_primary_context_raises(self, service):
        """The primary context must be a LoaderContext."""
        with pytest.raises(PreconditionError, match="primary_context"):
            service.discover(Formatter, "primary")


class TestAmbientSecondaryContext:
    """Tests for the context-variable backed secondary context."""

    def test_override_applies_within_block(self, registry, sink):
        """use_secondary_context() selects the secondary scope."""
        service = DiscoveryService(
            ProviderEnumerator(registry, sink),
            ContextVarSecondaryProvider(lambda: LoaderContext.named("empty")),
        )

        with use_secondary_context(SECONDARY):
            inside = list(service.discover(Formatter, PRIMARY, use_secondary=True))
        outside = list(service.discover(Formatter, PRIMARY, use_secondary=True))

        assert [type(r) for r in inside] == [FormatterA, FormatterB, FormatterC]
        assert [type(r) for r in outside] == [FormatterA, FormatterB]

    def test_secondary_captured_at_call_time(self, registry, sink):
        """The override active when discover() is called is used, even if consumed later."""
        service = DiscoveryService(
            ProviderEnumerator(registry, sink),
            ContextVarSecondaryProvider(lambda: LoaderContext.named("empty")),
        )

        with use_secondary_context(SECONDARY):
            result = service.discover(Formatter, PRIMARY, use_secondary=True)

        assert [type(r) for r in result] == [FormatterA, FormatterB, FormatterC]

    def test_override_is_thread_local(self, registry, sink):
        """An override in one thread is invisible to another."""
        service = DiscoveryService(
            ProviderEnumerator(registry, sink),
            ContextVarSecondaryProvider(lambda: LoaderContext.named("empty")),
        )
        seen = {}

        def worker():
            seen["types"] = [type(r) for r in service.discover(Formatter, PRIMARY, use_secondary=True)]

        with use_secondary_context(SECONDARY):
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()

        assert seen["types"] == [FormatterA, FormatterB]


class TestConcurrentDiscovery:
    """Concurrent calls must not share deduplication state."""

    def test_parallel_calls_are_independent(self, service):
        """Each thread sees the full result set."""
        barrier = threading.Barrier(8)
        results: list[list[type]] = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            types = [type(r) for r in service.discover(Formatter, PRIMARY, use_secondary=True)]
            with lock:
                results.append(types)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r == [FormatterA, FormatterB, FormatterC] for r in results)

    def test_interleaved_iteration_is_independent(self, service):
        """Two live iterators in one thread do not affect each other."""
        first = service.discover(Formatter, PRIMARY, use_secondary=True)
        second = service.discover(Formatter, PRIMARY, use_secondary=True)

        a1 = next(first)
        a2 = next(second)
        rest1 = list(first)
        rest2 = list(second)

        assert type(a1) is type(a2) is FormatterA
        assert [type(r) for r in rest1] == [FormatterB, FormatterC]
        assert [type(r) for r in rest2] == [FormatterB, FormatterC]
