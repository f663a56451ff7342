"""Static registration table resolver.

Providers are registered explicitly at startup instead of being found by
scanning metadata:

    registry = StaticRegistryResolver()
    registry.register(Formatter, JsonFormatter)
    registry.register(Formatter, lambda: XmlFormatter(indent=2), context=plugins)

Registrations without a context are shared: they are visible from every
context and are listed before the context's own registrations.
"""

from __future__ import annotations

from dataclasses import dataclass
import threading
from typing import Any, Callable, TypeVar

from ...domain.contracts.registry_resolver import IRegistryResolver
from ...domain.exceptions import ValidationError
from ...domain.value_objects import LoaderContext, ProviderHandle

T = TypeVar("T")

_SHARED = ("shared",)


@dataclass(frozen=True)
class _Registration:
    name: str
    factory: Callable[[], Any]
    target: str | None


def _describe(factory: Callable[[], Any]) -> str | None:
    module = getattr(factory, "__module__", None)
    qualname = getattr(factory, "__qualname__", None)
    if module and qualname:
        return f"{module}:{qualname}"
    return None


class StaticRegistryResolver(IRegistryResolver):
    """Resolver backed by an explicit, thread-safe registration table."""

    def __init__(self):
        self._table: dict[tuple[str, ...], dict[type, list[_Registration]]] = {}
        self._lock = threading.Lock()

    def register(
        self,
        service_type: type,
        factory: Callable[[], Any],
        *,
        context: LoaderContext | None = None,
        name: str | None = None,
    ) -> None:
        """Register a provider factory for a service.

        Args:
            service_type: The service contract.
            factory: Zero-argument callable (usually the provider class).
            context: Scope of the registration; None shares it with all contexts.
            name: Entry name, defaults to the factory's name.

        Raises:
            ValidationError: If service_type is not a class or factory is not callable.
        """
        if not isinstance(service_type, type):
            raise ValidationError("service_type must be a class", field="service_type", value=service_type)
        if not callable(factory):
            raise ValidationError("factory must be callable", field="factory", value=factory)
        if context is not None and not isinstance(context, LoaderContext):
            raise ValidationError("context must be a LoaderContext", field="context", value=context)

        key = context.key if context is not None else _SHARED
        entry = _Registration(
            name=name or getattr(factory, "__name__", repr(factory)),
            factory=factory,
            target=_describe(factory),
        )
        with self._lock:
            self._table.setdefault(key, {}).setdefault(service_type, []).append(entry)

    def unregister(self, service_type: type, *, context: LoaderContext | None = None) -> int:
        """Remove every registration of a service in a scope.

        Returns:
            Number of registrations removed.
        """
        key = context.key if context is not None else _SHARED
        with self._lock:
            removed = self._table.get(key, {}).pop(service_type, [])
        return len(removed)

    def clear(self) -> None:
        """Drop all registrations (mainly for testing)."""
        with self._lock:
            self._table.clear()

    def resolve(self, service_type: type[T], context: LoaderContext) -> list[ProviderHandle[T]]:
        with self._lock:
            entries = list(self._table.get(_SHARED, {}).get(service_type, ()))
            if context.key != _SHARED:
                entries.extend(self._table.get(context.key, {}).get(service_type, ()))

        return [
            ProviderHandle(
                service_type=service_type,
                context=context,
                name=entry.name,
                factory=entry.factory,
                origin="static",
                target=entry.target,
            )
            for entry in entries
        ]


# Process-wide table used by provides() and the default runtime
_default_registry: StaticRegistryResolver | None = None
_default_registry_lock = threading.Lock()


def get_static_registry() -> StaticRegistryResolver:
    """Get the process-wide static registration table."""
    global _default_registry

    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = StaticRegistryResolver()

    return _default_registry


def provides(
    service_type: type,
    *,
    context: LoaderContext | None = None,
    name: str | None = None,
    registry: StaticRegistryResolver | None = None,
) -> Callable[[type], type]:
    """Class decorator registering the class as a provider of service_type.

    Example:
        @provides(Formatter)
        class JsonFormatter(Formatter):
            ...
    """

    def decorator(cls: type) -> type:
        (registry or get_static_registry()).register(service_type, cls, context=context, name=name)
        return cls

    return decorator
