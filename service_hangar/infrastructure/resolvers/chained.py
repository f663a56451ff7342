"""Resolver concatenating several registries."""

from __future__ import annotations

from typing import Iterable, TypeVar

from ...domain.contracts.registry_resolver import IRegistryResolver
from ...domain.value_objects import LoaderContext, ProviderHandle

T = TypeVar("T")


class ChainedRegistryResolver(IRegistryResolver):
    """Lists the entries of each wrapped resolver in turn.

    A failure in any wrapped resolver fails the whole context.
    """

    def __init__(self, resolvers: Iterable[IRegistryResolver]):
        self._resolvers = tuple(resolvers)

    @property
    def resolvers(self) -> tuple[IRegistryResolver, ...]:
        return self._resolvers

    def resolve(self, service_type: type[T], context: LoaderContext) -> list[ProviderHandle[T]]:
        handles: list[ProviderHandle[T]] = []
        for resolver in self._resolvers:
            handles.extend(resolver.resolve(service_type, context))
        return handles
