"""Ambient secondary context providers.

The override installed by use_secondary_context() is held in a
ContextVar, so it is scoped to the current thread or asyncio task.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Iterator

from ..domain.contracts.context_provider import ISecondaryContextProvider
from ..domain.exceptions import ValidationError
from ..domain.value_objects import LoaderContext

_secondary_override: ContextVar[LoaderContext | None] = ContextVar("service_hangar_secondary_context", default=None)


@contextmanager
def use_secondary_context(context: LoaderContext) -> Iterator[LoaderContext]:
    """Install an override of the ambient secondary context.

    Example:
        with use_secondary_context(LoaderContext.from_paths(["plugins"])):
            formatters = list(load_services(Formatter, use_secondary=True))
    """
    if not isinstance(context, LoaderContext):
        raise ValidationError("context must be a LoaderContext", field="context", value=context)
    token = _secondary_override.set(context)
    try:
        yield context
    finally:
        _secondary_override.reset(token)


def get_secondary_override() -> LoaderContext | None:
    """Override active in the current thread or task, if any."""
    return _secondary_override.get()


class ContextVarSecondaryProvider(ISecondaryContextProvider):
    """Returns the active override, else a default context.

    Attributes:
        default_factory: Builds the fallback context on each call so that
            changes to sys.path are picked up.
    """

    def __init__(self, default_factory: Callable[[], LoaderContext] = LoaderContext.default):
        self._default_factory = default_factory

    def current_secondary_context(self) -> LoaderContext:
        override = _secondary_override.get()
        if override is not None:
            return override
        return self._default_factory()


class FixedSecondaryProvider(ISecondaryContextProvider):
    """Always returns the same context."""

    def __init__(self, context: LoaderContext):
        self._context = context

    def current_secondary_context(self) -> LoaderContext:
        return self._context
