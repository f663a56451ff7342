"""Top-level convenience API.

    from service_hangar import load_services

    for formatter in load_services(Formatter):
        ...

load_services() uses a process-wide runtime built lazily from
configuration and the environment. get_runtime() and set_runtime() are
the single accessor for that default; tests and applications with their
own wiring should call DiscoveryService.discover() directly or install
a runtime with set_runtime().
"""

from __future__ import annotations

import inspect
import threading
from types import ModuleType
from typing import Iterator, Optional, TypeVar, Union

from .bootstrap.runtime import create_runtime, Runtime
from .config import load_config
from .domain.discovery import DiscoveryService
from .domain.exceptions import PreconditionError
from .domain.value_objects import LoaderContext

T = TypeVar("T")

_runtime: Runtime | None = None
_runtime_lock = threading.Lock()


def get_runtime() -> Runtime:
    """Get the process-wide runtime, creating it on first use."""
    global _runtime

    if _runtime is None:
        with _runtime_lock:
            if _runtime is None:
                _runtime = create_runtime(load_config())

    return _runtime


def set_runtime(runtime: Runtime) -> None:
    """Install the process-wide runtime."""
    global _runtime

    with _runtime_lock:
        _runtime = runtime


def reset_runtime() -> None:
    """Drop the process-wide runtime (mainly for testing)."""
    global _runtime

    with _runtime_lock:
        _runtime = None


def get_discovery_service() -> DiscoveryService:
    """Get the discovery service of the process-wide runtime."""
    return get_runtime().discovery


def _caller_context(depth: int) -> LoaderContext:
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            if frame is None:
                break
            frame = frame.f_back
        module = inspect.getmodule(frame) if frame is not None else None
    finally:
        del frame
    if module is None:
        return LoaderContext.default()
    return LoaderContext.of_module(module)


def load_services(
    service_type: type[T],
    context: Union[LoaderContext, ModuleType, None] = None,
    use_secondary: Optional[bool] = None,
    *,
    verbose: Optional[bool] = None,
) -> Iterator[T]:
    """Load every valid provider of a service. Broken providers are ignored.

    Args:
        service_type: The service contract.
        context: Primary context, or a module whose context to use. Defaults
            to the context of the calling module.
        use_secondary: Also search the ambient secondary context. Defaults to
            the configured discovery.use_secondary.
        verbose: Report failures. Defaults to the configured discovery.verbose.

    Returns:
        Single-pass iterator over provider instances.

    Raises:
        PreconditionError: If service_type or context is invalid.
    """
    runtime = get_runtime()

    if context is None:
        primary = _caller_context(1)
    elif isinstance(context, ModuleType):
        primary = LoaderContext.of_module(context)
    elif isinstance(context, LoaderContext):
        primary = context
    else:
        raise PreconditionError("context must be a LoaderContext or a module", field="context", value=context)

    if use_secondary is None:
        use_secondary = runtime.config.discovery.use_secondary
    if verbose is None:
        verbose = runtime.config.discovery.verbose

    return runtime.discovery.discover(service_type, primary, use_secondary, verbose=verbose)
