"""Entry point registry resolver.

Providers are declared as entry points of installed distributions, in
the group named after the service type:

    [project.entry-points."myapp.formatters.Formatter"]
    json = "myapp_json.formatter:JsonFormatter"

A context's registry is the set of distributions found under its import
roots. Distributions appear in import root order, entry points in the
order their distribution declares them.
"""

from __future__ import annotations

from functools import partial
from importlib import metadata
import re
from typing import Any, TypeVar

from ...domain.contracts.registry_resolver import IRegistryResolver
from ...domain.exceptions import RegistryLoadError
from ...domain.value_objects import LoaderContext, ProviderHandle, service_group, service_name
from ...logging_config import get_logger

T = TypeVar("T")

logger = get_logger(__name__)

# Failures reading distribution metadata (unreadable files, malformed entry_points.txt).
_METADATA_ERRORS: tuple[type[Exception], ...] = (OSError, ValueError, UnicodeDecodeError, TypeError, KeyError)


def _normalize_name(name: str) -> str:
    return re.sub(r"[-_.]+", "-", name).lower()


def _instantiate(entry_point: metadata.EntryPoint) -> Any:
    target = entry_point.load()
    if not callable(target):
        raise TypeError(f"entry point target {entry_point.value!r} is not callable")
    return target()


class EntryPointRegistryResolver(IRegistryResolver):
    """Locates providers through installed distribution entry points.

    Named contexts have no installed distributions and resolve to an
    empty registry.
    """

    def resolve(self, service_type: type[T], context: LoaderContext) -> list[ProviderHandle[T]]:
        if context.is_named:
            return []

        group = service_group(service_type)
        handles: list[ProviderHandle[T]] = []
        seen_distributions: set[str] = set()

        try:
            for dist in metadata.distributions(path=list(context.roots)):
                dist_name = dist.metadata.get("Name") or ""
                normalized = _normalize_name(dist_name)
                # first distribution of a given name shadows later ones, like the import system
                if normalized:
                    if normalized in seen_distributions:
                        continue
                    seen_distributions.add(normalized)

                for entry_point in dist.entry_points:
                    if entry_point.group != group:
                        continue
                    handles.append(
                        ProviderHandle(
                            service_type=service_type,
                            context=context,
                            name=entry_point.name,
                            factory=partial(_instantiate, entry_point),
                            origin=dist_name or None,
                            target=entry_point.value,
                        )
                    )
        except _METADATA_ERRORS as e:
            raise RegistryLoadError(
                service_name(service_type),
                str(context),
                f"{type(e).__name__}: {e}",
            ) from e

        logger.debug(
            "entry_point_registry_resolved",
            service=service_name(service_type),
            group=group,
            context=str(context),
            providers=len(handles),
        )
        return handles
