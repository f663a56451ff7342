"""Value objects for service discovery.

Contains:
- LoaderContext - identity of a scope from which providers are located
- ProviderHandle - deferred factory for one registered provider
- service_name / service_group - naming helpers for service types
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
import sys
from types import ModuleType
from typing import Any, Callable, Generic, Iterable, TypeVar

from .exceptions import ProviderLoadError, ValidationError

T = TypeVar("T")

# Attribute a service type may define to override its entry point group.
SERVICE_GROUP_ATTRIBUTE = "__service_group__"


def service_name(service_type: type) -> str:
    """Fully qualified, human readable name of a service type."""
    return f"{service_type.__module__}.{service_type.__qualname__}"


def service_group(service_type: type) -> str:
    """Registry key (entry point group) for a service type."""
    group = getattr(service_type, SERVICE_GROUP_ATTRIBUTE, None)
    if group:
        return str(group)
    return service_name(service_type)


def _normalize_root(path: Any) -> str:
    raw = os.fspath(path) or os.curdir
    return os.path.realpath(raw)


def _import_root(location: str, module_name: str) -> str:
    """Directory a module's top-level package would be imported from."""
    levels = module_name.count(".") + 1
    if os.path.basename(location).startswith("__init__."):
        levels += 1
    root = location
    for _ in range(levels):
        root = os.path.dirname(root)
    return root


@dataclass(frozen=True)
class LoaderContext:
    """Scope against which implementations of a service are located.

    Contexts compare by identity key, not by object: two handles built from
    different spellings of the same import roots are equal. Path contexts
    key on resolved import roots, named contexts on their scope name.

    Attributes:
        key: Identity of the scope.
        label: Display name, ignored for equality.
    """

    key: tuple[str, ...]
    label: str = field(default="", compare=False)

    @classmethod
    def from_paths(cls, paths: Iterable[Any], label: str | None = None) -> LoaderContext:
        """Create a context over a sequence of import roots.

        Duplicate roots are collapsed, keeping the first occurrence.
        """
        if isinstance(paths, (str, bytes, os.PathLike)):
            raise ValidationError("paths must be an iterable of paths, not a single path", field="paths", value=paths)
        try:
            roots = tuple(dict.fromkeys(_normalize_root(p) for p in paths))
        except TypeError as e:
            raise ValidationError(f"Invalid import root: {e}", field="paths", value=paths) from e
        return cls(key=("paths",) + roots, label=label or os.pathsep.join(roots))

    @classmethod
    def named(cls, name: str) -> LoaderContext:
        """Create a logical scope identified only by its name."""
        if not name or not isinstance(name, str):
            raise ValidationError("Context name must be a non-empty string", field="name", value=name)
        return cls(key=("scope", name), label=name)

    @classmethod
    def default(cls) -> LoaderContext:
        """Context covering the interpreter's current import path."""
        return cls.from_paths(sys.path, label="sys.path")

    @classmethod
    def of_module(cls, module: ModuleType | str) -> LoaderContext:
        """Context seen by code in a module.

        Imports are global, so a module importable from sys.path sees the
        whole of sys.path and gets a context equal to default(). A module
        loaded from elsewhere sees its own import root first, then sys.path.
        Built-in and namespace modules fall back to default().
        """
        if isinstance(module, str):
            module = sys.modules[module]
        filename = getattr(module, "__file__", None)
        if not filename:
            return cls.default()

        location = os.path.realpath(filename)
        for entry in sys.path:
            root = _normalize_root(entry)
            if location.startswith(root.rstrip(os.sep) + os.sep):
                return cls.from_paths(sys.path, label=f"{module.__name__} (sys.path)")

        root = _import_root(location, module.__name__)
        return cls.from_paths([root, *sys.path], label=f"{module.__name__} ({root}+sys.path)")

    @property
    def roots(self) -> tuple[str, ...]:
        """Import roots of a path context (empty for named scopes)."""
        if self.key and self.key[0] == "paths":
            return self.key[1:]
        return ()

    @property
    def is_named(self) -> bool:
        return bool(self.key) and self.key[0] == "scope"

    def is_same(self, other: object) -> bool:
        """Identity comparison against another context handle."""
        return isinstance(other, LoaderContext) and self.key == other.key

    def __str__(self) -> str:
        return self.label or ":".join(self.key)


@dataclass(frozen=True)
class ProviderHandle(Generic[T]):
    """Deferred factory for one registered provider of a service.

    Calling get() constructs the provider. Every failure during
    construction, including a result of the wrong type, is raised as
    ProviderLoadError so callers handle a single exception type.

    Attributes:
        service_type: The service contract the provider implements.
        context: Context the provider was located in.
        name: Registry entry name.
        factory: Zero-argument callable producing the instance.
        origin: Where the entry was declared (e.g. distribution name).
        target: Textual reference to the implementation, if known.
    """

    service_type: type[T]
    context: LoaderContext
    name: str
    factory: Callable[[], Any] = field(compare=False, repr=False)
    origin: str | None = None
    target: str | None = None

    def get(self) -> T:
        """Instantiate the provider."""
        service = service_name(self.service_type)
        try:
            instance = self.factory()
        except Exception as e:
            raise ProviderLoadError(service, self.name, f"{type(e).__name__}: {e}") from e

        try:
            matches = isinstance(instance, self.service_type)
        except TypeError as e:
            # non runtime-checkable Protocol
            raise ProviderLoadError(service, self.name, str(e)) from e
        if not matches:
            raise ProviderLoadError(
                service,
                self.name,
                f"{type(instance).__module__}.{type(instance).__qualname__} is not a subtype",
            )
        return instance
