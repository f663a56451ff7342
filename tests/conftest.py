"""Shared fixtures for service hangar tests."""

from pathlib import Path
import uuid

import pytest

from service_hangar.api import reset_runtime
from service_hangar.domain.contracts.diagnostics import IDiagnosticsSink
from service_hangar.infrastructure.event_bus import reset_event_bus
from service_hangar.infrastructure.resolvers.static_table import get_static_registry


class RecordingSink(IDiagnosticsSink):
    """Diagnostics sink remembering every report."""

    def __init__(self):
        self.warnings: list[tuple[type, BaseException]] = []
        self.errors: list[tuple[type, BaseException]] = []

    def warn(self, service_type, cause):
        self.warnings.append((service_type, cause))

    def error(self, service_type, cause):
        self.errors.append((service_type, cause))


@pytest.fixture
def sink():
    """Create a recording diagnostics sink."""
    return RecordingSink()


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset process-wide singletons before and after each test."""
    reset_runtime()
    reset_event_bus()
    get_static_registry().clear()
    yield
    reset_runtime()
    reset_event_bus()
    get_static_registry().clear()


def write_distribution(
    root: Path,
    name: str,
    entry_points: dict[str, dict[str, str]],
    modules: dict[str, str] | None = None,
) -> Path:
    """Write a fake installed distribution under an import root.

    Args:
        root: Import root (site-packages like directory).
        name: Distribution name.
        entry_points: Mapping of group -> {entry name: "module:attr"}.
        modules: Optional mapping of module name -> source to write next to it.

    Returns:
        Path of the .dist-info directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    dist_info = root / f"{name.replace('-', '_')}-1.0.dist-info"
    dist_info.mkdir()
    (dist_info / "METADATA").write_text(f"Metadata-Version: 2.1\nName: {name}\nVersion: 1.0\n")

    lines: list[str] = []
    for group, entries in entry_points.items():
        lines.append(f"[{group}]")
        lines.extend(f"{entry} = {target}" for entry, target in entries.items())
        lines.append("")
    (dist_info / "entry_points.txt").write_text("\n".join(lines))

    for module_name, source in (modules or {}).items():
        (root / f"{module_name}.py").write_text(source)

    return dist_info


@pytest.fixture
def unique_name():
    """Unique suffix for module names written during a test."""
    return uuid.uuid4().hex[:8]


@pytest.fixture
def make_distribution():
    """Return the fake distribution writer."""
    return write_distribution
