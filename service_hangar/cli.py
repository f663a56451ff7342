"""Command line interface for inspecting service discovery.

    service-hangar discover service_hangar.builtins:QueueFactory
    service-hangar providers myapp.formatters:Formatter --path ./plugins
"""

from __future__ import annotations

import importlib
from pathlib import Path
import sys
from typing import Annotated, Optional

from rich import box
from rich.console import Console
from rich.table import Table
import typer

from .bootstrap.runtime import create_runtime
from .config import load_config
from .domain.exceptions import ConfigurationError, HangarError
from .domain.value_objects import LoaderContext, service_name
from .infrastructure.context_provider import FixedSecondaryProvider
from .logging_config import setup_logging

app = typer.Typer(
    name="service-hangar",
    help="Discover service providers across loader contexts",
    no_args_is_help=True,
)

console = Console()


def _import_service(reference: str) -> type:
    """Import a service type from "module:Class" or "module.Class"."""
    if ":" in reference:
        module_name, _, attr_path = reference.partition(":")
    else:
        module_name, _, attr_path = reference.rpartition(".")
    if not module_name or not attr_path:
        raise typer.BadParameter(f"expected module:Class, got {reference!r}")

    try:
        target: object = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            target = getattr(target, attr)
    except (ImportError, AttributeError) as e:
        console.print(f"[bold red]Cannot import service {reference}:[/bold red] {e}")
        raise typer.Exit(1) from e

    if not isinstance(target, type):
        console.print(f"[bold red]{reference} is not a class[/bold red]")
        raise typer.Exit(1)
    return target


def _primary_context(paths: list[Path] | None) -> LoaderContext:
    if paths:
        return LoaderContext.from_paths(paths)
    return LoaderContext.default()


def _load_config(config_path: Path | None, quiet: bool):
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(1) from e
    setup_logging(
        level="ERROR" if quiet else config.logging.level,
        json_format=config.logging.json_format,
        log_file=config.logging.file,
    )
    return config


@app.command()
def discover(
    service: Annotated[str, typer.Argument(help="Service type as module:Class")],
    path: Annotated[
        Optional[list[Path]], typer.Option("--path", "-p", help="Import root of the primary context (repeatable)")
    ] = None,
    secondary: Annotated[
        Optional[list[Path]],
        typer.Option("--secondary", "-s", help="Import root of the secondary context (repeatable)"),
    ] = None,
    use_secondary: Annotated[
        bool, typer.Option("--use-secondary", help="Also search the ambient secondary context")
    ] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Suppress failure diagnostics")] = False,
    config_path: Annotated[Optional[Path], typer.Option("--config", "-c", help="Configuration file")] = None,
) -> None:
    """Instantiate and list every provider of SERVICE."""
    config = _load_config(config_path, quiet)
    for root in (path or []) + (secondary or []):
        if str(root) not in sys.path:
            sys.path.append(str(root))

    service_type = _import_service(service)

    secondary_provider = FixedSecondaryProvider(LoaderContext.from_paths(secondary)) if secondary else None
    runtime = create_runtime(config, secondary_provider=secondary_provider)

    try:
        providers = list(
            runtime.discovery.discover(
                service_type,
                _primary_context(path),
                use_secondary or bool(secondary) or config.discovery.use_secondary,
                verbose=not quiet and config.discovery.verbose,
            )
        )
    except HangarError as e:
        console.print(f"[bold red]Discovery failed:[/bold red] {e}")
        raise typer.Exit(1) from e

    if not providers:
        console.print(f"No providers found for [bold]{service_name(service_type)}[/bold]")
        return

    table = Table(title=service_name(service_type), box=box.SIMPLE)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Provider", style="bold")
    table.add_column("Module")
    for i, provider in enumerate(providers, start=1):
        cls = type(provider)
        table.add_row(str(i), cls.__qualname__, cls.__module__)
    console.print(table)


@app.command()
def providers(
    service: Annotated[str, typer.Argument(help="Service type as module:Class")],
    path: Annotated[
        Optional[list[Path]], typer.Option("--path", "-p", help="Import root of the context (repeatable)")
    ] = None,
    config_path: Annotated[Optional[Path], typer.Option("--config", "-c", help="Configuration file")] = None,
) -> None:
    """List registry entries of SERVICE without instantiating them."""
    config = _load_config(config_path, quiet=False)
    for root in path or []:
        if str(root) not in sys.path:
            sys.path.append(str(root))

    service_type = _import_service(service)
    runtime = create_runtime(config)
    context = _primary_context(path)

    try:
        handles = list(runtime.resolver.resolve(service_type, context))
    except HangarError as e:
        console.print(f"[bold red]Registry unavailable:[/bold red] {e}")
        raise typer.Exit(1) from e

    if not handles:
        console.print(f"No registry entries for [bold]{service_name(service_type)}[/bold]")
        return

    table = Table(title=service_name(service_type), box=box.SIMPLE)
    table.add_column("Name", style="bold")
    table.add_column("Target")
    table.add_column("Origin", style="dim")
    for handle in handles:
        table.add_row(handle.name, handle.target or "", handle.origin or "")
    console.print(table)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
