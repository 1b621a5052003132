"""CLI commands for statewalk."""

from __future__ import annotations

import asyncio
import importlib
import logging
from collections.abc import Mapping
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from statewalk import __version__
from statewalk.config import StatewalkSettings, load_settings
from statewalk.core.machine import Machine
from statewalk.driver import check
from statewalk.errors import ConfigValidationError, InvalidMachineError, StatewalkError
from statewalk.generator import generate_walk
from statewalk.reporters.console import ConsoleReporter

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def load_machine(target: str) -> Machine:
    """Resolve ``module:attribute`` to a Machine.

    The attribute may be a Machine or a mapping of state descriptors.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"expected 'module:attribute', got {target!r}", param_hint="TARGET")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name!r}: {e}", param_hint="TARGET") from e

    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise click.BadParameter(
                f"{module_name!r} has no attribute {attr!r}", param_hint="TARGET"
            ) from None

    if isinstance(obj, Machine):
        return obj
    if isinstance(obj, Mapping):
        try:
            return Machine.from_dict(obj)
        except InvalidMachineError as e:
            raise click.BadParameter(str(e), param_hint="TARGET") from e
    raise click.BadParameter(
        f"{target!r} is a {type(obj).__name__}, not a Machine or a mapping",
        param_hint="TARGET",
    )


def _settings_or_exit(console: Console, config: str | None) -> StatewalkSettings:
    try:
        return load_settings(config)
    except (ConfigValidationError, ValidationError) as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise SystemExit(EXIT_ERROR)


def _configure_logging(settings: StatewalkSettings, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.version_option(__version__, prog_name="statewalk")
def cli() -> None:
    """statewalk - random walks, invariant checks and shrinking for state machines."""


@cli.command("check")
@click.argument("target")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Walks to explore (default: from config, 200)")
@click.option("--config", "-c", "config", type=click.Path(exists=True, dir_okay=False), default=None, help="YAML settings file")
@click.option("--no-shrink", is_flag=True, help="Report the first failure without shrinking it")
@click.option("--verbose", "-v", is_flag=True, help="Log every walk and step")
def check_command(target: str, limit: int | None, config: str | None, no_shrink: bool, verbose: bool) -> None:
    """Explore random walks of TARGET (module:attribute) and shrink the first failure."""
    console = Console()
    settings = _settings_or_exit(console, config)
    if no_shrink:
        settings = settings.model_copy(update={"shrink": False})
    _configure_logging(settings, verbose)

    machine = load_machine(target)
    try:
        result = asyncio.run(check(machine, limit, settings=settings))
    except StatewalkError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {escape(str(e))}")
        raise SystemExit(EXIT_ERROR)

    ConsoleReporter(console).report(result)
    raise SystemExit(EXIT_OK if result.success else EXIT_FAILED)


@cli.command("sample")
@click.argument("target")
@click.option("--count", "-n", type=click.IntRange(min=1), default=5, help="Number of walks to print")
@click.option("--length", "-l", type=click.IntRange(min=0), default=None, help="Fixed walk length (default: random)")
@click.option("--config", "-c", "config", type=click.Path(exists=True, dir_okay=False), default=None, help="YAML settings file")
def sample_command(target: str, count: int, length: int | None, config: str | None) -> None:
    """Print COUNT random walks of TARGET without executing them."""
    console = Console()
    settings = _settings_or_exit(console, config)
    machine = load_machine(target)
    try:
        walks = [generate_walk(machine, length, settings=settings) for _ in range(count)]
    except StatewalkError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {escape(str(e))}")
        raise SystemExit(EXIT_ERROR)
    ConsoleReporter(console).report_walks(walks)
