"""CLI entry point for object-printing."""

from __future__ import annotations

import builtins
import importlib
import sys
from typing import Any

import click
from babel import UnknownLocaleError

from object_printing.config import DEFAULT_MAX_ELEMENTS, DEFAULT_MAX_NESTING_LEVEL, PrintingConfig
from object_printing.errors import ObjectPrintingError
from object_printing.logging import configure_logging
from object_printing.printer import ObjectPrinter


def _resolve_target(target: str) -> Any:
    """Import ``package.module:attr.path`` and return the attribute."""
    module_name, _, attr_path = target.partition(":")
    obj = importlib.import_module(module_name)
    for name in filter(None, attr_path.split(".")):
        obj = getattr(obj, name)
    return obj


def _resolve_type(name: str) -> type:
    """``float`` -> builtins.float, ``uuid.UUID`` -> uuid.UUID."""
    module_name, _, type_name = name.rpartition(".")
    obj = getattr(builtins, type_name) if not module_name else getattr(importlib.import_module(module_name), type_name)
    if not isinstance(obj, type):
        raise TypeError(f"'{name}' is not a type")
    return obj


def _build_config(max_depth: int, max_elements: int, exclude_types: tuple[str, ...], cultures: tuple[str, ...]) -> PrintingConfig:
    config = PrintingConfig().with_max_nesting_level(max_depth).with_max_elements(max_elements)
    for name in exclude_types:
        config = config.excluding(_resolve_type(name))
    for spec in cultures:
        type_name, sep, locale = spec.partition("=")
        if not sep or not locale:
            raise ValueError(f"culture must look like TYPE=LOCALE, got '{spec}'")
        config = config.with_culture(_resolve_type(type_name), locale)
    return config


@click.command()
@click.argument("target")
@click.option("--max-depth", "-d", "max_depth", type=int, default=DEFAULT_MAX_NESTING_LEVEL, help="Maximum nesting level")
@click.option("--max-elements", "-n", "max_elements", type=int, default=DEFAULT_MAX_ELEMENTS, help="Elements printed per sequence")
@click.option("--exclude-type", "-x", "exclude_types", multiple=True, help="Skip members of this type (e.g. uuid.UUID)")
@click.option("--culture", "-c", "cultures", multiple=True, help="Number locale per type, e.g. float=ru_RU")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", count=True, help="Log to stderr (-vv for debug)")
@click.option("--log-json", "log_json", is_flag=True, help="Emit logs as JSON")
def main(
    target: str,
    max_depth: int,
    max_elements: int,
    exclude_types: tuple[str, ...],
    cultures: tuple[str, ...],
    output: str | None,
    verbose: int,
    log_json: bool,
) -> None:
    """Print the public data of a Python object, given as module:attribute."""
    configure_logging(json_mode=log_json, verbosity=verbose)

    try:
        obj = _resolve_target(target)
    except (ImportError, AttributeError) as e:
        click.echo(f"error: cannot load '{target}': {e}", err=True)
        sys.exit(1)

    try:
        config = _build_config(max_depth, max_elements, exclude_types, cultures)
    except (ImportError, AttributeError, TypeError, ValueError, UnknownLocaleError) as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    try:
        rendered = ObjectPrinter(config).print_to_string(obj)
    except ObjectPrintingError as e:
        click.echo(f"render error:\n{e}", err=True)
        sys.exit(1)

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
