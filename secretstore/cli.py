"""
SecretStore Command-Line Interface

Hydrates a KV store from a seed file (the JSON shape a persistence layer
writes) and inspects it.

Author: SecretStore Team
Date: 2026-10-19
"""

import sys
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml

from secretstore import __version__
from secretstore.core.config_manager import ConfigManager, create_store, load_mapping_file
from secretstore.core.logging_config import setup_logging
from secretstore.kv import KVStore, KVStoreError

logger = logging.getLogger("secretstore.cli")


def _load_store(ctx: click.Context, seed: Path) -> KVStore:
    """Build a store from the loaded config and import the seed file into it."""
    store = create_store(ctx.obj["config"])
    try:
        store.import_secrets(load_mapping_file(str(seed)))
    except (ValueError, yaml.YAMLError) as e:
        # pydantic.ValidationError and json.JSONDecodeError are ValueErrors
        click.echo(f"[ERROR] Invalid seed file {seed}: {e}", err=True)
        sys.exit(1)
    return store


def _fail(error: KVStoreError) -> None:
    click.echo(f"[ERROR] {error.error_code}: {error.message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="secretstore")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level (default: WARNING, or the config file's level)",
)
@click.option(
    "--max-versions",
    type=int,
    default=None,
    help="Versions retained per path (overrides configuration)",
)
@click.pass_context
def cli(ctx, config: Optional[Path], log_level: Optional[str], max_versions: Optional[int]):
    """
    SecretStore - versioned in-memory secret store

    Inspect secrets loaded from a seed file.
    """
    ctx.ensure_object(dict)

    overrides: Dict[str, Any] = {}
    if log_level:
        overrides["logging"] = {"level": log_level.upper()}
    elif config is None:
        overrides["logging"] = {"level": "WARNING"}
    if max_versions is not None:
        overrides["store"] = {"max_secret_versions": max_versions}

    try:
        loaded = ConfigManager().load(
            config_file=str(config) if config else None,
            cli_overrides=overrides,
        )
    except (ValueError, yaml.YAMLError) as e:
        click.echo(f"[ERROR] Invalid configuration: {e}", err=True)
        sys.exit(1)

    setup_logging(
        level=loaded.logging.level,
        format_type=loaded.logging.format,
        log_file=loaded.logging.file,
        rotation_size=loaded.logging.rotation_size,
        rotation_count=loaded.logging.rotation_count,
        module_levels=loaded.logging.module_levels,
    )
    ctx.obj["config"] = loaded


@cli.command(name="list")
@click.argument("seed", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def list_paths(ctx, seed: Path):
    """
    List every secret path in SEED.

    Example:
        secretstore list secrets.yaml
    """
    store = _load_store(ctx, seed)
    for path in sorted(store.list()):
        click.echo(path)


@cli.command()
@click.argument("seed", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("path")
@click.option(
    "--version",
    "-v",
    "version",
    default=0,
    type=int,
    help="Version number (0 = current)",
    show_default=True,
)
@click.pass_context
def get(ctx, seed: Path, path: str, version: int):
    """
    Print the values of one version of PATH as JSON.

    Example:
        secretstore get secrets.yaml app/db --version 2
    """
    store = _load_store(ctx, seed)
    try:
        values = store.get(path, version)
    except KVStoreError as e:
        _fail(e)
        return
    click.echo(json.dumps(dict(values), indent=2, sort_keys=True))


@cli.command()
@click.argument("seed", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("path")
@click.pass_context
def metadata(ctx, seed: Path, path: str):
    """
    Print version info and metadata of PATH as JSON.

    Example:
        secretstore metadata secrets.yaml app/db
    """
    store = _load_store(ctx, seed)
    try:
        result = store.get_metadata(path)
    except KVStoreError as e:
        _fail(e)
        return
    click.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))


def main():
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
