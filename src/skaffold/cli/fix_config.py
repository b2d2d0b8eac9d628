"""CLI for inspecting and upgrading Skaffold configuration files.

This script provides command-line access to the SchemaManager functionality
for upgrading skaffold.yaml files to a newer schema version.
"""

import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from skaffold.schema import Lineage, SchemaError, SchemaManager
from skaffold.settings import load_settings
from skaffold.utils.structlog_configurator import configure_structlog, get_logger

logger = get_logger(__name__)


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Skaffold configuration schema tools.

    Examples:
      # Print skaffold.yaml upgraded to the latest version of its lineage
      skaffold-schema fix skaffold.yaml

      # Upgrade in place to a specific version, keeping skaffold.yaml.backup
      skaffold-schema fix skaffold.yaml --version skaffold/v1beta6 --overwrite

      # Check that every document can be upgraded
      skaffold-schema check skaffold.yaml

      # List known versions
      skaffold-schema versions
    """
    try:
        settings = load_settings()
    except ValueError as e:
        _fail(f"Invalid settings: {e}")
    if verbose:
        settings.logging.level = "DEBUG"
    configure_structlog(settings)

    ctx.ensure_object(dict)
    ctx.obj["manager"] = SchemaManager()


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--version", "target", help="Target apiVersion (default: latest of the lineage)")
@click.option("--overwrite", is_flag=True, help="Write the result back to PATH")
@click.option("--output", type=click.Path(path_type=Path), help="Write the result to a file")
@click.pass_obj
def fix(
    obj: dict[str, Any], path: Path, target: str | None, overwrite: bool, output: Path | None
) -> None:
    """Upgrade a configuration file.

    PATH: skaffold.yaml to upgrade
    """
    manager: SchemaManager = obj["manager"]
    if overwrite and output:
        _fail("--overwrite and --output are mutually exclusive")

    try:
        if target:
            configs = manager.upgrade_to(manager.parse_config(path), target)
        else:
            configs = manager.parse_config_and_upgrade(path)
    except SchemaError as e:
        _fail(str(e))

    if not configs:
        click.echo(click.style(f"Warning: no config documents in {path}", fg="yellow"), err=True)
        return

    logger.info("Config upgraded", path=str(path), documents=len(configs))
    if overwrite:
        manager.save(configs, path)
        click.echo(click.style(f"✓ Upgraded {path} (backup: {path}.backup)", fg="green"))
    elif output:
        manager.save(configs, output, backup=False)
        click.echo(click.style(f"✓ Wrote upgraded config to {output}", fg="green"))
    else:
        click.echo(manager.marshal_all(configs), nl=False)


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--version", "target", help="Target apiVersion (default: latest of the lineage)")
@click.pass_obj
def check(obj: dict[str, Any], path: Path, target: str | None) -> None:
    """Check that a file is a Skaffold config that can be upgraded.

    PATH: skaffold.yaml to check
    """
    manager: SchemaManager = obj["manager"]
    if not manager.is_skaffold_config(path):
        _fail(f"{path} is not a Skaffold config")

    try:
        configs = manager.parse_config(path)
        target = target or manager.get_latest_from_compatibility_check(configs)
        versions = manager.is_compatible_with(configs, target)
    except SchemaError as e:
        _fail(str(e))

    click.echo(
        click.style(
            f"✓ {path}: {len(configs)} document(s) at [{' '.join(versions)}] "
            f"can be upgraded to {target}",
            fg="green",
        )
    )


@cli.command()
@click.pass_obj
def versions(obj: dict[str, Any]) -> None:
    """List known configuration versions, oldest first."""
    registry = obj["manager"].registry
    for lineage in Lineage:
        terminal = registry.terminal_of(lineage)
        click.echo(click.style(f"{lineage} lineage:", bold=True))
        for api_version in registry.all_versions_of(lineage):
            marker = " (latest)" if api_version == terminal else ""
            click.echo(f"  {api_version}{marker}")


def main() -> None:
    """Entry point for the configuration schema CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
