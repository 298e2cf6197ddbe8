"""CLI commands for the package documentation extractor.

Provides the Click-based command group 'pkgdoc' with subcommands for
printing the documentation model of a package and listing its
sub-packages.
"""

import json
import logging
from typing import Optional

import click

from pkgdoc import __version__
from pkgdoc.documenter import Documenter
from pkgdoc.errors import PackageLoadError, SubPackageDiscoveryError
from pkgdoc.output.template_manager import FORMATS, TemplateManager
from pkgdoc.utils.config import AppConfig, load_config
from pkgdoc.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="pkgdoc")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a YAML config file.",
)
@click.option("-v", "--verbose", count=True, help="Log more detail (-vv for debug output).")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: int) -> None:
    """Package documentation extractor: document a Python package from source."""
    config = load_config(config_path)
    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
        verbose=verbose,
    )
    ctx.obj = config


@cli.command()
@click.argument("import_path")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", *FORMATS]),
    default="text",
    help="Output format.",
)
@click.option(
    "--all",
    "include_private",
    is_flag=True,
    help="Include names starting with an underscore.",
)
@click.pass_obj
def show(config: AppConfig, import_path: str, output_format: str, include_private: bool) -> None:
    """Print the documentation of a package.

    A package whose sub-packages cannot be listed is still printed,
    with a warning on stderr.
    """
    if include_private:
        config.loader.include_private = True
    logger.debug("Documenting %s as %s", import_path, output_format)

    try:
        package = Documenter(config).document(import_path)
    except SubPackageDiscoveryError as e:
        click.echo(f"Warning: {e}", err=True)
        package = e.package
    except PackageLoadError as e:
        raise click.ClickException(str(e)) from e

    if output_format == "json":
        click.echo(json.dumps(package.to_dict(), indent=2))
    else:
        click.echo(TemplateManager().render_package(package, output_format), nl=False)


@cli.command()
@click.argument("import_path")
@click.pass_obj
def subpackages(config: AppConfig, import_path: str) -> None:
    """List the sub-packages of a package, one per line."""
    documenter = Documenter(config)
    try:
        names = documenter.discoverer.discover(import_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"cannot list sub-packages of {import_path}: {e}") from e

    for name in names:
        click.echo(name)
