# exportify/cli.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Command line interface.

    exportify evaluate usage.json --cwd ../app --main-repo .
    exportify fix usage.json [PACKAGE_NAME] --dry-run
    exportify fix usage.json --detect-structure
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from . import __version__
from .commands.evaluate import EvaluateOptions, evaluate_usage
from .commands.fix import FixOptions, fix_exports
from .config import ExportifyConfig

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CliContext:
    verbose: bool
    config_path: Optional[Path]

    def __init__(self, verbose: bool = False, config_path: Optional[Path] = None):
        self.verbose = verbose
        self.config_path = config_path

    def load_config(self, cwd: Path) -> ExportifyConfig:
        return ExportifyConfig.load(self.config_path, cwd)


def _fail(error: Exception) -> NoReturn:
    logger.debug("Command failed", exc_info=error)
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="exportify")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML configuration file (default: exportify.yaml in --cwd)",
)
@click.pass_context
def cli(ctx, verbose, config_path):
    """Infer package.json exports maps from how packages are imported."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )
    ctx.obj = CliContext(verbose=verbose, config_path=config_path)


@cli.command()
@click.argument("usage_file", type=click.Path(path_type=Path))
@click.option(
    "--cwd",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path.cwd,
    help="Working directory to scan",
)
@click.option(
    "--main-repo",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Main repository directory (where packages are defined)",
)
@click.option("--private-only", is_flag=True, help='Only include packages marked "private": true')
@click.pass_obj
def evaluate(co: CliContext, usage_file, cwd, main_repo, private_only):
    """Scan a repo for imports and build/update the usage dictionary"""
    try:
        config = co.load_config(cwd)
        options = EvaluateOptions(main_repo=main_repo, private_only=private_only)
        report = asyncio.run(evaluate_usage(cwd, usage_file, options, config))
    except Exception as e:
        _fail(e)

    if report.failed_files:
        click.echo(f"{report.failed_files} files could not be analyzed", err=True)
    click.echo(f"Usage data updated in: {usage_file}")


@cli.command()
@click.argument("usage_file", type=click.Path(path_type=Path))
@click.argument("package_name", required=False)
@click.option(
    "--cwd",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path.cwd,
    help="Working directory containing packages",
)
@click.option("--dry-run", is_flag=True, help="Show what would be generated without writing files")
@click.option(
    "--detect-structure",
    is_flag=True,
    help="Use the build and source directories found in each package",
)
@click.pass_obj
def fix(co: CliContext, usage_file, package_name, cwd, dry_run, detect_structure):
    """Generate exports maps for packages using the usage dictionary"""
    try:
        config = co.load_config(cwd)
        options = FixOptions(
            dry_run=dry_run, package_name=package_name, detect_structure=detect_structure
        )
        report = asyncio.run(fix_exports(cwd, usage_file, options, config))
    except Exception as e:
        _fail(e)

    for result in report.results:
        if dry_run:
            click.echo(f"\n--- {result.name} ---")
            click.echo(json.dumps({"exports": result.exports_map}, indent=2, ensure_ascii=False))
        elif result.updated:
            click.echo(f"Updated exports for {result.name}: {len(result.exports_map)} entries")
        else:
            click.echo(f"No changes needed for {result.name}: exports are already up to date")

    click.echo(f"Processed exports for {report.processed} packages")
    if not dry_run:
        click.echo("Exports maps generated successfully")


def main():
    cli()


if __name__ == "__main__":
    main()
