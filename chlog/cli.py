"""CLI entrypoint for chlog."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import DEFAULT_CONFIG_FILE, Config, load_config
from .errors import ConfigError
from .models import UNRELEASED

DEFAULT_CHANGELOG_FILE = "CHANGELOG.yaml"


def _configure_logging(verbose: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _config(ctx: click.Context) -> Config:
    try:
        return load_config(ctx.obj["config"])
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(__version__, prog_name="chlog")
@click.option(
    "--file",
    "-f",
    "changelog_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CHANGELOG_FILE,
    show_default=True,
    help="Path to CHANGELOG.yaml",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    help="Path to config file",
)
@click.option("--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, changelog_file: Path, config_file: Path, verbose: bool) -> None:
    """chlog - YAML-first changelog management.

    Keep CHANGELOG.yaml as the source of truth and generate CHANGELOG.md from it.
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["file"] = changelog_file
    ctx.obj["config"] = config_file


@cli.command()
@click.option("--project", default=None, help="Project name (default: prompt, suggesting the directory name)")
@click.pass_context
def init(ctx: click.Context, project: str | None) -> None:
    """Initialize a new CHANGELOG.yaml and .chlog.yaml."""
    from .commands.edit import run_init

    if project is None:
        project = click.prompt("Project name", default=Path.cwd().name)

    sys.exit(run_init(ctx.obj["file"], ctx.obj["config"], project))


@cli.command()
@click.argument("category")
@click.argument("entries", nargs=-1, required=True)
@click.option("--version", "-v", "version", default=UNRELEASED, show_default=True, help="Target version")
@click.option("--internal", "-i", is_flag=True, help="Add as internal entry")
@click.pass_context
def add(ctx: click.Context, category: str, entries: tuple[str, ...], version: str, internal: bool) -> None:
    """Add one or more entries to a category.

    Examples:

        chlog add added "Support dark mode"

        chlog add fixed --version 1.2.0 "Fix login timeout"

        chlog add changed --internal "Refactor auth middleware"
    """
    from .commands.edit import run_add

    sys.exit(run_add(ctx.obj["file"], _config(ctx), category, list(entries), version=version, internal=internal))


@cli.command()
@click.argument("entry")
@click.option("--category", "-c", required=True, help="Changelog category (e.g. added, fixed, changed)")
@click.option("--version", "-v", "version", default=UNRELEASED, show_default=True, help="Target version")
@click.option("--internal", "-i", is_flag=True, help="Remove from internal entries")
@click.option("--match", "-m", is_flag=True, help="Use case-insensitive substring matching")
@click.pass_context
def remove(ctx: click.Context, entry: str, category: str, version: str, internal: bool, match: bool) -> None:
    """Remove a single entry from a category.

    Examples:

        chlog remove -c added "Support dark mode"

        chlog remove -c added --match "dark mode"
    """
    from .commands.edit import run_remove

    sys.exit(
        run_remove(
            ctx.obj["file"],
            _config(ctx),
            entry,
            category=category,
            version=version,
            internal=internal,
            match=match,
        )
    )


@cli.command()
@click.argument("version")
@click.option("--date", "release_date", default=None, help="Release date in YYYY-MM-DD format (default: today)")
@click.pass_context
def release(ctx: click.Context, version: str, release_date: str | None) -> None:
    """Promote unreleased changes to a versioned release."""
    from .commands.edit import run_release

    sys.exit(run_release(ctx.obj["file"], _config(ctx), version, release_date))


@cli.command()
@click.option("--write", is_flag=True, help="Merge into the existing CHANGELOG.yaml")
@click.option("--version", "version", default="", help="Version string (default: unreleased)")
@click.pass_context
def scaffold(ctx: click.Context, write: bool, version: str) -> None:
    """Generate changelog entries from conventional commits since the last tag."""
    from .commands.scaffold_cmd import run_scaffold

    sys.exit(run_scaffold(ctx.obj["file"], _config(ctx), write=write, version=version))


@cli.command()
@click.argument("version", required=False)
@click.option("--last", "-n", type=int, default=0, help="Show the last N entries")
@click.option("--plain", is_flag=True, help="Disable colors")
@click.option("--internal", is_flag=True, help="Include internal entries")
@click.pass_context
def show(ctx: click.Context, version: str | None, last: int, plain: bool, internal: bool) -> None:
    """Display the changelog in the terminal."""
    from .commands.show import run_show

    sys.exit(run_show(ctx.obj["file"], _config(ctx), version, last=last, plain=plain, internal=internal))


@cli.command()
@click.argument("version")
@click.option("--internal", is_flag=True, help="Include internal entries")
@click.pass_context
def extract(ctx: click.Context, version: str, internal: bool) -> None:
    """Print a single version as markdown."""
    from .commands.show import run_extract

    sys.exit(run_extract(ctx.obj["file"], _config(ctx), version, internal=internal))


@cli.command()
@click.option("--internal", is_flag=True, help="Include internal entries")
@click.option("--split", is_flag=True, help="Generate both public and internal changelogs")
@click.pass_context
def sync(ctx: click.Context, internal: bool, split: bool) -> None:
    """Generate CHANGELOG.md from CHANGELOG.yaml."""
    from .commands.sync import run_sync

    sys.exit(run_sync(ctx.obj["file"], _config(ctx), internal=internal, split=split))


@cli.command()
@click.option("--internal", is_flag=True, help="Compare with internal entries included")
@click.option("--split", is_flag=True, help="Verify both public and internal changelogs")
@click.pass_context
def check(ctx: click.Context, internal: bool, split: bool) -> None:
    """Verify CHANGELOG.md matches CHANGELOG.yaml.

    Exit 0 = in sync, 1 = out of sync, 2 = validation error.
    """
    from .commands.sync import run_check

    sys.exit(run_check(ctx.obj["file"], _config(ctx), internal=internal, split=split))


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate the CHANGELOG.yaml schema."""
    from .commands.sync import run_validate

    sys.exit(run_validate(ctx.obj["file"], _config(ctx)))


@cli.command("version")
@click.option("--plain", is_flag=True, help="Plain output without formatting")
def version_cmd(plain: bool) -> None:
    """Display version information."""
    from .commands.version_cmd import run_version

    sys.exit(run_version(plain))


if __name__ == "__main__":
    cli()
