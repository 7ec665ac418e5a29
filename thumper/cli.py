"""Click-based CLI for thumper - sync a local directory to a bunny.net storage zone."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click
from click.shell_completion import get_completion_class
from pydantic import ValidationError
from rich.markup import escape

from thumper import __version__
from thumper.api.purge import purge_url as purge_cache_url
from thumper.api.purge import purge_zone as purge_cache_zone
from thumper.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_LOCKFILE,
    build_sync_config,
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from thumper.errors import ConfigurationError, LockHeld, ThumperError, format_error_chain
from thumper.output import Console, create_console
from thumper.sync.engine import SyncJob

API_KEY_ENV_VAR = "THUMPER_API_KEY"
COMPLETION_SHELLS = ("bash", "zsh", "fish")


def _fail(console: Console, error: BaseException) -> NoReturn:
    """Print an error with its cause chain and exit with status 1."""
    if isinstance(error, ValidationError):
        console.print_error("Invalid options")
        for detail in error.errors():
            loc = " -> ".join(str(part) for part in detail["loc"])
            console.print_cause(f"{loc}: {detail['msg']}")
    else:
        message, *causes = format_error_chain(error)
        console.print_error(message)
        for cause in causes:
            console.print_cause(cause)

    if isinstance(error, LockHeld):
        console.print("[dim]Re-run with --force if no other sync is running.[/dim]")

    sys.exit(1)


def _require_api_key(ctx: click.Context) -> str:
    api_key = ctx.obj["api_key"]
    if not api_key:
        raise ConfigurationError(f"No API key given; use --api-key or set {API_KEY_ENV_VAR}")
    return api_key


def _detect_shell() -> str:
    shell = Path(os.environ.get("SHELL", "")).name
    return shell if shell in COMPLETION_SHELLS else "bash"


@click.group()
@click.version_option(version=__version__, prog_name="thumper")
@click.option(
    "--api-key",
    envvar=API_KEY_ENV_VAR,
    help=f"Storage zone password or account API key (env: {API_KEY_ENV_VAR})",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: ~/.config/thumper/config.yaml)",
)
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(ctx: click.Context, api_key: Optional[str], config_path: Optional[Path], no_color: bool) -> None:
    """thumper - sync a local directory to a bunny.net storage zone.

    Makes a storage zone path an exact mirror of a local directory.
    Unchanged files are detected by SHA-256 checksum and skipped.

    \b
    Example:
        thumper sync ./public my-zone -p /site
    """
    ctx.ensure_object(dict)
    ctx.obj["api_key"] = api_key
    ctx.obj["config_path"] = config_path
    ctx.obj["no_color"] = no_color
    ctx.obj["console"] = create_console(colored=False if no_color else None)


@cli.command()
@click.argument("local_path", type=click.Path(path_type=str))
@click.argument("storage_zone")
@click.option("--endpoint", "-e", default=None, help=f"Storage API endpoint (default: {DEFAULT_ENDPOINT})")
@click.option("--path", "-p", "remote_path", default=None, help="Directory inside the storage zone (default: /)")
@click.option("--dry-run", is_flag=True, help="Show what would change without changing anything")
@click.option("--force", "-f", is_flag=True, help="Sync even if the remote is locked")
@click.option("--lockfile", default=None, help=f"Name of the lock marker (default: {DEFAULT_LOCKFILE})")
@click.option("--ignore", "-i", multiple=True, help="Remote prefix that is never deleted (repeatable)")
@click.option("--verbose", "-v", is_flag=True, help="Print every file outcome")
@click.option("--concurrency", "-c", type=int, default=None, help="Worker threads (default: CPU count)")
@click.option("--html-barrier", is_flag=True, help="Upload every other asset before any HTML file")
@click.pass_context
def sync(
    ctx: click.Context,
    local_path: str,
    storage_zone: str,
    endpoint: Optional[str],
    remote_path: Optional[str],
    dry_run: bool,
    force: bool,
    lockfile: Optional[str],
    ignore: tuple[str, ...],
    verbose: bool,
    concurrency: Optional[int],
    html_barrier: bool,
) -> None:
    """Sync LOCAL_PATH to STORAGE_ZONE.

    New files are uploaded, changed files replaced and files missing
    locally deleted. HTML files are uploaded after all other files.
    Remote files under an --ignore prefix are never deleted.
    """
    console: Console = ctx.obj["console"]

    try:
        file_config = load_config(ctx.obj["config_path"])
        if not ctx.obj["no_color"] and file_config.output.colored is not None:
            console = create_console(colored=file_config.output.colored)

        sync_config = build_sync_config(
            file_config,
            local_path=local_path,
            storage_zone=storage_zone,
            remote_path=remote_path,
            endpoint=endpoint,
            lockfile=lockfile,
            force=force,
            dry_run=dry_run,
            verbose=verbose,
            ignore=list(ignore) or None,
            concurrency=concurrency,
            html_barrier=html_barrier,
        )
        api_key = _require_api_key(ctx)

        job = SyncJob.from_config(api_key, sync_config, console)
        result = job.execute()
    except (ThumperError, ValidationError) as e:
        _fail(console, e)

    console.print_sync_result(result, dry_run=sync_config.dry_run)


@cli.command("purge-url")
@click.argument("url")
@click.pass_context
def purge_url(ctx: click.Context, url: str) -> None:
    """Purge URL from the edge cache.

    A trailing * purges everything below the URL.
    """
    console: Console = ctx.obj["console"]
    try:
        purge_cache_url(_require_api_key(ctx), url)
    except ThumperError as e:
        _fail(console, e)

    console.print_success(f"Purged {url}")


@cli.command("purge-zone")
@click.argument("pullzone", type=int)
@click.option("--cache-tag", "-t", default=None, help="Only purge objects carrying this cache tag")
@click.pass_context
def purge_zone(ctx: click.Context, pullzone: int, cache_tag: Optional[str]) -> None:
    """Purge the edge cache of pull zone PULLZONE."""
    console: Console = ctx.obj["console"]
    try:
        purge_cache_zone(_require_api_key(ctx), pullzone, cache_tag)
    except ThumperError as e:
        _fail(console, e)

    suffix = f" (cache tag {cache_tag})" if cache_tag else ""
    console.print_success(f"Purged pull zone {pullzone}{suffix}")


@cli.command()
@click.option(
    "--shell",
    "-s",
    type=click.Choice(COMPLETION_SHELLS),
    default=None,
    help="Shell to generate completions for (default: from $SHELL)",
)
def completions(shell: Optional[str]) -> None:
    """Print a shell completion script.

    \b
    Example:
        eval "$(thumper completions -s bash)"
    """
    completion_class = get_completion_class(shell or _detect_shell())
    script = completion_class(cli, {}, "thumper", "_THUMPER_COMPLETE").source()
    click.echo(script)


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Configuration file commands.

    \b
    The configuration file provides defaults for sync options:
    endpoint, lockfile, concurrency, ignore, verbose, html_barrier.
    Command-line options always win.
    """
    pass


@config.command("init")
@click.pass_context
def config_init(ctx: click.Context) -> None:
    """Create a default configuration file."""
    console: Console = ctx.obj["console"]
    path, created = ensure_config_exists(ctx.obj["config_path"])

    if created:
        console.print_success(f"Created {path}")
    else:
        console.print_info(f"Configuration already exists: {path}")


@config.command("check")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path), required=False)
@click.pass_context
def config_check(ctx: click.Context, file: Optional[Path]) -> None:
    """Validate a configuration file.

    Checks FILE, or the active configuration file when omitted.
    """
    console: Console = ctx.obj["console"]
    path = file or ctx.obj["config_path"] or get_config_path()
    is_valid, errors = validate_config_file(path)

    if not is_valid:
        console.print_error(f"{path} is invalid")
        for error in errors:
            console.print(f"  [yellow]{escape(error)}[/yellow]")
        sys.exit(1)

    console.print_success(f"{path} is valid")


@config.command("path")
@click.pass_context
def config_path(ctx: click.Context) -> None:
    """Show the active configuration file path."""
    click.echo(str(ctx.obj["config_path"] or get_config_path()))


if __name__ == "__main__":
    cli()
