from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from .config import DEFAULT_CONFIG_FILE, Settings, build_settings, token_from_env
from .errors import ConfigurationError, GitHubAPIError, PersistenceReadError
from .github import GitHubClient
from .runner import ActivityUpdater
from .vcs import GitRepo
from .window import decode_window

app = typer.Typer(add_completion=False, help="readme-activity - keep a README's recent activity section current")
window_app = typer.Typer(help="Inspect the stored event window")
app.add_typer(window_app, name="window")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _workspace(ctx: typer.Context) -> Path:
    ctx.ensure_object(dict)
    return ctx.obj.get("workspace") or Path.cwd()


def _settings(ctx: typer.Context) -> Settings:
    ctx.ensure_object(dict)
    config = ctx.obj.get("config")
    if config is None:
        config = _workspace(ctx) / DEFAULT_CONFIG_FILE
    try:
        return build_settings(ctx.obj.get("overrides", {}), config_path=config, token=token_from_env())
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _client(settings: Settings) -> GitHubClient:
    return GitHubClient(settings.token)


def _updater(ctx: typer.Context, settings: Settings, client: GitHubClient) -> ActivityUpdater:
    workspace = _workspace(ctx)
    return ActivityUpdater(settings, client, GitRepo(workspace), workspace)


@app.callback()
def cli(
    ctx: typer.Context,
    workspace: Path = typer.Option(Path.cwd(), help="Repository checkout holding the README"),
    config: Optional[Path] = typer.Option(None, help=f"YAML settings file (default: {DEFAULT_CONFIG_FILE})"),
    username: Optional[str] = typer.Option(
        None, "--username", envvar=["GH_USERNAME", "INPUT_GH_USERNAME"], help="Account whose activity is listed"
    ),
    html_encoding: Optional[str] = typer.Option(
        None, "--html-encoding", envvar=["HTML_ENCODING", "INPUT_HTML_ENCODING"], help="'false' for markdown links"
    ),
    commit_message: Optional[str] = typer.Option(
        None, "--commit-message", envvar=["COMMIT_MSG", "INPUT_COMMIT_MSG"], help="Commit message"
    ),
    max_lines: Optional[int] = typer.Option(
        None, "--max-lines", envvar=["MAX_LINES", "INPUT_MAX_LINES"], help="Number of entries to show"
    ),
    readme: Optional[Path] = typer.Option(None, "--readme", help="README path relative to the workspace"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    _configure_logging(verbose)
    overrides: Dict[str, Any] = {
        "username": username,
        "html_encoding": html_encoding,
        "commit_message": commit_message,
        "max_lines": max_lines,
        "readme_path": readme,
    }
    ctx.obj = {"workspace": workspace, "config": config, "overrides": overrides}


@app.command()
def run(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the new list without writing or committing"),
) -> None:
    """Update the README activity section and push it."""
    settings = _settings(ctx)
    with _client(settings) as client:
        result = _updater(ctx, settings, client).run(dry_run=dry_run)
    if dry_run:
        for line in result.entries:
            typer.echo(line)
    typer.echo(result.message, err=not result.ok)
    raise typer.Exit(result.exit_code)


@app.command()
def preview(ctx: typer.Context) -> None:
    """Print the numbered list a run would write."""
    settings = _settings(ctx)
    with _client(settings) as client:
        updater = _updater(ctx, settings, client)
        try:
            window = updater.collect()
        except GitHubAPIError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(1)
    entries = updater.formatter.format_events(window.selected)
    if not entries:
        typer.echo("(no supported activity)")
        return
    for line in updater.formatter.render_list(entries):
        typer.echo(line)


@window_app.command("show")
def window_show(ctx: typer.Context) -> None:
    settings = _settings(ctx)
    with _client(settings) as client:
        try:
            raw = client.read_variable(settings.username, settings.username, settings.variable_name)
        except GitHubAPIError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(1)
    try:
        events = decode_window(raw)
    except PersistenceReadError as exc:
        typer.echo(f"No usable stored window: {exc}")
        return
    typer.echo(f"{settings.variable_name} ({len(events)} events):")
    for event in events:
        typer.echo(f"- {event.id} | {event.type} | {event.repo}")


@window_app.command("reset")
def window_reset(ctx: typer.Context) -> None:
    settings = _settings(ctx)
    with _client(settings) as client:
        try:
            client.write_variable(settings.username, settings.username, settings.variable_name, "[]")
        except GitHubAPIError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(1)
    typer.echo(f"Cleared {settings.variable_name}")


def main() -> None:
    app()
