"""CLI entry point for nbpublish."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax

from nbpublish.config import NbPublishConfig, load_config
from nbpublish.config.loader import DEFAULT_CONFIG_TEMPLATE
from nbpublish.converter import create_converter
from nbpublish.errors import PublishError, RelocationFailedError
from nbpublish.publisher import Publisher, PublishResult

app = typer.Typer(
    name="nbpublish",
    help="Publish Jupyter notebooks as static-site blog posts.",
)

config_app = typer.Typer(help="Manage nbpublish configuration.")
app.add_typer(config_app, name="config")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Global state
_config: NbPublishConfig | None = None


def _get_config() -> NbPublishConfig:
    if _config is None:
        return load_config()
    return _config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS[level],
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to nbpublish.yaml")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _setup_logging("debug" if verbose else _config.log_level)


def _display_result(result: PublishResult) -> None:
    """Show where the post and assets ended up."""
    assets = result.assets_path or "(no images)"
    if result.pruned_assets:
        assets = "(no images, stale bundle removed)"
    title = "Publish Plan" if result.dry_run else "Conversion complete!"
    verb = "would replace" if result.dry_run else "replaced"
    replaced = [
        name
        for name, flag in (("post", result.overwrote_post), ("assets", result.overwrote_assets))
        if flag
    ]
    rprint(
        Panel(
            f"[dim]Source:[/dim]  {result.source_path}\n"
            f"[dim]Post:[/dim]    {result.post_path}\n"
            f"[dim]Assets:[/dim]  {assets}\n"
            f"[dim]{verb.capitalize()}:[/dim] {', '.join(replaced) or 'nothing'}",
            title=title,
            border_style="yellow" if result.dry_run else "green",
        )
    )


@app.command()
def publish(
    document: str = typer.Argument(..., help="Path to the .ipynb notebook to publish"),
    posts_dir: Annotated[
        str | None, typer.Option("--posts-dir", help="Override posts directory")
    ] = None,
    assets_dir: Annotated[
        str | None, typer.Option("--assets-dir", help="Override assets directory")
    ] = None,
    converter: Annotated[
        str | None,
        typer.Option("--converter", help="Converter backend: cli or library"),
    ] = None,
    dry_run: bool = typer.Option(False, "--dry-run", help="Show destinations without converting"),
) -> None:
    """Convert a notebook to markdown and move it into the site."""
    cfg = _get_config()

    pub_updates = {
        k: v for k, v in (("posts_dir", posts_dir), ("assets_dir", assets_dir)) if v
    }
    pub_cfg = cfg.publish.model_copy(update=pub_updates)
    conv_cfg = cfg.converter
    if converter:
        conv_cfg = conv_cfg.model_copy(update={"backend": converter})

    try:
        conv = create_converter(conv_cfg)
        publisher = Publisher(pub_cfg, conv)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        if dry_run:
            result = publisher.plan(document)
        else:
            rprint(f"[bold]Publishing[/bold] {document} (converter: {conv.name})...")
            result = publisher.publish(document)
    except RelocationFailedError as e:
        if e.partial:
            rprint(f"[red]Partially published:[/red] post moved, but {e}")
        else:
            rprint(f"[red]Relocation failed ({e.artifact}):[/red] {e}")
        raise typer.Exit(e.exit_code)
    except PublishError as e:
        rprint(f"[red]Error ({e.stage}):[/red] {e}")
        raise typer.Exit(e.exit_code)

    _display_result(result)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default nbpublish.yaml in current directory."""
    target = Path("nbpublish.yaml")
    if target.exists() and not force:
        rprint("[yellow]nbpublish.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
