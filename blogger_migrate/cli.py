"""
Command-line interface for the Blogger to Hugo migration.

Uses Typer to provide a CLI with options for the main configuration
settings. Supports loading .env files for API key configuration.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from .config import load_config
from .errors import MigrationError
from .llm.tracing import flush
from .runner import run_pipeline

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def run(
    input: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Blogger Atom export."),
    output: Path = typer.Argument(..., help="Directory for the migrated posts."),
    extra: str | None = typer.Option(
        None, "--extra", help="Additional metadata to set in every post's front matter."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    provider: str | None = typer.Option(
        None, "--provider", help="Rewrite provider: groq, ollama or gemini."
    ),
    model: str | None = typer.Option(None, "--model", help="Override the provider model."),
    api_key: str | None = typer.Option(
        None, "--api-key", help="Override provider API key (or set it in the environment / .env)."
    ),
    delay: float | None = typer.Option(
        None, "--delay", min=0, help="Seconds to wait after each written post."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    progress: bool = typer.Option(False, "--progress/--no-progress"),
):
    """Migrate a Blogger export into Hugo content files.

    Every post entry is rewritten through the configured LLM provider
    and written to OUTPUT as <slug>.md. Posts whose file already exists
    are skipped, so an interrupted run can simply be repeated.

    Args:
        input: Path to the Blogger Atom export
        output: Directory for the migrated posts
        extra: Front matter line(s) added to every post
        config: Optional path to YAML config file
        provider: Rewrite provider name
        model: Provider model override
        api_key: Override provider API key
        delay: Pause after each written post, in seconds
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        progress: Whether to show a progress bar
    """
    load_dotenv()

    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if provider:
        cfg.provider.name = provider
    if model:
        cfg.provider.model = model
    if api_key:
        cfg.provider.api_key = api_key
    if delay is not None:
        cfg.pacing.delay_seconds = delay
    if log_level:
        cfg.logging.level = log_level

    try:
        stats = run_pipeline(input, output, cfg, extra=extra, show_progress=progress, console=console)
    except (MigrationError, ValueError) as exc:
        console.print(f"[bold red]Migration failed:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
    finally:
        flush()

    console.print(
        f"[bold]Done[/bold]: published={stats.published}, drafts={stats.drafts}, "
        f"already_present={stats.existing}"
    )


if __name__ == "__main__":
    app()
