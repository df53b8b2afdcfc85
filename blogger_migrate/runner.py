"""
Main pipeline orchestration for the blog migration.

This module coordinates the entire workflow:
1. Prepare the output directory
2. Parse the Blogger export
3. Keep only post entries
4. Skip posts whose output file already exists
5. Rewrite each remaining post body via the LLM provider
6. Render and write one Hugo content file per post

Processing is strictly sequential with a pause after every written post.
Any rewrite or write failure aborts the run; files already written stay on
disk and a re-run resumes from the first missing post.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from .config import AppConfig
from .core.entry import PostFile
from .core.filters import is_post
from .core.types import Entry
from .errors import DirectoryError
from .input.atom_parser import load_export
from .llm.providers.base import RewriteProvider
from .llm.providers.factory import create_provider
from .llm.tracing import set_span_output, setup_langfuse, start_span
from .output.renderer import render_document
from .pacing import FixedDelay, Pacer
from .utils.logging import log_event, setup_llm_logger, setup_logging


@dataclass
class MigrationStats:
    """Counters collected during a migration run.

    Attributes:
        published: Published posts written, plus posts already on disk
        drafts: Draft posts written
        existing: Posts skipped because their file already existed
            (also included in ``published``)
        ignored: Export entries that are not posts (comments, pages, settings)
    """
    published: int = 0
    drafts: int = 0
    existing: int = 0
    ignored: int = 0


def prepare_output_dir(output_dir: Path) -> None:
    """Create the output directory if needed.

    Raises:
        DirectoryError: If the path exists but is not a directory, or
            cannot be created
    """
    if output_dir.exists() and not output_dir.is_dir():
        raise DirectoryError(f"{output_dir} exists and is not a directory")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryError(f"Cannot create output directory {output_dir}: {exc}") from exc


def run_pipeline(
    input_path: Path,
    output_dir: Path,
    cfg: AppConfig,
    provider: RewriteProvider | None = None,
    pacer: Pacer | None = None,
    extra: str | None = None,
    show_progress: bool = False,
    console: Console | None = None,
) -> MigrationStats:
    """Run the complete export-to-files migration.

    Args:
        input_path: Path to the Blogger Atom export
        output_dir: Directory that receives one file per post
        cfg: Application configuration
        provider: Rewrite provider; built from ``cfg.provider`` if None
        pacer: Pause policy after each written post; a fixed delay of
            ``cfg.pacing.delay_seconds`` if None
        extra: Metadata appended to the front matter of every post
        show_progress: Whether to display a progress bar
        console: Rich console for the progress bar

    Returns:
        The final counters

    Raises:
        DirectoryError: If the output directory is unusable
        ParseError: If the export cannot be decoded
        RewriteError: If a rewrite call fails (aborts the run)
        WriteError: If a post file cannot be written (aborts the run)
    """
    logger = setup_logging(cfg.logging)
    setup_langfuse(cfg.langfuse)

    prepare_output_dir(output_dir)
    export = load_export(input_path)
    log_event(
        logger,
        "Export parsed",
        event="export_parsed",
        input=str(input_path),
        output=str(output_dir),
        entries=len(export.entries),
    )

    if provider is None:
        provider = create_provider(cfg.provider, cfg.logging, setup_llm_logger(cfg.logging))
    if pacer is None:
        pacer = FixedDelay(cfg.pacing.delay_seconds)

    stats = MigrationStats()
    progress = _build_progress(console or Console()) if show_progress else None
    with start_span(
        "blogger_migrate.run",
        kind="chain",
        input_value={"input_path": str(input_path), "output_dir": str(output_dir)},
        attributes={"entries": len(export.entries)},
    ) as run_span:
        try:
            if progress is not None:
                progress.start()
                task = progress.add_task("Migrating", total=len(export.entries))
            for entry in export.entries:
                _process_entry(entry, output_dir, cfg, provider, pacer, extra, stats, logger)
                if progress is not None:
                    progress.advance(task, 1)
        finally:
            if progress is not None:
                progress.stop()
            _log_summary(logger, stats)
        set_span_output(run_span, vars(stats))

    return stats


def _process_entry(
    entry: Entry,
    output_dir: Path,
    cfg: AppConfig,
    provider: RewriteProvider,
    pacer: Pacer,
    extra: str | None,
    stats: MigrationStats,
    logger: logging.Logger,
) -> None:
    if not is_post(entry):
        stats.ignored += 1
        return
    if extra:
        entry.extra = extra

    post_file = PostFile(output_dir, entry, cfg.output.extension)
    logger.info(entry.title)
    if post_file.exists():
        stats.published += 1
        stats.existing += 1
        log_event(
            logger,
            "Already exists!",
            event="post_exists",
            title=entry.title,
            path=str(post_file.path),
        )
        return

    entry.content = provider.rewrite(entry)
    path = post_file.write(render_document(entry))
    if entry.is_draft:
        stats.drafts += 1
    else:
        stats.published += 1
    log_event(
        logger,
        "Post written",
        event="post_written",
        title=entry.title,
        path=str(path),
        draft=entry.is_draft,
    )
    pacer.wait()


def _log_summary(logger: logging.Logger, stats: MigrationStats) -> None:
    logger.info("Wrote %d published posts to disk.", stats.published)
    logger.info("Wrote %d drafts to disk.", stats.drafts)
    log_event(
        logger,
        "Migration summary",
        event="migration_summary",
        published=stats.published,
        drafts=stats.drafts,
        existing=stats.existing,
        ignored=stats.ignored,
    )


def _build_progress(console: Console) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    )
