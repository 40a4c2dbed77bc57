import logging
import time
from pathlib import Path
from typing import Optional, Tuple

import click

from emover.cli.reporter import (
    confirm_changes,
    show_cancelled,
    show_changes,
    show_no_changes,
    show_summary,
)
from emover.core.engine.batch_executor import BatchExecutor
from emover.core.engine.transformer import FileTransformer
from emover.core.loader.loader import (
    ConfigError,
    RunMode,
    build_run_config,
    find_config_file,
    load_config_file,
)
from emover.core.scanner.classifier import SymbolClassifier
from emover.core.scanner.enumerator import PathEnumerator
from emover.core.utils.constants import MAX_WORKERS_LIMIT, TOOL_NAME, TOOL_VERSION
from emover.core.utils.logger_setup import LOGGER_NAME, setup_logger
from emover.core.utils.util_methods import format_duration


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.option("--dry-run", "-n", is_flag=True,
              help="Show what would change without writing anything")
@click.option("--exclude", "-e", multiple=True, metavar="PATTERN",
              help="Skip files whose name contains PATTERN (repeatable, e.g. -e .md -e .txt)")
@click.option("--no-gitignore", is_flag=True, help="Don't skip hidden directories")
@click.option("--keep-symbols", is_flag=True,
              help="Keep Unicode symbols such as check marks, stars and warning signs")
@click.option("--workers", "-w", type=click.IntRange(1, MAX_WORKERS_LIMIT),
              help="Number of worker threads")
@click.option("--config", "-c", "config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Config file (default: ./.emover.yaml when present)")
@click.option("--verbose", "-v", count=True,
              help="Verbosity level: -v (progress), -vv (per-file diagnostics)")
@click.version_option(version=TOOL_VERSION, prog_name=TOOL_NAME)
@click.help_option("--help", "-h")
def cli(paths: Tuple[Path, ...], yes: bool, dry_run: bool, exclude: Tuple[str, ...],
        no_gitignore: bool, keep_symbols: bool, workers: Optional[int],
        config_file: Optional[Path], verbose: int):
    """Emoji Remover - Remove emojis from files."""

    logger = setup_logger(verbose)

    try:
        # Step 1: Resolve configuration
        config_path = config_file or find_config_file(Path.cwd())
        try:
            file_config = load_config_file(config_path) if config_path else None
        except ConfigError as e:
            click.echo(f"Invalid configuration: {e}", err=True)
            for error in e.errors:
                click.echo(f"  - {error}", err=True)
            raise click.Abort()

        run_config = build_run_config(
            roots=paths,
            yes=yes,
            dry_run=dry_run,
            exclude=exclude,
            no_gitignore=no_gitignore,
            keep_symbols=keep_symbols,
            max_workers=workers,
            file_config=file_config,
        )
        logger.info(
            "RUN_CONFIG_RESOLVED",
            extra={
                "config_file": str(config_path) if config_path else None,
                "mode": run_config.mode.value,
                "strictness": run_config.strictness.value,
                "max_workers": run_config.max_workers,
            }
        )

        run_start = time.perf_counter()

        # Step 2: Find candidate files
        enumerator = PathEnumerator(run_config.exclude_patterns, run_config.respect_ignore_dirs)
        enumeration = enumerator.enumerate(run_config.roots)

        # Step 3: Detect changes in parallel
        classifier = SymbolClassifier.for_strictness(run_config.strictness)
        executor = BatchExecutor(
            FileTransformer(classifier),
            max_workers=run_config.max_workers,
            logger=logging.getLogger(f"{LOGGER_NAME}.batch"),
        )
        detection = executor.detect(enumeration.candidates)

        if not detection.changes:
            show_no_changes(len(enumeration.candidates))
            return

        # Step 4: Report, confirm and commit
        show_changes(detection.changes, dry_run=run_config.dry_run)

        if run_config.dry_run:
            summary = executor.summarize(enumeration, detection.totals, dry_run=True)
        else:
            if run_config.mode is RunMode.CONFIRM and not confirm_changes():
                show_cancelled()
                return
            totals = executor.commit(detection.changes)
            summary = executor.summarize(enumeration, totals)

        show_summary(summary)
        logger.info(
            "RUN_COMPLETE",
            extra={"duration": format_duration(time.perf_counter() - run_start)}
        )

    except click.Abort:
        raise
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        if verbose >= 2:
            import traceback
            traceback.print_exc()
        raise click.Abort()


if __name__ == "__main__":
    cli()
