from typing import Sequence

import click

from emover.core.engine.batch_executor import RunSummary
from emover.core.engine.transformer import FileChange
from emover.core.utils.constants import AFFIRMATIVE_ANSWER, CONFIRM_PROMPT


def show_no_changes(files_scanned: int):
    """Report an empty change set."""
    click.echo(f"No emojis found in {files_scanned} files")


def show_changes(changes: Sequence[FileChange], dry_run: bool = False):
    """List every pending change with its symbol count."""
    prefix = "[dry-run] " if dry_run else ""
    for change in changes:
        click.echo(f"  {prefix}{change.path} ({change.removed_count} emojis)")


def confirm_changes() -> bool:
    """
    Ask once whether to write the pending changes.

    Only a case-insensitive "y" confirms. Empty input, any other answer and
    end of input all decline.
    """
    try:
        answer = click.prompt(CONFIRM_PROMPT, default="", show_default=False)
    except click.Abort:
        click.echo()
        return False
    return answer.strip().lower() == AFFIRMATIVE_ANSWER


def show_cancelled():
    click.echo("Cancelled")


def show_summary(summary: RunSummary):
    """Print the final summary line."""
    if summary.dry_run:
        click.echo(
            f"\nFiles scanned: {summary.files_scanned}, Would modify: {summary.files_modified}, "
            f"Ignored: {summary.files_ignored}, Emojis found: {summary.symbols_removed}"
        )
        click.echo("Dry run: no files were changed")
        return

    line = (
        f"\nFiles scanned: {summary.files_scanned}, Modified: {summary.files_modified}, "
        f"Ignored: {summary.files_ignored}, Emojis removed: {summary.symbols_removed}"
    )
    if summary.files_failed:
        line += f", Failed: {summary.files_failed}"
    click.echo(line)
