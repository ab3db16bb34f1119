import logging
from collections.abc import Callable
from pathlib import Path

import click
import rich
from rich.markup import escape

from .describers import ContentDescriber
from .generators import NameSuggester
from .list_files import iter_candidate_files
from .types import Description, DescriptionError, Outcome, RenameError, RunSummary, SuggestionError
from .utils import fallback_label, sanitize_filename


def ask_to_rename(suggestion: str) -> bool:
    """Ask the operator whether to use the suggestion. Only 'y' (any case) means yes."""
    try:
        answer = click.prompt(
            "Do you want to rename the file? (y/n)",
            default="",
            show_default=False,
        )
    except click.Abort:
        # stdin closed
        return False
    return answer.strip().lower() == "y"


def rename_file(image_path: Path, suggestion: str) -> Path | None:
    """Rename a file to the sanitized suggestion, keeping its directory and extension.

    Returns the new path, or None if there was nothing sensible to rename to.
    """
    stem = sanitize_filename(suggestion)
    if not stem:
        rich.print(f"[yellow]Suggestion {escape(suggestion)!r} has no usable characters, skipping[/yellow]")
        return None

    new_path = image_path.with_name(f"{stem}{image_path.suffix}")
    if new_path == image_path:
        return None
    # On case-insensitive filesystems a case-only rename "exists" already, as the file itself
    if new_path.exists() and not new_path.samefile(image_path):
        rich.print(f"[yellow]{escape(str(new_path))} already exists, not renaming {escape(image_path.name)}[/yellow]")
        return None

    try:
        image_path.rename(new_path)
    except OSError as e:
        raise RenameError(f"Failed to rename {image_path} to {new_path}: {e}") from e
    return new_path


def describe_image(image_path: Path, describer: ContentDescriber) -> Description:
    try:
        return describer.describe(image_path)
    except DescriptionError as e:
        logging.error(f"Error describing {image_path}: {e}")
        return Description(labels=[fallback_label(image_path.name)])


def process_file(
    image_path: Path,
    *,
    describer: ContentDescriber,
    suggester: NameSuggester,
    confirm: Callable[[str], bool] = ask_to_rename,
) -> Outcome:
    """Describe, name, confirm and rename a single candidate file."""
    rich.print(f"Found target file: [bold]{escape(str(image_path))}[/bold]")

    description = describe_image(image_path, describer)
    logging.debug(f"Description of {image_path.name}: {description.prompt_text()!r}")

    try:
        suggestion = suggester.suggest(description)
    except SuggestionError as e:
        logging.error(f"Error getting a name suggestion for {image_path}: {e}")
        return Outcome.FAILED

    rich.print(f"Suggested name: [cyan]{escape(suggestion)}[/cyan]")
    if not confirm(suggestion):
        return Outcome.SKIPPED

    new_path = rename_file(image_path, suggestion)
    if new_path is None:
        return Outcome.SKIPPED
    rich.print(f"Renamed {escape(image_path.name)} → [green]{escape(new_path.name)}[/green]")
    return Outcome.RENAMED


def tell_me_more(
    directory: Path,
    *,
    describer: ContentDescriber,
    suggester: NameSuggester,
    confirm: Callable[[str], bool] = ask_to_rename,
) -> RunSummary:
    """Offer new names for the screenshots and DALL-E images under a directory.

    Args:
        directory: Root of the tree to search
        describer: Describes each candidate image
        suggester: Turns descriptions into filename suggestions
        confirm: Asks the operator whether to apply a suggestion

    Raises:
        TraversalError: a directory couldn't be listed
        RenameError: a confirmed rename failed
    """
    summary = RunSummary()
    for image_path in iter_candidate_files(directory):
        outcome = process_file(image_path, describer=describer, suggester=suggester, confirm=confirm)
        logging.debug(f"{image_path}: {outcome.value}")
        summary.record(outcome)

    if not summary.candidates:
        rich.print("[yellow]No candidate files found[/yellow]")
    else:
        rich.print(
            f"\nProcessed {summary.candidates} candidate files: "
            f"{summary.renamed} renamed, {summary.skipped} skipped, {summary.failed} failed"
        )
    return summary
