import logging
from collections.abc import Iterator
from pathlib import Path

from .types import TraversalError
from .utils import is_target_filename


def iter_candidate_files(directory: Path) -> Iterator[Path]:
    """Iterate over rename candidates in a directory tree, depth first, in sorted order.

    Raises TraversalError if a directory can't be listed.
    """
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise TraversalError(f"Error walking the path {str(directory)!r}: {e}") from e

    for entry in entries:
        if entry.is_dir() and not entry.is_symlink():
            yield from iter_candidate_files(entry)
        elif entry.is_file() and is_target_filename(entry.name):
            yield entry
        else:
            logging.debug(f"Skipping {entry}")
