#!/usr/bin/env python3


import logging
from pathlib import Path

import click

from .describers import get_describer
from .generators import get_suggester
from .tell_me_more import tell_me_more
from .types import RenameError, Settings, TraversalError

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(log_level: str) -> None:
    if log_level not in LOG_LEVELS:
        raise click.ClickException(
            f"Unknown log level {log_level!r}. Set TELL_ME_MORE_LOG_LEVEL to one of: {', '.join(LOG_LEVELS)}"
        )
    level = getattr(logging, log_level)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    # When not in debug mode, only show our own debug messages
    if level != logging.DEBUG:
        # Set third-party loggers to WARNING
        for logger_name in logging.root.manager.loggerDict:
            if not logger_name.startswith("tell_me_more"):
                logging.getLogger(logger_name).setLevel(logging.WARNING)


@click.command()
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
def main(directory: Path) -> None:
    """Rename screenshots and DALL-E images in DIRECTORY based on their content.

    \b
    Configuration is read from the environment:
      TELL_ME_MORE_DESCRIBER          description (default) or labels
      TELL_ME_MORE_DESCRIPTION_MODEL  model for descriptions (default: gemini-2.5-flash)
      TELL_ME_MORE_LABELS_MODEL       model for labels (default: gpt-4o-mini)
      TELL_ME_MORE_SUGGESTION_MODEL   model for name suggestions (default: gpt-4)
      TELL_ME_MORE_LOG_LEVEL          DEBUG, INFO, WARNING, ERROR or CRITICAL
      GEMINI_API_KEY, OPENAI_API_KEY  service credentials
    """
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    describer = get_describer(settings)
    suggester = get_suggester(settings)

    try:
        tell_me_more(directory, describer=describer, suggester=suggester)
    except (TraversalError, RenameError) as e:
        raise click.ClickException(str(e))


if __name__ == "__main__":
    main()
