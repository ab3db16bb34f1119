"""Utility functions for tell-me-more."""

import re
from pathlib import Path
from typing import Final

# Matches "screenshot", "dalle", "dall-e", "DALL·E", "dall_é" and friends
TARGET_PATTERN: Final = re.compile(r"screenshot|dall[-_ ·]?[eé]", re.IGNORECASE)

DISALLOWED_CHARS: Final = re.compile(r"[^\w\s-]")
WHITESPACE_RUN: Final = re.compile(r"\s+")


def is_target_filename(filename: str) -> bool:
    """Check if a filename looks like a screenshot or a DALL-E image.

    Matches (case insensitive):
    - Anything containing 'screenshot'
    - 'dalle', 'dall-e', 'dall_e', 'dall e', 'dall·e', with or without an accented 'é'
    """
    return bool(TARGET_PATTERN.search(filename))


def sanitize_filename(name: str) -> str:
    """Convert a free-text suggestion into a safe filename stem.

    Characters other than word characters, hyphens and whitespace are removed,
    and each run of whitespace becomes a single underscore.
    """
    text = name.strip()
    text = DISALLOWED_CHARS.sub("", text).strip()
    return WHITESPACE_RUN.sub("_", text)


def fallback_label(filename: str) -> str:
    """The label used when a file can't be described: its name without the extension."""
    return Path(filename).stem
