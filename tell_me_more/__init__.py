"""A command-line tool that renames screenshots and DALL-E images after what they show."""

from .generators import NameSuggester
from .tell_me_more import tell_me_more
from .utils import is_target_filename, sanitize_filename

__all__ = ["NameSuggester", "is_target_filename", "sanitize_filename", "tell_me_more"]
