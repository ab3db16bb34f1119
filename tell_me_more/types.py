import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

DESCRIBER_VARIANTS = ("description", "labels")


class TellMeMoreError(Exception):
    """Base class for errors raised while processing candidate files."""


class DescriptionError(TellMeMoreError):
    """The image-understanding service couldn't describe a file."""


class SuggestionError(TellMeMoreError):
    """The language model couldn't suggest a filename."""


class TraversalError(TellMeMoreError):
    """A directory couldn't be listed. Aborts the run."""


class RenameError(TellMeMoreError):
    """A confirmed rename failed. Aborts the run."""


@dataclass
class Description:
    """What the describer saw in an image: free text or a list of labels."""

    text: str | None = None
    labels: list[str] = field(default_factory=list)

    def prompt_text(self) -> str:
        if self.labels:
            return ", ".join(self.labels)
        return (self.text or "").strip()


class Outcome(Enum):
    RENAMED = "renamed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class RunSummary:
    candidates: int = 0
    renamed: int = 0
    skipped: int = 0
    failed: int = 0

    def record(self, outcome: Outcome) -> None:
        self.candidates += 1
        match outcome:
            case Outcome.RENAMED:
                self.renamed += 1
            case Outcome.SKIPPED:
                self.skipped += 1
            case Outcome.FAILED:
                self.failed += 1


@dataclass
class Settings:
    """Run configuration, read from the environment."""

    describer: str = "description"
    description_model: str = "gemini-2.5-flash"
    labels_model: str = "gpt-4o-mini"
    suggestion_model: str = "gpt-4"
    description_key_env: str = "GEMINI_API_KEY"
    labels_key_env: str = "OPENAI_API_KEY"
    suggestion_key_env: str = "OPENAI_API_KEY"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            describer=env.get("TELL_ME_MORE_DESCRIBER", defaults.describer).strip().lower(),
            description_model=env.get("TELL_ME_MORE_DESCRIPTION_MODEL", defaults.description_model),
            labels_model=env.get("TELL_ME_MORE_LABELS_MODEL", defaults.labels_model),
            suggestion_model=env.get("TELL_ME_MORE_SUGGESTION_MODEL", defaults.suggestion_model),
            log_level=env.get("TELL_ME_MORE_LOG_LEVEL", defaults.log_level).upper(),
        )
