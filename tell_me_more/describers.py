"""Content describers: turn an image into text a language model can name."""

import logging
import os
import re
from pathlib import Path
from typing import Final

import click
import llm
from PIL import Image

from .generators import get_model
from .image_utils import load_image_for_upload
from .types import DESCRIBER_VARIANTS, Description, DescriptionError, Settings

DESCRIPTION_PROMPT = """Can you tell me about this photo, describe it in as much detail as possible, \
include an overall impression about what the image may be about."""

LABELS_PROMPT = """List what you can see in this image, one short label per line.
Include:
- The main objects and subjects
- Any text visible in the image
- Recognisable entities such as brands, websites, apps, people or places
Only output the labels, most important first, with no numbering or commentary."""

# Leading list markers the model sometimes adds despite being asked not to
LIST_MARKER: Final = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def parse_labels(text: str) -> list[str]:
    """Split a one-label-per-line reply into a deduplicated list, keeping the first spelling."""
    labels: list[str] = []
    seen: set[str] = set()
    for line in text.splitlines():
        label = LIST_MARKER.sub("", line).strip().strip("\"'").strip()
        if not label or label.casefold() in seen:
            continue
        seen.add(label.casefold())
        labels.append(label)
    return labels


class ContentDescriber:
    """Ask a multimodal model about an image.

    Subclasses set `prompt` and implement `parse`, which turns the model's reply
    into a Description.
    """

    prompt: str

    def __init__(self, model: llm.Model, key_env: str):
        self.model = model
        self.key_env = key_env

    def describe(self, image_path: Path) -> Description:
        return self.parse(self.ask(image_path))

    def parse(self, reply: str) -> Description:
        raise NotImplementedError

    def ask(self, image_path: Path) -> str:
        key = os.environ.get(self.key_env)
        if not key:
            raise DescriptionError(f"{self.key_env} environment variable not set")

        try:
            image_content = load_image_for_upload(image_path, self.model.attachment_types)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise DescriptionError(f"Could not read image {image_path}: {e}") from e

        self.model.key = key
        logging.debug(f"Asking {self.model.model_id} about {image_path}")
        try:
            reply = self.model.prompt(
                self.prompt,
                attachments=[llm.Attachment(content=image_content)],
            ).text()
        except Exception as e:
            raise DescriptionError(f"{self.model.model_id} could not describe {image_path.name}: {e}") from e

        if not reply or not reply.strip():
            raise DescriptionError(f"{self.model.model_id} returned an empty response for {image_path.name}")
        logging.debug(f"Response for {image_path.name}: {reply!r}")
        return reply


class ImageDescriber(ContentDescriber):
    """Produces a free-text description of the image."""

    prompt = DESCRIPTION_PROMPT

    def parse(self, reply: str) -> Description:
        return Description(text=reply.strip())


class ImageLabeler(ContentDescriber):
    """Produces labels: objects, visible text and web entities."""

    prompt = LABELS_PROMPT

    def parse(self, reply: str) -> Description:
        labels = parse_labels(reply)
        if not labels:
            raise DescriptionError(f"{self.model.model_id} returned no labels")
        return Description(labels=labels)


def get_describer(settings: Settings) -> ContentDescriber:
    match settings.describer:
        case "description":
            model = get_model(settings.description_model, require_images=True)
            return ImageDescriber(model, settings.description_key_env)
        case "labels":
            model = get_model(settings.labels_model, require_images=True)
            return ImageLabeler(model, settings.labels_key_env)
        case _:
            raise click.ClickException(
                f"Unknown describer {settings.describer!r}. "
                f"Set TELL_ME_MORE_DESCRIBER to one of: {', '.join(DESCRIBER_VARIANTS)}"
            )
