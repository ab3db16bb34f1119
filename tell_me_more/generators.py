import logging
import os

import click
import llm

from .types import Description, Settings, SuggestionError

PROMPT_PREAMBLE = """You are a creative assistant that generates human-like filenames for images."""

PROMPT_INSTRUCTIONS = """Suggest a short, descriptive, human-friendly filename for the image \
(without file extension). The best names read like something a person would have typed: \
a screenshot of the YouTube home page has lots of interesting details, but a good name \
would be 'youtube_homepage'.

Make sure the name suggestion is under 40 characters, the fewer words the better. \
Reply with the name only."""

DESCRIPTION_PROMPT = """{preamble}

Here is what is in the image:
{description}

{instructions}"""

CREATIVE_PROMPT = """{preamble}

An image is provided, but no labels or descriptions are available.
Using your imagination, come up with a plausible name anyway.

{instructions}"""

MAX_TOKENS = 100
TEMPERATURE = 0.9

# Providers spell the reply length limit differently
MAX_TOKENS_OPTIONS = ("max_tokens", "max_output_tokens")


def suggestion_options(model: llm.Model) -> dict[str, float | int]:
    """The temperature and length options, under the names the model's Options declares."""
    fields = model.Options.model_fields
    options: dict[str, float | int] = {}
    if "temperature" in fields:
        options["temperature"] = TEMPERATURE
    for name in MAX_TOKENS_OPTIONS:
        if name in fields:
            options[name] = MAX_TOKENS
            break
    return options


def get_model(model_name: str, *, require_images: bool = False) -> llm.Model:
    try:
        model = llm.get_model(model_name)
    except llm.UnknownModelError as e:
        raise click.ClickException(f"Unknown model {model_name!r}: {e}")
    if require_images and not any(t in model.attachment_types for t in ["image/jpeg", "image/png", "image/webp"]):
        raise click.ClickException(f"Model {model_name} does not support any image types")
    return model


def build_prompt(description: Description) -> str:
    """Build the filename prompt, falling back to a creative prompt when nothing is known."""
    text = description.prompt_text()
    if text:
        return DESCRIPTION_PROMPT.format(
            preamble=PROMPT_PREAMBLE,
            description=text,
            instructions=PROMPT_INSTRUCTIONS,
        )
    return CREATIVE_PROMPT.format(preamble=PROMPT_PREAMBLE, instructions=PROMPT_INSTRUCTIONS)


class NameSuggester:
    """Turns a description of an image into a filename suggestion."""

    def __init__(self, model: llm.Model, key_env: str = "OPENAI_API_KEY"):
        self.model = model
        self.key_env = key_env

    def suggest(self, description: Description) -> str:
        key = os.environ.get(self.key_env)
        if not key:
            raise SuggestionError(f"{self.key_env} environment variable not set")
        self.model.key = key

        prompt = build_prompt(description)
        logging.debug(f"Suggestion prompt: {prompt!r}")
        try:
            reply = self.model.prompt(prompt, **suggestion_options(self.model)).text()
        except Exception as e:
            raise SuggestionError(f"{self.model.model_id} error: {e}") from e

        suggestion = (reply or "").strip()
        if not suggestion:
            raise SuggestionError(f"No response from {self.model.model_id}")
        return suggestion


def get_suggester(settings: Settings) -> NameSuggester:
    return NameSuggester(get_model(settings.suggestion_model), settings.suggestion_key_env)
