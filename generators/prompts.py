"""Prompt helpers backed by the Gemini text model."""

import json
import logging
from dataclasses import dataclass

from config import settings
from providers.chat.gemini import GeminiChatProvider
from providers.errors import InvalidInput, UpstreamError

logger = logging.getLogger(__name__)

ENHANCE_INSTRUCTIONS = {
    "Subtle": "Slightly enhance this prompt with more detail: ",
    "Artistic": "Rewrite this prompt to be much more artistic, vivid, and descriptive: ",
    "Extreme": (
        "Completely reimagine this concept into an extreme, vivid, and highly detailed "
        "artistic masterpiece prompt for an AI image generator: "
    ),
}

SURPRISE_INSTRUCTION = (
    "Generate a single, random, highly creative and visually descriptive prompt for an AI image "
    "generator. Be imaginative and specific. Examples: \"a giant bioluminescent jellyfish floating "
    "over a misty forest at twilight, volumetric lighting, cinematic\", \"a cozy bookstore cafe on a "
    "rainy day in a cyberpunk city, neon signs reflecting on wet streets, detailed\", \"a majestic "
    "clockwork dragon soaring through a sky of swirling galaxies, intricate gears and filigree, epic\"."
)

CONCEPTS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "concepts": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "prompt": {"type": "STRING"},
                },
            },
        }
    },
}


@dataclass
class ImageConcept:
    name: str
    prompt: str


def _text_model() -> GeminiChatProvider:
    return GeminiChatProvider(model=settings.gemini_text_model)


async def enhance_prompt(prompt: str, level: str = "Subtle") -> str:
    """Rewrite an image prompt with more detail.

    Args:
        prompt: The user's prompt.
        level: "Subtle", "Artistic" or "Extreme".
    """
    if not prompt or not prompt.strip():
        raise InvalidInput("A prompt is required to enhance.")
    instruction = ENHANCE_INSTRUCTIONS.get(level)
    if instruction is None:
        raise InvalidInput(f"Unknown enhancement level: {level}")
    return await _text_model().generate_text(f'{instruction} "{prompt}"')


async def surprise_prompt() -> str:
    text = await _text_model().generate_text(SURPRISE_INSTRUCTION)
    return text.replace('"', "").strip()


async def image_concepts(song_title: str) -> list[ImageConcept]:
    """Three cover-art concepts for a song title."""
    if not song_title or not song_title.strip():
        raise InvalidInput("A song title is required.")

    text = await _text_model().generate_text(
        f'For the song title "{song_title}", generate 3 distinct cover art concepts. Each needs a '
        "name and a detailed, artistic prompt for an AI image generator.",
        generation_config={"responseMimeType": "application/json", "responseSchema": CONCEPTS_SCHEMA},
    )
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Concept response was not JSON: %s", text[:200])
        raise UpstreamError("Gemini returned malformed concepts") from e

    concepts = parsed.get("concepts") if isinstance(parsed, dict) else None
    return [
        ImageConcept(name=c.get("name", ""), prompt=c.get("prompt", ""))
        for c in concepts or []
        if isinstance(c, dict)
    ]
