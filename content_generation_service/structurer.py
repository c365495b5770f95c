import json
import logging
import re
from typing import Dict, List

from google.genai import types
from pydantic import ValidationError

from content_generation_service.models import Deck, Slide

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """Transform the following text into a professional presentation structure.
Break the content into logical slides. Each slide should have a concise title, 3-5 bullet points, and brief speaker notes.
Provide a suggestion for a professional, high-quality stock photo image description that would complement the slide's content.

TEXT:
{raw_text}"""

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "The overall title of the presentation"},
        "slides": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "title": {"type": "STRING"},
                    "content": {"type": "ARRAY", "items": {"type": "STRING"}},
                    "speakerNotes": {"type": "STRING"},
                    "imageDescription": {"type": "STRING"},
                },
                "required": ["id", "title", "content", "speakerNotes"],
            },
        },
    },
    "required": ["title", "slides"],
}


class GenerationFailure(Exception):
    """Raised when the structuring response cannot be parsed into a deck."""


def extract_json_from_string(text: str) -> str:
    """
    Safely extracts a JSON object from a string, even with markdown fences.
    """
    match = re.search(r'```(?:json)?\s*(\{.*\})\s*```', text, re.DOTALL)
    if match:
        return match.group(1)
    match = re.search(r'(\{.*\})', text, re.DOTALL)
    return match.group(1) if match else ""


def ensure_unique_ids(slides: List[Slide]) -> List[Slide]:
    """Suffixes repeated slide ids so every id joins to exactly one slide."""
    seen: Dict[str, int] = {}
    taken = {slide.id for slide in slides}
    unique = []
    for slide in slides:
        if slide.id not in seen:
            seen[slide.id] = 1
            unique.append(slide)
            continue
        n = seen[slide.id]
        while True:
            n += 1
            candidate = f"{slide.id}-{n}"
            if candidate not in taken:
                break
        seen[slide.id] = n
        taken.add(candidate)
        logger.info(f"Renamed duplicate slide id '{slide.id}' to '{candidate}'.")
        unique.append(slide.model_copy(update={"id": candidate}))
    return unique


def parse_deck(text: str) -> Deck:
    json_string = extract_json_from_string(text or "")
    if not json_string:
        raise GenerationFailure("Failed to extract JSON from the AI's response.")
    try:
        deck = Deck(**json.loads(json_string))
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        raise GenerationFailure(f"Failed to structure presentation data: {e}") from e
    return deck.model_copy(update={"slides": ensure_unique_ids(deck.slides)})


async def structurize(client, model_name: str, raw_text: str) -> Deck:
    """
    Sends the raw text to the structuring model with the fixed deck schema
    and parses the answer. One call, no retries.
    """
    response = await client.aio.models.generate_content(
        model=model_name,
        contents=PROMPT_TEMPLATE.format(raw_text=raw_text),
        config=types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=RESPONSE_SCHEMA,
        ),
    )
    deck = parse_deck(response.text)
    logger.info(f"Structured '{deck.title}' into {len(deck.slides)} slides.")
    return deck
