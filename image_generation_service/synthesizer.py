import base64
import logging
from typing import Optional

from google.genai import types

logger = logging.getLogger(__name__)

PROMPT_PREFIX = "A professional, corporate-style high-quality presentation visual: "
ASPECT_RATIO = "16:9"
DEFAULT_MIME_TYPE = "image/png"


class ImageGenerationFailure(Exception):
    """Raised when the model response carries no image."""


def to_data_uri(data, mime_type: Optional[str] = None) -> str:
    """Encodes image bytes (or an already base64 encoded string) as a data URI."""
    if isinstance(data, (bytes, bytearray)):
        data = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{data}"


async def _generate_with_imagen(client, model_name: str, prompt: str) -> Optional[str]:
    response = await client.aio.models.generate_images(
        model=model_name,
        prompt=prompt,
        config=types.GenerateImagesConfig(number_of_images=1, aspect_ratio=ASPECT_RATIO),
    )
    for generated in response.generated_images or []:
        image = generated.image
        if image is not None and image.image_bytes:
            return to_data_uri(image.image_bytes, image.mime_type)
    return None


async def _generate_with_gemini(client, model_name: str, prompt: str) -> Optional[str]:
    response = await client.aio.models.generate_content(
        model=model_name,
        contents=prompt,
        config=types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=ASPECT_RATIO),
        ),
    )
    if not response.candidates or not response.candidates[0].content:
        return None
    # Images come back as inline_data parts, possibly next to text parts
    for part in response.candidates[0].content.parts or []:
        if part.inline_data is not None and part.inline_data.data:
            return to_data_uri(part.inline_data.data, part.inline_data.mime_type)
    return None


async def synthesize_image(client, model_name: str, description: str) -> str:
    """
    Generates one 16:9 picture for a slide description and returns it as a
    data URI. Imagen models use the image endpoint, other models are asked
    for inline image data.
    """
    prompt = PROMPT_PREFIX + description
    if model_name.startswith("imagen"):
        image_url = await _generate_with_imagen(client, model_name, prompt)
    else:
        image_url = await _generate_with_gemini(client, model_name, prompt)

    if not image_url:
        raise ImageGenerationFailure("No image data found in model response")
    logger.info(f"Generated image for '{description[:60]}' ({len(image_url)} chars).")
    return image_url
