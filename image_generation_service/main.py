import os
import uuid
import asyncio
import logging

from fastapi import FastAPI, HTTPException
from google import genai
from google.genai import errors

from image_generation_service.models import (
    ImageBatchRequest,
    ImageBatchResponse,
    ImageBatchResult,
    ImageRequest,
    ImageResponse,
)
from image_generation_service.synthesizer import ImageGenerationFailure, synthesize_image

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - [%(levelname)s] - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Image Generation Service",
    description="Generates 16:9 visuals for presentation slides from their image descriptions."
)

# --- Initialize the image model client ---
MODEL_NAME = os.environ.get("IMAGE_MODEL", "imagen-3.0-generate-002")

try:
    API_KEY = os.environ.get("GEMINI_API_KEY")
    PROJECT_ID = os.environ.get("GCP_PROJECT")
    LOCATION = os.environ.get("GCP_REGION", "us-central1")
    if API_KEY:
        client = genai.Client(api_key=API_KEY)
    elif PROJECT_ID:
        client = genai.Client(vertexai=True, project=PROJECT_ID, location=LOCATION)
    else:
        raise ValueError("Set GEMINI_API_KEY or GCP_PROJECT.")
    logger.info(f"✅ Image client initialized for model '{MODEL_NAME}'.")
except Exception as e:
    logger.critical(f"Failed to initialize image client: {e}")
    client = None

# Limit concurrent calls to the image generation API to avoid quota errors
MAX_CONCURRENT_IMAGES = int(os.environ.get("MAX_CONCURRENT_IMAGES", "2"))
image_gen_semaphore = asyncio.Semaphore(MAX_CONCURRENT_IMAGES)


async def generate_single_image(description: str) -> str:
    """Generates one image under the concurrency limit. No retries."""
    async with image_gen_semaphore:
        return await synthesize_image(client, MODEL_NAME, description)


@app.post("/generate-image", response_model=ImageResponse)
async def generate_image(request: ImageRequest):
    if not client:
        raise HTTPException(status_code=503, detail="Image model not available.")
    job_id = str(uuid.uuid4())
    logger.info(f"[{job_id}] Image requested for '{request.description[:60]}'.")
    try:
        image_url = await generate_single_image(request.description)
    except ImageGenerationFailure as e:
        logger.warning(f"[{job_id}] No image for '{request.description[:60]}': {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except errors.APIError as e:
        logger.error(f"[{job_id}] Image API error for '{request.description[:60]}': {e}")
        raise HTTPException(status_code=502, detail=f"Image API error: {e}")
    return ImageResponse(image_url=image_url)


@app.post("/generate-images", response_model=ImageBatchResponse)
async def generate_images(request: ImageBatchRequest):
    """
    Generates an image for every item in parallel and returns one result per
    item, keyed by its id. A failed item carries an error instead of an image.
    """
    if not client:
        raise HTTPException(status_code=503, detail="Image model not available.")

    job_id = str(uuid.uuid4())
    logger.info(f"[{job_id}] Batch of {len(request.items)} images requested.")
    tasks = [generate_single_image(item.description) for item in request.items]
    outcomes = await asyncio.gather(*tasks, return_exceptions=True)

    results = []
    for item, outcome in zip(request.items, outcomes):
        if isinstance(outcome, (ImageGenerationFailure, errors.APIError)):
            logger.warning(f"[{job_id}] Image for slide '{item.id}' failed: {outcome}")
            results.append(ImageBatchResult(id=item.id, error=str(outcome)))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results.append(ImageBatchResult(id=item.id, image_url=outcome))

    generated = sum(1 for r in results if r.image_url)
    logger.info(f"[{job_id}] ✅ Generated {generated} of {len(results)} images.")
    return ImageBatchResponse(results=results)
