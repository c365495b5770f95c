import os
import uuid
import logging

from fastapi import FastAPI, HTTPException
from google import genai
from google.genai import errors

from content_generation_service.models import ContentRequest, Deck
from content_generation_service.structurer import GenerationFailure, structurize

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - [%(levelname)s] - %(message)s')
logger = logging.getLogger(__name__)

# --- FastAPI App and Gemini Initialization ---------------------------------
app = FastAPI(
    title="Content Generation Service",
    description="Structures raw text into a slide deck using Gemini.",
    version="3.0.0",
)

MODEL_NAME = os.environ.get("CONTENT_MODEL", "gemini-2.5-flash")

try:
    API_KEY = os.environ.get("GEMINI_API_KEY")
    PROJECT_ID = os.environ.get("GCP_PROJECT")
    LOCATION = os.environ.get("GCP_REGION")
    if API_KEY:
        client = genai.Client(api_key=API_KEY)
    elif PROJECT_ID and LOCATION:
        client = genai.Client(vertexai=True, project=PROJECT_ID, location=LOCATION)
    else:
        raise ValueError("Set GEMINI_API_KEY, or GCP_PROJECT and GCP_REGION.")
    logger.info(f"✅ Gemini client initialized for model '{MODEL_NAME}'.")
except Exception as e:
    logger.error(f"❌ Failed to initialize Gemini client: {e}")
    client = None


# --- API Endpoint ----------------------------------------------------------
@app.post("/generate-content", response_model=Deck)
async def generate_content(request: ContentRequest):
    """
    Turns free-form text into a titled deck of slides in a single model call.
    """
    if not client:
        raise HTTPException(status_code=503, detail="Gemini model not available.")
    if not request.text.strip():
        raise HTTPException(status_code=422, detail="Input text is empty.")

    job_id = str(uuid.uuid4())
    logger.info(f"[{job_id}] Structuring {len(request.text)} characters of input: '{request.text[:80]}...'")
    try:
        deck = await structurize(client, MODEL_NAME, request.text)
    except GenerationFailure as e:
        logger.error(f"[{job_id}] Content generation failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except errors.APIError as e:
        logger.error(f"[{job_id}] Content API error: {e}")
        raise HTTPException(status_code=502, detail=f"Content API error: {e}")
    logger.info(f"[{job_id}] Structured '{deck.title}' into {len(deck.slides)} slides.")
    return deck
