# clients.py
# HTTP calls from the Streamlit shell to the three backend services.

import os
import re
import json
import logging
import urllib.parse
from typing import Any, Dict, List, Tuple

import requests

logger = logging.getLogger(__name__)

# --- Configuration ---
CONTENT_URL = os.environ.get("CONTENT_SERVICE_URL", "http://localhost:8001")
IMAGE_URL = os.environ.get("IMAGE_SERVICE_URL", "http://localhost:8002")
DESIGN_URL = os.environ.get("DESIGN_SERVICE_URL", "http://localhost:8003")


class ServiceError(Exception):
    """Base class for failures reported to the user."""

class GenerationFailure(ServiceError):
    pass

class ImageGenerationFailure(ServiceError):
    pass

class ExportFailure(ServiceError):
    pass


def _error_detail(http_err: requests.exceptions.HTTPError) -> str:
    try:
        detail = http_err.response.json().get("detail", http_err.response.text)
    except (json.JSONDecodeError, ValueError, AttributeError):
        return http_err.response.text
    # FastAPI validation errors carry a list of {"loc", "msg", ...} entries
    if isinstance(detail, list):
        return "; ".join(item.get("msg", str(item)) if isinstance(item, dict) else str(item)
                         for item in detail)
    return detail


def _post(url: str, payload: Dict[str, Any], timeout: int, failure: type) -> requests.Response:
    try:
        response = requests.post(url, json=payload, timeout=timeout)
        response.raise_for_status()
        return response
    except requests.exceptions.HTTPError as http_err:
        detail = _error_detail(http_err)
        logger.error(f"POST {url} failed: {detail}")
        raise failure(str(detail)) from http_err
    except requests.exceptions.RequestException as e:
        logger.error(f"POST {url} could not connect: {e}")
        raise failure(f"Could not connect to the service: {e}") from e


def structurize(raw_text: str) -> Dict[str, Any]:
    response = _post(f"{CONTENT_URL}/generate-content", {"text": raw_text}, 180, GenerationFailure)
    try:
        return response.json()
    except ValueError as e:
        raise GenerationFailure("The content service returned a malformed deck.") from e


def synthesize_image(description: str) -> str:
    response = _post(f"{IMAGE_URL}/generate-image", {"description": description}, 180, ImageGenerationFailure)
    image_url = response.json().get("imageUrl")
    if not image_url:
        raise ImageGenerationFailure("No image data found in the response.")
    return image_url


def synthesize_images(items: List[Dict[str, str]]) -> List[Dict[str, Any]]:
    """Batch variant: items are {id, description}; results are {id, imageUrl, error}."""
    response = _post(f"{IMAGE_URL}/generate-images", {"items": items}, 600, ImageGenerationFailure)
    return response.json().get("results", [])


def filename_from_disposition(header: str, default: str) -> str:
    match = re.search(r"filename\*=UTF-8''([^;]+)", header or "")
    if match:
        return urllib.parse.unquote(match.group(1))
    match = re.search(r'filename="([^"]+)"', header or "")
    return match.group(1) if match else default


def export_presentation(deck: Dict[str, Any], theme: str) -> Tuple[str, bytes]:
    """Returns the download file name and the .pptx bytes."""
    response = _post(f"{DESIGN_URL}/export-presentation", {"deck": deck, "theme": theme}, 600, ExportFailure)
    filename = filename_from_disposition(response.headers.get("Content-Disposition"), "presentation.pptx")
    return filename, response.content
