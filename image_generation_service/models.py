from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

# --- Pydantic models must match the Streamlit client ---

class ImageRequest(BaseModel):
    description: str = Field(min_length=1)

class ImageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(alias="imageUrl")

# One entry per slide; the id is echoed back so results join by slide
class ImageBatchItem(BaseModel):
    id: str
    description: str

class ImageBatchRequest(BaseModel):
    items: List[ImageBatchItem]

class ImageBatchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    error: Optional[str] = None

class ImageBatchResponse(BaseModel):
    results: List[ImageBatchResult]
