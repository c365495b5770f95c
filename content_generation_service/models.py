from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

# --- Input Models ---

class ContentRequest(BaseModel):
    """The raw notes pasted into the Streamlit frontend."""
    text: str = Field(min_length=1)

# --- Output/Result Models ---

class Slide(BaseModel):
    """
    A single slide as structured by the model. Keys on the wire are the
    camelCase names of the response schema.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: List[str]
    speaker_notes: str = Field(alias="speakerNotes")
    image_description: Optional[str] = Field(default=None, alias="imageDescription")
    # Never set by this service; the image flow fills it in later.
    generated_image_url: Optional[str] = Field(default=None, alias="generatedImageUrl")


class Deck(BaseModel):
    """The root object that the /generate-content endpoint returns."""
    title: str
    slides: List[Slide]
