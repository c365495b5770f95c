# models.py

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from design_generation_service.themes import DEFAULT_THEME

# --- Models for the deck, as produced by the content service ---
class Slide(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: List[str]
    speaker_notes: str = Field(alias="speakerNotes")
    image_description: Optional[str] = Field(default=None, alias="imageDescription")
    # Data URI of the generated picture, if one was attached
    generated_image_url: Optional[str] = Field(default=None, alias="generatedImageUrl")

class Deck(BaseModel):
    title: str
    slides: List[Slide]

# --- Models for API communication ---
class ExportRequest(BaseModel):
    deck: Deck
    theme: str = DEFAULT_THEME

class ThemeInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    identifier: str
    name: str
    description: str
    background_color: str = Field(alias="backgroundColor")
    text_color: str = Field(alias="textColor")
    accent_color: str = Field(alias="accentColor")
    secondary_color: str = Field(alias="secondaryColor")
    heading_font: str = Field(alias="headingFont")
    body_font: str = Field(alias="bodyFont")
