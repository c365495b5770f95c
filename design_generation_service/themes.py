# themes.py

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


class UnknownTheme(KeyError):
    """Raised when a theme identifier is not one of the supported profiles."""


@dataclass(frozen=True)
class ThemeProfile:
    identifier: str
    name: str
    description: str
    # Hex RGB without the leading '#', the form python-pptx's RGBColor expects
    background_color: str
    text_color: str
    accent_color: str
    secondary_color: str
    heading_font: str
    body_font: str = "Arial"


THEME_PROFILES: Mapping[str, ThemeProfile] = MappingProxyType({
    "corporate": ThemeProfile(
        identifier="corporate",
        name="Corporate",
        description="Dark and authoritative",
        background_color="0F172A",
        text_color="FFFFFF",
        accent_color="60A5FA",
        secondary_color="94A3B8",
        heading_font="Arial",
    ),
    "modern": ThemeProfile(
        identifier="modern",
        name="Modern",
        description="Bright and clean",
        background_color="FFFFFF",
        text_color="18181B",
        accent_color="059669",
        secondary_color="71717A",
        heading_font="Arial",
    ),
    "minimal": ThemeProfile(
        identifier="minimal",
        name="Minimal",
        description="Quiet and light",
        background_color="F8FAFC",
        text_color="000000",
        accent_color="F97316",
        secondary_color="A1A1AA",
        heading_font="Arial",
    ),
    "elegant": ThemeProfile(
        identifier="elegant",
        name="Elegant",
        description="Warm with a serif touch",
        background_color="F5F5F4",
        text_color="1C1917",
        accent_color="78350F",
        secondary_color="78716C",
        heading_font="Georgia",
    ),
})

DEFAULT_THEME = "corporate"


def resolve(identifier: str) -> ThemeProfile:
    """Looks up a theme profile by its identifier."""
    try:
        return THEME_PROFILES[identifier]
    except KeyError:
        raise UnknownTheme(identifier) from None
