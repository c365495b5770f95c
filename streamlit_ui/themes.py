# themes.py
# Theme cards for the picker. Colors and fonts come from the same registry
# the exporter uses, so the preview matches the downloaded file.

from design_generation_service.themes import THEME_PROFILES


def _card(profile):
    return {
        "id": profile.identifier,
        "name": profile.name,
        "desc": profile.description,
        "colors": [f"#{c}" for c in (profile.background_color, profile.text_color,
                                     profile.accent_color, profile.secondary_color)],
        "fonts": f"Heading: {profile.heading_font}, Body: {profile.body_font}",
    }


THEMES = [_card(profile) for profile in THEME_PROFILES.values()]
