# preview.py
# HTML for the on-screen slide, rendered with st.markdown(unsafe_allow_html=True).

from html import escape
from typing import Any, Dict
from urllib.parse import quote

from design_generation_service.themes import ThemeProfile

PLACEHOLDER_IMAGE = "https://picsum.photos/seed/{seed}/600/400?grayscale"


def image_source(slide: Dict[str, Any]) -> str:
    return slide.get("generatedImageUrl") or PLACEHOLDER_IMAGE.format(seed=quote(slide["id"], safe=""))


def render_slide(slide: Dict[str, Any], theme: ThemeProfile, index: int) -> str:
    bullets = "".join(
        f'<li><span class="dot" style="background:#{theme.accent_color}"></span>'
        f'<p>{escape(item)}</p></li>'
        for item in slide["content"]
    )
    if slide.get("generatedImageUrl"):
        alt = f"AI generated visual for: {slide['title']}"
    else:
        alt = f"Default visual aid for: {slide['title']}"
    return f"""
        <article class="slide" style="background:#{theme.background_color}; color:#{theme.text_color};">
            <div class="slide-label" style="color:#{theme.secondary_color}">Slide {index + 1}</div>
            <h2 style="font-family:{theme.heading_font}, serif;">{escape(slide['title'])}</h2>
            <div class="slide-body">
                <ul style="font-family:{theme.body_font}, sans-serif;">{bullets}</ul>
                <img src="{escape(image_source(slide), quote=True)}" alt="{escape(alt, quote=True)}"/>
            </div>
            <footer style="color:#{theme.secondary_color}">
                <span class="context">Context</span> <em>{escape(slide['speakerNotes'])}</em>
            </footer>
        </article>
    """


def render_thumbnail(slide: Dict[str, Any], theme: ThemeProfile, active: bool) -> str:
    first_point = escape(slide["content"][0]) if slide["content"] else ""
    badge = '<span class="badge" title="Image generated"></span>' if slide.get("generatedImageUrl") else ""
    css_class = "thumb active" if active else "thumb"
    return f"""
        <div class="{css_class}" style="background:#{theme.background_color}; color:#{theme.text_color};">
            <div class="thumb-title">{escape(slide['title'])}</div>
            <div class="thumb-body">{first_point}</div>
            {badge}
        </div>
    """
