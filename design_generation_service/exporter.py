# exporter.py
# Projects a deck and a theme profile onto a 16:9 .pptx file.

# --- Imports ---
import base64
import io
import logging
import re

from lxml import etree
from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_ANCHOR
from pptx.oxml.ns import qn
from pptx.slide import Slide as PptxSlide
from pptx.util import Emu, Inches, Pt

from design_generation_service.models import Deck, Slide
from design_generation_service.themes import ThemeProfile

logger = logging.getLogger(__name__)

PPTX_EXTENSION = ".pptx"
PPTX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

# --- Layout geometry (16:9 canvas) ---
SLIDE_WIDTH = Inches(10)
SLIDE_HEIGHT = Inches(5.625)
BLANK_LAYOUT = 6

MARGIN_LEFT = Inches(0.5)
TITLE_TOP = Inches(0.5)
TITLE_HEIGHT = Inches(1)
TITLE_FONT_SIZE = Pt(36)

BODY_TOP = Inches(1.8)
BODY_HEIGHT = Inches(3)
BODY_FONT_SIZE = Pt(18)
BULLET_SPACING = Pt(5)
BULLET_CHAR = "•"

WIDE_WIDTH_RATIO = 0.90
NARROW_WIDTH_RATIO = 0.50
IMAGE_LEFT_RATIO = 0.55
IMAGE_WIDTH_RATIO = 0.40


class ExportFailure(Exception):
    """Raised when the presentation file cannot be written."""


def presentation_filename(title: str) -> str:
    """Collapses each whitespace run in the title to '_' and appends .pptx."""
    return re.sub(r"\s+", "_", title) + PPTX_EXTENSION


def _ratio(ratio: float) -> Emu:
    return Emu(int(SLIDE_WIDTH * ratio))


def body_width(slide: Slide) -> Emu:
    """Bullets share the row with the picture when the slide has one."""
    return _ratio(NARROW_WIDTH_RATIO if slide.generated_image_url else WIDE_WIDTH_RATIO)


def decode_image(image_url: str) -> bytes:
    """Accepts a base64 data URI or a bare base64 string."""
    payload = image_url
    if image_url.startswith("data:"):
        header, _, payload = image_url.partition(",")
        if not header.endswith(";base64"):
            raise ValueError("image data URI is not base64 encoded")
    return base64.b64decode(payload, validate=True)


def _style_run(run, font_name: str, size: Pt, color: str, bold: bool = False) -> None:
    run.font.name = font_name
    run.font.size = size
    run.font.bold = bold
    run.font.color.rgb = RGBColor.from_string(color)


def _add_bullet(paragraph) -> None:
    pPr = paragraph._p.get_or_add_pPr()
    pPr.set("marL", str(Inches(0.3)))
    pPr.set("indent", str(-Inches(0.3)))
    buFont = etree.SubElement(pPr, qn("a:buFont"))
    buFont.set("typeface", "Arial")
    buChar = etree.SubElement(pPr, qn("a:buChar"))
    buChar.set("char", BULLET_CHAR)


def _add_title(pptx_slide: PptxSlide, slide: Slide, theme: ThemeProfile) -> None:
    box = pptx_slide.shapes.add_textbox(MARGIN_LEFT, TITLE_TOP, _ratio(WIDE_WIDTH_RATIO), TITLE_HEIGHT)
    box.name = "Title"
    tf = box.text_frame
    tf.word_wrap = True
    run = tf.paragraphs[0].add_run()
    run.text = slide.title
    _style_run(run, theme.heading_font, TITLE_FONT_SIZE, theme.text_color, bold=True)


def _add_bullets(pptx_slide: PptxSlide, slide: Slide, theme: ThemeProfile) -> None:
    box = pptx_slide.shapes.add_textbox(MARGIN_LEFT, BODY_TOP, body_width(slide), BODY_HEIGHT)
    box.name = "Content"
    tf = box.text_frame
    tf.word_wrap = True
    tf.vertical_anchor = MSO_ANCHOR.TOP
    for i, item in enumerate(slide.content):
        paragraph = tf.paragraphs[0] if i == 0 else tf.add_paragraph()
        # spcAft has to be set before the bullet elements are appended to a:pPr
        paragraph.space_after = BULLET_SPACING
        _add_bullet(paragraph)
        run = paragraph.add_run()
        run.text = item
        _style_run(run, theme.body_font, BODY_FONT_SIZE, theme.text_color)


def _add_picture(pptx_slide: PptxSlide, slide: Slide) -> None:
    try:
        image_stream = io.BytesIO(decode_image(slide.generated_image_url))
        picture = pptx_slide.shapes.add_picture(
            image_stream, _ratio(IMAGE_LEFT_RATIO), BODY_TOP, _ratio(IMAGE_WIDTH_RATIO), BODY_HEIGHT
        )
    except Exception as e:
        raise ExportFailure(f"Slide '{slide.id}' has an unreadable image: {e}") from e
    picture.name = "Image"


def _add_slide(prs: Presentation, slide: Slide, theme: ThemeProfile) -> None:
    pptx_slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
    fill = pptx_slide.background.fill
    fill.solid()
    fill.fore_color.rgb = RGBColor.from_string(theme.background_color)

    _add_title(pptx_slide, slide, theme)
    _add_bullets(pptx_slide, slide, theme)
    if slide.generated_image_url:
        _add_picture(pptx_slide, slide)

    pptx_slide.notes_slide.notes_text_frame.text = slide.speaker_notes


def export_presentation(deck: Deck, theme: ThemeProfile) -> bytes:
    """
    Builds the .pptx file for a deck snapshot and returns its bytes.
    The deck is only read; images already attached to slides are embedded as-is.
    """
    if not deck.slides:
        raise ValueError("Cannot export a deck without slides.")
    if not deck.title.strip():
        raise ValueError("Cannot export a deck without a title.")

    prs = Presentation()
    prs.slide_width = SLIDE_WIDTH
    prs.slide_height = SLIDE_HEIGHT
    prs.core_properties.title = deck.title

    for slide in deck.slides:
        _add_slide(prs, slide, theme)
    logger.info(f"Laid out {len(deck.slides)} slides with theme '{theme.identifier}'.")

    buffer = io.BytesIO()
    try:
        prs.save(buffer)
    except Exception as e:
        raise ExportFailure(f"Could not serialize presentation: {e}") from e
    return buffer.getvalue()
