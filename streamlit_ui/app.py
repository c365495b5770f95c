# app.py
# Run with: streamlit run streamlit_ui/app.py

# --- Imports ---
import logging
from pathlib import Path

import streamlit as st

from design_generation_service.themes import resolve
from streamlit_ui import clients, session
from streamlit_ui.clients import ServiceError
from streamlit_ui.preview import render_slide, render_thumbnail
from streamlit_ui.themes import THEMES

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - [%(levelname)s] - %(message)s')
logger = logging.getLogger(__name__)

st.set_page_config(page_title="SlideCraft AI", page_icon="🎞️", layout="wide")

SAMPLE_TEXT = """Strategic Roadmap 2025: Tech Horizon

Current Landscape:
The industry is shifting towards decentralized computing and edge AI. Competition has intensified in the SaaS sector, necessitating a pivot towards integrated ecosystems.

Core Objectives:
- Achieve carbon neutrality by Q4 2025
- Expand market share in APAC by 18%
- Redefine internal workflows using LLM-driven automation

Innovation Pillars:
- Adaptive UI/UX using biometric feedback
- Quantum-resistant encryption for cloud storage
- Real-time supply chain transparency using distributed ledgers

Conclusion:
Our focus remains steadfast on sustainable growth and pioneering technological breakthroughs. The road ahead is challenging but ripe with opportunity."""


def load_css(file_name):
    """Loads a CSS file and injects it into the Streamlit app."""
    with open(Path(__file__).parent / file_name) as f:
        st.markdown(f'<style>{f.read()}</style>', unsafe_allow_html=True)


load_css("style.css")

# --- State Management ---
state = st.session_state
session.init_state(state)


# --- Actions ---
def use_sample_text():
    state["input_text"] = SAMPLE_TEXT


def generate_deck():
    state["error"] = None
    with st.spinner("Gemini is architecting your presentation..."):
        try:
            deck = clients.structurize(state["input_text"])
        except ServiceError as e:
            session.apply_generation_error(state, str(e) or "An error occurred while generating slides.")
            return
    session.apply_deck(state, deck)


def generate_visual(slide_id):
    ticket = session.begin_image_request(state, slide_id)
    if ticket is None:
        return
    state["error"] = None
    try:
        with st.spinner("Generating vision..."):
            image_url = clients.synthesize_image(ticket.description)
        session.apply_image_result(state, ticket, image_url)
    except ServiceError as e:
        logger.error(f"Image generation failed for slide '{slide_id}': {e}")
        state["error"] = "Failed to generate AI image. Please try again."
    finally:
        session.finish_image_request(state, ticket)


def generate_all_visuals():
    tickets = {}
    for slide in state["deck"]["slides"]:
        if slide.get("generatedImageUrl"):
            continue
        ticket = session.begin_image_request(state, slide["id"])
        if ticket is not None:
            tickets[ticket.slide_id] = ticket
    if not tickets:
        return

    state["error"] = None
    items = [{"id": t.slide_id, "description": t.description} for t in tickets.values()]
    try:
        with st.spinner(f"Generating {len(items)} visuals..."):
            results = clients.synthesize_images(items)
        failed = 0
        for result in results:
            ticket = tickets.get(result.get("id"))
            if ticket is None:
                continue
            if result.get("imageUrl"):
                session.apply_image_result(state, ticket, result["imageUrl"])
            else:
                failed += 1
        if failed:
            state["error"] = f"{failed} of {len(items)} AI images could not be generated. Please try again."
    except ServiceError as e:
        logger.error(f"Batch image generation failed: {e}")
        state["error"] = "Failed to generate AI images. Please try again."
    finally:
        for ticket in tickets.values():
            session.finish_image_request(state, ticket)


def prepare_export():
    state["error"] = None
    deck = session.snapshot_deck(state)
    with st.spinner("Building your PowerPoint file..."):
        try:
            filename, payload = clients.export_presentation(deck, state["theme"])
        except ServiceError as e:
            logger.error(f"PPTX export failed: {e}")
            state["error"] = f"Failed to export PowerPoint file: {e}"
            return
    session.store_export(state, filename, payload)


# --- UI Functions ---
def theme_picker():
    st.subheader("Visual Theme")
    cols = st.columns(2)
    for i, theme in enumerate(THEMES):
        with cols[i % 2]:
            card_class = "theme-card selected" if state["theme"] == theme['id'] else "theme-card"
            st.markdown(f"""
                <div class="{card_class}">
                    <div class="theme-card-header">{theme['name']}</div>
                    <div class="theme-card-desc">{theme['desc']}</div>
                    <div class="theme-preview-colors">
                        {''.join([f'<div class="theme-preview-color" style="background-color:{color};"></div>' for color in theme['colors']])}
                    </div>
                    <div class="theme-preview-font">{theme['fonts']}</div>
                </div>
            """, unsafe_allow_html=True)
            st.button(f"Select {theme['name']}", key=f"theme_{theme['id']}", width="stretch",
                      on_click=session.select_theme, args=(state, theme['id']))


def slide_navigation(deck):
    title_col, prev_col, count_col, next_col = st.columns([6, 1, 1, 1])
    title_col.subheader(deck["title"])
    prev_col.button("◀", key="prev_slide", disabled=state["active_index"] == 0,
                    on_click=session.previous_slide, args=(state,))
    count_col.markdown(f"**{state['active_index'] + 1} / {len(deck['slides'])}**")
    next_col.button("▶", key="next_slide", disabled=state["active_index"] == len(deck["slides"]) - 1,
                    on_click=session.next_slide, args=(state,))


def thumbnails(deck, theme):
    per_row = 8
    for start in range(0, len(deck["slides"]), per_row):
        cols = st.columns(per_row)
        for offset, slide in enumerate(deck["slides"][start:start + per_row]):
            idx = start + offset
            with cols[offset]:
                st.markdown(render_thumbnail(slide, theme, idx == state["active_index"]), unsafe_allow_html=True)
                st.button(str(idx + 1), key=f"thumb_{slide['id']}", width="stretch",
                          on_click=session.go_to_slide, args=(state, idx))


# --- UI Rendering ---
st.title("SlideCraft AI")
st.caption("Professional Presentation Engine")

input_col, deck_col = st.columns([4, 8], gap="large")

with input_col:
    st.text_area("Source Content", key="input_text", height=300,
                 placeholder="Paste your presentation notes, reports, or raw data here...")
    st.button("Check sample text", on_click=use_sample_text)
    if st.button("Transform into Slides", type="primary", width="stretch",
                 disabled=not state["input_text"].strip()):
        generate_deck()
        st.rerun()
    if state["error"]:
        st.error(state["error"], icon="⚠️")

    if state["deck"]:
        st.markdown("---")
        theme_picker()

with deck_col:
    deck = state["deck"]
    if not deck or not deck["slides"]:
        st.subheader("No slides yet")
        st.write("Paste your content and let our AI create a professional slide deck for you.")
    else:
        theme = resolve(state["theme"])
        slide_navigation(deck)

        slide = session.active_slide(state)
        st.markdown(render_slide(slide, theme, state["active_index"]), unsafe_allow_html=True)

        action_col, batch_col = st.columns(2)
        if slide.get("imageDescription"):
            label = "Regenerate Image" if slide.get("generatedImageUrl") else "Generate AI Visual"
            if action_col.button(label, key=f"visual_{slide['id']}", width="stretch",
                                 disabled=session.is_generating_image(state, slide["id"])):
                generate_visual(slide["id"])
                st.rerun()
        if batch_col.button("Generate all visuals", width="stretch"):
            generate_all_visuals()
            st.rerun()

        thumbnails(deck, theme)

        with st.container(border=True):
            st.markdown("**PRESENTER NOTES**")
            st.markdown(f"*\"{slide['speakerNotes']}\"*")

        st.markdown("---")
        if st.button("Prepare .PPTX", width="stretch"):
            prepare_export()
            st.rerun()
        export = state["export"]
        if export:
            st.download_button(
                label=f"Download {export['filename']}",
                data=export["payload"],
                file_name=export["filename"],
                mime="application/vnd.openxmlformats-officedocument.presentationml.presentation",
                width="stretch",
                type="primary"
            )
