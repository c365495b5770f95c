# session.py
# State for the Streamlit shell. Every function takes the state mapping
# (st.session_state in the app) so the transitions can run without Streamlit.

import copy
import logging
from typing import Any, Dict, MutableMapping, NamedTuple, Optional

from design_generation_service.themes import DEFAULT_THEME, resolve

logger = logging.getLogger(__name__)

State = MutableMapping[str, Any]

DEFAULTS = {
    "input_text": "",
    "deck": None,
    "deck_revision": 0,
    "theme": DEFAULT_THEME,
    "active_index": 0,
    "generating_images": {},
    "error": None,
    "export": None,
}


class ImageTicket(NamedTuple):
    """Identifies an in-flight image request: which deck it was issued against and for which slide."""
    revision: int
    slide_id: str
    description: str


def init_state(state: State) -> None:
    for key, value in DEFAULTS.items():
        if key not in state:
            state[key] = copy.deepcopy(value)


def find_slide(state: State, slide_id: str) -> Optional[Dict[str, Any]]:
    deck = state["deck"]
    if not deck:
        return None
    return next((s for s in deck["slides"] if s["id"] == slide_id), None)


def apply_deck(state: State, deck: Dict[str, Any]) -> bool:
    """
    Replaces the deck wholesale. Image requests issued against the old deck
    become stale. A deck without slides is reported as a generation error and
    the previous deck stays in place.
    """
    if not deck.get("slides"):
        apply_generation_error(state, "The generated presentation has no slides. Please try again.")
        return False
    state["deck"] = deck
    state["deck_revision"] += 1
    state["active_index"] = 0
    state["generating_images"] = {}
    state["error"] = None
    state["export"] = None
    logger.info(f"Deck revision {state['deck_revision']}: '{deck['title']}' with {len(deck['slides'])} slides.")
    return True


def apply_generation_error(state: State, message: str) -> None:
    # The previous deck, if any, stays in place
    state["error"] = message


def begin_image_request(state: State, slide_id: str) -> Optional[ImageTicket]:
    slide = find_slide(state, slide_id)
    if not slide or not slide.get("imageDescription"):
        return None
    state["generating_images"][slide_id] = True
    return ImageTicket(state["deck_revision"], slide_id, slide["imageDescription"])


def apply_image_result(state: State, ticket: ImageTicket, image_url: str) -> bool:
    """
    Attaches a generated image to the slide the ticket names. Returns False
    and leaves the deck untouched when the deck has been replaced since the
    ticket was issued or the slide no longer exists.
    """
    if ticket.revision != state["deck_revision"]:
        logger.info(f"Dropping stale image for slide '{ticket.slide_id}' (revision {ticket.revision}).")
        return False
    slide = find_slide(state, ticket.slide_id)
    if slide is None:
        logger.info(f"Dropping image for unknown slide '{ticket.slide_id}'.")
        return False
    slide["generatedImageUrl"] = image_url
    state["export"] = None
    return True


def finish_image_request(state: State, ticket: ImageTicket) -> None:
    if ticket.revision == state["deck_revision"]:
        state["generating_images"].pop(ticket.slide_id, None)


def is_generating_image(state: State, slide_id: str) -> bool:
    return bool(state["generating_images"].get(slide_id))


def go_to_slide(state: State, index: int) -> None:
    deck = state["deck"]
    if not deck or not deck["slides"]:
        state["active_index"] = 0
        return
    state["active_index"] = max(0, min(index, len(deck["slides"]) - 1))


def next_slide(state: State) -> None:
    go_to_slide(state, state["active_index"] + 1)


def previous_slide(state: State) -> None:
    go_to_slide(state, state["active_index"] - 1)


def active_slide(state: State) -> Optional[Dict[str, Any]]:
    deck = state["deck"]
    if not deck or not deck["slides"]:
        return None
    return deck["slides"][state["active_index"]]


def select_theme(state: State, theme_id: str) -> None:
    resolve(theme_id)  # raises UnknownTheme
    if state["theme"] != theme_id:
        state["theme"] = theme_id
        state["export"] = None


def snapshot_deck(state: State) -> Optional[Dict[str, Any]]:
    """A private copy of the deck for export, so later image updates cannot reach it."""
    return copy.deepcopy(state["deck"])


def store_export(state: State, filename: str, payload: bytes) -> None:
    state["export"] = {"filename": filename, "payload": payload}
