from typing import Any, List

from .config import MAX_GIFT_IDEAS
from .errors import GiftFinderError, UnexpectedShapeError
from .links import process_retailer_link
from .llm import llm_json, llm_text
from .logger import get_logger
from .models import AppState, GiftIdea
from .prompts import GIFT_IDEAS_SCHEMA, build_gift_prompt, build_message_prompt

log = get_logger(__name__, component="recommender")

MESSAGE_FALLBACK = "Error generating message. Please try again."


def _text(value: Any) -> str:
    if isinstance(value, str):
        # Unpaired surrogates are not valid str input for the models
        return value.encode("utf-8", "replace").decode("utf-8")
    # JSON numbers still make a usable name and search term
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def parse_gift_ideas(parsed: Any, k: int = MAX_GIFT_IDEAS) -> List[GiftIdea]:
    """Validates the parsed payload, keeps the first k entries and rewrites their links."""
    if not isinstance(parsed, list):
        raise UnexpectedShapeError()

    ideas = []
    for raw in parsed[:k]:
        if not isinstance(raw, dict):
            raise UnexpectedShapeError()
        name = _text(raw.get("name"))
        ideas.append(
            GiftIdea(
                name=name,
                description=_text(raw.get("description")),
                purchase_link=process_retailer_link(raw.get("purchaseLink"), name),
            )
        )
    return ideas


def fetch_gift_suggestions(state: AppState) -> AppState:
    """
    Runs one gift fetch against state. Used by both "Find Gifts" and "Refresh".
    On failure the previously displayed ideas were already cleared on entry and the
    history is left alone.
    """
    if state.busy:
        log.warning("fetch_rejected_busy")
        return state

    state.gift_ideas = []
    state.error = None
    state.is_loading = True
    log.info("fetch_started", occasion=state.criteria.occasion)

    try:
        parsed = llm_json(build_gift_prompt(state.criteria), GIFT_IDEAS_SCHEMA)
        ideas = parse_gift_ideas(parsed)
    except UnexpectedShapeError as exc:
        log.error("fetch_unexpected_shape", error=str(exc))
        state.error = str(exc)
    except GiftFinderError as exc:
        log.error("fetch_failed", error=str(exc))
        state.error = f"Failed to fetch gift suggestions: {str(exc).rstrip('.')}. Please try again."
    else:
        state.gift_ideas = ideas
        state.history.push(ideas)
        log.info("fetch_succeeded", count=len(ideas), history_len=len(state.history))
    finally:
        state.is_loading = False

    return state


def generate_card_message(state: AppState) -> AppState:
    if state.busy:
        log.warning("message_rejected_busy")
        return state

    state.card_message = ""
    state.error = None
    state.is_generating_message = True

    try:
        state.card_message = llm_text(build_message_prompt(state.criteria))
    except GiftFinderError as exc:
        log.error("message_failed", error=str(exc))
        state.error = f"Failed to generate card message: {str(exc).rstrip('.')}."
        state.card_message = MESSAGE_FALLBACK
    finally:
        state.is_generating_message = False

    return state


def go_back(state: AppState) -> AppState:
    if state.busy:
        log.warning("history_back_rejected_busy")
        return state
    entry = state.history.back()
    if entry is not None:
        state.gift_ideas = entry
        state.error = None
        log.info("history_back", cursor=state.history.cursor)
    return state


def go_forward(state: AppState) -> AppState:
    if state.busy:
        log.warning("history_forward_rejected_busy")
        return state
    entry = state.history.forward()
    if entry is not None:
        state.gift_ideas = entry
        state.error = None
        log.info("history_forward", cursor=state.history.cursor)
    return state
