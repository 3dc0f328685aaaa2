# app.py
# Sentence-style recipient form, centered.
# Find / Refresh / Card message actions plus Back / Forward through earlier result sets.
# Link behavior:
#   - Purchase links are already rewritten to retailer searches by the recommender
#   - "#" means no usable link; a hint is shown instead of a button

from typing import List

import streamlit as st

from giftfinder.config import GENDERS, OCCASIONS, RELATIONSHIPS
from giftfinder.links import has_purchase_link
from giftfinder.logger import setup_logging
from giftfinder.models import AppState, Criteria, GiftIdea
from giftfinder.prompts import article_for, possessive_for, pronoun_verb
from giftfinder.recommender import fetch_gift_suggestions, generate_card_message, go_back, go_forward


setup_logging()
st.set_page_config(page_title="Gift Finder", page_icon="🎁", layout="wide")

_TEXT_FIELDS = ["occasion", "relationship", "gender", "interests", "notable_events"]
_DIGIT_FIELDS = ["age", "min_price", "max_price"]


def _init_state() -> None:
    if "app_state" not in st.session_state:
        st.session_state["app_state"] = AppState()
    for k in _TEXT_FIELDS + _DIGIT_FIELDS:
        if k not in st.session_state:
            st.session_state[k] = ""


def _state() -> AppState:
    return st.session_state["app_state"]


def _sync_criteria() -> None:
    values = {k: st.session_state.get(k, "") or "" for k in _TEXT_FIELDS + _DIGIT_FIELDS}
    _state().criteria = Criteria(**values)


def _clean_digits(key: str) -> None:
    # Show the sanitised value back in the box
    st.session_state[key] = getattr(Criteria(**{key: st.session_state.get(key, "")}), key)
    _sync_criteria()


def _on_find() -> None:
    with st.spinner("Finding gift ideas..."):
        fetch_gift_suggestions(_state())


def _on_message() -> None:
    with st.spinner("Writing your card message..."):
        generate_card_message(_state())


def _on_back() -> None:
    go_back(_state())


def _on_forward() -> None:
    go_forward(_state())


def _select(label: str, key: str, options: List[str], placeholder: str) -> None:
    values = [""] + [o.lower() for o in sorted(options)]
    labels = {o.lower(): o for o in options}
    labels[""] = placeholder
    st.selectbox(
        label,
        values,
        key=key,
        format_func=lambda v: labels.get(v, v),
        on_change=_sync_criteria,
        disabled=_state().busy,
    )


def _render_ideas(items: List[GiftIdea]) -> None:
    st.subheader("Unique Gift Ideas")
    st.caption(
        "Please note: Purchase links are AI-generated links and may occasionally be outdated "
        "or lead to a general search page. You might need to adjust your search if a link does not work."
    )
    for idx, gift in enumerate(items, start=1):
        with st.container(border=True):
            st.markdown(f"**{idx}. {gift.name}**")
            if gift.description:
                st.write(gift.description)
            if has_purchase_link(gift.purchase_link):
                st.link_button("Purchase Here", gift.purchase_link)
            else:
                st.caption("No direct purchase link available. Try searching online.")


_init_state()
_sync_criteria()

state = _state()
criteria = state.criteria
busy = state.busy

st.title("🎁 Gift Finder")

left, center, right = st.columns([1, 2, 1])

with center:
    st.markdown(f"### I need {article_for(criteria.occasion)} ...")
    _select("Occasion", "occasion", OCCASIONS, "occasion")
    st.markdown("##### gift for my")
    _select("Relationship", "relationship", RELATIONSHIPS, "relationship")
    st.markdown("##### who is")
    st.text_input("Age", key="age", placeholder="age", on_change=_clean_digits, args=("age",), disabled=busy)
    st.markdown("##### years old.")
    _select("Gender", "gender", GENDERS, "Gender")
    st.markdown(f"##### {pronoun_verb(criteria.gender)} interested in")
    st.text_input("Interests", key="interests", placeholder="interests", on_change=_sync_criteria, disabled=busy)
    st.markdown(f"##### and notable events in {possessive_for(criteria.gender)} life include")
    st.text_input(
        "Notable events", key="notable_events", placeholder="notable events", on_change=_sync_criteria, disabled=busy
    )

    st.markdown("**Price:**")
    c_min, c_max = st.columns(2)
    with c_min:
        st.text_input("$min", key="min_price", placeholder="$min", on_change=_clean_digits, args=("min_price",), disabled=busy)
    with c_max:
        st.text_input("$max", key="max_price", placeholder="$max", on_change=_clean_digits, args=("max_price",), disabled=busy)

    col_a, col_b, col_c = st.columns(3)
    with col_a:
        st.button("Find Gifts", on_click=_on_find, disabled=not state.can_find_gifts, use_container_width=True)
    with col_b:
        st.button("Refresh Gift Ideas", on_click=_on_find, disabled=not state.can_refresh, use_container_width=True)
    with col_c:
        st.button(
            "✨ Generate Card Message",
            on_click=_on_message,
            disabled=not state.can_generate_message,
            use_container_width=True,
        )

    col_back, col_fwd = st.columns(2)
    with col_back:
        st.button("Back", on_click=_on_back, disabled=not state.can_go_back, use_container_width=True)
    with col_fwd:
        st.button("Forward", on_click=_on_forward, disabled=not state.can_go_forward, use_container_width=True)

    if state.error:
        st.error(f"**Error:** {state.error}")

    if state.gift_ideas:
        _render_ideas(state.gift_ideas)

    if state.card_message:
        st.subheader("Your Personalized Card Message")
        st.text_area("Message", value=state.card_message, height=220)
