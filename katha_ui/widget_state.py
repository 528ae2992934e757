"""
Keyed widgets bound to fields of the KathaSession.

Each bound widget owns a st.session_state entry that is seeded once from the
session and then left to Streamlit. Loading or resetting a session drops the
entries so the next run seeds them again from the new values.
"""
import streamlit as st

BOUND_FIELDS = ("name", "difficulty", "seed_story", "filter_prompt", "character_customization")


def widget_key(field: str) -> str:
    return f"w_{field}"


def _value(session, field: str):
    value = getattr(session, field)
    # enums are shown by their label
    return getattr(value, "value", value)


def bind(session, field: str, state=None) -> str:
    """Seed the widget entry for `field` if missing and return its key."""
    state = st.session_state if state is None else state
    key = widget_key(field)
    if key not in state:
        state[key] = _value(session, field)
    return key


def forget_bound_widgets(state=None):
    state = st.session_state if state is None else state
    for field in BOUND_FIELDS:
        state.pop(widget_key(field), None)
