import streamlit as st
from katha.data_models import Difficulty
from katha.errors import KathaError
from katha.pipeline import generate_story_and_lexicon, run_sync
from katha.presets import FILTER_PRESETS
from katha.session import KathaSession, Stage
from katha.text_utils import localized_terms_in_story
from katha_ui.widget_state import bind, widget_key


def _render_lexicon(session: KathaSession):
    with st.expander("📜 View Generated Lexicon"):
        cols = st.columns(2)
        for i, (label, entries) in enumerate(session.lexicon.categories()):
            with cols[i % 2]:
                st.markdown(f"**{label}**")
                if not entries:
                    st.caption("(none)")
                for e in entries:
                    st.markdown(f"- **{e.original}** → {e.indianized}")


def _apply_preset():
    preset = st.session_state.filter_preset
    if preset in FILTER_PRESETS:
        st.session_state[widget_key("filter_prompt")] = FILTER_PRESETS[preset]


def render_section_1(client, models):
    st.header("1) Provide Your Story's Seed")

    session: KathaSession = st.session_state.session

    tiers = [d.value for d in Difficulty]
    picked = st.radio("Select Difficulty", tiers, horizontal=True, key=bind(session, "difficulty"))
    session.difficulty = Difficulty(picked)

    session.seed_story = st.text_area(
        "Seed story",
        height=160,
        key=bind(session, "seed_story"),
        placeholder="Enter a short plot summary, outline, or a few opening chapters...",
    )

    preset_names = ["(Custom)"] + list(FILTER_PRESETS.keys())
    st.selectbox("Filter preset", preset_names, key="filter_preset", on_change=_apply_preset,
                 help="Fills the filter below; you can still edit it.")
    session.filter_prompt = st.text_area("Indianization filter", height=120, key=bind(session, "filter_prompt"))

    if st.button("✨ Weave the Tale", type="primary", disabled=not bool(client and session.seed_story.strip())):
        with st.spinner("Generating lexicon and rewritten story..."):
            try:
                generated = run_sync(generate_story_and_lexicon(
                    client, session.seed_story, session.filter_prompt, session.difficulty, model=models["text"]
                ))
            except KathaError as e:
                st.error(f"Could not generate the story: {e.message}")
            else:
                session.apply_story(generated)
                st.success("Lexicon and story ready.")

    if session.stage >= Stage.STORY:
        _render_lexicon(session)
        st.subheader("📖 Rewritten Story")
        st.write(session.rewritten_story)
        used = localized_terms_in_story(session.rewritten_story, session.lexicon)
        if used:
            st.caption("Lexicon terms used: " + ", ".join(used))
