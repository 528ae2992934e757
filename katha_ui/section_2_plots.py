# -*- coding: utf-8 -*-
import streamlit as st
from katha.errors import KathaError
from katha.pipeline import generate_plot_options, run_sync
from katha.session import KathaSession, Stage


def _option_label(i: int, text: str) -> str:
    head = text.split(".")[0].strip()
    if len(head) > 90:
        head = head[:87].rstrip() + "…"
    return f"{i}. {head}"


def render_section_2(client, models):
    st.header("2) Choose a Plot Direction")

    session: KathaSession = st.session_state.session
    if session.stage < Stage.STORY:
        st.info("Weave the tale first to get plot options.")
        return

    if st.button("🧭 Generate plot options", disabled=not bool(client)):
        with st.spinner("Generating plot options..."):
            try:
                options = run_sync(generate_plot_options(
                    client, session.rewritten_story, session.difficulty, model=models["text"]
                ))
            except KathaError as e:
                st.error(f"Could not generate plot options: {e.message}")
            else:
                session.apply_plot_options(options)
                st.success(f"{len(options)} plot options ready.")

    if not session.plot_options:
        return

    labels = [_option_label(i, p) for i, p in enumerate(session.plot_options, 1)]
    current = session.plot_options.index(session.selected_plot) if session.selected_plot else 0
    pick = st.radio("Plot options", labels, index=current, key="pick_plot")
    idx_pick = labels.index(pick)
    st.text_area("Plot summary", value=session.plot_options[idx_pick], height=160, disabled=True)

    if st.button("✅ Select this plot"):
        session.select_plot(session.plot_options[idx_pick])
        st.success("Plot selected. Continue with images and the video script.")

    if session.selected_plot:
        st.caption(f"Selected: {session.selected_plot}")
