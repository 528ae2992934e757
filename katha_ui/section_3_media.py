# -*- coding: utf-8 -*-
import streamlit as st

from katha.errors import KathaError
from katha.gemini_image import data_uri_to_image
from katha.pipeline import generate_images, generate_video_script, regenerate_character_image, run_sync
from katha.presets import CLOTHING_COLORS
from katha.session import KathaSession, Stage
from katha.text_utils import veo_prompts_text
from katha_ui.widget_state import bind, widget_key


# ===================== Images =====================

def _pick_color(color: str):
    st.session_state[widget_key("character_customization")] = f"wearing {color.lower()} clothing"


def _render_character_regen(client, models, session: KathaSession):
    """Re-issue the character prompt with a customization (clothing color, pose...)."""
    st.markdown("**🎨 Customize character**")
    key = bind(session, "character_customization")
    cols = st.columns(len(CLOTHING_COLORS))
    for col, color in zip(cols, CLOTHING_COLORS):
        col.button(color, key=f"color_{color}", on_click=_pick_color, args=(color,))

    session.character_customization = st.text_input(
        "Customization",
        key=key,
        placeholder="e.g. wearing saffron robes, holding a trishul",
    )

    if st.button("🔁 Regenerate character", disabled=not bool(client)):
        with st.spinner("Regenerating character image..."):
            try:
                uri = run_sync(regenerate_character_image(
                    client,
                    session.images.character_prompts[0],
                    session.character_customization,
                    model=models["image"],
                ))
            except KathaError as e:
                st.error(f"Could not regenerate the character: {e.message}")
            else:
                session.replace_character_image(0, uri)
                st.success("Character image updated.")


def _render_images(client, models, session: KathaSession):
    st.subheader("🖼️ Illustrations")
    if st.button("🪄 Generate images", disabled=not bool(client)):
        with st.spinner("Writing image prompts and painting (1 character + 3 scenes)..."):
            try:
                images = run_sync(generate_images(
                    client, session.rewritten_story, text_model=models["text"], image_model=models["image"]
                ))
            except KathaError as e:
                st.error(f"Could not generate images: {e.message}")
            else:
                session.apply_images(images)
                st.success("Images ready.")

    imgs = session.images
    if imgs is None:
        return

    colC, colS = st.columns([1, 3])
    with colC:
        st.caption("Character")
        for uri, prompt in zip(imgs.character_images, imgs.character_prompts):
            st.image(data_uri_to_image(uri), width="stretch")
            with st.expander("Prompt"):
                st.write(prompt)
    with colS:
        st.caption("Scenes")
        cols = st.columns(max(1, len(imgs.scene_images)))
        for col, uri, prompt in zip(cols, imgs.scene_images, imgs.scene_prompts):
            with col:
                st.image(data_uri_to_image(uri), width="stretch")
                with st.expander("Prompt"):
                    st.write(prompt)

    _render_character_regen(client, models, session)


# ===================== Video script =====================

def _render_video_script(client, models, session: KathaSession):
    st.subheader("🎬 Video Script")
    if st.button("📝 Generate video script", disabled=not bool(client)):
        with st.spinner("Writing the video script..."):
            try:
                script = run_sync(generate_video_script(
                    client, session.selected_plot, session.rewritten_story, model=models["text"]
                ))
            except KathaError as e:
                st.error(f"Could not generate the video script: {e.message}")
            else:
                session.apply_video_script(script)
                st.success("Video script ready.")

    vs = session.video_script
    if vs is None:
        return

    st.markdown(f"### {vs.title}")
    tabs = st.tabs(["🎞️ Script", "🎥 Veo prompts"])
    with tabs[0]:
        for i, sc in enumerate(vs.script):
            with st.expander(f"Scene {sc.scene}", expanded=i == 0):
                st.markdown(f"**Visual:** {sc.visual}")
                st.markdown(f"**Dialogue / Narration:** {sc.dialogue}")
    with tabs[1]:
        for v in vs.veo_prompts:
            st.caption(f"Scene {v.scene}")
            st.code(v.prompt, language="markdown")
        st.download_button("Download Veo prompts", data=veo_prompts_text(vs), file_name="veo_prompts.txt")


# ===================== Main UI =====================

def render_section_3(client, models):
    st.header("3) Illustrate & Script")

    session: KathaSession = st.session_state.session
    if session.stage < Stage.SELECTED:
        st.info("Select a plot direction first.")
        return

    _render_images(client, models, session)
    st.markdown("---")
    _render_video_script(client, models, session)
