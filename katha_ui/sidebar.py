import streamlit as st
from katha.env_loader import apply_api_key, credential_status, forget_api_key
from katha.errors import KathaError
from katha.presets import DEFAULT_TEXT_MODEL, DEFAULT_IMAGE_MODEL, TEXT_MODELS, IMAGE_MODELS
from katha.project_io import DATA_DIR, save_session, load_session, list_sessions, clear_session, export_zip
from katha.session import KathaSession
from katha_ui.widget_state import bind, forget_bound_widgets


def _model_picker(label: str, options, default: str, key: str) -> str:
    options = list(options)
    if default not in options:
        options.insert(0, default)
    picked = st.sidebar.selectbox(label, options, index=options.index(default), key=key)
    custom = st.sidebar.text_input(f"{label} (custom)", value="", key=f"{key}_custom",
                                   help="Overrides the selection above, e.g. gemini-2.5-flash")
    return custom.strip() or picked


# ---- button callbacks: they run before widgets are re-created ----

def _apply_key():
    try:
        fingerprint = apply_api_key(st.session_state.api_key_entry, persist=st.session_state.api_key_persist)
    except KathaError as e:
        st.session_state.key_notice = ("error", e.message)
        return
    where = "saved to .env" if st.session_state.api_key_persist else "for this run"
    st.session_state.key_notice = ("success", f"Key applied {where} ({fingerprint}).")
    st.session_state.api_key_entry = ""


def _forget_key():
    forget_api_key()
    st.session_state.key_notice = ("info", "Key dropped. A key in .env is used again if present.")


def _load_selected():
    picked = st.session_state.saved_session_pick
    st.session_state.session = load_session(DATA_DIR / picked)
    forget_bound_widgets()
    st.session_state.progress_notice = f"Loaded {picked}"


def _clear_and_reset():
    session: KathaSession = st.session_state.session
    clear_session(session.name)
    session.reset()
    forget_bound_widgets()
    st.session_state.confirm_clear = False


def _render_key_manager():
    has_key, status = credential_status()
    with st.sidebar.expander("🔐 Gemini API key", expanded=not has_key):
        if has_key:
            st.caption(status)
        else:
            st.warning(status)

        st.text_input("API key", type="password", placeholder="paste GEMINI_API_KEY here…", key="api_key_entry")
        st.checkbox("Also save to .env", key="api_key_persist")
        colA, colF = st.columns(2)
        colA.button("⚡ Apply", on_click=_apply_key)
        colF.button("🧽 Forget", on_click=_forget_key, disabled=not has_key)

        notice = st.session_state.pop("key_notice", None)
        if notice:
            getattr(st, notice[0])(notice[1])


def render_sidebar():
    st.sidebar.title("⚙️ Settings")
    _render_key_manager()

    text_model = _model_picker("Text model", TEXT_MODELS, DEFAULT_TEXT_MODEL, "text_model")
    image_model = _model_picker("Image model", IMAGE_MODELS, DEFAULT_IMAGE_MODEL, "image_model")

    st.sidebar.markdown("---")
    st.sidebar.subheader("📁 Progress")
    session: KathaSession = st.session_state.session
    name = st.sidebar.text_input("Session name", key=bind(session, "name"))
    session.name = name.strip() or session.name

    files = list_sessions()
    if files:
        st.sidebar.selectbox("Saved sessions", ["(Choose)"] + [f.name for f in files], key="saved_session_pick")
        st.sidebar.button("📂 Load Progress", on_click=_load_selected,
                          disabled=st.session_state.saved_session_pick == "(Choose)")
    notice = st.session_state.pop("progress_notice", None)
    if notice:
        st.sidebar.success(notice)

    if st.sidebar.button("💾 Save Progress", type="primary"):
        f = save_session(session)
        st.sidebar.success(f"Progress saved: {f.name}")

    if st.sidebar.button("📦 Export ZIP"):
        zbytes = export_zip(session)
        st.sidebar.download_button("Download katha.zip", data=zbytes, file_name="katha.zip")

    confirm = st.sidebar.checkbox("I understand this cannot be undone", key="confirm_clear")
    st.sidebar.button("🧹 Clear & Reset", disabled=not confirm, on_click=_clear_and_reset)

    return {"text": text_model, "image": image_model}
