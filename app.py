import streamlit as st

from katha.env_loader import load_env, init_client, configure_logging
from katha.errors import MissingCredentialError
from katha.session import KathaSession

from katha_ui.sidebar import render_sidebar
from katha_ui.section_1_seed import render_section_1
from katha_ui.section_2_plots import render_section_2
from katha_ui.section_3_media import render_section_3

configure_logging()
st.set_page_config(page_title="Katha-Yantra", page_icon="🪔", layout="wide")

# Session init
if "session" not in st.session_state:
    st.session_state.session = KathaSession()

models = render_sidebar()   # key manager and save/load/clear/export UI
api_key = load_env()

st.title("🪔 Katha-Yantra")
st.caption("The AI Indianization Novel Creation App")

try:
    client = init_client(api_key)
except MissingCredentialError as e:
    st.error(e.message)
    st.stop()

# Sections
render_section_1(client, models)
render_section_2(client, models)
render_section_3(client, models)
