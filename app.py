import streamlit as st

from modules.core.session_gate import LOGIN_PAGE
from modules.services.auth_service import DASHBOARD_PAGE
from modules.utils.helpers import get_session_store, load_config, setup_page_config

# Setup page
setup_page_config("Home")

# Fail fast when the API location is missing
load_config()

st.title("Sora Clean")
st.markdown("""
    Remove watermarks from your Sora videos.

    - Monthly quota from your subscription is used first
    - One-time credit packs cover the rest
    - Results stay available in your upload history
""")

if get_session_store().has_session():
    st.switch_page(DASHBOARD_PAGE)
else:
    st.switch_page(LOGIN_PAGE)
