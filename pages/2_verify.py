import time

import streamlit as st

from modules.core.session_gate import LOGIN_PAGE
from modules.ui.navigation import Navigation
from modules.utils.helpers import (
    get_api_client,
    get_auth_service,
    get_session_store,
    enter_page,
    load_config,
    run_async,
    setup_page_config,
)

setup_page_config("Verify email")
Navigation.display_header()
enter_page("verify")

config = load_config()
session_store = get_session_store()
auth = get_auth_service(get_api_client(config, session_store), session_store)

st.title("Verify your email")

token = st.query_params.get("token")
if token and st.session_state.get('verified_token') != token:
    st.session_state.verified_token = token
    if run_async(auth.verify_email(token)):
        st.success(auth.state.message)
        time.sleep(1.2)
        st.switch_page(LOGIN_PAGE)
    else:
        st.error(auth.state.error)

st.caption("Didn't get the email? Send a new verification link.")
with st.form("resend_form"):
    email = st.text_input(
        "Email",
        value=st.query_params.get("email") or st.session_state.get('verify_email', ""),
    )
    submitted = st.form_submit_button("Resend verification email")

if submitted:
    if run_async(auth.resend_verification(email)):
        st.success(auth.state.message)
    else:
        st.error(auth.state.error)

st.page_link("pages/0_login.py", label="Back to sign in")
