import streamlit as st

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

setup_page_config("Create account")
Navigation.display_header()
enter_page("register")

config = load_config()
session_store = get_session_store()
auth = get_auth_service(get_api_client(config, session_store), session_store)

st.title("Create your account")
st.caption("Start with one free generation, then top up or subscribe.")

with st.form("register_form"):
    email = st.text_input("Email", key="register_email")
    username = st.text_input("Username (optional)", key="register_username")
    password = st.text_input("Password", type="password", key="register_password")
    submitted = st.form_submit_button("Create account")

if submitted:
    result = run_async(auth.register(email, password, username))
    if not result.success:
        st.error(auth.state.error)
    elif result.needs_verification:
        st.success(auth.state.message)
        st.session_state.verify_email = email
        st.page_link("pages/2_verify.py", label="Resend verification email")

st.write("Already have an account?")
st.page_link("pages/0_login.py", label="Sign in")
