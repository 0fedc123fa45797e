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

setup_page_config("Sign in")
Navigation.display_header()
enter_page("login")

config = load_config()
session_store = get_session_store()
auth = get_auth_service(get_api_client(config, session_store), session_store)

st.title("Welcome back")
st.caption("Log in to manage your credits and uploads.")

with st.form("login_form"):
    email = st.text_input("Email", key="login_email")
    password = st.text_input("Password", type="password", key="login_password")
    submitted = st.form_submit_button("Sign in")

if submitted:
    result = run_async(auth.login(email, password))
    if not result.success:
        st.error(auth.state.error)
        if result.needs_verification:
            st.write("Need a new verification email?")
            st.page_link("pages/2_verify.py", label="Verify your email")
            st.session_state.verify_email = email

st.write("New here?")
st.page_link("pages/1_register.py", label="Create an account")
