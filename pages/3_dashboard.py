import json

import streamlit as st
import streamlit.components.v1 as components

from modules.ui.components import render_dashboard
from modules.ui.navigation import Navigation
from modules.utils.helpers import (
    enter_page,
    get_api_client,
    get_auth_service,
    get_or_create,
    get_session_store,
    load_config,
    run_async,
    setup_page_config,
    switch_page,
)
from modules.views import DashboardView

setup_page_config("Dashboard")

config = load_config()
session_store = get_session_store()
api = get_api_client(config, session_store)
auth = get_auth_service(api, session_store)
Navigation.display_sidebar(auth.logout)


def open_payment(url: str):
    st.session_state.pending_payment_url = url
    st.session_state.open_payment_tab = True


view = get_or_create(
    'dashboard_view',
    lambda: DashboardView(api, session_store, switch_page, config, open_url=open_payment)
)


def handle_buy(slug: str):
    st.session_state.pending_payment_url = None
    run_async(view.payments.buy(slug))


def handle_cancel(subscription_id: int):
    run_async(view.subscriptions.cancel(subscription_id))


if enter_page('dashboard_view') or st.session_state.pop('reload_dashboard', False):
    with st.spinner("Loading your desk..."):
        run_async(view.load())

st.title("Welcome to your desk")
st.caption("Manage your credits, subscriptions, and upcoming uploads.")
col1, col2 = st.columns([4, 1])
with col1:
    st.page_link("pages/4_generate.py", label="Upload a video")
with col2:
    if st.button("Reload"):
        st.session_state.reload_dashboard = True
        st.rerun()

render_dashboard(
    view,
    on_buy=handle_buy,
    on_cancel=handle_cancel,
    pending_payment_url=st.session_state.get('pending_payment_url')
)

if st.session_state.pop('open_payment_tab', False):
    url = json.dumps(st.session_state.pending_payment_url)
    components.html(
        f"<script>window.open({url}, '_blank', 'noopener,noreferrer');</script>",
        height=0
    )
