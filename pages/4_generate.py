import streamlit as st

from modules.ui.components import render_generate
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
from modules.views import GenerateView

setup_page_config("Generate")

config = load_config()
session_store = get_session_store()
api = get_api_client(config, session_store)
auth = get_auth_service(api, session_store)
Navigation.display_sidebar(auth.logout)

view = get_or_create(
    'generate_view',
    lambda: GenerateView(api, session_store, switch_page, config)
)


def handle_refresh():
    run_async(view.feed.refresh())


def handle_load_more():
    run_async(view.feed.load_more())


def handle_submit(request: dict):
    run_async(view.submission.submit(**request))
    st.rerun()


if enter_page('generate_view'):
    run_async(view.load())

render_generate(
    view,
    on_submit=handle_submit,
    on_refresh=handle_refresh,
    on_load_more=handle_load_more
)
