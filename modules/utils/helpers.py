import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional, TypeVar

import streamlit as st

from config.environment import AppConfig, Environment
from modules.core.error_handler import ConfigurationError
from modules.core.session import SessionStore
from modules.services.api_client import ApiClient
from modules.services.auth_service import AuthService

logger = logging.getLogger(__name__)

T = TypeVar('T')

_logging_configured = False


def setup_logging():
    """Configure root logging once per process from the environment."""
    global _logging_configured
    if _logging_configured:
        return
    logging.basicConfig(
        level=getattr(logging, str(Environment.LOGGING_CONFIG['level']).upper(), logging.INFO),
        format=Environment.LOGGING_CONFIG['format']
    )
    _logging_configured = True


def setup_page_config(page_title: str = Environment.APP_NAME):
    """Set up the Streamlit page configuration."""
    setup_logging()
    st.set_page_config(
        page_title=f"{page_title} | {Environment.APP_NAME}",
        page_icon="🎬",
        layout="wide",
        initial_sidebar_state="expanded"
    )
    st.markdown("""
        <style>
            .main {
                padding: 2rem;
            }
            .featured-pack {
                border: 2px solid currentColor;
                border-radius: 1rem;
                padding: 0.25rem 0.75rem;
            }
        </style>
    """, unsafe_allow_html=True)


def run_async(coro):
    """Drive a coroutine to completion from a Streamlit script run."""
    return asyncio.run(coro)


def load_config() -> AppConfig:
    """Resolve configuration; a missing API location stops the page."""
    try:
        return Environment.load()
    except ConfigurationError as e:
        st.error(f"Configuration error: {e.message}")
        st.stop()
        raise


def get_session_store() -> SessionStore:
    return SessionStore(st.session_state)


def get_api_client(config: AppConfig, session_store: SessionStore) -> ApiClient:
    if 'api_client' not in st.session_state:
        st.session_state.api_client = ApiClient(
            config.api_base_url, session_store, timeout=config.request_timeout
        )
    return st.session_state.api_client


def get_or_create(key: str, factory: Callable[[], T]) -> T:
    """Keep one instance per browser session under ``key``."""
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def switch_page(page: str):
    st.switch_page(page)


def format_date(value: Optional[datetime]) -> str:
    """
    Format an optional timestamp for display.

    Args:
        value (datetime): Timestamp to format

    Returns:
        str: Formatted date or "N/A"
    """
    if value is None:
        return "N/A"
    return value.strftime('%B %d, %Y')


def format_price(price: str, currency: str) -> str:
    return f"{price} {currency}"


def get_auth_service(api: ApiClient, session_store: SessionStore) -> AuthService:
    return get_or_create(
        'auth_service',
        lambda: AuthService(api, session_store, switch_page, on_logout=reset_session)
    )


VIEW_KEYS = ('dashboard_view', 'generate_view')
SESSION_KEYS = ('active_page', 'pending_payment_url', 'open_payment_tab', 'reload_dashboard')


def enter_page(page_key: str) -> bool:
    """
    Track which page is showing.

    Returns:
        bool: True when this run starts a new activation of ``page_key``;
            views belonging to other pages are deactivated at that point
    """
    if st.session_state.get('active_page') == page_key:
        return False
    for key in VIEW_KEYS:
        if key != page_key and key in st.session_state:
            st.session_state[key].deactivate()
    st.session_state.active_page = page_key
    return True


def reset_session(storage=None):
    """Forget every view and page flag tied to the signed-in account."""
    storage = st.session_state if storage is None else storage
    for key in VIEW_KEYS:
        view = storage.get(key)
        if view is not None:
            view.deactivate()
    for key in VIEW_KEYS + SESSION_KEYS:
        if key in storage:
            del storage[key]
    logger.info("Cleared cached views for the previous session")
