import logging
from typing import Callable

from modules.core.session import SessionStore

logger = logging.getLogger(__name__)

LOGIN_PAGE = "pages/0_login.py"


class SessionGate:
    """Precondition check run once when a view is activated."""

    def __init__(self, session_store: SessionStore, navigate: Callable[[str], None],
                 login_page: str = LOGIN_PAGE):
        self.session_store = session_store
        self.navigate = navigate
        self.login_page = login_page

    def check(self) -> bool:
        """Return True when authenticated requests may be issued; redirect otherwise."""
        if self.session_store.has_session():
            return True
        logger.info(f"No session token, redirecting to {self.login_page}")
        self.navigate(self.login_page)
        return False
