from typing import MutableMapping, Optional
import logging

import streamlit as st

logger = logging.getLogger(__name__)

TOKEN_KEY = 'auth_token'


class SessionStore:
    """Bearer token holder backed by a mutable mapping.

    Pages use the Streamlit session state; tests pass a plain dict.
    """

    def __init__(self, storage: Optional[MutableMapping] = None):
        self._storage = storage if storage is not None else st.session_state

    def get_token(self) -> Optional[str]:
        token = self._storage.get(TOKEN_KEY)
        return token or None

    def set_token(self, token: str) -> None:
        self._storage[TOKEN_KEY] = token
        logger.info("Session token stored")

    def clear_token(self) -> None:
        if TOKEN_KEY in self._storage:
            del self._storage[TOKEN_KEY]
            logger.info("Session token cleared")

    def has_session(self) -> bool:
        return self.get_token() is not None
