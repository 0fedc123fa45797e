from dataclasses import dataclass
from typing import Callable, Optional

from modules.core.error_handler import ValidationError
from modules.core.models import AuthResponse
from modules.core.session import SessionStore
from modules.core.session_gate import LOGIN_PAGE
from modules.core.state_manager import Component, ComponentState, EventLog
from modules.services.api_client import run_request

DASHBOARD_PAGE = "pages/3_dashboard.py"
VERIFIED_MESSAGE = "Email verified. You can now sign in."
RESENT_MESSAGE = "Verification email sent. Check your inbox."
CHECK_INBOX_MESSAGE = "Check your inbox to verify your email before signing in."


@dataclass
class AuthResult:
    success: bool
    response: Optional[AuthResponse] = None
    needs_verification: bool = False


def require(**fields):
    """Reject blank form fields before anything is sent."""
    for label, value in fields.items():
        if not (value or "").strip():
            raise ValidationError(f"{label.capitalize()} is required.", error_code="MISSING_FIELD")


class AuthService(Component):
    """Login, registration and email verification."""

    name = "auth"

    def __init__(self, api, session_store: SessionStore, navigate: Callable[[str], None],
                 events: Optional[EventLog] = None,
                 on_logout: Optional[Callable[[], None]] = None):
        super().__init__(api, events)
        self.session_store = session_store
        self.navigate = navigate
        self.on_logout = on_logout

    def _store(self, response: AuthResponse):
        if response.token:
            self.session_store.set_token(response.token)

    async def login(self, email: str, password: str) -> AuthResult:
        self.state.message = None
        try:
            require(email=email, password=password)
        except ValidationError as e:
            self._report_invalid(e)
            return AuthResult(False)

        self.state.start()
        try:
            response = await run_request(self.api.login, email.strip(), password)
        except Exception as e:
            self._report_failure(e, "Login failed")
            needs_verification = "email not verified" in (self.state.error or "").lower()
            return AuthResult(False, needs_verification=needs_verification)

        self._store(response)
        self.state.succeed()
        self.logger.info(f"User {response.user_id} signed in")
        self.navigate(DASHBOARD_PAGE)
        return AuthResult(True, response)

    async def register(self, email: str, password: str, username: Optional[str] = None) -> AuthResult:
        self.state.message = None
        try:
            require(email=email, password=password)
        except ValidationError as e:
            self._report_invalid(e)
            return AuthResult(False)

        self.state.start()
        try:
            response = await run_request(
                self.api.register, email.strip(), password, (username or "").strip() or None
            )
        except Exception as e:
            self._report_failure(e, "Registration failed")
            return AuthResult(False)

        self._store(response)
        self.state.succeed()
        if response.verification_required:
            self._report_info(CHECK_INBOX_MESSAGE)
            return AuthResult(True, response, needs_verification=True)
        self.navigate(DASHBOARD_PAGE)
        return AuthResult(True, response)

    async def verify_email(self, token: str) -> bool:
        try:
            require(token=token)
        except ValidationError as e:
            self._report_invalid(e)
            return False

        self.state.start()
        try:
            await run_request(self.api.verify_email, token)
        except Exception as e:
            self._report_failure(e, "Verification failed")
            return False
        self._report_info(VERIFIED_MESSAGE)
        self.state.succeed()
        return True

    async def resend_verification(self, email: str) -> bool:
        self.state.message = None
        try:
            require(email=email)
        except ValidationError as e:
            self._report_invalid(e)
            return False

        self.state.start()
        try:
            await run_request(self.api.resend_verification, email.strip())
        except Exception as e:
            self._report_failure(e, "Request failed")
            return False
        self._report_info(RESENT_MESSAGE)
        self.state.succeed()
        return True

    def logout(self):
        """End the session and discard whatever was loaded for it."""
        self.session_store.clear_token()
        self.state = ComponentState()
        if self.on_logout is not None:
            self.on_logout()
        self.logger.info("Signed out")
        self.navigate(LOGIN_PAGE)
