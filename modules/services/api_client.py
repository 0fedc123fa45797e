import asyncio
import json
import logging
import threading
from typing import Any, Dict, List, Optional

import requests

from modules.core.error_handler import AuthRequired, ConfigurationError, RequestError, handle_error
from modules.core.models import (
    AuthResponse,
    CreditsStatus,
    PaymentResponse,
    Product,
    Subscription,
    UploadItem,
    UploadResponse,
    VideoFile,
)
from modules.core.session import SessionStore


class ApiClient:
    """Blocking client for the Sora Clean backend

    Calls run on worker threads, so each thread gets its own
    ``requests.Session`` unless one is passed in.
    """

    def __init__(self, base_url: Optional[str], session_store: SessionStore,
                 timeout: float = 30.0, http: Optional[requests.Session] = None):
        if not base_url:
            raise ConfigurationError(
                "SORA_CLEAN_API_BASE_URL is not set",
                error_code="MISSING_API_BASE_URL"
            )
        self.base_url = base_url.rstrip('/')
        self.session_store = session_store
        self.timeout = timeout
        self._http = http
        self._local = threading.local()
        self.logger = logging.getLogger(__name__)

    @property
    def http(self) -> requests.Session:
        if self._http is not None:
            return self._http
        session = getattr(self._local, 'session', None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def _request(self, method: str, path: str, auth: bool = False,
                 json_body: Optional[Dict[str, Any]] = None,
                 form: Optional[Dict[str, Any]] = None,
                 params: Optional[Dict[str, Any]] = None,
                 files: Optional[Dict[str, Any]] = None) -> Any:
        headers = {}
        if auth:
            token = self.session_store.get_token()
            if not token:
                self.logger.debug(f"Skipping {method} {path}: no session token")
                raise AuthRequired()
            headers['Authorization'] = f"Bearer {token}"

        kwargs: Dict[str, Any] = {'headers': headers, 'timeout': self.timeout}
        if json_body is not None:
            kwargs['json'] = json_body
        if form is not None or files is not None:
            # requests only builds multipart bodies from ``files``
            multipart = {key: (None, str(value)) for key, value in (form or {}).items()}
            multipart.update(files or {})
            kwargs['files'] = multipart
        if params is not None:
            kwargs['params'] = params

        url = f"{self.base_url}{path}"
        self.logger.debug(f"{method} {url}")
        try:
            response = self.http.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Transport error on {method} {path}: {str(e)}")
            raise RequestError(str(e) or "Network error", error_code="TRANSPORT_ERROR")

        if not response.ok:
            raise RequestError(
                self._error_message(response),
                status_code=response.status_code
            )
        if response.status_code == 204:
            return {}
        if not response.content:
            return {}
        return response.json()

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        text = response.text or ""
        message = text or f"Request failed ({response.status_code})"
        try:
            parsed = json.loads(text)
        except ValueError:
            return message
        if isinstance(parsed, dict) and parsed.get('error'):
            return str(parsed['error'])
        return message

    # Auth

    def register(self, email: str, password: str, username: Optional[str] = None) -> AuthResponse:
        payload = {'email': email, 'password': password}
        if username:
            payload['username'] = username
        return AuthResponse.from_dict(self._request('POST', '/auth/register', json_body=payload))

    def login(self, email: str, password: str) -> AuthResponse:
        payload = {'email': email, 'password': password}
        return AuthResponse.from_dict(self._request('POST', '/auth/login', json_body=payload))

    def verify_email(self, token: str) -> Any:
        return self._request('GET', '/auth/verify', params={'token': token})

    def resend_verification(self, email: str) -> Any:
        return self._request('POST', '/auth/resend-verification', json_body={'email': email})

    # Billing

    def get_products(self) -> List[Product]:
        return Product.from_list(self._request('GET', '/api/products', auth=True))

    def create_payment(self, product_slug: str, buyer_email: Optional[str] = None,
                       periodicity: Optional[str] = None) -> PaymentResponse:
        payload = {'product_slug': product_slug}
        if buyer_email:
            payload['buyer_email'] = buyer_email
        if periodicity:
            payload['periodicity'] = periodicity
        return PaymentResponse.from_dict(
            self._request('POST', '/api/create-payment', auth=True, json_body=payload)
        )

    def list_subscriptions(self) -> List[Subscription]:
        return Subscription.from_list(self._request('GET', '/api/subscriptions', auth=True))

    def cancel_subscription(self, subscription_id: int) -> Any:
        return self._request(
            'POST', '/api/subscriptions/cancel', auth=True,
            json_body={'subscription_id': subscription_id}
        )

    def get_credits_status(self) -> CreditsStatus:
        return CreditsStatus.from_dict(self._request('GET', '/api/credits', auth=True))

    # Uploads

    def upload_video(self, url: Optional[str] = None,
                     file: Optional[VideoFile] = None) -> UploadResponse:
        """Queue a job from a local file or a remote URL; the file wins when both are given."""
        if file is not None:
            files = {'file': (file.filename, file.content, file.content_type)}
            return UploadResponse.from_dict(
                self._request('POST', '/api/upload', auth=True, files=files)
            )
        return UploadResponse.from_dict(
            self._request('POST', '/api/upload', auth=True, form={'url': url})
        )

    def list_uploads(self, limit: int = 100, offset: int = 0) -> List[UploadItem]:
        return UploadItem.from_list(
            self._request('GET', '/api/uploads', auth=True, params={'limit': limit, 'offset': offset})
        )


@handle_error("Request failed")
async def run_request(func, *args, **kwargs):
    """Run a blocking client call without stalling the event loop."""
    return await asyncio.to_thread(func, *args, **kwargs)
