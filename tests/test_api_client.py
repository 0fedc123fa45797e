import threading
import unittest
from unittest.mock import MagicMock, patch

import requests

from modules.core.error_handler import AuthRequired, ConfigurationError, RequestError
from modules.core.models import VideoFile
from modules.core.session import SessionStore
from modules.services.api_client import ApiClient


def make_response(status_code=200, json_data=None, text=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if text is None:
        text = "" if json_data is None else "json"
    response.text = text
    response.content = text.encode()
    response.json.return_value = json_data
    return response


class TestApiClient(unittest.TestCase):
    def setUp(self):
        self.store = SessionStore({})
        self.http = MagicMock()
        self.client = ApiClient("https://api.example.com/", self.store, timeout=5, http=self.http)

    def test_missing_base_url(self):
        with self.assertRaises(ConfigurationError):
            ApiClient(None, self.store)
        with self.assertRaises(ConfigurationError):
            ApiClient("", self.store)

    def test_authenticated_call_without_token_is_not_sent(self):
        with self.assertRaises(AuthRequired):
            self.client.get_products()
        self.http.request.assert_not_called()

    def test_bearer_token_attached(self):
        self.store.set_token("abc")
        self.http.request.return_value = make_response(json_data=[])

        self.assertEqual(self.client.get_products(), [])

        args, kwargs = self.http.request.call_args
        self.assertEqual(args, ('GET', 'https://api.example.com/api/products'))
        self.assertEqual(kwargs['headers']['Authorization'], "Bearer abc")
        self.assertEqual(kwargs['timeout'], 5)

    def test_login_is_unauthenticated(self):
        self.http.request.return_value = make_response(
            json_data={'token': 't', 'user_id': 4, 'verification_required': False}
        )

        response = self.client.login("a@example.com", "secret")

        self.assertEqual(response.user_id, 4)
        kwargs = self.http.request.call_args[1]
        self.assertNotIn('Authorization', kwargs['headers'])
        self.assertEqual(kwargs['json'], {'email': "a@example.com", 'password': "secret"})

    def test_error_field_is_used(self):
        self.store.set_token("abc")
        self.http.request.return_value = make_response(
            status_code=402, text='{"error": "No credits left"}'
        )

        with self.assertRaises(RequestError) as ctx:
            self.client.get_credits_status()

        self.assertEqual(ctx.exception.message, "No credits left")
        self.assertEqual(ctx.exception.status_code, 402)

    def test_raw_text_when_body_is_not_json(self):
        self.http.request.return_value = make_response(status_code=502, text="Bad gateway")
        with self.assertRaises(RequestError) as ctx:
            self.client.resend_verification("a@example.com")
        self.assertEqual(ctx.exception.message, "Bad gateway")

    def test_json_without_error_field_falls_back_to_text(self):
        self.http.request.return_value = make_response(status_code=400, text='{"detail": "nope"}')
        with self.assertRaises(RequestError) as ctx:
            self.client.verify_email("tok")
        self.assertEqual(ctx.exception.message, '{"detail": "nope"}')

    def test_empty_error_body(self):
        self.http.request.return_value = make_response(status_code=500, text="")
        with self.assertRaises(RequestError) as ctx:
            self.client.verify_email("tok")
        self.assertEqual(ctx.exception.message, "Request failed (500)")

    def test_no_content_is_empty_success(self):
        self.store.set_token("abc")
        self.http.request.return_value = make_response(status_code=204)

        self.assertEqual(self.client.cancel_subscription(9), {})
        kwargs = self.http.request.call_args[1]
        self.assertEqual(kwargs['json'], {'subscription_id': 9})

    def test_transport_failure(self):
        self.http.request.side_effect = requests.exceptions.ConnectionError("refused")
        with self.assertRaises(RequestError) as ctx:
            self.client.login("a@example.com", "secret")
        self.assertEqual(ctx.exception.error_code, "TRANSPORT_ERROR")

    def test_upload_is_multipart(self):
        self.store.set_token("abc")
        self.http.request.return_value = make_response(
            json_data={'message': 'queued', 'upload_id': 3, 'task_id': 't-3'}
        )

        response = self.client.upload_video("https://example.com/v.mp4")

        self.assertEqual(response.task_id, 't-3')
        kwargs = self.http.request.call_args[1]
        self.assertEqual(kwargs['files'], {'url': (None, "https://example.com/v.mp4")})
        self.assertNotIn('json', kwargs)

    def test_file_upload_sends_file_field(self):
        self.store.set_token("abc")
        self.http.request.return_value = make_response(
            json_data={'message': 'queued', 'upload_id': 4, 'task_id': 't-4'}
        )
        video = VideoFile(filename="clip.mp4", content=b"mp4-bytes")

        response = self.client.upload_video(file=video)

        self.assertEqual(response.upload_id, 4)
        kwargs = self.http.request.call_args[1]
        self.assertEqual(kwargs['files'], {'file': ("clip.mp4", b"mp4-bytes", "video/mp4")})
        self.assertEqual(kwargs['headers']['Authorization'], "Bearer abc")

    def test_list_uploads_paging_params(self):
        self.store.set_token("abc")
        self.http.request.return_value = make_response(json_data=[
            {'id': 1, 'status': 'complete', 'original_filename': 'a.mp4', 'cleaned_url': 'https://cdn/a.mp4'}
        ])

        items = self.client.list_uploads(limit=50, offset=100)

        self.assertEqual(items[0].cleaned_url, 'https://cdn/a.mp4')
        kwargs = self.http.request.call_args[1]
        self.assertEqual(kwargs['params'], {'limit': 50, 'offset': 100})

    def test_create_payment_payload(self):
        self.store.set_token("abc")
        self.http.request.return_value = make_response(json_data={'transaction_id': 12})

        response = self.client.create_payment("monthly-pro", periodicity="MONTHLY")

        self.assertIsNone(response.payment_url)
        kwargs = self.http.request.call_args[1]
        self.assertEqual(kwargs['json'], {'product_slug': "monthly-pro", 'periodicity': "MONTHLY"})


class TestApiClientSessions(unittest.TestCase):
    def setUp(self):
        self.client = ApiClient("https://api.example.com", SessionStore({}))

    @patch('modules.services.api_client.requests.Session')
    def test_each_thread_gets_its_own_session(self, session_cls):
        session_cls.side_effect = lambda: MagicMock()
        seen = {}

        def grab(name):
            seen[name] = (self.client.http, self.client.http)

        threads = [threading.Thread(target=grab, args=(name,)) for name in ("a", "b")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertIs(seen["a"][0], seen["a"][1])
        self.assertIsNot(seen["a"][0], seen["b"][0])
        self.assertEqual(session_cls.call_count, 2)


if __name__ == '__main__':
    unittest.main()
