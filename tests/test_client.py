"""Tests for the request primitive (``nexara.client``).

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.
- ``time.sleep`` is patched so retry delays are observed, not waited for.
"""

from __future__ import annotations

from unittest.mock import call, patch

import httpx
import pytest
import respx

from nexara.client import get, request, stream
from nexara.config import settings
from nexara.errors import FetchError

_URL = "https://example.com/page"


@pytest.fixture(autouse=True)
def _retry_defaults(monkeypatch):
    monkeypatch.setattr(settings, "max_retries", 3)
    monkeypatch.setattr(settings, "retry_delay", 1.0)
    monkeypatch.setattr(settings, "retry_client_errors", False)


# ---------------------------------------------------------------------------
# Successful requests
# ---------------------------------------------------------------------------

class TestRequestSuccess:
    def test_returns_full_response(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(200, text="<p>hi</p>"))
            response = request(_URL)

        assert response.status_code == 200
        assert response.text == "<p>hi</p>"

    def test_body_length_matches_content_length(self) -> None:
        payload = b"x" * 1234
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(200, content=payload))
            response = request(_URL)

        assert 200 <= response.status_code <= 399
        assert int(response.headers["Content-Length"]) == len(response.content)

    def test_sends_default_browser_headers(self) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(return_value=httpx.Response(200))
            request(_URL)

        sent = route.calls.last.request
        assert sent.headers["User-Agent"] == settings.user_agent
        assert sent.headers["Accept"] == settings.accept
        assert sent.headers["Accept-Language"] == settings.accept_language

    def test_caller_headers_replace_defaults(self) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(return_value=httpx.Response(200))
            request(_URL, {"headers": {"X-Token": "abc"}})

        sent = route.calls.last.request
        assert sent.headers["X-Token"] == "abc"
        assert sent.headers.get("Accept-Language") is None

    def test_params_option_is_passed_through(self) -> None:
        with respx.mock:
            route = respx.get(url__startswith=_URL).mock(return_value=httpx.Response(200))
            request(_URL, {"params": {"q": "python"}})

        assert route.calls.last.request.url.params["q"] == "python"

    def test_single_attempt_success_never_sleeps(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(200))
            with patch("nexara.client.time.sleep") as mock_sleep:
                request(_URL, retries=1)

        mock_sleep.assert_not_called()

    def test_follows_redirects(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(
                return_value=httpx.Response(301, headers={"Location": "https://example.com/new"})
            )
            respx.get("https://example.com/new").mock(
                return_value=httpx.Response(200, text="moved")
            )
            response = request(_URL)

        assert response.text == "moved"

    def test_get_alias_uses_default_attempts(self) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(side_effect=httpx.ConnectError)
            with patch("nexara.client.time.sleep"):
                with pytest.raises(FetchError):
                    get(_URL)

        assert route.call_count == 3


# ---------------------------------------------------------------------------
# Retry loop
# ---------------------------------------------------------------------------

class TestRetries:
    @pytest.mark.parametrize("retries", [1, 2, 5])
    def test_always_failing_target_is_tried_exactly_n_times(self, retries: int) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(side_effect=httpx.ConnectError)
            with patch("nexara.client.time.sleep"):
                with pytest.raises(FetchError) as excinfo:
                    request(_URL, retries=retries)

        assert route.call_count == retries
        assert excinfo.value.attempts == retries
        assert f"after {retries} attempt" in str(excinfo.value)

    def test_linear_backoff_between_attempts(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(503))
            with patch("nexara.client.time.sleep") as mock_sleep:
                with pytest.raises(FetchError):
                    request(_URL, retries=3)

        assert mock_sleep.call_args_list == [call(1.0), call(2.0)]

    def test_recovers_after_transient_failure(self) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(
                side_effect=[httpx.ConnectTimeout("slow"), httpx.Response(200, text="ok")]
            )
            with patch("nexara.client.time.sleep") as mock_sleep:
                response = request(_URL)

        assert response.text == "ok"
        assert route.call_count == 2
        mock_sleep.assert_called_once_with(1.0)

    @pytest.mark.parametrize("status", [408, 429, 500, 502])
    def test_retryable_statuses(self, status: int) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(return_value=httpx.Response(status))
            with patch("nexara.client.time.sleep"):
                with pytest.raises(FetchError):
                    request(_URL, retries=2)

        assert route.call_count == 2

    def test_client_error_fails_without_retry(self) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(return_value=httpx.Response(404))
            with patch("nexara.client.time.sleep") as mock_sleep:
                with pytest.raises(FetchError) as excinfo:
                    request(_URL, retries=3)

        assert route.call_count == 1
        assert excinfo.value.attempts == 1
        mock_sleep.assert_not_called()

    def test_client_errors_retried_when_enabled(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "retry_client_errors", True)
        with respx.mock:
            route = respx.get(_URL).mock(return_value=httpx.Response(404))
            with patch("nexara.client.time.sleep"):
                with pytest.raises(FetchError, match="after 3 attempts"):
                    request(_URL, retries=3)

        assert route.call_count == 3

    def test_error_carries_url_and_cause(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(500))
            with patch("nexara.client.time.sleep"):
                with pytest.raises(FetchError) as excinfo:
                    request(_URL, retries=1)

        assert excinfo.value.url == _URL
        assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)

    def test_retries_below_one_rejected(self) -> None:
        with pytest.raises(ValueError):
            request(_URL, retries=0)

    def test_default_attempts_come_from_settings(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "max_retries", 2)
        with respx.mock:
            route = respx.get(_URL).mock(side_effect=httpx.ReadTimeout)
            with patch("nexara.client.time.sleep"):
                with pytest.raises(FetchError, match="after 2 attempts"):
                    request(_URL)

        assert route.call_count == 2


# ---------------------------------------------------------------------------
# Streaming
# ---------------------------------------------------------------------------

class TestStream:
    def test_yields_streaming_body(self) -> None:
        payload = b"0123456789" * 100
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(200, content=payload))
            with stream(_URL) as response:
                body = b"".join(response.iter_bytes(chunk_size=64))

        assert body == payload

    def test_stream_retries_like_request(self) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(return_value=httpx.Response(500))
            with patch("nexara.client.time.sleep"):
                with pytest.raises(FetchError, match="after 2 attempts"):
                    with stream(_URL, retries=2):
                        pass

        assert route.call_count == 2
