"""Tests for the shared HTTP client helpers."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from common import http_client
from constants import Constants


def make_response(status_code=200, text="ok"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.headers = {"Content-Type": "text/html"}
    return resp


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("common.http_client.time.sleep") as mock_sleep:
        yield mock_sleep


class TestRobustGet:
    """Retry and timeout behavior."""

    @patch("common.http_client.requests.get")
    def test_success(self, mock_get):
        mock_get.return_value = make_response(200, "<html/>")

        status, headers, text = http_client.robust_get("https://dev.bukkit.org/x")

        assert status == 200
        assert text == "<html/>"
        assert headers["Content-Type"] == "text/html"
        kwargs = mock_get.call_args[1]
        assert kwargs["timeout"] == Constants.REQUEST_TIMEOUT
        assert kwargs["headers"]["User-Agent"] == Constants.USER_AGENT

    @patch("common.http_client.requests.get")
    def test_retries_timeouts_then_succeeds(self, mock_get, no_sleep):
        mock_get.side_effect = [requests.Timeout(), make_response(200, "ok")]

        status, _, text = http_client.robust_get("https://dev.bukkit.org/x")

        assert (status, text) == (200, "ok")
        assert mock_get.call_count == 2
        no_sleep.assert_called_once_with(Constants.HTTP_RETRY_BASE_DELAY_SEC)

    @patch("common.http_client.requests.get")
    def test_retries_server_errors(self, mock_get):
        mock_get.side_effect = [make_response(502), make_response(200, "ok")]
        assert http_client.robust_get("https://dev.bukkit.org/x")[0] == 200

    @patch("common.http_client.requests.get")
    def test_client_error_is_final(self, mock_get):
        mock_get.return_value = make_response(404, "missing")
        assert http_client.robust_get("https://dev.bukkit.org/x")[0] == 404
        assert mock_get.call_count == 1

    @patch("common.http_client.requests.get")
    def test_gives_up_after_max_attempts(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")

        status, headers, text = http_client.robust_get("https://dev.bukkit.org/x")

        assert status == 0
        assert headers == {}
        assert "refused" in text
        assert mock_get.call_count == Constants.HTTP_RETRY_MAX

    @patch("common.http_client.requests.get")
    def test_backoff_doubles_between_retries(self, mock_get, no_sleep, monkeypatch):
        monkeypatch.setattr(Constants, "HTTP_RETRY_MAX", 3)
        mock_get.side_effect = requests.Timeout()

        http_client.robust_get("https://dev.bukkit.org/x")

        base = Constants.HTTP_RETRY_BASE_DELAY_SEC
        assert [c.args[0] for c in no_sleep.call_args_list] == [base, base * 2]


class TestGetText:
    """Text convenience wrapper."""

    @patch("common.http_client.robust_get")
    def test_returns_text_on_200(self, mock_robust):
        mock_robust.return_value = (200, {}, "body")
        assert http_client.get_text("https://x", context="bukkit") == (200, "body")

    @patch("common.http_client.robust_get")
    def test_returns_none_otherwise(self, mock_robust):
        mock_robust.return_value = (500, {}, "error")
        assert http_client.get_text("https://x", context="bukkit") == (500, None)
