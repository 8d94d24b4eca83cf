"""Shared HTTP helpers used by release sources.

Encapsulates request/timeout/retry handling so site scrapers only deal with
status codes and response text.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout and retries, with DEBUG traces.

    Args:
        url: Target URL.
        headers: Optional request headers (a User-Agent is always sent).
        **kwargs: Additional requests.get parameters.

    Returns:
        Tuple of (status_code, headers_dict, text). Status 0 means every
        attempt failed; text then holds the last error.
    """
    safe_target = safe_url(url)
    req_headers = {"User-Agent": Constants.USER_AGENT}
    if headers:
        req_headers.update(headers)

    last_exception = None

    for attempt in range(Constants.HTTP_RETRY_MAX):
        if attempt:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 1)))
        with Timer() as t:
            try:
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request",
                        extra=extra_context(
                            event="http_request",
                            component="http_client",
                            action="GET",
                            attempt=attempt + 1,
                            target=safe_target,
                        )
                    )
                response = requests.get(
                    url, headers=req_headers, timeout=Constants.REQUEST_TIMEOUT, **kwargs
                )
            except requests.Timeout:
                last_exception = "timeout"
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP timeout",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action="GET",
                            outcome="timeout",
                            attempt=attempt + 1,
                            target=safe_target
                        )
                    )
                continue
            except requests.RequestException as exc:  # includes ConnectionError
                last_exception = str(exc)
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request exception",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action="GET",
                            outcome="request_exception",
                            attempt=attempt + 1,
                            target=safe_target
                        )
                    )
                continue

        # Retry server errors and rate limiting; everything else is final.
        if response.status_code >= 500 or response.status_code == 429:
            last_exception = f"HTTP {response.status_code}"
            continue

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success" if response.status_code == 200 else "http_error",
                    status_code=response.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target
                )
            )
        return response.status_code, dict(response.headers), response.text

    logger.error(
        "GET %s failed after %s attempts: %s",
        safe_target,
        Constants.HTTP_RETRY_MAX,
        last_exception,
    )
    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {last_exception}"


def get_text(url: str, *, context: str, **kwargs: Any) -> Tuple[int, Optional[str]]:
    """GET ``url`` and return (status_code, text or None on failure).

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "bukkit").
        **kwargs: Passed through to robust_get.
    """
    status_code, _, text = robust_get(url, **kwargs)
    if status_code != 200:
        logger.warning("%s request to %s returned status %s", context, safe_url(url), status_code)
        return status_code, None
    return status_code, text
