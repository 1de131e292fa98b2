"""Shared HTTP helpers used by the repository version source.

Encapsulates request/timeout error handling and retries so callers avoid
duplicating try/except blocks. Transport failures surface as
MetadataRetrievalError rather than exiting the process.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from errors import MetadataRetrievalError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform a GET request with timeout and bounded retries.

    Timeouts, connection errors and 5xx responses are retried up to
    ``Constants.HTTP_RETRY_MAX`` attempts. Any other status is returned as-is.

    Returns:
        Tuple of (status_code, headers_dict, body_text)

    Raises:
        MetadataRetrievalError: when every attempt failed.
    """
    safe_target = safe_url(url)
    last_problem = None

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
                            target=safe_target,
                            attempt=attempt + 1
                        )
                    )

                response = requests.get(
                    url,
                    timeout=Constants.REQUEST_TIMEOUT,
                    headers=headers,
                    **kwargs
                )
            except requests.Timeout:
                last_problem = f"timed out after {Constants.REQUEST_TIMEOUT} seconds"
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
                last_problem = str(exc)
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

        if response.status_code >= 500:
            last_problem = f"server error {response.status_code}"
            logger.debug("Retrying %s after HTTP %s", safe_target, response.status_code)
            continue

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response ok",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    status_code=response.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target
                )
            )
        return response.status_code, dict(response.headers), response.text

    logger.error("GET %s failed after %s attempts: %s", safe_target, Constants.HTTP_RETRY_MAX, last_problem)
    raise MetadataRetrievalError(
        f"Request to {safe_target} failed after {Constants.HTTP_RETRY_MAX} attempts: {last_problem}"
    )
