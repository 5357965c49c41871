"""
Page fetcher for pathtopro-schedule.

One plain GET for the schedule page. There is no retry, no backoff and
no timeout: any transport error or non-200 status ends the run with a
``TransportError``.
"""

from __future__ import annotations

import logging

import requests

from pathtopro_schedule.exceptions import TransportError

logger = logging.getLogger(__name__)


def fetch_page(url: str, session: requests.Session | None = None) -> str:
    """Fetch *url* and return the response body as text.

    Args:
        url: Page URL.
        session: Optional ``requests.Session`` (or any object with a
            compatible ``get``); a new session is used when omitted.

    Raises:
        TransportError: On a request failure or a status other than 200.
    """
    if session is None:
        session = requests.Session()
    logger.info("Fetching %s", url)
    try:
        response = session.get(url)
    except requests.RequestException as exc:
        raise TransportError(f"Request failed for {url}: {exc}") from exc
    if response.status_code != 200:
        raise TransportError(f"Unexpected response status {response.status_code} for {url}")
    logger.info("Fetched %s (%d chars)", url, len(response.text))
    return response.text
