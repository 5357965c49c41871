"""
Embedded JSON payload extraction.

Next.js pages ship their server-rendered props as a JSON document inside
a ``<script id="__NEXT_DATA__" type="application/json">`` element. This
module cuts that document out of the page HTML by plain marker search
(first prefix, then the first suffix after it) and decodes it.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pathtopro_schedule.exceptions import MalformedDocument, PayloadNotFoundError

logger = logging.getLogger(__name__)


def extract_payload(html: str, prefix: str, suffix: str) -> str:
    """Return the raw text between *prefix* and the next *suffix*.

    Raises:
        PayloadNotFoundError: If either marker is missing.
    """
    start = html.find(prefix)
    if start < 0:
        raise PayloadNotFoundError(f"Opening marker not found in page: {prefix!r}")
    start += len(prefix)
    end = html.find(suffix, start)
    if end < 0:
        raise PayloadNotFoundError(
            f"Closing marker {suffix!r} not found after opening marker"
        )
    return html[start:end]


def extract_document(html: str, prefix: str, suffix: str) -> dict[str, Any]:
    """Extract and decode the embedded JSON document from page HTML.

    Args:
        html: The full page body.
        prefix: Opening marker (the ``<script ...>`` tag).
        suffix: Closing marker (``</script>``).

    Returns:
        The decoded top-level JSON object.

    Raises:
        PayloadNotFoundError: If either marker is missing.
        MalformedDocument: If the payload is not a JSON object.
    """
    payload = extract_payload(html, prefix, suffix)
    try:
        document = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise MalformedDocument(f"Embedded payload is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise MalformedDocument(
            f"Embedded payload must be a JSON object, got {type(document).__name__}"
        )
    logger.info("Extracted embedded JSON payload (%d chars)", len(payload))
    return document
