"""Telemetry module for tracking browse session interactions with PostHog."""

import logging
from typing import Any

from posthog import Posthog

logger = logging.getLogger(__name__)

DISTINCT_ID = "new-titles-map-service"

MONTH_CHANGED = "month_changed"
PAGE_CHANGED = "page_changed"
BOOK_SELECTED = "book_selected"


def capture_session_event(
    posthog_client: Posthog | None,
    event: str,
    session_id: str | None = None,
    properties: dict[str, Any] | None = None,
) -> None:
    """Send a browse session event to PostHog.

    Args:
        posthog_client: PostHog client instance, or None when telemetry is disabled
        event: Event name (one of MONTH_CHANGED, PAGE_CHANGED, BOOK_SELECTED)
        session_id: Browse session the event belongs to
        properties: Additional event properties
    """
    if posthog_client is None:
        return

    posthog_client.capture(
        distinct_id=session_id or DISTINCT_ID,
        event=event,
        properties=properties or {},
    )
    logger.debug(f"Sent telemetry event {event}")
