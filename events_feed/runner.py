"""High-level orchestration for the events_feed application."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import MEETUP_API_BASE_URL, MEETUP_SITE_URL
from .events import get_upcoming_events
from .meetup import MeetupAPI, MeetupClient
from .models import Feed
from .output import render_feed

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Runtime options for executing the application."""

    api_base_url: str = MEETUP_API_BASE_URL
    site_url: str = MEETUP_SITE_URL
    timeout: Optional[float] = None
    output_path: Optional[str] = None


@dataclass
class RunResult:
    """Returned data after executing the app."""

    output_text: str
    feed: Feed
    written_to: Optional[str] = None


def _write_output(path: str, text: str) -> None:
    location = Path(path)
    if location.parent and not location.parent.exists():
        location.parent.mkdir(parents=True, exist_ok=True)
    location.write_text(text, encoding="utf-8")
    logger.info("Saved events feed to %s", location)


def execute(config: RunConfig, client: Optional[MeetupClient] = None) -> RunResult:
    """Fetch, assemble and render the feed.

    Errors from the directory fetch and from encoding propagate; nothing is
    written unless the whole document rendered.
    """
    owned_client: Optional[MeetupAPI] = None
    if client is None:
        owned_client = MeetupAPI(base_url=config.api_base_url, timeout=config.timeout)
        client = owned_client

    try:
        feed = get_upcoming_events(client, site_url=config.site_url)
    finally:
        if owned_client is not None:
            owned_client.close()

    output_text = render_feed(feed)

    if config.output_path:
        _write_output(config.output_path, output_text)

    return RunResult(output_text=output_text, feed=feed, written_to=config.output_path)
