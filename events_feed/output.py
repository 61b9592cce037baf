"""YAML rendering of the events feed."""

from __future__ import annotations

import logging

import yaml

from .config import EVENTS_HEADER
from .models import Feed

logger = logging.getLogger(__name__)


class OutputError(RuntimeError):
    """Raised when the feed cannot be encoded."""


def render_feed(feed: Feed, header: str = EVENTS_HEADER) -> str:
    """Return the header comment followed by the feed as a YAML document."""
    try:
        document = yaml.safe_dump(
            feed.to_dict(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    except yaml.YAMLError as exc:
        raise OutputError(f"failed to encode event yaml: {exc}") from exc
    return f"{header}\n{document}"

