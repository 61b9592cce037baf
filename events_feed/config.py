"""Constants and configuration loading for events_feed."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

logger = logging.getLogger(__name__)

# Maximum number of events written to the feed.
EVENT_LIMIT = 15

MEETUP_API_BASE_URL = "https://api.meetup.com"
MEETUP_SITE_URL = "https://www.meetup.com"

# Global Go groups, sorted by next upcoming event.
GROUPS_SUMMARY_PATH = "/pro/go/es_groups_summary?location=global&order=next_event&desc=false"

EVENTS_HEADER = """\
# DO NOT EDIT: Autogenerated from cmd/events.
# To update, run:
#    python -m events_feed > data/events.yaml"""

USER_AGENT = "events-feed/0.1 (+https://go.dev/)"


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: Optional[str] = None


@dataclass
class AppConfig:
    api_base_url: str = MEETUP_API_BASE_URL
    site_url: str = MEETUP_SITE_URL
    timeout: Optional[float] = None
    output: Optional[str] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the base config file if it's not absolute."""
    target = Path(target_path)
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def _parse_url(value: str, element: str) -> str:
    url = value.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise ValueError(f"<{element}> must be an http(s) URL, got {value!r}")
    return url


def parse_app_config(path: str) -> AppConfig:
    """Parse the application configuration XML."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info("Loading application configuration from %s", config_path)
    try:
        root = ET.parse(config_path).getroot()
    except ET.ParseError as exc:
        raise ValueError(f"Config file is not valid XML: {path}: {exc}") from exc

    config = AppConfig()

    api_base_url = root.findtext("api-base-url")
    if api_base_url:
        config.api_base_url = _parse_url(api_base_url, "api-base-url")

    site_url = root.findtext("site-url")
    if site_url:
        config.site_url = _parse_url(site_url, "site-url")

    timeout = root.findtext("timeout")
    if timeout:
        try:
            config.timeout = float(timeout)
        except ValueError:
            raise ValueError(f"<timeout> must be a number, got {timeout!r}")
        if config.timeout <= 0:
            raise ValueError("<timeout> must be positive.")

    output = root.findtext("output")
    if output:
        config.output = _resolve_path(config_path, output.strip())

    log_node = root.find("logging")
    if log_node is not None:
        config.logging.level = log_node.findtext("level", "WARNING").strip()
        log_file = log_node.findtext("file")
        if log_file:
            config.logging.file = _resolve_path(config_path, log_file.strip())

    return config
