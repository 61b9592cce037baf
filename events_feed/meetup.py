"""Meetup API access for the groups directory and per-group details."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Protocol
from urllib.parse import quote

import requests

from .config import GROUPS_SUMMARY_PATH, MEETUP_API_BASE_URL, USER_AGENT
from .models import ChapterSummary, FetchError, GroupDetail, NextEvent

logger = logging.getLogger(__name__)


class MeetupClient(Protocol):
    """The two read operations the feed is built from."""

    def get_groups_summary(self) -> List[ChapterSummary]:
        """Return the global groups directory, ordered by next event."""

    def get_group(self, urlname: str) -> GroupDetail:
        """Return timezone and next-event details for one group."""


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _optional_millis(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def parse_chapter(payload: Mapping[str, Any]) -> ChapterSummary:
    """Build a ChapterSummary from one entry of the directory payload."""
    if not isinstance(payload, Mapping):
        raise TypeError("chapter entry must be an object")

    photo = payload.get("group_photo") or {}
    if not isinstance(photo, Mapping):
        raise TypeError("group_photo must be an object")

    return ChapterSummary(
        urlname=_text(payload, "urlname"),
        city=_text(payload, "city"),
        state=_text(payload, "state"),
        country=_text(payload, "country"),
        description=_text(payload, "description"),
        thumbnail_url=_text(photo, "thumb_link"),
        name=_text(payload, "name"),
        id=payload.get("id"),
        member_count=int(payload.get("member_count") or 0),
        next_event=_optional_millis(payload.get("next_event")),
    )


def parse_groups_summary(payload: Any) -> List[ChapterSummary]:
    """Parse the ``es_groups_summary`` response body."""
    if not isinstance(payload, Mapping):
        raise TypeError("groups summary must be an object")
    chapters = payload.get("chapters")
    if chapters is None:
        return []
    if not isinstance(chapters, list):
        raise TypeError("'chapters' must be a list")
    return [parse_chapter(item) for item in chapters]


def parse_next_event(payload: Any) -> Optional[NextEvent]:
    if payload is None:
        return None
    if not isinstance(payload, Mapping):
        raise TypeError("next_event must be an object")
    event_time = payload.get("time")
    if isinstance(event_time, bool) or not isinstance(event_time, (int, float)):
        raise TypeError("next_event.time must be a number")
    return NextEvent(
        id=str(payload.get("id") or ""),
        name=_text(payload, "name"),
        time=int(event_time),
        description=_text(payload, "description"),
    )


def parse_group(payload: Any) -> GroupDetail:
    """Parse a single group response body."""
    if not isinstance(payload, Mapping):
        raise TypeError("group must be an object")
    return GroupDetail(
        urlname=_text(payload, "urlname"),
        name=_text(payload, "name"),
        timezone=_text(payload, "timezone"),
        localized_location=_text(payload, "localized_location"),
        localized_country_name=_text(payload, "localized_country_name"),
        description=_text(payload, "description"),
        next_event=parse_next_event(payload.get("next_event")),
    )


class MeetupAPI:
    """HTTP implementation of :class:`MeetupClient` built on requests."""

    def __init__(
        self,
        base_url: str = MEETUP_API_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)

    def close(self) -> None:
        self.session.close()

    def _get_json(self, url: str, *, fatal: bool, what: str) -> Any:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchError(
                f"failed to fetch {what} from {url!r}: {exc}", fatal=fatal, url=url
            ) from exc

        try:
            if response.status_code != requests.codes.ok:
                raise FetchError(
                    f"failed to fetch {what} from {url!r}: "
                    f"{response.status_code} {response.reason}",
                    fatal=fatal,
                    url=url,
                )
            try:
                return response.json()
            except ValueError as exc:
                raise FetchError(
                    f"failed to decode {what} from {url!r}: {exc}", fatal=fatal, url=url
                ) from exc
        finally:
            response.close()

    def get_groups_summary(self) -> List[ChapterSummary]:
        url = self.base_url + GROUPS_SUMMARY_PATH
        payload = self._get_json(url, fatal=True, what="events")
        try:
            chapters = parse_groups_summary(payload)
        except (TypeError, ValueError) as exc:
            raise FetchError(
                f"failed to decode events from {url!r}: {exc}", fatal=True, url=url
            ) from exc
        logger.info("Fetched %d chapters from groups summary", len(chapters))
        return chapters

    def get_group(self, urlname: str) -> GroupDetail:
        url = f"{self.base_url}/{quote(urlname, safe='')}"
        payload = self._get_json(url, fatal=False, what="group details")
        try:
            return parse_group(payload)
        except (TypeError, ValueError) as exc:
            raise FetchError(
                f"failed to decode group from {url!r}: {exc}", fatal=False, url=url
            ) from exc
