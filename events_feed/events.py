"""Assembly of the upcoming events feed."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from urllib.parse import quote

from .config import EVENT_LIMIT, MEETUP_SITE_URL
from .localizer import localize
from .meetup import MeetupClient
from .models import (
    ChapterResult,
    ChapterSummary,
    EventRecord,
    Feed,
    FetchError,
    GroupDetail,
)
from .sanitizer import sanitize

logger = logging.getLogger(__name__)


def build_event_url(site_url: str, urlname: str, event_id: str) -> str:
    """Join the site origin with ``urlname/events/event_id``."""
    segments = [quote(segment.strip("/"), safe="") for segment in (urlname, "events", event_id)]
    return "/".join([site_url.rstrip("/")] + [segment for segment in segments if segment])


def _pick_description(chapter: ChapterSummary, group: GroupDetail) -> str:
    # Chapter descriptions are frequently empty.
    for candidate in (
        chapter.description,
        group.description,
        group.next_event.description if group.next_event else "",
    ):
        if candidate and candidate.strip():
            return candidate
    return ""


def build_record(
    chapter: ChapterSummary, group: GroupDetail, site_url: str = MEETUP_SITE_URL
) -> EventRecord:
    """Merge a chapter with its group details into an EventRecord."""
    event = group.next_event
    if event is None:
        raise ValueError(f"group {chapter.urlname!r} has no next event")

    local_date, local_time = localize(event.time, group.timezone)
    return EventRecord(
        city=chapter.city,
        country=chapter.country,
        description=sanitize(_pick_description(chapter, group)),
        id=event.id,
        local_date=local_date,
        local_time=local_time,
        localized_country=group.localized_country_name,
        localized_location=group.localized_location,
        name=event.name,
        state=chapter.state,
        thumbnail_url=chapter.thumbnail_url,
        url=build_event_url(site_url, chapter.urlname, event.id),
    )


def build_chapter_result(
    client: MeetupClient, chapter: ChapterSummary, site_url: str = MEETUP_SITE_URL
) -> ChapterResult:
    """Enrich one chapter, turning recoverable failures into a skip."""
    if not chapter.urlname:
        return ChapterResult.skip(chapter, "missing urlname")

    try:
        group = client.get_group(chapter.urlname)
    except FetchError as exc:
        if exc.fatal:
            raise
        return ChapterResult.skip(chapter, str(exc))

    if group.next_event is None:
        return ChapterResult.skip(chapter, "no upcoming event")

    try:
        record = build_record(chapter, group, site_url)
    except (OverflowError, OSError, ValueError) as exc:
        return ChapterResult.skip(chapter, f"event time out of range: {exc}")
    return ChapterResult.ok(chapter, record)


def _check_directory_order(chapters: List[ChapterSummary]) -> None:
    previous: Optional[int] = None
    for chapter in chapters:
        if chapter.next_event is None:
            continue
        if previous is not None and chapter.next_event < previous:
            logger.debug(
                "Directory is not sorted by next event at %s; keeping received order",
                chapter.urlname,
            )
            return
        previous = chapter.next_event


def assemble(
    client: MeetupClient,
    chapters: Iterable[ChapterSummary],
    limit: int = EVENT_LIMIT,
    site_url: str = MEETUP_SITE_URL,
) -> Feed:
    """Build the feed from ``chapters`` in order, stopping at ``limit`` records."""
    records: List[EventRecord] = []
    for chapter in chapters:
        if len(records) >= limit:
            break
        result = build_chapter_result(client, chapter, site_url)
        if result.skipped:
            logger.info("Skipping %s: %s", chapter.urlname, result.skip_reason)
            continue
        records.append(result.record)

    logger.info("Assembled %d upcoming events", len(records))
    return Feed(all=records)


def get_upcoming_events(
    client: MeetupClient,
    limit: int = EVENT_LIMIT,
    site_url: str = MEETUP_SITE_URL,
) -> Feed:
    """Return upcoming events for groups in the global directory."""
    chapters = client.get_groups_summary()
    _check_directory_order(chapters)
    return assemble(client, chapters, limit=limit, site_url=site_url)
