"""Shared data models for events_feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class FetchError(RuntimeError):
    """Raised when a Meetup API request cannot be completed.

    ``fatal`` separates the directory listing, which the whole run depends
    on, from per-group lookups that only cost a single chapter.
    """

    def __init__(self, message: str, *, fatal: bool, url: Optional[str] = None):
        super().__init__(message)
        self.fatal = fatal
        self.url = url


@dataclass(frozen=True)
class ChapterSummary:
    """One group entry from the directory listing."""

    urlname: str
    city: str = ""
    state: str = ""
    country: str = ""
    description: str = ""
    thumbnail_url: str = ""
    name: str = ""
    id: Optional[int] = None
    member_count: int = 0
    next_event: Optional[int] = None


@dataclass(frozen=True)
class NextEvent:
    """The soonest scheduled meeting of a group."""

    id: str
    name: str
    time: int
    description: str = ""


@dataclass(frozen=True)
class GroupDetail:
    """Per-group data used to enrich a chapter."""

    urlname: str = ""
    name: str = ""
    timezone: str = ""
    localized_location: str = ""
    localized_country_name: str = ""
    description: str = ""
    next_event: Optional[NextEvent] = None


@dataclass(frozen=True)
class EventRecord:
    """A single upcoming event as written to the feed."""

    city: str
    country: str
    description: str
    id: str
    local_date: str
    local_time: str
    localized_country: str
    localized_location: str
    name: str
    state: str
    thumbnail_url: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "City": self.city,
            "Country": self.country,
            "Description": self.description,
            "ID": self.id,
            "local_date": self.local_date,
            "local_time": self.local_time,
            "LocalizedCountry": self.localized_country,
            "LocalizedLocation": self.localized_location,
            "Name": self.name,
            "State": self.state,
            "ThumbnailURL": self.thumbnail_url,
            "URL": self.url,
        }


@dataclass
class Feed:
    """Ordered collection of upcoming events."""

    all: List[EventRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.all)

    def __iter__(self):
        return iter(self.all)

    def to_dict(self) -> Dict[str, Any]:
        return {"All": [record.to_dict() for record in self.all]}


@dataclass(frozen=True)
class ChapterResult:
    """Outcome of processing one chapter: a record or a reason to skip it."""

    chapter: ChapterSummary
    record: Optional[EventRecord] = None
    skip_reason: Optional[str] = None

    @classmethod
    def ok(cls, chapter: ChapterSummary, record: EventRecord) -> "ChapterResult":
        return cls(chapter=chapter, record=record)

    @classmethod
    def skip(cls, chapter: ChapterSummary, reason: str) -> "ChapterResult":
        return cls(chapter=chapter, skip_reason=reason)

    @property
    def skipped(self) -> bool:
        return self.record is None
