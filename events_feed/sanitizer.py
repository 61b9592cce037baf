"""Allow-list sanitising of group descriptions."""

from __future__ import annotations

import logging
from typing import Optional

import bleach
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

ALLOWED_TAGS = ["a", "br"]
ALLOWED_ATTRIBUTES = {"a": ["href"]}
ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

# Elements removed together with their content rather than unwrapped.
_DROPPED_ELEMENTS = ["script", "style", "iframe", "object", "embed", "noscript", "template"]

LINE_BREAK = "<br/>\n"


def _drop_scripting(raw_value: str) -> str:
    soup = BeautifulSoup(raw_value, "html.parser")
    for element in soup.find_all(_DROPPED_ELEMENTS):
        element.decompose()
    return str(soup)


def sanitize(raw_value: Optional[str]) -> str:
    """Return ``raw_value`` reduced to links and line breaks.

    Kept line breaks are written as ``<br/>``, and newlines become ``<br/>``
    followed by a newline. Escaped ``<br>`` text left over from the clean
    is normalised the same way, so the replacements run after bleach.
    """
    if not raw_value:
        return ""

    cleaned = bleach.clean(
        _drop_scripting(raw_value),
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
    cleaned = cleaned.replace("<br>", "<br/>")
    return cleaned.replace("\n", LINE_BREAK).replace("&lt;br&gt;", LINE_BREAK)
