from __future__ import annotations

import re
from html import unescape
from typing import Callable, Union

from bs4 import BeautifulSoup

from ..errors import ExtractionConfigError
from ..models import SourceId

FieldValue = Union[str, bool, None]
Rule = Callable[[str], FieldValue]

EXTRACTABLE_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "publish_date",
    "cover_url",
    "play_url",
    "origin_is_chinese_subtitle",
    "has_chinese_subtitle",
    "has_english_subtitle",
    "has_uncensored_leak",
)

_FLAGS = re.IGNORECASE | re.DOTALL

_RULES: dict[tuple[SourceId, str], Rule] = {}


def register(source: SourceId, field: str, rule: Rule) -> None:
    if field not in EXTRACTABLE_FIELDS:
        raise ExtractionConfigError(f"Unknown field: {field}")
    _RULES[(source, field)] = rule


def registered_fields(source: SourceId) -> list[str]:
    return [field for field in EXTRACTABLE_FIELDS if (source, field) in _RULES]


def extract(source: SourceId, field: str, html: str, *, required: bool = True) -> FieldValue:
    """Run the rule registered for ``(source, field)`` against raw HTML.

    A pattern that does not match yields ``None`` (``False`` for flags). A
    missing rule is a configuration error unless the caller opts out with
    ``required=False``; an unknown field name is always an error.
    """
    if field not in EXTRACTABLE_FIELDS:
        raise ExtractionConfigError(f"Unknown field: {field}")
    rule = _RULES.get((source, field))
    if rule is None:
        if required:
            raise ExtractionConfigError(f"No extraction rule for {source}/{field}")
        return None
    return rule(html)


def meta_property(name: str) -> str:
    return rf'<meta\s+property="{re.escape(name)}"\s+content="([^"]*)"'


def clean_text(fragment: str) -> str | None:
    text = BeautifulSoup(fragment, "lxml").get_text(" ", strip=True)
    return text or None


def first_text(pattern: str) -> Rule:
    """Group 1 of the first match, flattened to plain text."""
    regex = re.compile(pattern, _FLAGS)

    def rule(html: str) -> str | None:
        match = regex.search(html)
        if not match:
            return None
        return clean_text(match.group(1))

    return rule


def first_value(pattern: str) -> Rule:
    """Group 1 of the first match as an attribute value (URLs, dates)."""
    regex = re.compile(pattern, _FLAGS)

    def rule(html: str) -> str | None:
        match = regex.search(html)
        if not match:
            return None
        value = unescape(match.group(1)).strip()
        return value or None

    return rule


def marker(pattern: str) -> Rule:
    regex = re.compile(pattern, _FLAGS)

    def rule(html: str) -> bool:
        return regex.search(html) is not None

    return rule


def absent(html: str) -> None:
    return None


def never(html: str) -> bool:
    return False
