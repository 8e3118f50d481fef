from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from .models import FETCH_RETRY, RetryConfig

DEFAULT_COLUMNS: tuple[str, ...] = (
    "code",
    "cover_url",
    "title",
    "play_url",
    "preview_url",
    "publish_date",
)


@dataclass(frozen=True)
class FeedSettings:
    title: str = "codecast"
    link: str = "https://missav.ws"
    description: str = "Scraped episodes"
    author: str = "codecast"
    image: str | None = None
    language: str = "zh-cn"


@dataclass(frozen=True)
class Settings:
    feed: FeedSettings = field(default_factory=FeedSettings)
    retry: RetryConfig = FETCH_RETRY
    columns: tuple[str, ...] = DEFAULT_COLUMNS
    feed_name: str = "feed.xml"
    playlist_name: str = "playlist.m3u8"
    table_name: str = "table.md"


_RETRY_KEYS = ("max_retries", "base_delay_ms", "jitter_ms")


def load_json_arg(value: str | None) -> dict[str, Any]:
    if not value:
        return {}
    if value.lstrip().startswith("{"):
        return json.loads(value)
    return json.loads(Path(value).read_text(encoding="utf-8"))


def load_settings(value: str | None) -> Settings:
    """Build settings from a JSON file path or inline JSON; unknown keys fail.

    Every malformed value surfaces as ``ValueError`` so a bad config is
    reported before any page is fetched.
    """
    data = _section("settings", load_json_arg(value))
    _check_keys("settings", data, [item.name for item in fields(Settings)])
    kwargs: dict[str, Any] = {}
    if "feed" in data:
        feed = _section("feed", data["feed"])
        _check_keys("feed", feed, [item.name for item in fields(FeedSettings)])
        kwargs["feed"] = FeedSettings(**feed)
    if "retry" in data:
        retry = _section("retry", data["retry"])
        _check_keys("retry", retry, _RETRY_KEYS)
        kwargs["retry"] = RetryConfig(
            **{key: _as_int(key, retry.get(key, getattr(FETCH_RETRY, key))) for key in _RETRY_KEYS}
        )
    if "columns" in data:
        kwargs["columns"] = _columns(data["columns"])
    for name in ("feed_name", "playlist_name", "table_name"):
        if name in data:
            kwargs[name] = str(data[name])
    return Settings(**kwargs)


def _section(name: str, data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{name} must be a JSON object, got {type(data).__name__}")
    return data


def _as_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"retry.{key} must be an integer, got {value!r}") from exc


def _columns(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError("columns must be a JSON list")
    columns = tuple(str(column) for column in value)
    if not columns:
        raise ValueError("No table columns selected")
    unknown = [column for column in columns if column not in DEFAULT_COLUMNS]
    if unknown:
        raise ValueError(f"Unknown table columns: {', '.join(unknown)}")
    return columns


def _check_keys(section: str, data: dict[str, Any], allowed) -> None:
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ValueError(f"Unknown {section} keys: {', '.join(unknown)}")
