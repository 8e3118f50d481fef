from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Literal

import requests


SourceId = Literal["primary", "badnews", "badnews-dm"]


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 3
    base_delay_ms: int = 1000
    jitter_ms: int = 200
    retry_on: tuple[type[Exception], ...] = (Exception,)

    def __post_init__(self) -> None:
        for name in ("max_retries", "base_delay_ms", "jitter_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


FETCH_RETRY = RetryConfig(max_retries=3, base_delay_ms=1000, jitter_ms=200)


@dataclass(frozen=True)
class BuildContext:
    session: requests.Session
    retry_config: RetryConfig = FETCH_RETRY


@dataclass(frozen=True)
class Info:
    code: str
    title: str | None = None
    description: str | None = None
    publish_date: str | None = None
    home_url: str | None = None
    cover_url: str | None = None
    preview_url: str | None = None
    play_url: str | None = None
    origin_is_chinese_subtitle: bool = False
    has_chinese_subtitle: bool = False
    has_english_subtitle: bool = False
    has_uncensored_leak: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}
