from __future__ import annotations

from typing import get_args

from .models import SourceId

PRIMARY_BASE = "https://missav.ws/dm"
PREVIEW_BASE = "https://fourhoi.com"

ALT_PREFIX = "badnews-"
ALT_DM_PREFIX = "badnews-id-"
ALT_BASE = "https://bad.news/t"
ALT_DM_BASE = "https://bad.news/dm/id"


def list_sources() -> list[SourceId]:
    return list(get_args(SourceId))


def resolve(code: str) -> tuple[SourceId, str]:
    if code.startswith(ALT_DM_PREFIX):
        return "badnews-dm", f"{ALT_DM_BASE}/{code[len(ALT_DM_PREFIX):]}"
    if code.startswith(ALT_PREFIX):
        return "badnews", f"{ALT_BASE}/{code[len(ALT_PREFIX):]}"
    return "primary", f"{PRIMARY_BASE}/{code}"


def preview_url_for(source: SourceId, code: str) -> str | None:
    if source != "primary":
        return None
    return f"{PREVIEW_BASE}/{code}/preview.mp4"
