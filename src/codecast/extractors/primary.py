from __future__ import annotations

import re
from html import unescape
from urllib.parse import urlsplit

from .base import Rule, first_text, first_value, marker, meta_property, register

VARIANT_SUFFIXES = ("-chinese-subtitle", "-english-subtitle", "-uncensored-leak")

_OG_URL = re.compile(meta_property("og:url"), re.IGNORECASE)
_CANONICAL = re.compile(r'<link\s+rel="canonical"\s+href="([^"]*)"', re.IGNORECASE)

# The player script carries the stream URL as a packed token dictionary:
# "...|m3u8|<id5>|<id4>|...|<id1>|com|surrit|https|video|..."
_PLAYLIST_TOKENS = re.compile(r"(m3u8(?:\|\w+)+?\|https?)\|video")


def assemble_playlist_url(tokens: list[str]) -> str:
    """Rebuild ``scheme://domain.tld/<ids>/playlist.m3u8`` from packed tokens.

    ``tokens`` runs from ``m3u8`` to the scheme. Too few tokens give a
    malformed URL rather than an error.
    """
    ordered = list(reversed(tokens))
    scheme, domain, tld = (ordered + ["", "", ""])[:3]
    ids = "-".join(ordered[3:-1])
    return f"{scheme}://{domain}.{tld}/{ids}/playlist.m3u8"


def extract_play_url(html: str) -> str | None:
    match = _PLAYLIST_TOKENS.search(html)
    if not match:
        return None
    return assemble_playlist_url(match.group(1).split("|"))


def page_path(html: str) -> str | None:
    """Path of the page's own base item, from ``og:url`` or the canonical link.

    A variant page's suffix is dropped so it still matches its sibling links.
    """
    match = _OG_URL.search(html) or _CANONICAL.search(html)
    if not match:
        return None
    path = urlsplit(unescape(match.group(1)).strip()).path.rstrip("/")
    for suffix in VARIANT_SUFFIXES:
        if path.endswith(suffix):
            path = path[: -len(suffix)]
            break
    return path or None


def variant_marker(suffix: str) -> Rule:
    """True iff the page links its own ``suffix`` variant.

    Links to other items (related videos) never count.
    """

    def rule(html: str) -> bool:
        path = page_path(html)
        if path is None:
            return False
        pattern = rf'href="(?:https?://[^/"]+)?{re.escape(path + suffix)}/?"'
        return re.search(pattern, html, re.IGNORECASE) is not None

    return rule


register("primary", "title", first_text(meta_property("og:title")))
register("primary", "description", first_text(meta_property("og:description")))
register("primary", "publish_date", first_value(r'<time[^>]*\sdatetime="(\d{4}-\d{2}-\d{2})'))
register(
    "primary",
    "cover_url",
    first_value(r'<meta\s+property="og:image"\s+content="([^"]*cover-n\.jpg)"'),
)
register("primary", "play_url", extract_play_url)
register(
    "primary",
    "origin_is_chinese_subtitle",
    marker(r'<meta\s+property="og:url"\s+content="[^"]*-chinese-subtitle"'),
)
register("primary", "has_chinese_subtitle", variant_marker("-chinese-subtitle"))
register("primary", "has_english_subtitle", variant_marker("-english-subtitle"))
register("primary", "has_uncensored_leak", variant_marker("-uncensored-leak"))
