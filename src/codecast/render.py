from __future__ import annotations

import xml.etree.ElementTree as ET
from email.utils import format_datetime
from html import escape
from typing import Callable, Iterable

from .config import DEFAULT_COLUMNS, FeedSettings
from .models import Info
from .time_utils import now_utc, rfc822

ITUNES_NS = "http://www.itunes.com/dtds/podcast-1.0.dtd"
ET.register_namespace("itunes", ITUNES_NS)

STREAM_TYPE = "application/x-mpegURL"
COVER_WIDTH = 240


def _itunes(tag: str) -> str:
    return f"{{{ITUNES_NS}}}{tag}"


def _sub(parent: ET.Element, tag: str, text: str | None, **attrs: str) -> ET.Element:
    element = ET.SubElement(parent, tag, attrs)
    if text is not None:
        element.text = text
    return element


def _one_line(value: str | None) -> str:
    return " ".join((value or "").split())


def render_feed(infos: Iterable[Info], feed: FeedSettings) -> str:
    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    _sub(channel, "title", feed.title)
    _sub(channel, "link", feed.link)
    _sub(channel, "description", feed.description)
    _sub(channel, "language", feed.language)
    _sub(channel, "lastBuildDate", format_datetime(now_utc()))
    _sub(channel, _itunes("author"), feed.author)
    if feed.image:
        _sub(channel, _itunes("image"), None, href=feed.image)

    for info in infos:
        item = ET.SubElement(channel, "item")
        _sub(item, "title", info.title or "")
        _sub(item, "guid", info.code, isPermaLink="false")
        _sub(item, "link", info.home_url or "")
        _sub(item, "description", info.description or "")
        published = rfc822(info.publish_date)
        if published:
            _sub(item, "pubDate", published)
        if info.play_url:
            _sub(item, "enclosure", None, url=info.play_url, type=STREAM_TYPE, length="0")
        if info.cover_url:
            _sub(item, _itunes("image"), None, href=info.cover_url)

    ET.indent(rss)
    body = ET.tostring(rss, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"


def render_playlist(infos: Iterable[Info]) -> str:
    """Extended M3U; items without a stream are left out."""
    lines = ["#EXTM3U"]
    for info in infos:
        if not info.play_url:
            continue
        cover = (info.cover_url or "").replace('"', "%22")
        lines.append(f'#EXTINF:-1 tvg-logo="{cover}",{_one_line(info.title)}')
        lines.append(info.play_url)
    return "\n".join(lines) + "\n"


def _cell(value: str) -> str:
    return value.replace("|", "\\|")


def _link(url: str | None, label: str) -> str:
    if not url:
        return ""
    return f'<a href="{escape(url)}">{escape(label)}</a>'


def _code_cell(info: Info) -> str:
    if not info.home_url:
        return escape(info.code)
    return _link(info.home_url, info.code)


def _cover_cell(info: Info) -> str:
    if not info.cover_url:
        return ""
    image = f'<img src="{escape(info.cover_url)}" width="{COVER_WIDTH}">'
    if not info.play_url:
        return image
    return f'<a href="{escape(info.play_url)}">{image}</a>'


_COLUMNS: dict[str, tuple[str, Callable[[Info], str]]] = {
    "code": ("code", _code_cell),
    "cover_url": ("cover", _cover_cell),
    "title": ("title", lambda info: escape(_one_line(info.title), quote=False)),
    "play_url": ("play", lambda info: _link(info.play_url, "m3u8")),
    "preview_url": ("preview", lambda info: _link(info.preview_url, "mp4")),
    "publish_date": ("date", lambda info: info.publish_date or ""),
}


def render_table(infos: Iterable[Info], columns: Iterable[str] = DEFAULT_COLUMNS) -> str:
    selected = list(columns)
    unknown = [column for column in selected if column not in _COLUMNS]
    if unknown:
        raise ValueError(f"Unknown table columns: {', '.join(unknown)}")
    if not selected:
        raise ValueError("No table columns selected")

    headers = [_COLUMNS[column][0] for column in selected]
    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join("---" for _ in headers) + " |",
    ]
    for info in infos:
        cells = [_cell(_COLUMNS[column][1](info)) for column in selected]
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines) + "\n"
