from __future__ import annotations

from .base import absent, first_text, first_value, meta_property, never, register

_FLAG_FIELDS = (
    "origin_is_chinese_subtitle",
    "has_chinese_subtitle",
    "has_english_subtitle",
    "has_uncensored_leak",
)

register("badnews", "title", first_text(r'<h1[^>]*class="[^"]*title[^"]*"[^>]*>(.*?)</h1>'))
register("badnews", "description", first_text(r'<meta\s+name="description"\s+content="([^"]*)"'))
register("badnews", "publish_date", first_value(r'<span\s+class="date">\s*(\d{4}-\d{2}-\d{2})'))
register("badnews", "cover_url", first_value(r'\sposter="([^"]*\.jpg)"'))
register("badnews", "play_url", first_value(r'data-source="([^"]*\.m3u8[^"]*)"'))

# DM pages: a bare player without a publish date.
register("badnews-dm", "title", first_text(meta_property("og:title")))
register("badnews-dm", "description", first_text(meta_property("og:description")))
register("badnews-dm", "publish_date", absent)
register("badnews-dm", "cover_url", first_value(r'data-poster="([^"]*\.jpg)"'))
register("badnews-dm", "play_url", first_value(r'<source[^>]*\ssrc="([^"]*\.m3u8[^"]*)"'))

# Neither page type links subtitle or leak variants.
for _source in ("badnews", "badnews-dm"):
    for _field in _FLAG_FIELDS:
        register(_source, _field, never)
