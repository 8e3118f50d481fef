from __future__ import annotations

import logging
from dataclasses import replace

from .extractors import EXTRACTABLE_FIELDS, extract
from .http import get_text
from .models import BuildContext, Info, SourceId
from .retry import retry
from .sources import preview_url_for, resolve

logger = logging.getLogger(__name__)

# Checked in order; only the first set flag triggers a refetch.
VARIANT_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("has_chinese_subtitle", "-chinese-subtitle"),
    ("has_english_subtitle", "-english-subtitle"),
    ("has_uncensored_leak", "-uncensored-leak"),
)


def build_info(code: str, ctx: BuildContext) -> Info:
    source, home_url = resolve(code)
    logger.info("building %s from %s (%s)", code, home_url, source)
    html = fetch_page(ctx, home_url)

    values = {field: extract(source, field, html) for field in EXTRACTABLE_FIELDS}
    info = Info(
        code=code,
        home_url=home_url,
        preview_url=preview_url_for(source, code),
        **values,
    )
    return apply_variant_policy(info, source, ctx)


def fetch_page(ctx: BuildContext, url: str) -> str:
    return retry(ctx.retry_config, get_text, ctx.session, url)


def variant_suffix(info: Info) -> str | None:
    if info.origin_is_chinese_subtitle:
        return None
    for flag, suffix in VARIANT_SUFFIXES:
        if getattr(info, flag):
            return suffix
    return None


def apply_variant_policy(info: Info, source: SourceId, ctx: BuildContext) -> Info:
    suffix = variant_suffix(info)
    if suffix is None:
        return info
    variant_url = f"{info.home_url}{suffix}"
    logger.info("%s: taking play_url from variant page %s", info.code, variant_url)
    html = fetch_page(ctx, variant_url)
    return replace(info, play_url=extract(source, "play_url", html))
