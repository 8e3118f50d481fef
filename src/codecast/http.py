from __future__ import annotations

import requests

from .errors import NetworkError

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Encoding": "gzip, deflate",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    "Cache-Control": "no-cache",
    "User-Agent": USER_AGENT,
}


def create_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(DEFAULT_HEADERS)
    return session


def get_text(session: requests.Session, url: str, timeout: int = 20) -> str:
    try:
        response = session.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise NetworkError(f"GET {url} failed: {exc}", url=url) from exc
    if not 200 <= response.status_code < 300:
        raise NetworkError(
            f"GET {url} returned HTTP {response.status_code}",
            url=url,
            status=response.status_code,
        )
    return response.text
