from __future__ import annotations

import pytest

from codecast import pipeline
from codecast.errors import NetworkError
from codecast.models import BuildContext, RetryConfig
from codecast.pipeline import prepare_codes, read_codes, run
from codecast.sources import PRIMARY_BASE

NO_RETRY = RetryConfig(max_retries=0, base_delay_ms=0, jitter_ms=0)


class _DummyResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code


class _DummySession:
    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    def get(self, url, **kwargs):
        self.requested.append(url)
        if url not in self.pages:
            return _DummyResponse(status_code=500)
        return _DummyResponse(text=self.pages[url])


def _page(title: str) -> str:
    return f'<meta property="og:title" content="{title}">'


def test_read_codes_skips_blanks_and_comments(tmp_path):
    path = tmp_path / "codes.txt"
    path.write_text("juq-933\n\n  abc-1  \n# later\nbadnews-456\n", encoding="utf-8")
    assert read_codes(path) == ["juq-933", "abc-1", "badnews-456"]


def test_prepare_codes_dedupes_and_sorts():
    assert prepare_codes(["juq-933", "juq-933", "abc-1"]) == ["abc-1", "juq-933"]
    assert prepare_codes(["JUQ-933", "juq-933"]) == ["JUQ-933", "juq-933"]
    assert prepare_codes([]) == []


def test_run_builds_sorted_unique_codes():
    session = _DummySession(
        {
            f"{PRIMARY_BASE}/abc-1": _page("ABC-1"),
            f"{PRIMARY_BASE}/juq-933": _page("JUQ-933"),
        }
    )
    infos = run(["juq-933", "juq-933", "abc-1"], BuildContext(session=session, retry_config=NO_RETRY))
    assert [info.code for info in infos] == ["abc-1", "juq-933"]
    assert [info.title for info in infos] == ["ABC-1", "JUQ-933"]
    assert session.requested == [f"{PRIMARY_BASE}/abc-1", f"{PRIMARY_BASE}/juq-933"]


def test_run_does_not_reuse_results_across_codes():
    session = _DummySession({f"{PRIMARY_BASE}/a": _page("A"), f"{PRIMARY_BASE}/b": _page("B")})
    run(["b", "a", "b"], BuildContext(session=session, retry_config=NO_RETRY))
    assert session.requested == [f"{PRIMARY_BASE}/a", f"{PRIMARY_BASE}/b"]


def test_run_aborts_on_first_failure():
    session = _DummySession({f"{PRIMARY_BASE}/abc-1": _page("ABC-1")})
    with pytest.raises(NetworkError):
        run(["abc-1", "juq-933", "zzz-1"], BuildContext(session=session, retry_config=NO_RETRY))
    assert session.requested == [f"{PRIMARY_BASE}/abc-1", f"{PRIMARY_BASE}/juq-933"]


def test_run_creates_default_context(monkeypatch):
    session = _DummySession({f"{PRIMARY_BASE}/abc-1": _page("ABC-1")})
    monkeypatch.setattr(pipeline, "create_session", lambda: session)
    infos = run(["abc-1"])
    assert infos[0].title == "ABC-1"
