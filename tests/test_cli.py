from __future__ import annotations

import json

from codecast import cli
from codecast.sources import ALT_DM_BASE, PRIMARY_BASE

NO_RETRY = '{"retry": {"max_retries": 0, "base_delay_ms": 0, "jitter_ms": 0}}'


class _DummyResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code


class _DummySession:
    def __init__(self, pages):
        self.pages = pages

    def get(self, url, **kwargs):
        if url not in self.pages:
            return _DummyResponse(status_code=503)
        return _DummyResponse(text=self.pages[url])


def _page(title: str) -> str:
    return (
        f'<meta property="og:title" content="{title}">\n'
        f'<meta property="og:image" content="https://fourhoi.com/{title}/cover-n.jpg">\n'
        "<script>'||m3u8|beef|com|surrit|https|video'.split('|')</script>"
    )


def test_resolve_plain(capsys):
    assert cli.main(["resolve", "badnews-id-123"]) == 0
    assert capsys.readouterr().out.strip() == f"badnews-dm {ALT_DM_BASE}/123"


def test_resolve_json(capsys):
    assert cli.main(["resolve", "juq-933", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {"code": "juq-933", "source": "primary", "url": f"{PRIMARY_BASE}/juq-933"}


def test_build_writes_outputs(tmp_path, monkeypatch, capsys):
    session = _DummySession(
        {
            f"{PRIMARY_BASE}/abc-1": _page("abc-1"),
            f"{PRIMARY_BASE}/juq-933": _page("juq-933"),
        }
    )
    monkeypatch.setattr(cli, "create_session", lambda: session)
    codes = tmp_path / "codes.txt"
    codes.write_text("juq-933\njuq-933\nabc-1\n", encoding="utf-8")
    out_dir = tmp_path / "out"

    exit_code = cli.main(["build", str(codes), "--out-dir", str(out_dir), "--config", NO_RETRY])

    assert exit_code == 0
    report = json.loads(capsys.readouterr().out)
    assert report["codes"] == ["abc-1", "juq-933"]
    assert (out_dir / "feed.xml").exists()
    playlist = (out_dir / "playlist.m3u8").read_text(encoding="utf-8")
    assert playlist.count("https://surrit.com/beef/playlist.m3u8") == 2
    table = (out_dir / "table.md").read_text(encoding="utf-8").splitlines()
    assert table[2].startswith(f'| <a href="{PRIMARY_BASE}/abc-1">abc-1</a>')


def test_build_failure_writes_nothing(tmp_path, monkeypatch):
    session = _DummySession({f"{PRIMARY_BASE}/abc-1": _page("abc-1")})
    monkeypatch.setattr(cli, "create_session", lambda: session)
    codes = tmp_path / "codes.txt"
    codes.write_text("abc-1\njuq-933\n", encoding="utf-8")
    out_dir = tmp_path / "out"

    exit_code = cli.main(["build", str(codes), "--out-dir", str(out_dir), "--config", NO_RETRY])

    assert exit_code == 1
    assert not out_dir.exists()


def test_build_missing_codes_file(tmp_path):
    assert cli.main(["build", str(tmp_path / "missing.txt"), "--config", NO_RETRY]) == 2


def test_invalid_config(tmp_path, capsys):
    codes = tmp_path / "codes.txt"
    codes.write_text("abc-1\n", encoding="utf-8")
    assert cli.main(["build", str(codes), "--config", '{"bogus": 1}']) == 2
    assert "invalid config" in capsys.readouterr().err


def test_show_prints_info(monkeypatch, capsys):
    session = _DummySession({f"{PRIMARY_BASE}/abc-1": _page("abc-1")})
    monkeypatch.setattr(cli, "create_session", lambda: session)
    assert cli.main(["show", "abc-1", "--config", NO_RETRY]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["code"] == "abc-1"
    assert payload["cover_url"] == "https://fourhoi.com/abc-1/cover-n.jpg"
    assert payload["preview_url"] == "https://fourhoi.com/abc-1/preview.mp4"
    assert payload["has_chinese_subtitle"] is False


def test_unknown_column_rejected_before_scraping(tmp_path, monkeypatch, capsys):
    requested = []

    class _RecordingSession(_DummySession):
        def get(self, url, **kwargs):
            requested.append(url)
            return super().get(url, **kwargs)

    monkeypatch.setattr(cli, "create_session", lambda: _RecordingSession({}))
    codes = tmp_path / "codes.txt"
    codes.write_text("abc-1\n", encoding="utf-8")
    out_dir = tmp_path / "out"

    config = '{"columns": ["code", "rating"]}'
    assert cli.main(["build", str(codes), "--out-dir", str(out_dir), "--config", config]) == 2

    assert "invalid config" in capsys.readouterr().err
    assert requested == []
    assert not out_dir.exists()
