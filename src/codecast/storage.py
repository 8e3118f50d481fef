from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .config import Settings
from .models import Info
from .render import render_feed, render_playlist, render_table


def write_outputs(infos: Sequence[Info], out_dir: Path, settings: Settings) -> dict[str, Path]:
    # Render everything before touching the filesystem.
    rendered = {
        "feed": (settings.feed_name, render_feed(infos, settings.feed)),
        "playlist": (settings.playlist_name, render_playlist(infos)),
        "table": (settings.table_name, render_table(infos, settings.columns)),
    }
    out_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}
    for kind, (name, content) in rendered.items():
        path = out_dir / name
        path.write_text(content, encoding="utf-8")
        written[kind] = path
    return written
