from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .builder import build_info
from .http import create_session
from .models import FETCH_RETRY, BuildContext, Info

logger = logging.getLogger(__name__)


def read_codes(path: Path) -> list[str]:
    codes: list[str] = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            code = line.strip()
            if not code or code.startswith("#"):
                continue
            codes.append(code)
    return codes


def prepare_codes(codes: Iterable[str]) -> list[str]:
    return sorted(set(codes))


def run(codes: Iterable[str], ctx: BuildContext | None = None) -> list[Info]:
    ctx = ctx or BuildContext(session=create_session(), retry_config=FETCH_RETRY)
    prepared = prepare_codes(codes)
    logger.info("building %d codes", len(prepared))
    infos: list[Info] = []
    for index, code in enumerate(prepared, start=1):
        infos.append(build_info(code, ctx))
        logger.debug("built %d/%d: %s", index, len(prepared), code)
    return infos
