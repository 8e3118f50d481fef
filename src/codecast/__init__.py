from .builder import build_info
from .pipeline import prepare_codes, read_codes, run
from .sources import resolve

__all__ = [
    "build_info",
    "prepare_codes",
    "read_codes",
    "resolve",
    "run",
]
