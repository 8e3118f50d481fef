from __future__ import annotations

from . import badnews, primary
from .base import EXTRACTABLE_FIELDS, extract, register, registered_fields

__all__ = ["EXTRACTABLE_FIELDS", "extract", "register", "registered_fields", "badnews", "primary"]
