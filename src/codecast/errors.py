from __future__ import annotations


class CodecastError(Exception):
    pass


class NetworkError(CodecastError):
    """A page could not be fetched: transport failure or non-2xx status."""

    def __init__(self, message: str, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ExtractionConfigError(CodecastError):
    """No extraction rule exists for a requested (source, field) pair."""
