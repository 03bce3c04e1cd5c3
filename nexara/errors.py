"""Exceptions raised by nexara."""

from __future__ import annotations

from pathlib import Path


class NexaraError(Exception):
    """Base class for every error raised by this package."""


class FetchError(NexaraError):
    """The request primitive gave up on *url* after *attempts* tries."""

    def __init__(self, url: str, attempts: int, cause: BaseException) -> None:
        noun = "attempt" if attempts == 1 else "attempts"
        super().__init__(f"request() failed after {attempts} {noun}: {cause}")
        self.url = url
        self.attempts = attempts


class DownloadError(NexaraError):
    """Streaming *url* to *destination* failed."""

    def __init__(self, url: str, destination: str | Path, cause: BaseException) -> None:
        super().__init__(f"download_file() error: {cause}")
        self.url = url
        self.destination = str(destination)
