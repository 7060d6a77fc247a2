"""Failure modes of a publish run, one class per pipeline stage."""

from __future__ import annotations

from typing import Literal


class PublishError(Exception):
    """Base for publish failures. Carries the stage and the CLI exit code."""

    stage: str = "publish"
    exit_code: int = 1


class SourceNotFoundError(PublishError):
    """The document identifier is not a readable notebook file."""

    stage = "source"
    exit_code = 3

    def __init__(self, path: str, reason: str = "no such file") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Source notebook {path!r}: {reason}")


class ConversionFailedError(PublishError):
    """The converter failed or did not produce the expected markdown file."""

    stage = "convert"
    exit_code = 4

    def __init__(
        self,
        converter: str,
        message: str,
        stderr: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.converter = converter
        self.stderr = stderr
        super().__init__(f"{converter} conversion failed: {message}")
        if cause is not None:
            self.__cause__ = cause


class RelocationFailedError(PublishError):
    """Moving an artifact into its destination failed.

    ``partial`` is True when the post was already published and only the
    asset bundle failed to move.
    """

    stage = "relocate"

    def __init__(
        self,
        artifact: Literal["post", "assets"],
        destination: str,
        message: str,
        partial: bool = False,
        cause: Exception | None = None,
    ) -> None:
        self.artifact = artifact
        self.destination = destination
        self.partial = partial
        super().__init__(f"Could not move {artifact} to {destination}: {message}")
        if cause is not None:
            self.__cause__ = cause

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return 6 if self.partial else 5
