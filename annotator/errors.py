"""Exceptions raised while generating annotated images.

Every error that can reach the HTTP layer derives from ``AnnotatorError``
and carries the status code the request handler should answer with.
``CleanupError`` is the exception to that rule: it is only ever logged.
"""

from __future__ import annotations

from typing import Optional, Tuple


class AnnotatorError(Exception):
    """Base class for failures surfaced to API clients."""

    status_code: int = 500


class BadRequestError(AnnotatorError):
    """The request body does not carry both percentage sets."""

    status_code = 400


class ResourceFetchError(AnnotatorError):
    """One or more of the remote resources could not be downloaded.

    Attributes:
        statuses: ``(font, animals, brain)`` HTTP status codes, or ``None``
            when the failure happened before any response was received.
    """

    def __init__(self, message: str, statuses: Optional[Tuple[int, int, int]] = None) -> None:
        super().__init__(message)
        self.statuses = statuses

    @classmethod
    def from_statuses(cls, font: int, animals: int, brain: int) -> "ResourceFetchError":
        return cls(
            f"Failed to download resources. Font: {font}, Animals: {animals}, Brain: {brain}",
            statuses=(font, animals, brain),
        )


class RenderError(AnnotatorError):
    """An annotation pass failed.

    Attributes:
        pass_name: Name of the failing pass, e.g. ``"animal"`` or ``"brain"``.
    """

    def __init__(self, pass_name: str, cause: BaseException) -> None:
        super().__init__(f"Error during {pass_name} image processing: {cause}")
        self.pass_name = pass_name


class CleanupError(Exception):
    """A temporary typeface file could not be removed."""
