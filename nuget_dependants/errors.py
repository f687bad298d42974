"""
Errors raised while collecting and reporting dependants.
"""

from __future__ import annotations

from typing import Optional


class DependantsError(Exception):
    """Base class for every failure that aborts a run."""


class ArgumentError(DependantsError):
    """Missing or invalid command-line input."""


class TransportError(DependantsError):
    """A feed request failed or returned a non-success status."""

    def __init__(self, uri: str, status: Optional[int] = None, reason: str = "") -> None:
        self.uri = uri
        self.status = status
        self.reason = reason
        if status is None:
            message = f"Request to {uri} failed: {reason}"
        else:
            message = f"Got error {status}: {reason}"
        super().__init__(message)


class FormatError(DependantsError):
    """Feed data did not have the shape the registry promises."""


class OutputError(DependantsError):
    """The report could not be written."""
