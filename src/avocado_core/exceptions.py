# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/avocado_core

"""Errors raised while resolving, loading and (de)serializing files.

Every error also derives from the matching built-in exception, so callers
can catch either ``AvocadoError`` or e.g. ``FileNotFoundError``.
"""


class AvocadoError(Exception):
    """Base class for all avocado-core errors."""


class ResourceNotFoundError(AvocadoError, FileNotFoundError):
    """The resource reference does not point at an existing file."""

    def __init__(self, reference: str, reason: str | None = None):
        self.reference = reference
        self.reason = reason
        message = f"Resource not found: {reference}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    def __reduce__(self):
        return self.__class__, (self.reference, self.reason)


class FetchTimeoutError(AvocadoError, TimeoutError):
    """A remote resource could not be fetched within the configured timeout."""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(f"Fetching {url} exceeded {timeout} seconds limit.")

    def __reduce__(self):
        return self.__class__, (self.url, self.timeout)


class ResourceIOError(AvocadoError, OSError):
    """A resolved resource could not be read or written."""


class FetchError(ResourceIOError):
    """A remote resource could not be fetched."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.message = message
        self.status_code = status_code
        code = status_code if status_code is not None else "unknown"
        super().__init__(f"HTTP {code} for {url}: {message}")

    def __reduce__(self):
        return self.__class__, (self.url, self.message, self.status_code)


class JsonCodecError(AvocadoError, ValueError):
    """JSON content is malformed or does not match the requested shape."""
