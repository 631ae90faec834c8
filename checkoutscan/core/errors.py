"""Exceptions raised by the scan pipeline."""

from typing import Optional


class ScanError(Exception):
    """Base class for scan failures."""


class InvalidTarget(ScanError, ValueError):
    """The operator-supplied URL cannot be scanned."""

    def __init__(self, target: str, reason: str = "Invalid url"):
        self.target = target
        self.reason = reason
        super().__init__(f"{reason}: {target!r}")


class FetchError(ScanError):
    """A GET did not produce a 2xx response.

    ``status`` is None when the request never got a response
    (DNS, connect, TLS, timeout).
    """

    def __init__(self, url: str, status: Optional[int] = None, message: str = ""):
        self.url = url
        self.status = status
        if not message:
            message = (f"Fetch failed {status} for {url}" if status is not None
                       else f"Failed to fetch {url}")
        self.message = message
        super().__init__(message)
