"""Errors raised while turning an image source into a loaded image."""

from __future__ import annotations


class ImageSourceError(Exception):
    """Base class for every imgsource failure."""


class UnsupportedSourceError(ImageSourceError, TypeError):
    """Raised when a value matches none of the known source kinds."""

    def __init__(self, message: str = "unsupported image source") -> None:
        super().__init__(message)


class TransportError(ImageSourceError):
    """Connection-level failure (DNS, refused, reset) during a fetch."""

    def __init__(self, message: str, url: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Error message
            url: URL of the request that failed
        """
        super().__init__(message)
        self.url = url


class RemoteRejectedError(ImageSourceError):
    """The remote server answered with a status outside [200, 300)."""

    def __init__(self, status_code: int, url: str | None = None) -> None:
        """Initialize the error.

        Args:
            status_code: Final HTTP status code
            url: URL that produced the status
        """
        super().__init__(f"remote source rejected with status code {status_code}")
        self.status_code = status_code
        self.url = url


class DecodeError(ImageSourceError, ValueError):
    """Bytes could not be identified as any known image type."""

    def __init__(self, message: str = "failed to load image") -> None:
        super().__init__(message)


__all__ = [
    "DecodeError",
    "ImageSourceError",
    "RemoteRejectedError",
    "TransportError",
    "UnsupportedSourceError",
]
