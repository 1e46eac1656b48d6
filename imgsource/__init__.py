"""Image source loading.

Unified interface for turning bytes, buffers, streams, file paths, URLs,
data URIs and already-decoded images into a single loaded image tagged with
its sniffed MIME type.

Example:
    from imgsource import RetrievalOptions, SourceResolver

    resolver = SourceResolver()
    image = await resolver.resolve(
        "https://example.com/img1.jpg",
        RetrievalOptions(headers={"Referer": "https://example.com"}),
    )
    print(f"Loaded {image.mime} ({image.size} bytes)")
"""

from __future__ import annotations

from imgsource.classification import classify
from imgsource.config import Config
from imgsource.constants import MAX_REDIRECTS, REDIRECT_STATUSES
from imgsource.data_uri import decode_data_uri, is_data_uri
from imgsource.errors import (
    DecodeError,
    ImageSourceError,
    RemoteRejectedError,
    TransportError,
    UnsupportedSourceError,
)
from imgsource.fetchers import ImageFetcher, select_fetcher
from imgsource.fetchers.delegating import DelegatingFetcher
from imgsource.fetchers.redirecting import RedirectingFetcher
from imgsource.filesystem import exists, read_file
from imgsource.logging_config import configure_logging
from imgsource.models import ImageSource, LoadedImage, RetrievalOptions, SourceKind
from imgsource.resolver import SourceResolver, load_image, load_image_sync
from imgsource.sniffing import create_image, sniff_mime
from imgsource.streams import consume_stream

__all__ = [
    # Configuration
    "MAX_REDIRECTS",
    "REDIRECT_STATUSES",
    "Config",
    "configure_logging",
    # Models
    "ImageSource",
    "LoadedImage",
    "RetrievalOptions",
    "SourceKind",
    # Errors
    "DecodeError",
    "ImageSourceError",
    "RemoteRejectedError",
    "TransportError",
    "UnsupportedSourceError",
    # Loading
    "SourceResolver",
    "classify",
    "consume_stream",
    "create_image",
    "decode_data_uri",
    "exists",
    "is_data_uri",
    "load_image",
    "load_image_sync",
    "read_file",
    "sniff_mime",
    # Fetchers
    "DelegatingFetcher",
    "ImageFetcher",
    "RedirectingFetcher",
    "select_fetcher",
]
