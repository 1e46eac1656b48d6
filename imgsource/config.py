"""Configuration management for imgsource."""

import os

from dotenv import load_dotenv

from imgsource.constants import IMAGE_REQUEST_HEADERS, MAX_REDIRECTS

# Load environment variables from .env file
load_dotenv()


class Config:
    """Loader configuration."""

    # Redirects
    MAX_REDIRECTS: int = int(
        os.getenv("IMGSOURCE_MAX_REDIRECTS", str(MAX_REDIRECTS))
    )

    # HTTP
    HTTP_TIMEOUT: float = float(os.getenv("IMGSOURCE_HTTP_TIMEOUT", "10"))
    USER_AGENT: str = os.getenv("IMGSOURCE_USER_AGENT", "imgsource/0.1")

    # Features
    NATIVE_FETCH: bool = os.getenv("IMGSOURCE_NATIVE_FETCH", "false").lower() == "true"

    # Application
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    def default_headers(self) -> dict[str, str]:
        """Headers sent with every outbound image request."""
        headers = dict(IMAGE_REQUEST_HEADERS)
        headers["User-Agent"] = self.USER_AGENT
        return headers


config = Config()
