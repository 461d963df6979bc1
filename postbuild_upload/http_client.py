"""HTTP client utilities with consistent user agent."""

from typing import Optional

from . import __version__

USER_AGENT = f"postbuild-upload/{__version__}"


def get_default_headers(content_type: Optional[str] = None) -> dict:
    """
    Get default HTTP headers with user agent.

    No authentication header is ever added here; endpoints that need
    credentials must carry them in the URL or sit behind another layer.

    Args:
        content_type: Optional Content-Type header value

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if content_type:
        headers["Content-Type"] = content_type
    return headers
