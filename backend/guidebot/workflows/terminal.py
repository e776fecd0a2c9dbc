# /guidebot/workflows/terminal.py

"""
Terminal URL composition.

The terminal destination of a flow is usually a relative path such as
`/offer` or `/products/ABC123/payment`. A tracking reference is carried onto
it as one query parameter; composing twice with the same reference gives the
same URL and a different reference overwrites the old one.
"""

import logging
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit

from guidebot.config.settings import settings

logger = logging.getLogger(__name__)


def compose_terminal(
    base_url: Optional[str],
    tracking_ref: Optional[str],
    param: Optional[str] = None,
    origin: Optional[str] = None,
) -> Optional[str]:
    """
    Attach the tracking parameter to a terminal destination.

    Args:
        base_url: Destination path or URL; empty means the flow has none
        tracking_ref: Partner/affiliate reference; empty leaves the URL untouched
        param: Query parameter name (defaults to settings.tracking_param)
        origin: Placeholder origin used to resolve relative paths

    Returns:
        Path plus query string, or None when there is no destination
    """
    if not base_url:
        return None
    if not tracking_ref:
        return base_url

    param = param or settings.tracking_param
    origin = origin or settings.terminal_placeholder_origin

    try:
        parts = urlsplit(urljoin(origin + "/", base_url))
        query = parse_qsl(parts.query, keep_blank_values=True)
    except ValueError as e:
        return _append_raw(base_url, param, tracking_ref, e)

    replaced = False
    updated = []
    for key, value in query:
        if key == param:
            if not replaced:
                updated.append((key, tracking_ref))
                replaced = True
            continue
        updated.append((key, value))
    if not replaced:
        updated.append((param, tracking_ref))

    return f"{parts.path or '/'}?{urlencode(updated)}"


def _append_raw(base_url: str, param: str, tracking_ref: str, error: Exception) -> str:
    if "#" in base_url or any(ch.isspace() for ch in base_url):
        logger.warning(f"Unparseable terminal destination {base_url!r} returned unchanged: {error}")
        return base_url
    separator = "&" if "?" in base_url else "?"
    logger.warning(f"Unparseable terminal destination {base_url!r}, appending {param} as text: {error}")
    return f"{base_url}{separator}{param}={tracking_ref}"
