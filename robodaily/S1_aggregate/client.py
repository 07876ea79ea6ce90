"""Single outbound request per source; no retries."""

import httpx

from ..config import Settings
from ..errors import FetchError


def fetch_text(url: str, settings: Settings) -> str:
    """
    GET a URL and return the decoded body.

    Raises:
        FetchError: non-2xx status, or the request itself failed
    """
    headers = {"User-Agent": settings.user_agent}
    try:
        resp = httpx.get(
            url,
            headers=headers,
            follow_redirects=True,
            timeout=settings.timeout_seconds,
        )
    except httpx.HTTPError as e:
        raise FetchError(url, reason=str(e) or type(e).__name__) from e

    if not resp.is_success:
        raise FetchError(url, status=resp.status_code)
    return resp.text
