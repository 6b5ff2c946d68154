from __future__ import annotations

"""Lightweight HTTP JSON client over stdlib urllib.

GET + JSON decode only. Failures are mapped onto a small typed hierarchy so the
rate layer can tell transport problems from bad responses:

    NetworkError            transport could not complete (DNS, refused, timeout)
    HttpError(status)       server answered with status >= 400
    MalformedResponseError  body is not valid JSON (also raised by the fetcher
                            for schema problems)

Retries are opt-in (default 0); the rate fetcher leaves retry policy to callers.
"""
import http.client
import json
import logging
import time
import urllib.error
import urllib.request
from typing import Any, Optional

logger = logging.getLogger("fxboard.http")


class RateFeedError(Exception):
    """Base class for failures talking to the rate feed."""


class NetworkError(RateFeedError):
    pass


class HttpError(RateFeedError):
    def __init__(self, status: int, url: str = ""):
        super().__init__(f"HTTP {status} for {url}" if url else f"HTTP {status}")
        self.status = status
        self.url = url


class MalformedResponseError(RateFeedError):
    pass


def _open_json(url: str, timeout: float) -> Any:
    try:
        with urllib.request.urlopen(url, timeout=timeout) as resp:  # nosec B310
            status = getattr(resp, "status", 200)
            if status >= 400:
                raise HttpError(status, url)
            data = resp.read()
    except urllib.error.HTTPError as e:
        # urlopen raises for 4xx/5xx before we see the response object
        raise HttpError(e.code, url) from e
    except (urllib.error.URLError, http.client.HTTPException, TimeoutError, OSError) as e:
        raise NetworkError(f"Failed to reach {url}: {e}") from e
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedResponseError(f"Invalid JSON from {url}: {e}") from e


def get_json(
    url: str, *, timeout: float = 5.0, retries: int = 0, backoff: float = 0.5
) -> Any:
    last_err: Optional[RateFeedError] = None
    for attempt in range(retries + 1):
        try:
            return _open_json(url, timeout)
        except RateFeedError as e:
            last_err = e
            if attempt == retries:
                break
            logger.debug("retrying %s after %s", url, e, extra={"url": url})
            time.sleep(backoff * (2**attempt))
    assert last_err is not None
    raise last_err
