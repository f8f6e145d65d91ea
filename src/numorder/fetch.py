from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from . import __version__
from .errors import HttpError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": f"numorder/{__version__}",
    "Accept": "application/json",
}


def _is_success(resp: requests.Response) -> bool:
    return 200 <= resp.status_code < 300


def _status_line(resp: requests.Response) -> str:
    return f"{resp.status_code} {resp.reason}".strip()


class HttpClient:
    """Thin GET client returning plain dicts instead of raising on bad statuses.

    Transport failures (DNS, refused connections, timeouts) are retried with
    exponential backoff and surface as HttpError once retries run out.
    """

    def __init__(
        self,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0,
        retries: int = 3,
        delay: float = 0.5,
        backoff: float = 2.0,
        session: Optional[requests.Session] = None,
    ):
        self.session = session or requests.Session()
        self.headers: Dict[str, str] = {**DEFAULT_HEADERS, **(headers or {})}
        self.timeout = timeout
        self.retries = max(1, retries)
        self.delay = delay
        self.backoff = backoff

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def set_header(self, key: str, value: str) -> None:
        self.headers[key] = value

    def _send(self, url: str) -> requests.Response:
        def call() -> requests.Response:
            return self.session.get(url, headers=dict(self.headers), timeout=self.timeout)

        return self._retry(call, context=f"GET {url}")

    def _retry(self, func: Callable[[], requests.Response], context: str) -> requests.Response:
        attempt = 0
        while True:
            try:
                return func()
            except requests.RequestException as e:
                attempt += 1
                if attempt >= self.retries:
                    raise HttpError(f"{context} failed after {attempt} attempt(s): {e}") from e
                wait = self.delay * (self.backoff ** (attempt - 1))
                logger.warning("%s failed (%s), retrying in %.2fs", context, e, wait)
                time.sleep(wait)

    def get(self, url: str) -> Dict[str, str]:
        """Fetch ``url``; ``{"status", "text"}`` on 2xx, else ``{"error"}``."""
        resp = self._send(url)
        if not _is_success(resp):
            return {"error": _status_line(resp)}
        return {"status": _status_line(resp), "text": resp.text}

    def get_json(self, url: str) -> Dict[str, Any]:
        """Fetch and decode a JSON document; ``{"status", "data"}`` or ``{"error"}``."""
        resp = self._send(url)
        if not _is_success(resp):
            return {"error": _status_line(resp)}
        if "application/json" not in resp.headers.get("Content-Type", ""):
            return {"error": "Response is not valid json"}
        try:
            data = resp.json()
        except ValueError:
            return {"error": "Response is not valid json"}
        return {"status": _status_line(resp), "data": data}
