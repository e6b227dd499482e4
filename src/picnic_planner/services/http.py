"""
HTTP session shared by the Open-Meteo datasources.

Every request goes through a ``TimeoutHTTPAdapter`` that retries transient
failures (connection errors, 429 and 5xx gateway errors) with exponential
backoff and applies a default timeout when the caller gives none. Retries
happen here and nowhere else: the scorers and the historical aggregator
treat a failed call as final.

Usage::

    from picnic_planner.services.http import session

    resp = session.get("https://api.open-meteo.com/v1/forecast", params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: Three attempts after the first, waiting 0s, 1s, 2s
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,  # resp.raise_for_status() reports the final status
)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "picnic-planner/0.1"


class TimeoutHTTPAdapter(HTTPAdapter):
    """Retrying adapter that fills in a timeout for requests sent without one."""

    def __init__(self, *args: Any, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(  # type: ignore[override]
        self, request: requests.PreparedRequest, timeout: Any = None, **kwargs: Any
    ) -> requests.Response:
        return super().send(request, timeout=self.timeout if timeout is None else timeout, **kwargs)


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the retrying adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Timeout in seconds for requests that don't pass one.
        user_agent: ``User-Agent`` header sent with every request.
    """
    s = requests.Session()
    adapter = TimeoutHTTPAdapter(max_retries=retry or DEFAULT_RETRY, timeout=timeout)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = user_agent
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()
