"""Low-level HTTP transport for the user-management service.

Sends exactly one request per call; no retries.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from ..exceptions import TransportFailure

REQUEST_TIMEOUT = 5


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str


class HttpTransport:
    """Blocking HTTP transport built on a requests session.

    Usage:
        transport = HttpTransport(timeout=3)
        response = transport.send("GET", "https://api.example.org/users/alice")
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = REQUEST_TIMEOUT):
        """Initialize transport.

        Args:
            session: Session to send requests with (a new one when omitted)
            timeout: Per-request timeout in seconds
        """
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        """Send a single request.

        Args:
            method: HTTP method
            url: Absolute request URL
            headers: Request headers
            body: Raw request body

        Returns:
            Status code and decoded body text

        Raises:
            TransportFailure: If the request could not complete
        """
        try:
            resp = self.session.request(method, url, headers=headers, data=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportFailure(f"{method} {url} failed: {exc}", url=url) from exc
        return TransportResponse(status_code=resp.status_code, body=resp.text)
