from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from qc_web.domain.errors import RemoteCallFailure

log = logging.getLogger(__name__)


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    *,
    service: str,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> Any:
    """
    Sends one request and returns the decoded JSON body.
    Network errors, non-2xx responses and non-JSON bodies all become RemoteCallFailure.
    """
    log.debug("%s %s %s", service, method, url)
    try:
        resp = session.request(method, url, timeout=timeout, **kwargs)
    except requests.exceptions.RequestException as e:
        raise RemoteCallFailure(f"{service} request failed: {e}", service=service) from e

    if not 200 <= resp.status_code < 300:
        body = (resp.text or "").strip()[:200]
        raise RemoteCallFailure(f"{service} returned HTTP {resp.status_code}: {body}", service=service)

    try:
        return resp.json()
    except ValueError as e:
        raise RemoteCallFailure(f"{service} returned a malformed response", service=service) from e
