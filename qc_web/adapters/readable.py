from __future__ import annotations

from typing import Optional

import requests

from qc_web.adapters.http_utils import request_json
from qc_web.domain.errors import ConfigurationError, RemoteCallFailure

SERVICE = "readable"


class ReadableClient:
    """Readability score from readable.io."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()

    def score(self, text: str) -> float:
        if not self.api_key:
            raise ConfigurationError("readable.io API key is not configured.")

        data = request_json(
            self._session,
            "POST",
            self.api_url,
            service=SERVICE,
            timeout=self.timeout,
            json={"content": text},
            headers={"x-api-key": self.api_key, "Content-Type": "application/json"},
        )

        score = data.get("readability_score") if isinstance(data, dict) else None
        # bool is an int subclass
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise RemoteCallFailure(f"readable response has no numeric readability_score: {score!r}", service=SERVICE)
        return score
