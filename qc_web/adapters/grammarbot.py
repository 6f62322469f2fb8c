from __future__ import annotations

from typing import Optional

import requests

from qc_web.adapters.http_utils import request_json
from qc_web.domain.errors import ConfigurationError, RemoteCallFailure
from qc_web.domain.models import TextSpanError

SERVICE = "grammarbot"


class GrammarBotClient:
    """Grammar check against the GrammarBot v2 API."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        language: str = "en-US",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.language = language
        self.timeout = timeout
        self._session = session or requests.Session()

    def check(self, text: str) -> list[TextSpanError]:
        if not self.api_key:
            raise ConfigurationError("GrammarBot API key is not configured.")

        data = request_json(
            self._session,
            "POST",
            self.api_url,
            service=SERVICE,
            timeout=self.timeout,
            params={"text": text, "language": self.language, "apiKey": self.api_key},
        )

        matches = data.get("matches") if isinstance(data, dict) else None
        if not isinstance(matches, list):
            raise RemoteCallFailure("grammarbot response has no 'matches' list", service=SERVICE)

        try:
            return [
                TextSpanError(
                    message=str(m["message"]),
                    replacements=tuple(str(r["value"]) for r in (m.get("replacements") or [])),
                    offset=int(m["offset"]),
                    length=int(m["length"]),
                )
                for m in matches
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteCallFailure(f"grammarbot match is malformed: {e}", service=SERVICE) from e
