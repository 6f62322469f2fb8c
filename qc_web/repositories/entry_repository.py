from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from qc_web.adapters.http_utils import request_json
from qc_web.domain.errors import ConfigurationError, RemoteCallFailure
from qc_web.domain.models import ContentEntry

log = logging.getLogger(__name__)

SERVICE = "contentful"
CONTENT_TYPE = "application/vnd.contentful.management.v1+json"


class ContentfulEntryRepository:
    """
    Repository pattern: encapsulates reading, updating and publishing entries
    through the Contentful Management API.
    """

    def __init__(
        self,
        base_url: str,
        space_id: str,
        environment_id: str,
        access_token: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.space_id = space_id
        self.environment_id = environment_id
        self.access_token = access_token
        self.timeout = timeout
        self._session = session or requests.Session()

    def _entry_url(self, entry_id: str) -> str:
        return f"{self.base_url}/spaces/{self.space_id}/environments/{self.environment_id}/entries/{entry_id}"

    def _headers(self, version: Optional[int] = None) -> dict[str, str]:
        if not self.access_token:
            raise ConfigurationError("Contentful management token is not configured.")
        if not self.space_id:
            raise ConfigurationError("Contentful space_id is not configured.")

        headers = {"Authorization": f"Bearer {self.access_token}", "Content-Type": CONTENT_TYPE}
        if version is not None:
            headers["X-Contentful-Version"] = str(version)
        return headers

    @staticmethod
    def _to_entry(data: Any) -> ContentEntry:
        sys = data.get("sys") if isinstance(data, dict) else None
        if not isinstance(sys, dict) or "id" not in sys or "version" not in sys:
            raise RemoteCallFailure("contentful entry payload has no sys.id/sys.version", service=SERVICE)

        fields = data.get("fields") or {}
        if not isinstance(fields, dict):
            raise RemoteCallFailure("contentful entry payload has malformed fields", service=SERVICE)

        return ContentEntry(entry_id=str(sys["id"]), version=int(sys["version"]), fields=fields)

    def get_entry(self, entry_id: str) -> ContentEntry:
        headers = self._headers()
        data = request_json(self._session, "GET", self._entry_url(entry_id), service=SERVICE,
                            timeout=self.timeout, headers=headers)
        entry = self._to_entry(data)
        log.info("Fetched entry %s (version %d)", entry.entry_id, entry.version)
        return entry

    def update(self, entry: ContentEntry) -> ContentEntry:
        headers = self._headers(entry.version)
        data = request_json(self._session, "PUT", self._entry_url(entry.entry_id), service=SERVICE,
                            timeout=self.timeout, headers=headers, json={"fields": entry.fields})
        updated = self._to_entry(data)
        log.info("Updated entry %s (version %d -> %d)", entry.entry_id, entry.version, updated.version)
        return updated

    def publish(self, entry: ContentEntry) -> ContentEntry:
        headers = self._headers(entry.version)
        data = request_json(self._session, "PUT", self._entry_url(entry.entry_id) + "/published",
                            service=SERVICE, timeout=self.timeout, headers=headers)
        published = self._to_entry(data)
        log.info("Published entry %s", published.entry_id)
        return published
