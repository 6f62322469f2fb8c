from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import pytest

from qc_web.config.ini_config import AppSettings
from qc_web.domain.models import AccessibilityIssue, ContentEntry, TextSpanError


# -----------------------------
# Test doubles
# -----------------------------
_NO_JSON = object()


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = _NO_JSON, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if self._payload is _NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replays queued responses (or raises queued exceptions)."""

    def __init__(self, *responses: Any):
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, timeout: Optional[float] = None, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        nxt = self._responses.pop(0)
        if isinstance(nxt, BaseException):
            raise nxt
        return nxt


class FakeGrammar:
    def __init__(self, errors: Optional[list[TextSpanError]] = None, exc: Optional[Exception] = None):
        self.errors = errors or []
        self.exc = exc
        self.calls: list[str] = []

    def check(self, text: str) -> list[TextSpanError]:
        self.calls.append(text)
        if self.exc:
            raise self.exc
        return list(self.errors)


class FakeReadability:
    def __init__(self, score: float = 75, exc: Optional[Exception] = None):
        self._score = score
        self.exc = exc
        self.calls: list[str] = []

    def score(self, text: str) -> float:
        self.calls.append(text)
        if self.exc:
            raise self.exc
        return self._score


class FakeAccessibility:
    def __init__(self, issues: Optional[list[AccessibilityIssue]] = None, exc: Optional[Exception] = None):
        self.issues = issues or []
        self.exc = exc
        self.calls: list[str] = []

    def check(self, content: str) -> list[AccessibilityIssue]:
        self.calls.append(content)
        if self.exc:
            raise self.exc
        return list(self.issues)


@dataclass
class FakeEntryStore:
    entry: ContentEntry
    get_exc: Optional[Exception] = None
    update_exc: Optional[Exception] = None
    publish_exc: Optional[Exception] = None
    updated: list[ContentEntry] = field(default_factory=list)
    published: list[ContentEntry] = field(default_factory=list)

    def get_entry(self, entry_id: str) -> ContentEntry:
        if self.get_exc:
            raise self.get_exc
        return self.entry

    def update(self, entry: ContentEntry) -> ContentEntry:
        if self.update_exc:
            raise self.update_exc
        self.updated.append(entry)
        return ContentEntry(entry_id=entry.entry_id, version=entry.version + 1, fields=entry.fields)

    def publish(self, entry: ContentEntry) -> ContentEntry:
        if self.publish_exc:
            raise self.publish_exc
        self.published.append(entry)
        return ContentEntry(entry_id=entry.entry_id, version=entry.version + 1, fields=entry.fields)


# -----------------------------
# Helpers
# -----------------------------
def make_entry(body: Any = "Ths is a sample text.", entry_id: str = "entry-1", version: int = 3) -> ContentEntry:
    fields: dict[str, dict[str, Any]] = {"title": {"en-US": "Sample"}}
    if body is not None:
        fields["body"] = {"en-US": body}
    return ContentEntry(entry_id=entry_id, version=version, fields=fields)


def make_settings(**overrides: Any) -> AppSettings:
    values: dict[str, Any] = dict(
        cms_base_url="https://api.contentful.test",
        cms_space_id="space1",
        cms_environment_id="master",
        cms_access_token="cma-token",
        body_field="body",
        errors_field="errors",
        locale="en-US",
        grammar_api_url="https://grammar.test/v2/check",
        grammar_api_key="g-key",
        grammar_language="en-US",
        readability_api_url="https://readable.test/api/text/",
        readability_api_key="r-key",
        readability_threshold=60.0,
        pa11y_command="pa11y",
        accessibility_standard="WCAG2AA",
        timeout_seconds=None,
        max_workers=3,
        flask_host="127.0.0.1",
        flask_port=5000,
        flask_debug=False,
        log_level="INFO",
    )
    values.update(overrides)
    return AppSettings(**values)


@pytest.fixture
def settings() -> AppSettings:
    return make_settings()
