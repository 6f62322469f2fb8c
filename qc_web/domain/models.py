######## models.py
########

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class TextSpanError:
    message: str
    offset: int
    length: int
    replacements: tuple[str, ...] = ()

    @property
    def end(self) -> int:
        return self.offset + self.length

    def as_dict(self) -> dict[str, Any]:
        # key order matches the summary line written back to the entry
        return {
            "message": self.message,
            "replacements": list(self.replacements),
            "offset": self.offset,
            "length": self.length,
        }


@dataclass(frozen=True)
class AccessibilityIssue:
    message: str
    type: str                   # "error" | "warning" | "notice"
    selector: str

    def as_dict(self) -> dict[str, Any]:
        return {"message": self.message, "type": self.type, "selector": self.selector}


@dataclass(frozen=True)
class ContentEntry:
    """
    Handle to a CMS record. Fields are locale-keyed:
    {"body": {"en-US": "..."}, "errors": {"en-US": [...]}}
    """
    entry_id: str
    version: int
    fields: dict[str, dict[str, Any]] = field(default_factory=dict)

    def field_value(self, name: str, locale: str) -> Optional[Any]:
        return (self.fields.get(name) or {}).get(locale)

    def with_field(self, name: str, locale: str, value: Any) -> "ContentEntry":
        fields = dict(self.fields)
        fields[name] = {locale: value}
        return ContentEntry(entry_id=self.entry_id, version=self.version, fields=fields)


@dataclass(frozen=True)
class CheckReport:
    grammar_errors: list[TextSpanError]
    accessibility_issues: list[AccessibilityIssue]
    readability_score: float
    summary: list[str]
    passed_readability: bool


@dataclass(frozen=True)
class CheckOutcome:
    entry_id: str
    text: str
    report: CheckReport
    highlighted: str            # markupsafe.Markup


@dataclass
class WidgetState:
    running: bool = False
    results: str = ""
