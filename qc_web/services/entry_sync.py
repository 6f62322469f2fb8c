from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

from qc_web.domain.models import ContentEntry

log = logging.getLogger(__name__)


class EntryStore(Protocol):
    def get_entry(self, entry_id: str) -> ContentEntry: ...
    def update(self, entry: ContentEntry) -> ContentEntry: ...
    def publish(self, entry: ContentEntry) -> ContentEntry: ...


@dataclass
class EntrySync:
    """
    Writes the check summary onto the entry, then commits and publishes it.
    Every run replaces the previous value of the field; nothing is rolled back
    if publishing fails after the update went through.
    """
    entries: EntryStore
    field: str = "errors"
    locale: str = "en-US"

    def sync(self, entry: ContentEntry, summary: Sequence[str]) -> ContentEntry:
        staged = entry.with_field(self.field, self.locale, list(summary))
        updated = self.entries.update(staged)
        published = self.entries.publish(updated)
        log.info("Wrote %d summary line(s) to %s.%s[%s]", len(summary), entry.entry_id, self.field, self.locale)
        return published
