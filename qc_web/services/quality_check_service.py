from __future__ import annotations

import logging
from dataclasses import dataclass

from qc_web.domain.errors import RemoteCallFailure
from qc_web.domain.models import CheckOutcome
from qc_web.services.check_aggregator import CheckAggregator
from qc_web.services.entry_sync import EntryStore, EntrySync
from qc_web.services.highlighter import highlight_errors

log = logging.getLogger(__name__)


@dataclass
class QualityCheckService:
    """
    Service layer: one "run quality check" for an entry.
    fetch entry -> run checks -> write summary back + publish -> highlight grammar errors.
    Any failure propagates; the caller decides how to show it.
    """
    entries: EntryStore
    aggregator: CheckAggregator
    entry_sync: EntrySync
    body_field: str = "body"
    locale: str = "en-US"

    def run(self, entry_id: str) -> CheckOutcome:
        entry_id = (entry_id or "").strip()
        if not entry_id:
            raise ValueError("Entry id is required.")

        entry = self.entries.get_entry(entry_id)
        text = entry.field_value(self.body_field, self.locale)
        if not isinstance(text, str):
            raise RemoteCallFailure(
                f"Entry {entry_id} has no text in field '{self.body_field}' for locale {self.locale}.",
                service="contentful",
            )

        report = self.aggregator.run(text)

        # only reached when all three checks succeeded
        self.entry_sync.sync(entry, report.summary)

        highlighted = highlight_errors(text, report.grammar_errors)
        log.info("Quality check for %s finished with %d summary line(s)", entry_id, len(report.summary))

        return CheckOutcome(entry_id=entry_id, text=text, report=report, highlighted=highlighted)
