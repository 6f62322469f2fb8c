from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import replace

from markupsafe import Markup

from qc_web.domain.errors import CheckAlreadyRunning
from qc_web.domain.models import CheckOutcome, WidgetState
from qc_web.services.quality_check_service import QualityCheckService

log = logging.getLogger(__name__)

RUNNING_TEXT = "Running quality check..."

# idle entries beyond this many are forgotten, oldest first
MAX_TRACKED_ENTRIES = 256


def render_outcome(outcome: CheckOutcome) -> Markup:
    """Highlighted text followed by the summary block."""
    return outcome.highlighted + Markup("<pre>Errors: {}</pre>").format("\n".join(outcome.report.summary))


def render_failure(err: BaseException) -> Markup:
    return Markup("Error: {}").format(str(err))


class CheckController:
    """
    Owns the widget state per entry: Idle -> Running -> Idle.
    Starting a check while the entry is Running is rejected (the button is disabled).
    This is the one place where failures are caught and turned into a message.
    """

    def __init__(self, service: QualityCheckService, max_entries: int = MAX_TRACKED_ENTRIES):
        self._service = service
        self._max_entries = max_entries
        self._states: "OrderedDict[str, WidgetState]" = OrderedDict()
        self._lock = threading.Lock()

    def state(self, entry_id: str) -> WidgetState:
        with self._lock:
            return replace(self._states.get(entry_id) or WidgetState())

    def _begin(self, entry_id: str) -> None:
        with self._lock:
            st = self._states.setdefault(entry_id, WidgetState())
            if st.running:
                raise CheckAlreadyRunning(entry_id)
            st.running = True
            st.results = RUNNING_TEXT
            self._states.move_to_end(entry_id)
            self._evict_idle()

    def _evict_idle(self) -> None:
        excess = len(self._states) - self._max_entries
        if excess <= 0:
            return
        idle = [k for k, st in self._states.items() if not st.running][:excess]
        for k in idle:
            del self._states[k]

    def _finish(self, entry_id: str, results: str) -> WidgetState:
        with self._lock:
            st = self._states[entry_id]
            st.results = results
            st.running = False
            return replace(st)

    def run(self, entry_id: str) -> tuple[WidgetState, CheckOutcome | None]:
        """
        Runs one check for `entry_id` and returns the final state, plus the
        outcome on success (None on failure). Raises CheckAlreadyRunning only.
        """
        self._begin(entry_id)

        outcome: CheckOutcome | None = None
        results = ""
        try:
            outcome = self._service.run(entry_id)
            results = render_outcome(outcome)
        except Exception as e:
            log.exception("Quality check failed for entry %s", entry_id)
            outcome = None
            results = render_failure(e)
        finally:
            final = self._finish(entry_id, results)

        return final, outcome
