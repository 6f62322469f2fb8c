from __future__ import annotations

import pytest

from qc_web.domain.errors import ConfigurationError, RemoteCallFailure
from qc_web.domain.models import AccessibilityIssue, TextSpanError
from qc_web.services.check_aggregator import READABILITY_FAILED_LINE, CheckAggregator
from qc_web.services.entry_sync import EntrySync
from qc_web.services.quality_check_service import QualityCheckService
from qc_web.tests.conftest import (
    FakeAccessibility,
    FakeEntryStore,
    FakeGrammar,
    FakeReadability,
    make_entry,
)

TEXT = "This iss a short sample."


def make_service(store, grammar=None, readability=None, accessibility=None) -> QualityCheckService:
    aggregator = CheckAggregator(
        grammar=grammar or FakeGrammar(),
        readability=readability or FakeReadability(),
        accessibility=accessibility or FakeAccessibility(),
    )
    return QualityCheckService(entries=store, aggregator=aggregator, entry_sync=EntrySync(entries=store))


def test_one_grammar_error_passing_score_no_accessibility_issues():
    store = FakeEntryStore(entry=make_entry(TEXT))
    err = TextSpanError(message="Possible typo", offset=5, length=3, replacements=("is",))

    outcome = make_service(store, FakeGrammar([err]), FakeReadability(75)).run("entry-1")

    summary = outcome.report.summary
    assert summary[-1] == "Readability score: 75"
    assert READABILITY_FAILED_LINE not in summary
    assert not any(line.startswith("Accessibility Errors") for line in summary)
    assert summary[0].startswith("Grammar Errors: ")

    # entry sync got exactly the summary
    assert store.updated[0].fields["errors"] == {"en-US": summary}
    assert len(store.published) == 1

    assert outcome.highlighted == 'This <span class="error">iss</span> a short sample.'


def test_no_grammar_errors_low_score_two_accessibility_issues():
    store = FakeEntryStore(entry=make_entry(TEXT))
    issues = [
        AccessibilityIssue(message="Missing alt", type="error", selector="img"),
        AccessibilityIssue(message="Low contrast", type="warning", selector="p"),
    ]

    outcome = make_service(store, FakeGrammar([]), FakeReadability(40), FakeAccessibility(issues)).run("entry-1")

    summary = outcome.report.summary
    assert len(summary) == 3
    assert summary[0].startswith("Accessibility Errors: [")
    assert summary[1:] == ["Readability score: 40", "Content did not pass readability check."]
    assert store.updated[0].fields["errors"] == {"en-US": summary}
    # nothing to highlight
    assert outcome.highlighted == TEXT


def test_summary_only_score_when_no_findings():
    store = FakeEntryStore(entry=make_entry(TEXT))
    outcome = make_service(store, readability=FakeReadability(75)).run("entry-1")
    assert outcome.report.summary == ["Readability score: 75"]
    assert store.updated[0].fields["errors"] == {"en-US": ["Readability score: 75"]}


@pytest.mark.parametrize("failing", ["grammar", "readability", "accessibility"])
def test_check_failure_never_writes_to_entry(failing):
    store = FakeEntryStore(entry=make_entry(TEXT))
    exc = RemoteCallFailure("service unavailable")
    service = make_service(
        store,
        grammar=FakeGrammar(exc=exc if failing == "grammar" else None),
        readability=FakeReadability(exc=exc if failing == "readability" else None),
        accessibility=FakeAccessibility(exc=exc if failing == "accessibility" else None),
    )

    with pytest.raises(RemoteCallFailure):
        service.run("entry-1")

    assert store.updated == []
    assert store.published == []


def test_missing_credential_surfaces_as_failure_without_write():
    store = FakeEntryStore(entry=make_entry(TEXT))
    service = make_service(store, readability=FakeReadability(exc=ConfigurationError("readable.io API key is not configured.")))
    with pytest.raises(ConfigurationError):
        service.run("entry-1")
    assert store.updated == []


def test_fetch_failure_propagates():
    store = FakeEntryStore(entry=make_entry(TEXT), get_exc=RemoteCallFailure("contentful returned HTTP 404"))
    grammar = FakeGrammar()
    with pytest.raises(RemoteCallFailure, match="404"):
        make_service(store, grammar=grammar).run("entry-1")
    assert grammar.calls == []


@pytest.mark.parametrize("body", [None, 42])
def test_entry_without_body_text_is_a_failure(body):
    store = FakeEntryStore(entry=make_entry(body))
    with pytest.raises(RemoteCallFailure, match="no text in field 'body'"):
        make_service(store).run("entry-1")


def test_blank_entry_id_rejected():
    store = FakeEntryStore(entry=make_entry(TEXT))
    with pytest.raises(ValueError):
        make_service(store).run("   ")
