from __future__ import annotations

import json
import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Protocol, Sequence

from qc_web.domain.errors import QualityCheckError, RemoteCallFailure
from qc_web.domain.models import AccessibilityIssue, CheckReport, TextSpanError

log = logging.getLogger(__name__)

READABILITY_PASS_THRESHOLD = 60
READABILITY_FAILED_LINE = "Content did not pass readability check."


class GrammarChecker(Protocol):
    def check(self, text: str) -> list[TextSpanError]: ...


class ReadabilityScorer(Protocol):
    def score(self, text: str) -> float: ...


class AccessibilityChecker(Protocol):
    def check(self, content: str) -> list[AccessibilityIssue]: ...


def _compact_json(items: list[dict]) -> str:
    return json.dumps(items, separators=(",", ":"), ensure_ascii=False)


def format_score(score: float) -> str:
    # 75.0 -> "75", 72.5 -> "72.5"
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


def build_summary(
    grammar_errors: Sequence[TextSpanError],
    accessibility_issues: Sequence[AccessibilityIssue],
    readability_score: float,
    threshold: float = READABILITY_PASS_THRESHOLD,
) -> list[str]:
    """
    Summary lines, always in this order:
    grammar block (if any), accessibility block (if any), score, failure line (if score < threshold).
    """
    lines: list[str] = []
    if grammar_errors:
        lines.append("Grammar Errors: " + _compact_json([e.as_dict() for e in grammar_errors]))
    if accessibility_issues:
        lines.append("Accessibility Errors: " + _compact_json([i.as_dict() for i in accessibility_issues]))
    lines.append(f"Readability score: {format_score(readability_score)}")
    if readability_score < threshold:
        lines.append(READABILITY_FAILED_LINE)
    return lines


@dataclass
class CheckAggregator:
    """
    Runs the grammar, readability and accessibility checks against one text
    and folds the results into a CheckReport.
    """
    grammar: GrammarChecker
    readability: ReadabilityScorer
    accessibility: AccessibilityChecker
    readability_threshold: float = READABILITY_PASS_THRESHOLD
    max_workers: int = 3

    def run(self, text: str) -> CheckReport:
        ex = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="qc-check")
        try:
            grammar_fut = ex.submit(self.grammar.check, text)
            readability_fut = ex.submit(self.readability.score, text)
            accessibility_fut = ex.submit(self.accessibility.check, text)
            futures = [grammar_fut, readability_fut, accessibility_fut]

            # returns as soon as any check fails; the others are not waited for
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            failed = [f for f in futures if f in done and f.exception() is not None]
            if failed:
                e = failed[0].exception()
                if isinstance(e, QualityCheckError):
                    raise e
                raise RemoteCallFailure(f"Check failed: {e}") from e

            grammar_errors = list(grammar_fut.result())
            score = readability_fut.result()
            accessibility_issues = list(accessibility_fut.result())
        finally:
            ex.shutdown(wait=False, cancel_futures=True)

        passed = score >= self.readability_threshold
        summary = build_summary(grammar_errors, accessibility_issues, score, self.readability_threshold)

        log.info(
            "Checks done: %d grammar error(s), %d accessibility issue(s), readability %s (%s)",
            len(grammar_errors), len(accessibility_issues), format_score(score), "pass" if passed else "fail",
        )

        return CheckReport(
            grammar_errors=grammar_errors,
            accessibility_issues=accessibility_issues,
            readability_score=score,
            summary=summary,
            passed_readability=passed,
        )
