from __future__ import annotations

import json
import logging
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from qc_web.domain.errors import RemoteCallFailure
from qc_web.domain.models import AccessibilityIssue

log = logging.getLogger(__name__)

SERVICE = "pa11y"

# pa11y exits 2 when the page was tested and issues were found
_OK_EXIT_CODES = {0, 2}

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="{lang}">
<head><meta charset="utf-8"><title>Entry preview</title></head>
<body>
{content}
</body>
</html>
"""


class Pa11yRunner:
    """
    Accessibility check through the pa11y CLI.
    The content is rendered into a temporary page and tested as a file:// URL.
    """

    def __init__(
        self,
        command: str = "pa11y",
        standard: str = "WCAG2AA",
        locale: str = "en-US",
        timeout: Optional[float] = None,
    ):
        self.command = command
        self.standard = standard
        self.locale = locale
        self.timeout = timeout

    def build_command(self, page_url: str) -> list[str]:
        return [*shlex.split(self.command), "--standard", self.standard, "--reporter", "json", page_url]

    def check(self, content: str) -> list[AccessibilityIssue]:
        with tempfile.TemporaryDirectory(prefix="qc_web_") as tmp:
            page = Path(tmp) / "entry.html"
            page.write_text(_PAGE_TEMPLATE.format(lang=self.locale, content=content), encoding="utf-8")
            cmd = self.build_command(page.as_uri())

            try:
                proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
            except subprocess.TimeoutExpired as e:
                raise RemoteCallFailure("pa11y timed out.", service=SERVICE) from e
            except OSError as e:
                raise RemoteCallFailure(f"Failed to execute pa11y: {e}", service=SERVICE) from e

        if proc.returncode not in _OK_EXIT_CODES:
            stderr_tail = "\n".join((proc.stderr or "").splitlines()[-5:])
            raise RemoteCallFailure(f"pa11y exited with {proc.returncode}: {stderr_tail}", service=SERVICE)

        return self.parse_issues(proc.stdout)

    @staticmethod
    def parse_issues(stdout: str) -> list[AccessibilityIssue]:
        raw = (stdout or "").strip()
        if not raw:
            return []
        try:
            issues = json.loads(raw)
        except json.JSONDecodeError as e:
            raise RemoteCallFailure("pa11y produced invalid JSON", service=SERVICE) from e
        if not isinstance(issues, list):
            raise RemoteCallFailure("pa11y JSON report is not a list of issues", service=SERVICE)

        log.debug("pa11y reported %d issue(s)", len(issues))
        return [
            AccessibilityIssue(
                message=str(i.get("message", "")),
                type=str(i.get("type", "")),
                selector=str(i.get("selector", "")),
            )
            for i in issues
            if isinstance(i, dict)
        ]
