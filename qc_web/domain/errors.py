from __future__ import annotations

from typing import Optional


class QualityCheckError(Exception):
    """Base for everything that aborts a quality check run. str(err) is shown to the user."""


class RemoteCallFailure(QualityCheckError):
    def __init__(self, message: str, *, service: Optional[str] = None):
        super().__init__(message)
        self.service = service


class ConfigurationError(QualityCheckError):
    pass


class CheckAlreadyRunning(QualityCheckError):
    def __init__(self, entry_id: str):
        super().__init__(f"A quality check is already running for entry {entry_id}.")
        self.entry_id = entry_id
