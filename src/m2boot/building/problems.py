"""Problems collected while building settings, and the error that carries them."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel


class Severity(StrEnum):
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class SettingsProblem(BaseModel):
    """One issue found in a settings file."""

    model_config = {"frozen": True}

    severity: Severity
    message: str
    source: Path | None = None

    def __str__(self) -> str:
        where = f" @ {self.source}" if self.source else ""
        return f"[{self.severity.value.upper()}] {self.message}{where}"


class SettingsBuildingError(Exception):
    """Raised when one or more settings files cannot be used.

    ``problems`` holds every problem found, warnings included.
    """

    def __init__(self, problems: list[SettingsProblem]) -> None:
        self.problems = problems
        errors = [p for p in problems if p.severity is not Severity.WARNING]
        summary = "; ".join(str(p) for p in errors) or "unknown settings problem"
        super().__init__(f"{len(errors)} problem(s) building settings: {summary}")
