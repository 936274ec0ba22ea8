"""SettingsMerger — run the settings builder and capture failures as data.

Build failures are fail-open: they are logged and returned as a
:class:`MergeResult` carrying a :class:`ServiceError`, never raised. The
caller decides whether to go on with empty settings.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from m2boot.building import Severity, SettingsBuilder, SettingsBuildingError
from m2boot.config.models import EffectiveSettings, SettingsRequest
from m2boot.services.result import ServiceError

SETTINGS_BUILD_FAILED = "SETTINGS_BUILD_FAILED"

logger = logging.getLogger(__name__)


class MergeResult(BaseModel):
    """Either effective settings or the error that prevented them."""

    model_config = {"frozen": True}

    settings: EffectiveSettings | None = None
    error: ServiceError | None = None
    warnings: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class SettingsMerger:
    """Merge the files named by a :class:`SettingsRequest`."""

    def __init__(self, builder: SettingsBuilder | None = None) -> None:
        self._builder = builder or SettingsBuilder()

    def merge(self, request: SettingsRequest) -> MergeResult:
        try:
            result = self._builder.build(request)
        except SettingsBuildingError as exc:
            logger.error("While trying to read maven settings: %s", exc, exc_info=True)
            return MergeResult(
                error=ServiceError(
                    code=SETTINGS_BUILD_FAILED,
                    message=str(exc),
                    detail={
                        "problems": [str(p) for p in exc.problems],
                        "files": [str(p) for p in request.files],
                    },
                ),
                warnings=[str(p) for p in exc.problems if p.severity is Severity.WARNING],
            )

        warnings = [str(p) for p in result.problems]
        for warning in warnings:
            logger.warning("Settings problem: %s", warning)
        return MergeResult(settings=result.effective, warnings=warnings)
