"""SettingsService — read-only views of settings discovery and merging."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from m2boot.config.discovery import (
    build_settings_request,
    default_local_repository_path,
    locate_installation_home,
)
from m2boot.services.merger import SettingsMerger
from m2boot.services.result import ServiceResult


def _optional_path(path: Path | None) -> str | None:
    return str(path) if path is not None else None


class SettingsService:
    """Report which settings files apply and what they merge into."""

    def __init__(
        self,
        user_home: Path,
        environ: Mapping[str, str] | None = None,
        merger: SettingsMerger | None = None,
    ) -> None:
        self._user_home = user_home
        self._environ = dict(os.environ if environ is None else environ)
        self._merger = merger or SettingsMerger()

    def locate(self) -> ServiceResult:
        """Installation home, settings files in effect, default local repository."""
        installation_home = locate_installation_home(self._environ)
        request = build_settings_request(self._user_home, self._environ)
        return ServiceResult(
            ok=True,
            op="locate_settings",
            data={
                "installation_home": _optional_path(installation_home),
                "user_settings": _optional_path(request.user_settings_file),
                "global_settings": _optional_path(request.global_settings_file),
                "local_repository": str(default_local_repository_path(self._user_home)),
            },
        )

    def effective(self) -> ServiceResult:
        """Merged mirrors and proxies, or the error that prevented merging."""
        op = "effective_settings"
        request = build_settings_request(self._user_home, self._environ)
        merged = self._merger.merge(request)
        if merged.settings is None:
            return ServiceResult(ok=False, op=op, warnings=merged.warnings, error=merged.error)

        settings = merged.settings
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "files": [str(p) for p in request.files],
                "local_repository": settings.local_repository,
                "mirrors": [
                    {"id": m.id, "url": m.url, "mirror_of": m.mirror_of, "layout": m.layout}
                    for m in settings.mirrors
                ],
                "proxies": [
                    {
                        "id": p.id,
                        "protocol": p.protocol,
                        "host": p.host,
                        "port": p.port,
                        "non_proxy_hosts": p.non_proxy_hosts,
                    }
                    for p in settings.proxies
                ],
            },
            warnings=merged.warnings,
        )
