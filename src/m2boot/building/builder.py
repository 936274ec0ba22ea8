"""SettingsBuilder — validate and merge user and installation settings.

User settings are dominant. Mirrors and proxies merge by id: the user list
keeps its order and installation entries with an unseen id are appended.
Any error-severity problem in either file fails the whole build, so a
caller never sees half of a broken file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, Field

from m2boot.building.problems import Severity, SettingsBuildingError, SettingsProblem
from m2boot.building.reader import RawSettings, read_settings
from m2boot.config.models import EffectiveSettings, MirrorRule, ProxyRule, SettingsRequest

logger = logging.getLogger(__name__)

_Rule = TypeVar("_Rule", MirrorRule, ProxyRule)


class SettingsBuildingResult(BaseModel):
    """Effective settings plus any non-fatal problems."""

    model_config = {"frozen": True}

    effective: EffectiveSettings
    problems: list[SettingsProblem] = Field(default_factory=list)


def _validate_mirrors(raw: RawSettings, problems: list[SettingsProblem]) -> list[MirrorRule]:
    rules: list[MirrorRule] = []
    seen: set[str] = set()
    for index, entry in enumerate(raw.mirrors):
        missing = [name for name in ("id", "url", "mirrorOf") if name not in entry]
        if missing:
            for name in missing:
                problems.append(
                    SettingsProblem(
                        severity=Severity.ERROR,
                        message=f"'mirrors.mirror[{index}].{name}' must not be empty",
                        source=raw.source,
                    )
                )
            continue
        mirror_id = entry["id"]
        if mirror_id == "local":
            problems.append(
                SettingsProblem(
                    severity=Severity.WARNING,
                    message="'mirrors.mirror.id' must not be 'local', "
                    "this identifier is reserved for the local repository",
                    source=raw.source,
                )
            )
        if mirror_id in seen:
            problems.append(
                SettingsProblem(
                    severity=Severity.WARNING,
                    message=f"'mirrors.mirror.id' must be unique but found duplicate '{mirror_id}'",
                    source=raw.source,
                )
            )
            # Maven keeps both entries; only the first one is registered here.
            continue
        seen.add(mirror_id)
        rules.append(
            MirrorRule(
                id=mirror_id,
                url=entry["url"],
                mirror_of=entry["mirrorOf"],
                layout=entry.get("layout", "default"),
                mirror_of_layouts=entry.get("mirrorOfLayouts", "default,legacy"),
                name=entry.get("name"),
            )
        )
    return rules


def _validate_proxies(raw: RawSettings, problems: list[SettingsProblem]) -> list[ProxyRule]:
    rules: list[ProxyRule] = []
    seen: set[str] = set()
    for index, entry in enumerate(raw.proxies):
        if "host" not in entry:
            problems.append(
                SettingsProblem(
                    severity=Severity.ERROR,
                    message=f"'proxies.proxy[{index}].host' must not be empty",
                    source=raw.source,
                )
            )
            continue
        port = 8080
        if "port" in entry:
            try:
                port = int(entry["port"])
            except ValueError:
                problems.append(
                    SettingsProblem(
                        severity=Severity.ERROR,
                        message=f"'proxies.proxy[{index}].port' must be a number "
                        f"but is '{entry['port']}'",
                        source=raw.source,
                    )
                )
                continue
        proxy_id = entry.get("id", "default")
        if proxy_id in seen:
            problems.append(
                SettingsProblem(
                    severity=Severity.WARNING,
                    message=f"'proxies.proxy.id' must be unique but found duplicate '{proxy_id}'",
                    source=raw.source,
                )
            )
            # Maven keeps both entries; only the first one is registered here.
            continue
        seen.add(proxy_id)
        rules.append(
            ProxyRule(
                id=proxy_id,
                protocol=entry.get("protocol", "http"),
                host=entry["host"],
                port=port,
                non_proxy_hosts=entry.get("nonProxyHosts"),
            )
        )
    return rules


def merge_by_id(dominant: Sequence[_Rule], recessive: Iterable[_Rule]) -> tuple[_Rule, ...]:
    """Dominant entries in order, then recessive entries with an unseen id."""
    ids = {rule.id for rule in dominant}
    merged = list(dominant)
    merged.extend(rule for rule in recessive if rule.id not in ids)
    return tuple(merged)


class SettingsBuilder:
    """Build :class:`EffectiveSettings` from a :class:`SettingsRequest`."""

    def build(self, request: SettingsRequest) -> SettingsBuildingResult:
        """Read, validate and merge the request's settings files.

        Raises:
            SettingsBuildingError: A file is unreadable, malformed, or has
                error-severity problems.
        """
        problems: list[SettingsProblem] = []
        user = self._load(request, request.user_settings_file, problems)
        installation = self._load(request, request.global_settings_file, problems)

        if any(p.severity is not Severity.WARNING for p in problems):
            raise SettingsBuildingError(problems)

        user_mirrors, user_proxies, user_local = user
        inst_mirrors, inst_proxies, inst_local = installation
        effective = EffectiveSettings(
            mirrors=merge_by_id(user_mirrors, inst_mirrors),
            proxies=merge_by_id(user_proxies, inst_proxies),
            local_repository=user_local or inst_local,
        )
        logger.debug(
            "Built settings: %d mirror(s), %d proxy(ies)",
            len(effective.mirrors),
            len(effective.proxies),
        )
        return SettingsBuildingResult(effective=effective, problems=problems)

    @staticmethod
    def _load(
        request: SettingsRequest,
        path: Path | None,
        problems: list[SettingsProblem],
    ) -> tuple[list[MirrorRule], list[ProxyRule], str | None]:
        if path is None:
            return [], [], None
        try:
            raw = read_settings(path, user_home=request.user_home, environ=request.environ)
        except SettingsBuildingError as exc:
            problems.extend(exc.problems)
            return [], [], None
        mirrors = _validate_mirrors(raw, problems)
        proxies = _validate_proxies(raw, problems)
        return mirrors, proxies, raw.local_repository
