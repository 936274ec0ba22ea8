"""settings.xml reader.

Pulls ``<localRepository>``, ``<mirrors>`` and ``<proxies>`` out of a Maven
settings file as raw string fields, with ``${...}`` expressions
interpolated. Elements m2boot has no use for (servers, profiles, proxy
credentials) are never read.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from m2boot.building.problems import Severity, SettingsBuildingError, SettingsProblem

_EXPRESSION = re.compile(r"\$\{([^}]+)\}")

MIRROR_FIELDS = ("id", "name", "url", "layout", "mirrorOf", "mirrorOfLayouts")
# username/password are absent on purpose: proxy authentication is not supported.
PROXY_FIELDS = ("id", "protocol", "host", "port", "nonProxyHosts")


@dataclass
class RawSettings:
    """Uninterpreted content of one settings file."""

    source: Path
    local_repository: str | None = None
    mirrors: list[dict[str, str]] = field(default_factory=list)
    proxies: list[dict[str, str]] = field(default_factory=list)


def interpolate(text: str, user_home: Path, environ: Mapping[str, str]) -> str:
    """Expand ``${user.home}`` and ``${env.NAME}``; leave anything else verbatim."""

    def _resolve(match: re.Match[str]) -> str:
        expr = match.group(1).strip()
        if expr == "user.home":
            return str(user_home)
        if expr.startswith("env."):
            value = environ.get(expr[4:])
            if value is not None:
                return value
        return match.group(0)

    return _EXPRESSION.sub(_resolve, text)


def _local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _children(element: ET.Element | None, name: str) -> list[ET.Element]:
    if element is None:
        return []
    return [child for child in element if _local_name(child.tag) == name]


def _fields(
    element: ET.Element,
    names: tuple[str, ...],
    user_home: Path,
    environ: Mapping[str, str],
) -> dict[str, str]:
    values: dict[str, str] = {}
    for name in names:
        child = _child(element, name)
        if child is not None and child.text is not None:
            text = child.text.strip()
            if text:
                values[name] = interpolate(text, user_home, environ)
    return values


def read_settings(
    path: Path,
    *,
    user_home: Path,
    environ: Mapping[str, str],
) -> RawSettings:
    """Parse *path* into :class:`RawSettings`.

    Raises:
        SettingsBuildingError: The file is unreadable or not well-formed XML.
    """
    try:
        root = ET.fromstring(path.read_bytes())
    except (OSError, ET.ParseError) as exc:
        problem = SettingsProblem(
            severity=Severity.FATAL,
            message=f"Non-parseable settings {path}: {exc}",
            source=path,
        )
        raise SettingsBuildingError([problem]) from exc

    if _local_name(root.tag) != "settings":
        problem = SettingsProblem(
            severity=Severity.FATAL,
            message=f"Expected root element 'settings' but found '{_local_name(root.tag)}'",
            source=path,
        )
        raise SettingsBuildingError([problem])

    raw = RawSettings(source=path)
    local_repo = _fields(root, ("localRepository",), user_home, environ)
    raw.local_repository = local_repo.get("localRepository")
    raw.mirrors = [
        _fields(m, MIRROR_FIELDS, user_home, environ)
        for m in _children(_child(root, "mirrors"), "mirror")
    ]
    raw.proxies = [
        _fields(p, PROXY_FIELDS, user_home, environ)
        for p in _children(_child(root, "proxies"), "proxy")
    ]
    return raw
