"""Mirror and proxy selectors consulted by the resolution engine.

``build_mirror_selector`` and ``build_proxy_selector`` turn settings rules
into selectors. Lookups follow registration order: the first mirror or
proxy that applies wins and later registrations never override it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from m2boot.config.models import MirrorRule, ProxyRule, RepositoryDescriptor

WILDCARD = "*"
EXTERNAL_WILDCARD = "external:*"
EXTERNAL_HTTP_WILDCARD = "external:http:*"

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1"})
_HTTP_PROTOCOLS = frozenset({"http", "dav", "dav:http", "dav+http"})


# --- Mirrors ---


@dataclass(frozen=True)
class MirrorDefinition:
    id: str
    url: str
    layout: str
    authoritative: bool
    mirror_of: str
    mirror_of_layouts: str


@dataclass(frozen=True)
class MirrorRepository:
    """Repository to contact in place of ``mirrored``."""

    id: str
    url: str
    type: str
    authoritative: bool
    mirrored: tuple[RepositoryDescriptor, ...]


def _is_local(host: str) -> bool:
    return host in _LOCAL_HOSTS


def is_external(repository: RepositoryDescriptor) -> bool:
    """Neither a loopback host nor a ``file:`` URL."""
    return not (_is_local(repository.host) or repository.protocol.lower() == "file")


def is_external_http(repository: RepositoryDescriptor) -> bool:
    return repository.protocol.lower() in _HTTP_PROTOCOLS and not _is_local(repository.host)


def matches_pattern(repository: RepositoryDescriptor, pattern: str) -> bool:
    """Match a ``mirrorOf`` pattern against a repository.

    Supports ``*``, ``external:*``, ``external:http:*``, exact ids,
    comma-separated lists and ``!id`` exclusions. An exclusion anywhere in
    the list wins over earlier wildcard matches.
    """
    if pattern == WILDCARD or pattern == repository.id:
        return True

    result = False
    for part in pattern.split(","):
        part = part.strip()
        if len(part) > 1 and part.startswith("!"):
            if part[1:] == repository.id:
                return False
        elif part == repository.id:
            return True
        elif part == EXTERNAL_WILDCARD and is_external(repository):
            result = True
        elif part == EXTERNAL_HTTP_WILDCARD and is_external_http(repository):
            result = True
        elif part == WILDCARD:
            result = True
    return result


def matches_layout(layout: str, layouts: str) -> bool:
    """Match a repository layout against a ``mirrorOfLayouts`` list."""
    if not layouts:
        return True
    if layout == layouts:
        return True
    result = False
    for part in layouts.split(","):
        part = part.strip()
        if len(part) > 1 and part.startswith("!"):
            if part[1:] == layout:
                return False
        elif part == layout:
            return True
        elif part == WILDCARD:
            result = True
    return result


class MirrorSelector:
    """Ordered mirror registry.

    Exact-id registrations are consulted before pattern registrations;
    within each pass the earliest registration wins.
    """

    def __init__(self) -> None:
        self._mirrors: list[MirrorDefinition] = []

    def add(
        self,
        mirror_id: str,
        url: str,
        layout: str,
        authoritative: bool,
        mirror_of: str,
        mirror_of_layouts: str = "",
    ) -> MirrorSelector:
        self._mirrors.append(
            MirrorDefinition(
                id=mirror_id,
                url=url,
                layout=layout,
                authoritative=authoritative,
                mirror_of=mirror_of,
                mirror_of_layouts=mirror_of_layouts,
            )
        )
        return self

    @property
    def definitions(self) -> tuple[MirrorDefinition, ...]:
        return tuple(self._mirrors)

    def __len__(self) -> int:
        return len(self._mirrors)

    def find(self, mirror_of: str) -> MirrorDefinition | None:
        """First mirror registered for exactly this ``mirrorOf`` pattern."""
        for mirror in self._mirrors:
            if mirror.mirror_of == mirror_of:
                return mirror
        return None

    def get_mirror(self, repository: RepositoryDescriptor) -> MirrorRepository | None:
        """Mirror to use for *repository*, or None to contact it directly."""
        mirror = self._find_mirror(repository)
        if mirror is None:
            return None
        return MirrorRepository(
            id=mirror.id,
            url=mirror.url,
            type=mirror.layout,
            authoritative=mirror.authoritative,
            mirrored=(repository,),
        )

    def _find_mirror(self, repository: RepositoryDescriptor) -> MirrorDefinition | None:
        for mirror in self._mirrors:
            if mirror.mirror_of == repository.id and matches_layout(
                repository.type, mirror.mirror_of_layouts
            ):
                return mirror
        for mirror in self._mirrors:
            if matches_pattern(repository, mirror.mirror_of) and matches_layout(
                repository.type, mirror.mirror_of_layouts
            ):
                return mirror
        return None


# --- Proxies ---


@dataclass(frozen=True)
class Proxy:
    """Network proxy endpoint. Carries no authentication."""

    type: str
    host: str
    port: int


def _compile_non_proxy_hosts(non_proxy_hosts: str | None) -> tuple[re.Pattern[str], ...]:
    if not non_proxy_hosts:
        return ()
    patterns = []
    for token in re.split(r"[|,]", non_proxy_hosts):
        token = token.strip()
        if token:
            regex = ".*".join(re.escape(piece) for piece in token.split("*"))
            patterns.append(re.compile(regex, re.IGNORECASE))
    return tuple(patterns)


@dataclass(frozen=True)
class _ProxyDefinition:
    proxy: Proxy
    non_proxy_hosts: tuple[re.Pattern[str], ...]

    def excludes(self, host: str) -> bool:
        return bool(host) and any(p.fullmatch(host) for p in self.non_proxy_hosts)


class ProxySelector:
    """Ordered proxy registry keyed by protocol with host exclusions."""

    def __init__(self) -> None:
        self._proxies: list[_ProxyDefinition] = []

    def add(self, proxy: Proxy, non_proxy_hosts: str | None = None) -> ProxySelector:
        self._proxies.append(_ProxyDefinition(proxy, _compile_non_proxy_hosts(non_proxy_hosts)))
        return self

    @property
    def proxies(self) -> tuple[Proxy, ...]:
        return tuple(d.proxy for d in self._proxies)

    def __len__(self) -> int:
        return len(self._proxies)

    def get_proxy(self, repository: RepositoryDescriptor) -> Proxy | None:
        """First proxy for the repository's protocol not excluding its host."""
        protocol = repository.protocol.lower()
        for definition in self._proxies:
            if definition.proxy.type.lower() == protocol and not definition.excludes(
                repository.host
            ):
                return definition.proxy
        return None


# --- Builders ---


def build_mirror_selector(mirrors: Iterable[MirrorRule]) -> MirrorSelector:
    """Register every mirror as authoritative, in settings order."""
    selector = MirrorSelector()
    for mirror in mirrors:
        selector.add(
            mirror.id,
            mirror.url,
            mirror.layout,
            True,
            mirror.mirror_of,
            mirror.mirror_of_layouts,
        )
    return selector


def build_proxy_selector(proxies: Iterable[ProxyRule]) -> ProxySelector:
    """Register every proxy against its ``nonProxyHosts`` exclusions."""
    selector = ProxySelector()
    for rule in proxies:
        # ProxyRule has no credentials to carry over.
        proxy = Proxy(type=rule.protocol, host=rule.host, port=rule.port)
        selector.add(proxy, rule.non_proxy_hosts)
    return selector
