"""Settings file discovery.

Locates the Maven installation home from environment hints and PATH, then
resolves the user-level and installation-level ``settings.xml`` files.
Environment and home directory are explicit inputs so lookups are a pure
function of (environ, filesystem).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from m2boot.config.models import SettingsRequest

CONFIG_FILENAME = "m2boot.toml"
CONFIG_ENV_VAR = "M2BOOT_CONFIG"

HOME_ENV_VARS = ("M2_HOME", "MVN_HOME")
PATH_ENV_VAR = "PATH"
MARKER_FILENAME = "m2.conf"
SETTINGS_FILENAME = "settings.xml"
USER_DIRNAME = ".m2"
LOCAL_REPOSITORY_DIRNAME = "repository"

logger = logging.getLogger(__name__)


def _is_regular_file(path: Path) -> bool:
    """``path.is_file()``, with any stat error counted as absent."""
    try:
        return path.is_file()
    except OSError:
        return False


def locate_installation_home(
    environ: Mapping[str, str] | None = None,
    *,
    pathsep: str = os.pathsep,
) -> Path | None:
    """Return the Maven installation directory, or None if no hint resolves.

    ``M2_HOME`` wins over ``MVN_HOME``. Without either, the first PATH entry
    holding an ``m2.conf`` marker (Maven's ``bin/`` directory) is taken and
    its parent returned.
    """
    env = os.environ if environ is None else environ

    for name in HOME_ENV_VARS:
        value = env.get(name)
        if value:
            logger.debug("Installation home from %s: %s", name, value)
            return Path(value)

    for segment in env.get(PATH_ENV_VAR, "").split(pathsep):
        if not segment:
            continue
        bin_dir = Path(segment)
        if _is_regular_file(bin_dir / MARKER_FILENAME):
            home = bin_dir.absolute().parent
            logger.debug("Installation home from PATH entry %s: %s", segment, home)
            return home
    return None


def user_settings_path(user_home: Path) -> Path:
    """``<user_home>/.m2/settings.xml`` (may not exist)."""
    return user_home / USER_DIRNAME / SETTINGS_FILENAME


def installation_settings_path(installation_home: Path) -> Path | None:
    """Return the installation settings file, or None if neither layout has one.

    ``<home>/settings.xml`` is preferred; ``<home>/conf/settings.xml`` is the
    stock Maven 3 location.
    """
    for candidate in (
        installation_home / SETTINGS_FILENAME,
        installation_home / "conf" / SETTINGS_FILENAME,
    ):
        if _is_regular_file(candidate):
            return candidate
    return None


def build_settings_request(
    user_home: Path,
    environ: Mapping[str, str] | None = None,
) -> SettingsRequest:
    """Build a request carrying only settings files that exist right now."""
    env = dict(os.environ if environ is None else environ)

    user_file = user_settings_path(user_home)
    user_settings = user_file if _is_regular_file(user_file) else None

    global_settings: Path | None = None
    installation_home = locate_installation_home(env)
    if installation_home is not None:
        global_settings = installation_settings_path(installation_home)

    logger.debug(
        "Settings request: user=%s global=%s",
        user_settings,
        global_settings,
    )
    return SettingsRequest(
        user_settings_file=user_settings,
        global_settings_file=global_settings,
        user_home=user_home,
        environ=env,
    )


def default_local_repository_path(user_home: Path) -> Path:
    """``<user_home>/.m2/repository``, regardless of any settings content."""
    return user_home / USER_DIRNAME / LOCAL_REPOSITORY_DIRNAME


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for m2boot.toml.

    Checks the M2BOOT_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if _is_regular_file(p):
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if _is_regular_file(candidate):
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
