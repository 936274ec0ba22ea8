"""Settings building: read, interpolate, validate and merge settings.xml files.

The bootstrapper only talks to :class:`SettingsBuilder` and catches
:class:`SettingsBuildingError`; file format details stay in this package.
"""

from m2boot.building.builder import SettingsBuilder, SettingsBuildingResult
from m2boot.building.problems import Severity, SettingsBuildingError, SettingsProblem

__all__ = [
    "Severity",
    "SettingsBuilder",
    "SettingsBuildingError",
    "SettingsBuildingResult",
    "SettingsProblem",
]
