"""SDK described by its ``SDKSettings.json`` / ``SDKSettings.plist`` file.

Modern SDKs ship ``SDKSettings.json``; older ones only ``SDKSettings.plist``.
Both carry the same keys, for example::

    {
      "CanonicalName": "macosx14.2",
      "DisplayName": "macOS 14.2",
      "Version": "14.2",
      "MaximumDeploymentTarget": "14.2.99",
      "DefaultProperties": {"PLATFORM_NAME": "macosx"},
      "SupportedTargets": {
        "macosx": {
          "Archs": ["x86_64", "arm64"],
          "DefaultDeploymentTarget": "14.2",
          "MinimumDeploymentTarget": "10.13",
          "MaximumDeploymentTarget": "14.2.99"
        }
      }
    }

Only the keys above are read.
"""

from __future__ import annotations

import json
import logging
import plistlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union
from xml.parsers.expat import ExpatError

from ..errors import PathNotSdkError, SdkSettingsError
from ..platforms import ApplePlatform, KnownPlatform, SdkPath
from ..version import SdkVersion
from .base import AppleSdk

logger = logging.getLogger(__name__)

SETTINGS_JSON = "SDKSettings.json"
SETTINGS_PLIST = "SDKSettings.plist"

# PLATFORM_NAME values are lowercase filesystem names.
_PLATFORMS_BY_LOWER_NAME = {p.value.lower(): p for p in KnownPlatform}


@dataclass(frozen=True)
class SupportedTarget:
    """One entry of ``SupportedTargets``."""

    name: str
    archs: tuple[str, ...] = ()
    default_deployment_target: Optional[str] = None
    minimum_deployment_target: Optional[str] = None
    maximum_deployment_target: Optional[str] = None


@dataclass(frozen=True)
class SdkSettings:
    """The subset of ``SDKSettings`` we understand."""

    canonical_name: str
    version: SdkVersion
    display_name: Optional[str] = None
    maximum_deployment_target: Optional[str] = None
    platform_name: Optional[str] = None
    supported_targets: dict[str, SupportedTarget] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Any, source: Union[str, Path] = "<settings>") -> SdkSettings:
        """Build from a decoded JSON or plist document.

        Raises:
            SdkSettingsError: If the document is not a mapping or lacks
                ``CanonicalName`` / ``Version``.
        """
        if not isinstance(data, dict):
            raise SdkSettingsError(f"{source}: expected a dictionary")

        canonical_name = _required_str(data, "CanonicalName", source)
        version = _required_str(data, "Version", source)

        defaults = data.get("DefaultProperties") or {}
        if not isinstance(defaults, dict):
            raise SdkSettingsError(f"{source}: DefaultProperties is not a dictionary")

        raw_targets = data.get("SupportedTargets") or {}
        if not isinstance(raw_targets, dict):
            raise SdkSettingsError(f"{source}: SupportedTargets is not a dictionary")

        targets = {}
        for name, target in raw_targets.items():
            if not isinstance(target, dict):
                raise SdkSettingsError(f"{source}: SupportedTargets.{name} is not a dictionary")
            targets[name] = SupportedTarget(
                name=name,
                archs=tuple(target.get("Archs") or ()),
                default_deployment_target=target.get("DefaultDeploymentTarget"),
                minimum_deployment_target=target.get("MinimumDeploymentTarget"),
                maximum_deployment_target=target.get("MaximumDeploymentTarget"),
            )

        return cls(
            canonical_name=canonical_name,
            version=SdkVersion(version),
            display_name=data.get("DisplayName"),
            maximum_deployment_target=data.get("MaximumDeploymentTarget"),
            platform_name=defaults.get("PLATFORM_NAME"),
            supported_targets=targets,
        )

    @classmethod
    def from_sdk_directory(cls, sdk_dir: Union[str, Path]) -> Optional[SdkSettings]:
        """Load settings from an SDK directory, or None if it has none.

        Raises:
            SdkSettingsError: If a settings file is malformed.
            OSError: If a settings file exists but cannot be read.
        """
        sdk_dir = Path(sdk_dir)

        json_path = sdk_dir / SETTINGS_JSON
        if json_path.is_file():
            try:
                data = json.loads(json_path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise SdkSettingsError(f"{json_path}: {e}") from e
            return cls.from_mapping(data, json_path)

        plist_path = sdk_dir / SETTINGS_PLIST
        if plist_path.is_file():
            try:
                with open(plist_path, "rb") as f:
                    data = plistlib.load(f)
            except (plistlib.InvalidFileException, ExpatError, ValueError) as e:
                raise SdkSettingsError(f"{plist_path}: {e}") from e
            return cls.from_mapping(data, plist_path)

        return None


def _required_str(data: dict, key: str, source: Union[str, Path]) -> str:
    value = data.get(key)
    if value is None:
        raise SdkSettingsError(f"{source}: key missing: {key}")
    if not isinstance(value, str):
        raise SdkSettingsError(f"{source}: key not a string: {key}")
    return value


class ParsedSdk(AppleSdk):
    """An SDK whose metadata comes from its ``SDKSettings`` file."""

    def __init__(self, path: Path, is_symlink: bool, platform: ApplePlatform,
                 settings: SdkSettings):
        self._path = path
        self._is_symlink = is_symlink
        self._platform = platform
        self.settings = settings

    @classmethod
    def from_directory(cls, path: Union[str, Path]) -> ParsedSdk:
        """Load an SDK directory.

        Raises:
            PathNotSdkError: If the name is not ``*.sdk`` or the directory has
                no settings file.
            SdkSettingsError: If the settings file is malformed.
        """
        sdk_path = SdkPath.from_path(path)

        settings = SdkSettings.from_sdk_directory(sdk_path.path)
        if settings is None:
            logger.debug("No SDKSettings in %s", sdk_path.path)
            raise PathNotSdkError(sdk_path.path)

        platform = sdk_path.platform
        if settings.platform_name:
            known = _PLATFORMS_BY_LOWER_NAME.get(settings.platform_name.lower())
            if known is not None:
                platform = ApplePlatform(known)

        return cls(
            path=sdk_path.path,
            is_symlink=sdk_path.path.is_symlink(),
            platform=platform,
            settings=settings,
        )

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_symlink(self) -> bool:
        return self._is_symlink

    @property
    def platform(self) -> ApplePlatform:
        return self._platform

    @property
    def version(self) -> SdkVersion:
        return self.settings.version

    @property
    def canonical_name(self) -> str:
        return self.settings.canonical_name

    @property
    def display_name(self) -> Optional[str]:
        return self.settings.display_name

    @property
    def supported_targets(self) -> dict[str, SupportedTarget]:
        return self.settings.supported_targets
