"""YAML search profiles.

A profile describes one :class:`~apple_sdk.search.SdkSearch`::

    sdk: parsed
    system_xcodes: true
    additional_sdks_dirs:
      - /opt/sdks
    platform: MacOSX
    minimum_version: "11.0"

Every key is optional; omitted keys keep the :class:`SdkSearch` defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml

from .sdks import AppleSdk, UnparsedSdk, get_sdk_class
from .search import SdkSearch

logger = logging.getLogger(__name__)

_BOOL_KEYS = {
    "developer_dir": SdkSearch.developer_dir,
    "command_line_tools": SdkSearch.command_line_tools,
    "default_system_xcode": SdkSearch.default_system_xcode,
    "system_xcodes": SdkSearch.system_xcodes,
}

_PATH_LIST_KEYS = {
    "additional_developer_dirs": SdkSearch.additional_developer_dir,
    "additional_sdks_dirs": SdkSearch.additional_sdks_dir,
}

_VERSION_KEYS = {
    "minimum_version": SdkSearch.minimum_version,
    "maximum_version": SdkSearch.maximum_version,
}

_KNOWN_KEYS = {"sdk", "platform"} | set(_BOOL_KEYS) | set(_PATH_LIST_KEYS) | set(_VERSION_KEYS)


@dataclass(frozen=True)
class SearchConfig:
    """A parsed search profile: what to search and which SDK type to build."""

    search: SdkSearch = field(default_factory=SdkSearch)
    sdk_class: type[AppleSdk] = UnparsedSdk
    source: str = "<mapping>"

    def run(self) -> list[AppleSdk]:
        return self.search.search(self.sdk_class)


def parse_search_config(data: Any, source: str = "<mapping>") -> SearchConfig:
    """Build a SearchConfig from a decoded YAML mapping.

    Raises:
        ValueError: On unknown keys or values of the wrong type.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid search profile (expected mapping): {source}")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"{source}: unknown key(s): {', '.join(map(str, unknown))}")

    search = SdkSearch()

    for key, method in _BOOL_KEYS.items():
        if key in data:
            value = data[key]
            if not isinstance(value, bool):
                raise ValueError(f"{source}: {key} must be true or false")
            search = method(search, value)

    for key, method in _PATH_LIST_KEYS.items():
        paths = data.get(key) or []
        if not isinstance(paths, list):
            raise ValueError(f"{source}: {key} must be a list of paths")
        for path in paths:
            if not isinstance(path, str):
                raise ValueError(f"{source}: {key} entries must be strings")
            search = method(search, Path(path).expanduser())

    platform = data.get("platform")
    if platform is not None:
        if not isinstance(platform, str):
            raise ValueError(f"{source}: platform must be a string")
        search = search.platform(platform)

    for key, method in _VERSION_KEYS.items():
        value = data.get(key)
        if value is None:
            continue
        # Unquoted YAML decimals arrive as floats and lose digits (11.10 -> 11.1).
        if isinstance(value, float):
            raise ValueError(f"{source}: {key} must be a quoted version string")
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ValueError(f"{source}: {key} must be a version string")
        search = method(search, str(value))

    sdk_class: type[AppleSdk] = UnparsedSdk
    if "sdk" in data:
        if not isinstance(data["sdk"], str):
            raise ValueError(f"{source}: sdk must be a string")
        sdk_class = get_sdk_class(data["sdk"])

    return SearchConfig(search=search, sdk_class=sdk_class, source=source)


def load_search_config(path: Union[str, Path]) -> SearchConfig:
    """Load a YAML search profile from ``path``."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    logger.debug("Loaded search profile %s", path)
    return parse_search_config(data, source=str(path))
