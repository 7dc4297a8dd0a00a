"""SDK described only by its directory name."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ..platforms import ApplePlatform, SdkPath
from ..version import SdkVersion
from .base import AppleSdk


class UnparsedSdk(AppleSdk):
    """An SDK whose platform and version come from the path alone.

    Nothing inside the directory is read, so ``version`` is None for names
    like ``MacOSX.sdk``.
    """

    def __init__(self, path: Path, is_symlink: bool, platform: ApplePlatform,
                 version: Optional[SdkVersion] = None):
        self._path = path
        self._is_symlink = is_symlink
        self._platform = platform
        self._version = version

    @classmethod
    def from_directory(cls, path: Union[str, Path]) -> UnparsedSdk:
        sdk_path = SdkPath.from_path(path)
        return cls(
            path=sdk_path.path,
            is_symlink=sdk_path.path.is_symlink(),
            platform=sdk_path.platform,
            version=sdk_path.version,
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
    def version(self) -> Optional[SdkVersion]:
        return self._version
