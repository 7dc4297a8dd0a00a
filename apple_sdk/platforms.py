"""Apple platforms, platform directories and SDK paths.

A developer directory holds platforms under ``Platforms/<Name>.platform`` and
each platform holds SDKs under ``Developer/SDKs/<Name><Version>.sdk``::

    /Applications/Xcode.app/Contents/Developer
        Platforms/MacOSX.platform/Developer/SDKs/MacOSX12.3.sdk

Everything here is parsed from path strings alone. Only
:meth:`ApplePlatformDirectory.find_in_developer_directory` touches the
filesystem, to list the ``Platforms`` directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from .errors import PathNotPlatformError, PathNotSdkError
from .version import SdkVersion

if TYPE_CHECKING:
    from .sdks.base import AppleSdk

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class KnownPlatform(Enum):
    """Apple platforms with a known filesystem name."""

    APPLE_TV_OS = "AppleTVOS"
    APPLE_TV_SIMULATOR = "AppleTVSimulator"
    DRIVER_KIT = "DriverKit"
    IPHONE_OS = "iPhoneOS"
    IPHONE_SIMULATOR = "iPhoneSimulator"
    MACOSX = "MacOSX"
    WATCH_OS = "WatchOS"
    WATCH_SIMULATOR = "WatchSimulator"

    # ApplePlatform compares equal to members, so hashes must agree.
    def __hash__(self) -> int:
        return hash(self.value)


_KNOWN_BY_NAME = {p.value: p for p in KnownPlatform}


class ApplePlatform:
    """A target platform, identified by its filesystem name.

    Names not in :class:`KnownPlatform` produce an unknown platform that
    still carries the raw name. Equality compares filesystem names, so an
    unknown ``"MacOSX"`` would equal :attr:`ApplePlatform.MACOSX`, and a
    platform also equals the matching :class:`KnownPlatform` member.
    """

    __slots__ = ("_name", "_known")

    # Populated after the class body.
    APPLE_TV_OS: ApplePlatform
    APPLE_TV_SIMULATOR: ApplePlatform
    DRIVER_KIT: ApplePlatform
    IPHONE_OS: ApplePlatform
    IPHONE_SIMULATOR: ApplePlatform
    MACOSX: ApplePlatform
    WATCH_OS: ApplePlatform
    WATCH_SIMULATOR: ApplePlatform

    def __init__(self, name: Union[str, KnownPlatform]):
        if isinstance(name, KnownPlatform):
            name = name.value
        self._name = name
        self._known = _KNOWN_BY_NAME.get(name)

    @classmethod
    def from_name(cls, name: Union[str, KnownPlatform, ApplePlatform]) -> ApplePlatform:
        """Resolve a filesystem name. Never fails."""
        if isinstance(name, ApplePlatform):
            return name
        return cls(name)

    @classmethod
    def from_platform_directory_name(cls, name: str) -> ApplePlatform:
        """Parse a ``<Name>.platform`` directory name.

        Raises:
            PathNotPlatformError: If the name is not exactly ``<id>.platform``.
        """
        stem, sep, suffix = name.partition(".")
        if not sep or suffix != "platform":
            raise PathNotPlatformError(name)
        return cls.from_name(stem)

    @classmethod
    def from_platform_path(cls, path: PathLike) -> ApplePlatform:
        """Parse the final component of a ``*.platform`` directory path.

        Raises:
            PathNotPlatformError: If the path does not name a platform directory.
        """
        p = Path(path)
        if not p.name:
            raise PathNotPlatformError(p)
        try:
            return cls.from_platform_directory_name(p.name)
        except PathNotPlatformError:
            raise PathNotPlatformError(p) from None

    @property
    def filesystem_name(self) -> str:
        """Name as it appears in ``*.platform`` and ``*.sdk`` directory names."""
        return self._name

    @property
    def known(self) -> Optional[KnownPlatform]:
        return self._known

    @property
    def is_unknown(self) -> bool:
        return self._known is None

    @property
    def directory_name(self) -> str:
        return f"{self._name}.platform"

    def path_in_developer_directory(self, developer_directory: PathLike) -> Path:
        """Path of this platform's directory under a developer directory.

        The returned path is not validated to exist.
        """
        return Path(developer_directory) / "Platforms" / self.directory_name

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ApplePlatform):
            return self._name == other._name
        if isinstance(other, KnownPlatform):
            return self._name == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._name)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        if self._known is None:
            return f"ApplePlatform.unknown({self._name!r})"
        return f"ApplePlatform.{self._known.name}"


for _known in KnownPlatform:
    setattr(ApplePlatform, _known.name, ApplePlatform(_known))
del _known


@dataclass(frozen=True, order=True)
class ApplePlatformDirectory:
    """A ``*.platform`` directory.

    Equality, hashing and ordering use ``path`` only; the platform is a pure
    function of the path.
    """

    path: Path
    platform: ApplePlatform = field(compare=False)

    @classmethod
    def from_path(cls, path: PathLike) -> ApplePlatformDirectory:
        """Raises :class:`PathNotPlatformError` for non-platform paths."""
        p = Path(path)
        return cls(path=p, platform=ApplePlatform.from_platform_path(p))

    @classmethod
    def find_in_developer_directory(cls, developer_dir: PathLike) -> list[ApplePlatformDirectory]:
        """Find platform directories under ``<developer_dir>/Platforms``.

        A missing ``Platforms`` directory yields an empty list. Entries that
        are not ``*.platform`` are skipped. The result is sorted by path.

        Raises:
            OSError: If the directory exists but cannot be listed.
        """
        platforms_path = Path(developer_dir) / "Platforms"

        try:
            entries = list(platforms_path.iterdir())
        except FileNotFoundError:
            logger.debug("No Platforms directory in %s", developer_dir)
            return []

        res = []
        for entry in entries:
            try:
                res.append(cls.from_path(entry))
            except PathNotPlatformError:
                continue

        res.sort()
        return res

    @property
    def sdks_path(self) -> Path:
        """``Developer/SDKs`` under this platform. Not validated to exist."""
        return self.path / "Developer" / "SDKs"

    def find_sdks(self, sdk_class: type[AppleSdk]) -> list[AppleSdk]:
        """Enumerate SDKs of type ``sdk_class`` in :attr:`sdks_path`."""
        return sdk_class.find_sdks_in_directory(self.sdks_path)

    def __fspath__(self) -> str:
        return os.fspath(self.path)


@dataclass(frozen=True)
class SdkPath:
    """Metadata parsed from an SDK directory name.

    ``version`` is only set when the directory name carries one, e.g.
    ``MacOSX12.3.sdk``; ``MacOSX.sdk`` has none.
    """

    path: Path
    platform: ApplePlatform
    version: Optional[SdkVersion] = None

    @classmethod
    def from_path(cls, path: PathLike) -> SdkPath:
        """Parse a ``<Platform>[<Version>].sdk`` path.

        Raises:
            PathNotSdkError: If the final component does not end in ``.sdk``.
        """
        p = Path(path)

        prefix, sep, suffix = p.name.rpartition(".")
        if not sep or suffix != "sdk":
            raise PathNotSdkError(p)

        first_digit = next((i for i, c in enumerate(prefix) if c.isdecimal()), None)
        if first_digit is None:
            platform_name, version = prefix, None
        else:
            platform_name = prefix[:first_digit]
            version = SdkVersion(prefix[first_digit:])

        return cls(path=p, platform=ApplePlatform.from_name(platform_name), version=version)
