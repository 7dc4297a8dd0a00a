"""SDK abstraction: ABC for things that represent an Apple SDK directory.

Concrete SDK types differ in how much they read from disk. Everything that
enumerates SDKs (platform directories, :class:`~apple_sdk.search.SdkSearch`)
is written against this interface and takes the concrete class as a
parameter.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, TypeVar, Union

from ..errors import PathNotSdkError
from ..locate import command_line_tools_sdks_directory, default_developer_directory
from ..platforms import ApplePlatform, ApplePlatformDirectory
from ..version import SdkVersion

logger = logging.getLogger(__name__)

SdkT = TypeVar("SdkT", bound="AppleSdk")


class AppleSdk(ABC):
    """Abstract base for Apple SDK representations."""

    @classmethod
    @abstractmethod
    def from_directory(cls: type[SdkT], path: Union[str, Path]) -> SdkT:
        """Construct an instance from one candidate directory.

        Raises:
            PathNotSdkError: If the directory does not look like an SDK.
            OSError: On I/O failure.
        """

    @classmethod
    def find_sdks_in_directory(cls: type[SdkT], root: Union[str, Path]) -> list[SdkT]:
        """Find SDKs among the immediate children of ``root``.

        Entries are often symlinks to sibling SDKs (``MacOSX.sdk`` ->
        ``MacOSX14.2.sdk``); check :attr:`is_symlink` to drop duplicates.

        A missing ``root`` yields an empty list. Children that are not SDKs
        are skipped; any other error aborts the enumeration.
        """
        try:
            entries = list(Path(root).iterdir())
        except FileNotFoundError:
            logger.debug("SDK directory does not exist: %s", root)
            return []

        res = []
        for entry in entries:
            try:
                res.append(cls.from_directory(entry))
            except PathNotSdkError:
                continue
        return res

    @classmethod
    def find_in_developer_directories(cls: type[SdkT], developer_dir: Union[str, Path]) -> list[SdkT]:
        """Find SDKs in every platform of a developer directory.

        A common input is ``/Applications/Xcode.app/Contents/Developer``.
        """
        res = []
        for platform_dir in ApplePlatformDirectory.find_in_developer_directory(developer_dir):
            res.extend(platform_dir.find_sdks(cls))
        return res

    find_developer_sdks = find_in_developer_directories

    @classmethod
    def find_default_developer_sdks(cls: type[SdkT]) -> list[SdkT]:
        """Find SDKs in the active developer directory.

        Raises:
            XcodeSelectRunError, XcodeSelectStatusError: If the developer
                directory cannot be resolved.
        """
        return cls.find_in_developer_directories(default_developer_directory())

    @classmethod
    def find_command_line_tools_sdks(cls: type[SdkT]) -> Optional[list[SdkT]]:
        """Find SDKs in the Command Line Tools install, or None if absent."""
        path = command_line_tools_sdks_directory()
        if path is None:
            return None
        return cls.find_sdks_in_directory(path)

    @property
    @abstractmethod
    def path(self) -> Path:
        """Filesystem path of the SDK directory."""

    @property
    @abstractmethod
    def is_symlink(self) -> bool:
        """Whether :attr:`path` is a symlink."""

    @property
    @abstractmethod
    def platform(self) -> ApplePlatform:
        """Platform this SDK targets."""

    @property
    @abstractmethod
    def version(self) -> Optional[SdkVersion]:
        """SDK version, if known.

        Always set for SDKs built from ``SDKSettings``; may be None when only
        the directory name was available.
        """

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"
