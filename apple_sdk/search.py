"""Search for Apple SDKs across developer directories.

:class:`SdkSearch` collects candidate roots in a fixed order, expands each
into ``SDKs`` directories, enumerates SDKs and filters them by version:

1. :meth:`SdkSearch.developer_dir` (``DEVELOPER_DIR`` / xcode-select)
2. :meth:`SdkSearch.command_line_tools`
3. :meth:`SdkSearch.default_system_xcode`
4. :meth:`SdkSearch.system_xcodes`
5. :meth:`SdkSearch.additional_developer_dir`, in the order added
6. :meth:`SdkSearch.additional_sdks_dir`, in the order added

Results keep that order, then directory-listing order within each root.
Nothing is re-sorted; sort the returned list to prefer a version.

Usage:
    from apple_sdk import ApplePlatform, SdkSearch, UnparsedSdk

    sdks = (
        SdkSearch()
        .system_xcodes(True)
        .platform(ApplePlatform.MACOSX)
        .minimum_version("11.0")
        .search(UnparsedSdk)
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Optional, TypeVar, Union

from . import locate
from .errors import AppleSdkError
from .platforms import ApplePlatform, ApplePlatformDirectory, KnownPlatform
from .sdks.base import AppleSdk
from .sdks.unparsed import UnparsedSdk
from .version import SdkVersion, VersionLike

logger = logging.getLogger(__name__)

SdkT = TypeVar("SdkT", bound=AppleSdk)

PlatformLike = Union[ApplePlatform, KnownPlatform, str]


class SearchDirectoryKind(Enum):
    DEVELOPER = "developer"
    SDKS = "sdks"


@dataclass(frozen=True)
class SearchDirectory:
    """A root to search: a developer directory or a directory of SDKs."""

    kind: SearchDirectoryKind
    path: Path

    @classmethod
    def developer(cls, path: Union[str, Path]) -> SearchDirectory:
        return cls(SearchDirectoryKind.DEVELOPER, Path(path))

    @classmethod
    def sdks(cls, path: Union[str, Path]) -> SearchDirectory:
        return cls(SearchDirectoryKind.SDKS, Path(path))

    def resolve_sdks_dirs(self, platform: Optional[ApplePlatform] = None) -> list[Path]:
        """Expand into directories that directly hold SDKs.

        Developer directories expand to the ``Developer/SDKs`` directory of
        each platform, restricted to ``platform`` when given.
        """
        if self.kind is SearchDirectoryKind.SDKS:
            return [self.path]

        return [
            platform_dir.sdks_path
            for platform_dir in ApplePlatformDirectory.find_in_developer_directory(self.path)
            if platform is None or platform_dir.platform == platform
        ]


@dataclass(frozen=True)
class SdkSearch:
    """Search parameters for locating Apple SDKs.

    Instances are immutable: every configuration method returns a new
    search.
    """

    search_developer_dir: bool = True
    search_command_line_tools_sdks: bool = False
    search_default_system_xcode: bool = False
    search_system_xcodes: bool = False
    additional_developer_dirs: tuple[Path, ...] = ()
    additional_sdks_dirs: tuple[Path, ...] = ()
    wanted_platform: Optional[ApplePlatform] = None
    min_version: Optional[SdkVersion] = None
    max_version: Optional[SdkVersion] = None

    # =========================================================================
    # Configuration
    # =========================================================================

    def developer_dir(self, value: bool) -> SdkSearch:
        """Search the active developer directory. Default True.

        Honors ``DEVELOPER_DIR``, falling back to ``xcode-select``.
        """
        return replace(self, search_developer_dir=value)

    def command_line_tools(self, value: bool) -> SdkSearch:
        """Search the Command Line Tools ``SDKs`` directory. Default False."""
        return replace(self, search_command_line_tools_sdks=value)

    def default_system_xcode(self, value: bool) -> SdkSearch:
        """Search ``/Applications/Xcode.app``. Default False."""
        return replace(self, search_default_system_xcode=value)

    def system_xcodes(self, value: bool) -> SdkSearch:
        """Search every ``Xcode*.app`` under ``/Applications``. Default False.

        CI workers and machines with beta Xcodes often have several.
        """
        return replace(self, search_system_xcodes=value)

    def additional_developer_dir(self, path: Union[str, Path]) -> SdkSearch:
        """Add a developer directory (``Platforms/*.platform/Developer/SDKs``)."""
        return replace(self, additional_developer_dirs=self.additional_developer_dirs + (Path(path),))

    def additional_sdks_dir(self, path: Union[str, Path]) -> SdkSearch:
        """Add a directory holding ``*.sdk`` entries directly."""
        return replace(self, additional_sdks_dirs=self.additional_sdks_dirs + (Path(path),))

    def platform(self, platform: PlatformLike) -> SdkSearch:
        """Only return SDKs for this platform. By default all platforms match."""
        return replace(self, wanted_platform=ApplePlatform.from_name(platform))

    def minimum_version(self, version: VersionLike) -> SdkSearch:
        """Require SDK version ``>= version``.

        SDKs without a version are excluded.
        """
        return replace(self, min_version=SdkVersion(version))

    def maximum_version(self, version: VersionLike) -> SdkSearch:
        """Require SDK version ``<= version``.

        SDKs without a version are excluded.
        """
        return replace(self, max_version=SdkVersion(version))

    # =========================================================================
    # Searching
    # =========================================================================

    def search_directories(self) -> list[SearchDirectory]:
        """Collect the roots to search, in precedence order, without duplicates.

        Roots whose locator fails or finds nothing are left out.
        """
        dirs: list[SearchDirectory] = []

        def append(entry: SearchDirectory) -> None:
            if entry not in dirs:
                dirs.append(entry)

        if self.search_developer_dir:
            try:
                append(SearchDirectory.developer(locate.default_developer_directory()))
            except AppleSdkError as e:
                logger.debug("No active developer directory: %s", e)

        if self.search_command_line_tools_sdks:
            path = locate.command_line_tools_sdks_directory()
            if path is not None:
                append(SearchDirectory.sdks(path))

        if self.search_default_system_xcode:
            path = locate.default_xcode_developer_directory()
            if path is not None:
                append(SearchDirectory.developer(path))

        if self.search_system_xcodes:
            try:
                paths = locate.find_system_xcode_developer_directories()
            except OSError as e:
                logger.debug("Could not scan for Xcode applications: %s", e)
                paths = []
            for path in paths:
                append(SearchDirectory.developer(path))

        for path in self.additional_developer_dirs:
            append(SearchDirectory.developer(path))

        for path in self.additional_sdks_dirs:
            append(SearchDirectory.sdks(path))

        return dirs

    def search(self, sdk_class: type[SdkT] = UnparsedSdk) -> list[SdkT]:
        """Run the search and return matching SDKs.

        May return an empty list.

        Raises:
            VersionParseError: If a version bound is malformed.
            OSError: If a directory exists but cannot be listed.
        """
        for bound in (self.min_version, self.max_version):
            if bound is not None:
                bound.normalized_version()

        searched: set[Path] = set()
        res: list[SdkT] = []

        for search_dir in self.search_directories():
            logger.debug("Searching %s directory %s", search_dir.kind.value, search_dir.path)

            for sdks_dir in search_dir.resolve_sdks_dirs(self.wanted_platform):
                if sdks_dir in searched:
                    logger.debug("Already searched %s", sdks_dir)
                    continue
                searched.add(sdks_dir)

                for sdk in sdk_class.find_sdks_in_directory(sdks_dir):
                    if self.filter_sdk(sdk):
                        res.append(sdk)
                    else:
                        logger.debug("Filtered out %s (version %s)", sdk.path, sdk.version)

        return res

    def filter_sdk(self, sdk: AppleSdk) -> bool:
        """Whether an SDK satisfies the version bounds."""
        version = sdk.version

        if self.min_version is not None:
            if version is None or version < self.min_version:
                return False

        if self.max_version is not None:
            if version is None or version > self.max_version:
                return False

        return True
