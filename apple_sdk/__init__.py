"""
apple-sdk - locate and filter Apple SDKs

Models developer directories, platform directories and SDK directories,
and searches them for SDKs matching a platform and version range.
"""

from .errors import (
    AppleSdkError,
    PathNotPlatformError,
    PathNotSdkError,
    SdkSettingsError,
    VersionParseError,
    XcodeSelectRunError,
    XcodeSelectStatusError,
)
from .version import SdkVersion
from .platforms import ApplePlatform, ApplePlatformDirectory, KnownPlatform, SdkPath
from .locate import (
    COMMAND_LINE_TOOLS_DEFAULT_PATH,
    XCODE_APP_DEFAULT_PATH,
    XCODE_APP_RELATIVE_PATH_DEVELOPER,
    command_line_tools_sdks_directory,
    default_developer_directory,
    default_xcode_developer_directory,
    find_system_xcode_applications,
    find_system_xcode_developer_directories,
    find_xcode_apps,
)
from .sdks import AppleSdk, ParsedSdk, UnparsedSdk, get_sdk_class
from .search import SdkSearch

__all__ = [
    "AppleSdkError",
    "PathNotPlatformError",
    "PathNotSdkError",
    "SdkSettingsError",
    "VersionParseError",
    "XcodeSelectRunError",
    "XcodeSelectStatusError",
    "SdkVersion",
    "ApplePlatform",
    "ApplePlatformDirectory",
    "KnownPlatform",
    "SdkPath",
    "COMMAND_LINE_TOOLS_DEFAULT_PATH",
    "XCODE_APP_DEFAULT_PATH",
    "XCODE_APP_RELATIVE_PATH_DEVELOPER",
    "command_line_tools_sdks_directory",
    "default_developer_directory",
    "default_xcode_developer_directory",
    "find_system_xcode_applications",
    "find_system_xcode_developer_directories",
    "find_xcode_apps",
    "AppleSdk",
    "ParsedSdk",
    "UnparsedSdk",
    "get_sdk_class",
    "SdkSearch",
]
