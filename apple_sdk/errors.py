"""Exception types raised by apple_sdk.

Generic I/O failures are not wrapped: they surface as the ``OSError`` raised
by the failing filesystem call.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class AppleSdkError(Exception):
    """Base class for all apple_sdk errors."""


class XcodeSelectRunError(AppleSdkError):
    """``xcode-select`` could not be started."""

    def __init__(self, cause: OSError):
        super().__init__(f"Error running xcode-select: {cause}")
        self.cause = cause


class XcodeSelectStatusError(AppleSdkError):
    """``xcode-select`` ran but exited with a non-zero status."""

    def __init__(self, returncode: int):
        super().__init__(f"Error running xcode-select: exit status {returncode}")
        self.returncode = returncode


class PathNotPlatformError(AppleSdkError, ValueError):
    """A path is not an Apple ``*.platform`` directory."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"path is not an Apple Platform: {path}")
        self.path = Path(path)


class PathNotSdkError(AppleSdkError, ValueError):
    """A path is not an Apple SDK directory."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"path is not an Apple SDK: {path}")
        self.path = Path(path)


class VersionParseError(AppleSdkError, ValueError):
    """A version string could not be parsed."""

    def __init__(self, value: str):
        super().__init__(f"malformed version string: {value}")
        self.value = value


class SdkSettingsError(AppleSdkError):
    """An ``SDKSettings`` document is missing required data."""
