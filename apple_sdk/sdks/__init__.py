"""SDK representations: registry of AppleSdk implementations.

Usage:
    from apple_sdk.sdks import get_sdk_class, UnparsedSdk, ParsedSdk

    sdks = UnparsedSdk.find_in_developer_directories(
        "/Applications/Xcode.app/Contents/Developer")

    sdk_class = get_sdk_class("parsed")
"""

from .base import AppleSdk
from .parsed import ParsedSdk, SdkSettings, SupportedTarget
from .unparsed import UnparsedSdk

__all__ = [
    "AppleSdk",
    "ParsedSdk",
    "SdkSettings",
    "SupportedTarget",
    "UnparsedSdk",
    "get_sdk_class",
]

_SDK_CLASSES: dict[str, type[AppleSdk]] = {
    "unparsed": UnparsedSdk,
    "parsed": ParsedSdk,
}


def get_sdk_class(name: str) -> type[AppleSdk]:
    """Look up an SDK implementation by name.

    Args:
        name: 'unparsed' or 'parsed' (case-insensitive).

    Raises:
        ValueError: If name is not registered.
    """
    cls = _SDK_CLASSES.get(name.lower())
    if cls is None:
        supported = ", ".join(sorted(_SDK_CLASSES.keys()))
        raise ValueError(f"Unknown SDK type: {name!r}. Supported: {supported}")
    return cls
