"""SDK version strings.

SDK directory names and ``SDKSettings`` files carry versions like ``12``,
``12.3`` or ``12.3.1``. :class:`SdkVersion` stores the raw string and applies
a loose ``X.Y.Z`` interpretation when ordering.

Ordering never fails: a string that does not parse sorts as ``0.0.0``. Two
different malformed strings are therefore neither less nor greater than each
other while still being unequal.
"""

from __future__ import annotations

import re
from typing import Union

from .errors import VersionParseError

_COMPONENT = re.compile(r"[0-9]+")

# Components are byte-sized.
_COMPONENT_MAX = 255

VersionLike = Union["SdkVersion", str]


class SdkVersion:
    """An SDK version string.

    Any string can be stored. Equality and hashing use the raw string;
    ordering uses :meth:`normalized_version`, substituting ``(0, 0, 0)``
    when the string is malformed.
    """

    __slots__ = ("_value",)

    def __init__(self, value: VersionLike):
        if isinstance(value, SdkVersion):
            value = value.value
        self._value = str(value)

    @property
    def value(self) -> str:
        return self._value

    def normalized_version(self) -> tuple[int, int, int]:
        """Parse into a ``(major, minor, patch)`` tuple.

        Raises:
            VersionParseError: If there are not 1-3 components or a component
                is not an integer in ``0..255``.
        """
        ints = []
        for part in self._value.split("."):
            if not _COMPONENT.fullmatch(part) or int(part) > _COMPONENT_MAX:
                raise VersionParseError(self._value)
            ints.append(int(part))

        if not 1 <= len(ints) <= 3:
            raise VersionParseError(self._value)

        ints.extend([0] * (3 - len(ints)))
        return ints[0], ints[1], ints[2]

    def semantic_version(self) -> str:
        """Return the version as ``X.Y.Z``.

        Raises:
            VersionParseError: If the string is malformed.
        """
        return "{}.{}.{}".format(*self.normalized_version())

    @property
    def is_valid(self) -> bool:
        try:
            self.normalized_version()
        except VersionParseError:
            return False
        return True

    def _sort_key(self) -> tuple[int, int, int]:
        try:
            return self.normalized_version()
        except VersionParseError:
            return (0, 0, 0)

    def compare(self, other: VersionLike) -> int:
        """Three-way comparison: -1, 0 or 1."""
        a = self._sort_key()
        b = _coerce(other)._sort_key()
        return (a > b) - (a < b)

    # Malformed strings order as equal without being ==, so <= and >= are not
    # derived from < and ==.
    def __lt__(self, other: VersionLike) -> bool:
        if not isinstance(other, (SdkVersion, str)):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: VersionLike) -> bool:
        if not isinstance(other, (SdkVersion, str)):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: VersionLike) -> bool:
        if not isinstance(other, (SdkVersion, str)):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: VersionLike) -> bool:
        if not isinstance(other, (SdkVersion, str)):
            return NotImplemented
        return self.compare(other) >= 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SdkVersion):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"SdkVersion({self._value!r})"


def _coerce(value: VersionLike) -> SdkVersion:
    return value if isinstance(value, SdkVersion) else SdkVersion(value)
