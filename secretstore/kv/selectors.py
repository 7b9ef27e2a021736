"""
Version selectors.

A selector names either the current (head) version of a path or one
specific version number. Plain ints are accepted everywhere a selector is,
with ``0`` meaning the current version.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union


class Current:
    """Selects whatever version is current at resolution time."""

    _instance: Optional["Current"] = None

    def __new__(cls) -> "Current":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def resolve(self, current_version: int) -> int:
        return current_version

    def __repr__(self) -> str:
        return "CURRENT"


CURRENT = Current()


@dataclass(frozen=True)
class Specific:
    """Selects one literal version number."""

    number: int

    def resolve(self, current_version: int) -> int:
        return self.number


VersionSelector = Union[Current, Specific]
VersionLike = Union[int, Current, Specific]


def to_selector(value: VersionLike) -> VersionSelector:
    """
    Convert a version argument into a selector.

    Args:
        value: ``0`` or ``CURRENT`` for the current version, any other int
            or a ``Specific`` for that exact version

    Returns:
        The matching selector

    Raises:
        TypeError: If value is not an int or selector
    """
    if isinstance(value, (Current, Specific)):
        return value
    # bool is an int subclass; True/False are not version numbers
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Invalid version selector: {value!r}")
    if value == 0:
        return CURRENT
    return Specific(value)


def to_selectors(values: Optional[Iterable[VersionLike]]) -> List[VersionSelector]:
    """Convert a batch of version arguments, preserving order."""
    if not values:
        return []
    return [to_selector(v) for v in values]
