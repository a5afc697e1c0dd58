"""Version parsing and ordering for release listings."""
import functools
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar, Union

from ..utils.exceptions import VersionParseError

VERSION_SPLIT_PATTERN = re.compile(
    r"(?P<major>\d{1,2})\.(?P<minor>\d{1,3})(\.(?P<patch>\d{1,3}))?(rc(?P<rc>\d{1,3}))?"
)

T = TypeVar("T")


@functools.total_ordering
@dataclass(frozen=True)
class VersionTuple:
    """Numeric form of a release version.

    A release_candidate of 0 marks a stable release. Ordering is by
    (major, minor, patch); on a tie release candidates sort below the stable
    release and among themselves by candidate number.
    """
    major: int = 0
    minor: int = 0
    patch: int = 0
    release_candidate: int = 0

    @property
    def is_release_candidate(self) -> bool:
        return self.release_candidate != 0

    @property
    def sort_key(self) -> Tuple[int, int, int, bool, int]:
        return (self.major, self.minor, self.patch,
                not self.is_release_candidate, self.release_candidate)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.major, self.minor, self.patch, self.release_candidate)

    def __lt__(self, other):
        if not isinstance(other, VersionTuple):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.is_release_candidate:
            text += f"rc{self.release_candidate}"
        return text


ZERO_VERSION = VersionTuple()


def _match(text: str) -> Optional[VersionTuple]:
    match = VERSION_SPLIT_PATTERN.fullmatch(text.strip())
    if not match:
        return None
    return VersionTuple(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch") or 0),
        release_candidate=int(match.group("rc") or 0),
    )


def parse_version(text: str) -> VersionTuple:
    """Parse a version string, returning the zero tuple when it does not match.

    Meant for ordering only: malformed versions sink to the bottom of a
    newest-first listing instead of aborting the sort.
    """
    if not isinstance(text, str):
        return ZERO_VERSION
    return _match(text) or ZERO_VERSION


def parse_version_strict(text: str) -> VersionTuple:
    """Parse a version string.

    Raises:
        VersionParseError: If text is not <major>.<minor>[.<patch>][rc<n>]
    """
    parsed = _match(text) if isinstance(text, str) else None
    if parsed is None:
        raise VersionParseError(
            f"Invalid version '{text}': expected <major>.<minor>[.<patch>][rc<n>]"
        )
    return parsed


def _coerce(value: Union[str, VersionTuple]) -> VersionTuple:
    if isinstance(value, VersionTuple):
        return value
    return parse_version(value)


def compare_versions(a: Union[str, VersionTuple], b: Union[str, VersionTuple]) -> int:
    """Compare two versions, returning -1, 0 or 1."""
    left, right = _coerce(a).sort_key, _coerce(b).sort_key
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def sort_versions(
    items: Iterable[T],
    key: Optional[Callable[[T], Union[str, VersionTuple]]] = None,
    descending: bool = True,
) -> List[T]:
    """Sort items by version, newest first unless descending is False.

    The sort is stable, so items with equal versions keep their input order.
    """
    get = key or (lambda item: item)
    return sorted(items, key=lambda item: _coerce(get(item)).sort_key, reverse=descending)
