"""Maven artifact versions.

``ArtifactVersion`` exposes the ``major.minor.incremental-qualifier`` view of a
version string (used to spot SNAPSHOT builds) and orders versions the way Maven
does: the string is split into numeric and textual items, numbers compare
numerically, and well-known qualifiers follow a fixed order::

    alpha < beta < milestone < rc < snapshot < (release) < sp

Unknown qualifiers sort after the known ones, lexically.
"""

from __future__ import annotations

import re
from functools import total_ordering

_QUALIFIERS = ("alpha", "beta", "milestone", "rc", "snapshot", "", "sp")
_ALIASES = {"ga": "", "final": "", "release": "", "cr": "rc"}
_SHORT_QUALIFIERS = {"a": "alpha", "b": "beta", "m": "milestone"}
_RELEASE_INDEX = str(_QUALIFIERS.index(""))

_DIGITS = re.compile(r"\d+")


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


class _IntItem:
    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        self.value = value

    def is_null(self) -> bool:
        return self.value == 0

    def compare(self, other: _Item | None) -> int:
        if other is None:
            return 0 if self.value == 0 else 1
        if isinstance(other, _IntItem):
            return _cmp(self.value, other.value)
        # 1.1 > 1-sp and 1.1 > 1-1
        return 1


class _StringItem:
    __slots__ = ("value",)

    def __init__(self, value: str, followed_by_digit: bool) -> None:
        if followed_by_digit and len(value) == 1:
            value = _SHORT_QUALIFIERS.get(value, value)
        self.value = _ALIASES.get(value, value)

    @property
    def comparable(self) -> str:
        if self.value in _QUALIFIERS:
            return str(_QUALIFIERS.index(self.value))
        return f"{len(_QUALIFIERS)}-{self.value}"

    def is_null(self) -> bool:
        return self.comparable == _RELEASE_INDEX

    def compare(self, other: _Item | None) -> int:
        if other is None:
            # 1-rc < 1, 1-ga == 1, 1-sp > 1
            return _cmp(self.comparable, _RELEASE_INDEX)
        if isinstance(other, _StringItem):
            return _cmp(self.comparable, other.comparable)
        return -1


class _ListItem(list["_Item"]):
    def is_null(self) -> bool:
        return len(self) == 0

    def normalize(self) -> None:
        """Drop trailing nulls (0, release qualifiers, empty sublists)."""
        i = len(self) - 1
        while i >= 0:
            item = self[i]
            if item.is_null():
                del self[i]
            elif not isinstance(item, _ListItem):
                break
            i -= 1

    def compare(self, other: _Item | None) -> int:
        if other is None:
            return 0 if not self else self[0].compare(None)
        if isinstance(other, _IntItem):
            return -1
        if isinstance(other, _StringItem):
            return 1
        for i in range(max(len(self), len(other))):
            left = self[i] if i < len(self) else None
            right = other[i] if i < len(other) else None
            result = -right.compare(left) if left is None else left.compare(right)  # type: ignore[union-attr]
            if result != 0:
                return result
        return 0


_Item = _IntItem | _StringItem | _ListItem


def _parse_item(is_digit: bool, buf: str) -> _Item:
    return _IntItem(int(buf)) if is_digit else _StringItem(buf, False)


def _parse_items(version: str) -> _ListItem:
    version = version.lower()
    main = current = _ListItem()
    stack = [current]
    is_digit = False
    start = 0

    for i, c in enumerate(version):
        if c == ".":
            current.append(_IntItem(0) if i == start else _parse_item(is_digit, version[start:i]))
            start = i + 1
        elif c == "-":
            current.append(_IntItem(0) if i == start else _parse_item(is_digit, version[start:i]))
            start = i + 1
            sub = _ListItem()
            current.append(sub)
            current = sub
            stack.append(current)
        elif c.isdigit():
            if not is_digit and i > start:
                current.append(_StringItem(version[start:i], True))
                start = i
                sub = _ListItem()
                current.append(sub)
                current = sub
                stack.append(current)
            is_digit = True
        else:
            if is_digit and i > start:
                current.append(_parse_item(True, version[start:i]))
                start = i
                sub = _ListItem()
                current.append(sub)
                current = sub
                stack.append(current)
            is_digit = False

    if len(version) > start:
        current.append(_parse_item(is_digit, version[start:]))

    while stack:
        stack.pop().normalize()

    return main


def _to_int(token: str) -> int:
    if len(token) > 1 and token.startswith("0"):
        raise ValueError(f"Number part has a leading 0: {token}")
    return int(token)


@total_ordering
class ArtifactVersion:
    """A Maven version string with Maven's ordering."""

    __slots__ = ("_raw", "_items", "major", "minor", "incremental", "build_number", "qualifier")

    def __init__(self, version: str) -> None:
        self._raw = version
        self._items = _parse_items(version)
        self.major: int | None = None
        self.minor: int | None = None
        self.incremental: int | None = None
        self.build_number: int | None = None
        self.qualifier: str | None = None
        self._parse_components(version)

    def _parse_components(self, version: str) -> None:
        part1, sep, part2 = version.partition("-")

        if sep:
            if len(part2) == 1 or not part2.startswith("0"):
                try:
                    self.build_number = int(part2)
                except ValueError:
                    self.qualifier = part2
            else:
                self.qualifier = part2

        if "." not in part1 and not part1.startswith("0"):
            try:
                self.major = int(part1)
            except ValueError:
                # "beta" or "1a" - the whole string is the qualifier
                self.qualifier = version
                self.build_number = None
            return

        fallback = False
        tokens = [t for t in part1.split(".") if t]
        try:
            if tokens:
                self.major = _to_int(tokens[0])
            if len(tokens) > 1:
                self.minor = _to_int(tokens[1])
            if len(tokens) > 2:
                self.incremental = _to_int(tokens[2])
            if len(tokens) > 3:
                self.qualifier = ".".join(tokens[3:])
                fallback = _DIGITS.fullmatch(self.qualifier) is not None
        except ValueError:
            fallback = True

        if ".." in part1 or part1.startswith(".") or part1.endswith("."):
            fallback = True

        if fallback:
            self.qualifier = version
            self.major = self.minor = self.incremental = self.build_number = None

    @property
    def is_snapshot(self) -> bool:
        return self.qualifier == "SNAPSHOT"

    def compare(self, other: ArtifactVersion) -> int:
        return self._items.compare(other._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: ArtifactVersion) -> bool:
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(self.canonical)

    @property
    def canonical(self) -> str:
        return _render(self._items)

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"ArtifactVersion({self._raw!r})"


def _render(items: _ListItem) -> str:
    parts: list[str] = []
    for item in items:
        if isinstance(item, _ListItem):
            parts.append("-" + _render(item))
        elif isinstance(item, _IntItem):
            parts.append(("." if parts else "") + str(item.value))
        else:
            parts.append(("." if parts else "") + item.value)
    return "".join(parts)
