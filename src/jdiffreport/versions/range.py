"""Maven version ranges.

Supported forms::

    1.0             soft requirement for 1.0
    [1.0]           exactly 1.0
    (,1.0]          x <= 1.0
    [1.2,1.3]       1.2 <= x <= 1.3
    [1.0,2.0)       1.0 <= x < 2.0
    [1.5,)          x >= 1.5
    (,1.0],[1.2,)   x <= 1.0 or x >= 1.2
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from jdiffreport.core.errors import InvalidVersionConstraintError
from jdiffreport.versions.version import ArtifactVersion


@dataclass(frozen=True, slots=True)
class Restriction:
    """One interval of a range. ``None`` bounds are open-ended."""

    lower: ArtifactVersion | None = None
    lower_inclusive: bool = False
    upper: ArtifactVersion | None = None
    upper_inclusive: bool = False

    def contains(self, version: ArtifactVersion) -> bool:
        if self.lower is not None:
            comparison = self.lower.compare(version)
            if comparison == 0 and not self.lower_inclusive:
                return False
            if comparison > 0:
                return False
        if self.upper is not None:
            comparison = self.upper.compare(version)
            if comparison == 0 and not self.upper_inclusive:
                return False
            if comparison < 0:
                return False
        return True

    @property
    def is_exact(self) -> bool:
        return (
            self.lower is not None
            and self.upper is not None
            and self.lower_inclusive
            and self.upper_inclusive
            and self.lower == self.upper
        )

    def __str__(self) -> str:
        if self.is_exact:
            return f"[{self.lower}]"
        left = "[" if self.lower_inclusive else "("
        right = "]" if self.upper_inclusive else ")"
        lower = str(self.lower) if self.lower is not None else ""
        upper = str(self.upper) if self.upper is not None else ""
        return f"{left}{lower},{upper}{right}"


EVERYTHING = Restriction()


def _parse_restriction(spec: str, full_spec: str) -> Restriction:
    lower_inclusive = spec.startswith("[")
    upper_inclusive = spec.endswith("]")
    process = spec[1:-1].strip()

    if "," not in process:
        if not process:
            raise InvalidVersionConstraintError.malformed(full_spec, f"Empty restriction: {spec}")
        if not lower_inclusive or not upper_inclusive:
            raise InvalidVersionConstraintError.malformed(
                full_spec, f"Single version must be surrounded by []: {spec}"
            )
        version = ArtifactVersion(process)
        return Restriction(version, True, version, True)

    lower_str, _, upper_str = process.partition(",")
    lower_str = lower_str.strip()
    upper_str = upper_str.strip()
    if lower_str == upper_str:
        raise InvalidVersionConstraintError.malformed(
            full_spec, f"Range cannot have identical boundaries: {spec}"
        )

    lower = ArtifactVersion(lower_str) if lower_str else None
    upper = ArtifactVersion(upper_str) if upper_str else None
    if lower is not None and upper is not None and upper < lower:
        raise InvalidVersionConstraintError.malformed(
            full_spec, f"Range defies version ordering: {spec}"
        )
    return Restriction(lower, lower_inclusive, upper, upper_inclusive)


@dataclass(frozen=True, slots=True)
class VersionRange:
    """A parsed version constraint."""

    spec: str
    restrictions: tuple[Restriction, ...]
    recommended: ArtifactVersion | None = None

    @classmethod
    def parse(cls, spec: str) -> VersionRange:
        """Parse a range expression.

        Raises:
            InvalidVersionConstraintError: On malformed syntax.
        """
        if spec is None or not spec.strip():
            raise InvalidVersionConstraintError.malformed(str(spec), "Empty version range")

        restrictions: list[Restriction] = []
        process = spec.strip()
        upper_bound: ArtifactVersion | None = None

        while process.startswith(("[", "(")):
            close_paren = process.find(")")
            close_bracket = process.find("]")
            index = close_bracket
            if (close_bracket < 0 or close_paren < close_bracket) and close_paren >= 0:
                index = close_paren
            if index < 0:
                raise InvalidVersionConstraintError.malformed(spec, f"Unbounded range: {spec}")

            restriction = _parse_restriction(process[: index + 1], spec)
            if upper_bound is not None and (
                restriction.lower is None or restriction.lower < upper_bound
            ):
                raise InvalidVersionConstraintError.malformed(spec, f"Ranges overlap: {spec}")
            restrictions.append(restriction)
            upper_bound = restriction.upper

            process = process[index + 1 :].strip()
            if process.startswith(","):
                process = process[1:].strip()

        if process:
            if restrictions:
                raise InvalidVersionConstraintError.malformed(
                    spec, f"Only fully-qualified sets allowed in multiple set scenario: {spec}"
                )
            if any(c in process for c in "[](),"):
                raise InvalidVersionConstraintError.malformed(spec, f"Unbounded range: {spec}")
            return cls(spec, (EVERYTHING,), ArtifactVersion(process))

        return cls(spec, tuple(restrictions))

    @property
    def selected_version(self) -> ArtifactVersion | None:
        """The version this range pins without a repository lookup, if any."""
        if self.recommended is not None:
            return self.recommended
        if self.restrictions and self.restrictions[-1].is_exact:
            return self.restrictions[-1].lower
        return None

    def contains(self, version: ArtifactVersion) -> bool:
        return any(r.contains(version) for r in self.restrictions)

    def match(self, versions: Iterable[ArtifactVersion]) -> ArtifactVersion | None:
        """Highest version satisfying the range, or None."""
        matched: ArtifactVersion | None = None
        for version in versions:
            if self.contains(version) and (matched is None or version > matched):
                matched = version
        return matched

    def __str__(self) -> str:
        if self.recommended is not None:
            return str(self.recommended)
        return ",".join(str(r) for r in self.restrictions)
