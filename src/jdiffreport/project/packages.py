"""Java package discovery in source trees."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


def discover_packages(source_roots: Iterable[Path]) -> set[str]:
    """Names of packages holding at least one ``.java`` file.

    Files directly under a root belong to the default package and are skipped.
    """
    packages: set[str] = set()
    for root in source_roots:
        if not root.is_dir():
            continue
        for java_file in root.rglob("*.java"):
            relative = java_file.parent.relative_to(root)
            if relative.parts:
                packages.add(".".join(relative.parts))
    return packages


def select_packages(source_roots: Iterable[Path], include: Iterable[str] | None) -> set[str]:
    """Explicit ``include`` list when given, otherwise discovered packages."""
    names = [name for name in (include or ()) if name]
    if names:
        return set(names)
    return discover_packages(source_roots)
