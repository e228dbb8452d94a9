"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local jdiffreport package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of jdiffreport modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("jdiffreport"):
        del sys.modules[module_name]

from jdiffreport.core.logging import clear_run_id  # noqa: E402

POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>com.example</groupId>
  <artifactId>widgets</artifactId>
  <version>{version}</version>
  <packaging>{packaging}</packaging>
  <name>Widgets</name>
{scm}</project>
"""

SCM_TEMPLATE = """  <scm>
    <connection>{connection}</connection>
    <tag>{tag}</tag>
  </scm>
"""

PomFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _reset_run_id() -> Iterator[None]:
    yield
    clear_run_id()


@pytest.fixture(autouse=True)
def _isolate_global_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the user's ~/.config/jdiff-report out of tests."""
    monkeypatch.setattr(
        "jdiffreport.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global-config.yaml"
    )


def pom_xml(
    version: str = "2.0",
    *,
    packaging: str = "jar",
    connection: str | None = "scm:git:https://git.example.com/widgets.git",
    tag: str = "HEAD",
) -> str:
    scm = SCM_TEMPLATE.format(connection=connection, tag=tag) if connection else ""
    return POM_TEMPLATE.format(version=version, packaging=packaging, scm=scm)


@pytest.fixture
def pom_factory() -> PomFactory:
    """Write a Maven project (pom.xml plus Java sources) into a directory."""

    def _write(
        directory: Path,
        version: str = "2.0",
        *,
        packaging: str = "jar",
        connection: str | None = "scm:git:https://git.example.com/widgets.git",
        tag: str = "HEAD",
        sources: tuple[str, ...] = ("com/example/widgets/Widget.java",),
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "pom.xml").write_text(
            pom_xml(version, packaging=packaging, connection=connection, tag=tag)
        )
        for source in sources:
            java_file = directory / "src" / "main" / "java" / source
            java_file.parent.mkdir(parents=True, exist_ok=True)
            java_file.write_text(f"// {source}\n")
        return directory

    return _write


@pytest.fixture
def make_pom_xml() -> Callable[..., str]:
    """POM text as published to a repository."""
    return pom_xml
