"""Read pom.xml files into ProjectModel.

Only what the report needs is read: coordinates (inheriting groupId and
version from <parent>), name, packaging, <scm>, and the <build> directories.
``${...}`` references to ``project.*``/``pom.*`` values and <properties> are
interpolated; unknown references are left as-is.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from jdiffreport.core.errors import ProjectError
from jdiffreport.project.models import (
    DEFAULT_BUILD_DIRECTORY,
    DEFAULT_SOURCE_DIRECTORY,
    ProjectModel,
    ScmInfo,
)

POM_FILE = "pom.xml"

_REFERENCE = re.compile(r"\$\{([^}]+)\}")
_MAX_INTERPOLATION_PASSES = 10


def _strip_namespaces(root: ET.Element) -> None:
    for element in root.iter():
        if isinstance(element.tag, str) and "}" in element.tag:
            element.tag = element.tag.split("}", 1)[1]


def _text(element: ET.Element | None, path: str) -> str | None:
    if element is None:
        return None
    value = element.findtext(path)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _interpolate(value: str | None, context: dict[str, str]) -> str | None:
    if value is None:
        return None
    for _ in range(_MAX_INTERPOLATION_PASSES):
        replaced = _REFERENCE.sub(lambda m: context.get(m.group(1), m.group(0)), value)
        if replaced == value:
            break
        value = replaced
    return value


def parse_pom(
    content: str | bytes, *, basedir: Path | None = None, source: str = POM_FILE
) -> ProjectModel:
    """Parse POM text.

    Raises:
        ProjectError: If the XML is malformed or coordinates are missing.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise ProjectError.invalid_pom(source, str(e)) from e
    _strip_namespaces(root)

    parent = root.find("parent")
    group_id = _text(root, "groupId") or _text(parent, "groupId")
    artifact_id = _text(root, "artifactId")
    version = _text(root, "version") or _text(parent, "version")
    if not group_id or not artifact_id or not version:
        raise ProjectError.invalid_pom(source, "groupId, artifactId and version are required")

    context: dict[str, str] = {}
    properties = root.find("properties")
    if properties is not None:
        for prop in properties:
            if isinstance(prop.tag, str):
                context[prop.tag] = (prop.text or "").strip()
    for prefix in ("project", "pom"):
        context[f"{prefix}.groupId"] = group_id
        context[f"{prefix}.artifactId"] = artifact_id
        context[f"{prefix}.version"] = version
        if parent is not None:
            context[f"{prefix}.parent.groupId"] = _text(parent, "groupId") or ""
            context[f"{prefix}.parent.version"] = _text(parent, "version") or ""
    if basedir is not None:
        context["basedir"] = context["project.basedir"] = str(basedir)

    def value(path: str) -> str | None:
        return _interpolate(_text(root, path), context)

    build_directory = value("build/directory") or DEFAULT_BUILD_DIRECTORY
    context["project.build.directory"] = build_directory

    scm = root.find("scm")
    scm_info = ScmInfo(
        connection=_interpolate(_text(scm, "connection"), context),
        developer_connection=_interpolate(_text(scm, "developerConnection"), context),
        tag=_interpolate(_text(scm, "tag"), context),
        url=_interpolate(_text(scm, "url"), context),
    )

    return ProjectModel(
        group_id=_interpolate(group_id, context) or group_id,
        artifact_id=_interpolate(artifact_id, context) or artifact_id,
        version=_interpolate(version, context) or version,
        packaging=value("packaging") or "jar",
        name=value("name"),
        scm=scm_info,
        basedir=basedir,
        source_directory=value("build/sourceDirectory") or DEFAULT_SOURCE_DIRECTORY,
        build_directory=build_directory,
        output_directory=value("build/outputDirectory") or f"{build_directory}/classes",
    )


def read_pom(path: Path) -> ProjectModel:
    """Read ``path`` (a pom.xml or the directory holding one).

    Raises:
        ProjectError: If the file is missing or invalid.
    """
    if path.is_dir():
        path = path / POM_FILE
    if not path.is_file():
        raise ProjectError.invalid_pom(str(path), "file not found")
    try:
        content = path.read_bytes()
    except OSError as e:
        raise ProjectError.invalid_pom(str(path), str(e)) from e
    return parse_pom(content, basedir=path.parent.resolve(), source=str(path))
