"""
Utility functions for libforge
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import quote

from libforge_core.constants import PACKAGE_JSON
from libforge_core.exceptions import ConfigurationError, InvalidPackageNameError
from libforge_core.model.project import ProjectNode

MAX_PACKAGE_NAME_LENGTH = 214


def read_json_file(path: Path | str) -> Any:
    """
    Read and parse a JSON file.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"File does not exist: {path}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse JSON from {path}: {e}")


def write_json_file(path: Path | str, data: Any) -> None:
    """Write data as indented JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")


def _package_name_error(name: Any) -> str | None:
    if not isinstance(name, str) or name == "":
        return "package name must be a non-empty string"
    if name != name.strip():
        return "remove trailing spaces from start and end of package name"
    if len(name) > MAX_PACKAGE_NAME_LENGTH:
        return f"package name cannot be more than {MAX_PACKAGE_NAME_LENGTH} characters"
    if name[0] in (".", "_"):
        return "package name cannot start with a dot nor underscore"
    if name != name.lower():
        return "package name cannot have uppercase letters"

    if "@" in name:
        if not name.startswith("@"):
            return 'scoped package name must start with "@" character'
        if name.count("@") > 1:
            return 'scoped package name has an extra "@" character'
        if "/" not in name:
            return "scoped package name must be in the format of @myorg/package"
        if name.count("/") > 1:
            return 'scoped package name has an extra "/" character'
        scope, package = name[1:].split("/")
        return _package_name_error(scope) or _package_name_error(package)

    # same character set encodeURIComponent leaves untouched
    if quote(name, safe="!*'()") != name:
        return "package name had non-URL-safe characters"
    return None


def validate_package_name(name: str) -> bool:
    """
    Validate a publishable package name such as ``mylib`` or ``@myorg/mylib``.

    Returns:
        True when the name is valid

    Raises:
        InvalidPackageNameError: Describing the first rule the name breaks
    """
    error = _package_name_error(name)
    if error:
        raise InvalidPackageNameError(str(name), error)
    return True


def resolve_package_name(workspace_root: Path, node: ProjectNode) -> str:
    """
    Publish name of a project.

    Read from the ``name`` field of the project's own package.json; falls back
    to the ``@prefix/name`` convention when the descriptor or its name is absent.
    """
    package_json = Path(workspace_root) / node.root / PACKAGE_JSON
    if package_json.is_file():
        name = read_json_file(package_json).get("name")
        if name:
            return name
    return node.package_name
