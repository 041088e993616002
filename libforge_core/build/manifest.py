"""
Output package manifest generation and dependency pinning
"""

import logging
import os
import posixpath
from pathlib import Path, PurePosixPath

from libforge_core.config import BuildOptions
from libforge_core.constants import PACKAGE_JSON
from libforge_core.exceptions import ConfigurationError
from libforge_core.model.project import DependentLibraryNode
from libforge_core.utils import read_json_file, write_json_file

logger = logging.getLogger(__name__)


def relative_main_output(options: BuildOptions, workspace_root: Path) -> str:
    """
    Directory of the compiled entry file relative to the output path.

    The compiler mirrors the sources below ``rootDir`` (relative to the
    compiler config), so ``libs/a/src/index.ts`` with the config in
    ``libs/a`` and no rootDir ends up in ``src/``.
    """
    config = read_json_file(Path(workspace_root) / options.ts_config)
    root_dir = config.get("compilerOptions", {}).get("rootDir", "")
    config_dir = posixpath.dirname(options.ts_config)
    main_dir = posixpath.dirname(options.main)
    return os.path.relpath(main_dir, posixpath.join(config_dir, root_dir)).replace(os.sep, "/")


def write_output_manifest(options: BuildOptions, workspace_root: Path) -> Path:
    """
    Write the project's package.json into its output path.

    ``main`` and ``typings`` are pointed at the compiled entry file.

    Returns:
        Path of the written output package.json
    """
    workspace_root = Path(workspace_root)
    manifest = read_json_file(workspace_root / options.package_json)

    if options.main:
        relative_dir = relative_main_output(options, workspace_root)
        main_file = PurePosixPath(options.main).stem
        manifest["main"] = posixpath.normpath(f"./{relative_dir}/{main_file}.js")
        manifest["typings"] = posixpath.normpath(f"./{relative_dir}/{main_file}.d.ts")

    output_manifest = workspace_root / options.output_path / PACKAGE_JSON
    write_json_file(output_manifest, manifest)
    return output_manifest


def patch_manifest(
    manifest_path: Path | str,
    dependencies: list[DependentLibraryNode],
    workspace_root: Path,
) -> dict:
    """
    Pin internal dependencies in a built package.json.

    Every dependency not yet listed under ``dependencies`` is added with the
    ``version`` of its source package.json. Existing entries are kept as they
    are, and an empty ``dependencies`` mapping is dropped.

    Args:
        manifest_path: Output package.json to patch in place
        dependencies: Resolved library dependencies of the project
        workspace_root: Workspace root directory

    Returns:
        The patched manifest

    Raises:
        ConfigurationError: If a dependency's package.json has no version
    """
    manifest = read_json_file(manifest_path)
    pinned = dict(manifest.get("dependencies") or {})

    for dependency in dependencies:
        if dependency.scope in pinned:
            continue
        source_manifest = read_json_file(Path(workspace_root) / dependency.node.root / PACKAGE_JSON)
        version = source_manifest.get("version")
        if not version:
            raise ConfigurationError(
                f"Cannot pin {dependency.scope}: {dependency.node.root}/{PACKAGE_JSON} has no version"
            )
        pinned[dependency.scope] = version
        logger.debug("Pinned %s to %s", dependency.scope, version)

    if pinned:
        manifest["dependencies"] = pinned
    else:
        manifest.pop("dependencies", None)

    write_json_file(manifest_path, manifest)
    return manifest
