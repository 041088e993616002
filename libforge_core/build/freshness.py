"""
Build freshness check for dependent libraries
"""

import logging
from pathlib import Path

from libforge_core.constants import DEFAULT_DIST_ROOT, PACKAGE_JSON
from libforge_core.model.project import BuildResult, DependentLibraryNode

logger = logging.getLogger(__name__)


def is_built(
    dependency: DependentLibraryNode,
    workspace_root: Path,
    dist_root: str = DEFAULT_DIST_ROOT,
) -> bool:
    """Whether the completeness marker <dist-root>/<root>/package.json exists."""
    return (Path(workspace_root) / dist_root / dependency.node.root / PACKAGE_JSON).exists()


def check_built(
    project: str,
    dependencies: list[DependentLibraryNode],
    workspace_root: Path,
    dist_root: str = DEFAULT_DIST_ROOT,
) -> BuildResult:
    """
    Verify every dependency has been built.

    A dependency counts as built when ``<dist-root>/<root>/package.json``
    exists. All missing dependencies are reported together so they can be
    fixed in one pass.

    Args:
        project: Name of the project about to be built
        dependencies: Resolved library dependencies of that project
        workspace_root: Workspace root directory
        dist_root: Root of the build output tree

    Returns:
        BuildResult, failed if any dependency is missing its build output
    """
    missing = [
        dependency for dependency in dependencies
        if not is_built(dependency, workspace_root, dist_root)
    ]

    if not missing:
        return BuildResult.ok()

    message = (
        f"Some of the library {project}'s dependencies have not been built yet. "
        "Please build these libraries before:\n"
        + "\n".join(f" - {dependency.scope}" for dependency in missing)
    )
    logger.error(message)
    return BuildResult.failed(message)
