"""
Dependency resolution for a build target
"""

import logging
from pathlib import Path

from libforge_core.constants import DEFAULT_DIST_ROOT, PACKAGE_JSON
from libforge_core.model.graph import ProjectGraph
from libforge_core.model.project import DependentLibraryNode
from libforge_core.utils import resolve_package_name, validate_package_name

logger = logging.getLogger(__name__)


def resolve_dependencies(
    graph: ProjectGraph,
    target_project: str,
    workspace_root: Path,
    dist_root: str = DEFAULT_DIST_ROOT,
) -> list[DependentLibraryNode]:
    """
    Find the buildable library dependencies of a target project.

    Only direct dependencies are returned. A dependency is included when it is
    a library and declares a build target; anything else has no build step and
    is skipped. Order follows the graph's edge declaration order.

    Args:
        graph: Loaded project graph
        target_project: Name of the project being built
        workspace_root: Workspace root, used to read dependency package.json files
        dist_root: Root of the build output tree

    Returns:
        DependentLibraryNode per buildable library dependency

    Raises:
        ProjectNotFoundError: If target_project is not in the graph
        InvalidPackageNameError: If a dependency's package name is not publishable
    """
    dependencies = []

    for edge in graph.get_dependencies(target_project):
        node = graph.get_node(edge.target)
        if not node.is_buildable_library:
            logger.debug("Skipping %s: not a buildable library", node.name)
            continue

        if not (Path(workspace_root) / node.root / PACKAGE_JSON).is_file():
            logger.warning(
                "No %s found for library %s, assuming package name %s",
                PACKAGE_JSON, node.name, node.package_name
            )
        scope = resolve_package_name(workspace_root, node)
        validate_package_name(scope)

        dependencies.append(DependentLibraryNode(
            scope=scope,
            output_path=node.build_target.output_path or f"{dist_root}/{node.root}",
            node=node,
        ))

    return dependencies
