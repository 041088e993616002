"""
Workspace loading: reads workspace.json into a ProjectGraph
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from libforge_core.constants import DEFAULT_DIST_ROOT, WORKSPACE_FILE
from libforge_core.exceptions import ConfigurationError
from libforge_core.ingest.deps import infer_dependencies
from libforge_core.model.graph import ProjectGraph
from libforge_core.model.project import BuildTarget, DependencyType, ProjectNode, ProjectType
from libforge_core.utils import read_json_file, resolve_package_name

logger = logging.getLogger(__name__)


@dataclass
class Workspace:
    """
    A loaded workspace: its root directory and project graph.

    Loaded fresh for every build invocation; nothing is cached between loads.
    """
    root: Path
    graph: ProjectGraph
    dist_root: str = DEFAULT_DIST_ROOT
    npm_scope: str | None = None

    def default_output_path(self, node: ProjectNode) -> str:
        return f"{self.dist_root}/{node.root}"


def load_workspace(root: Path | str, workspace_file: str = WORKSPACE_FILE) -> Workspace:
    """
    Load a workspace and build its project graph.

    Edges come from each project's ``implicitDependencies`` (in declared order)
    followed by imports of other projects' packages found in its sources.

    Args:
        root: Workspace root directory
        workspace_file: Name of the workspace description file

    Returns:
        Workspace with a populated ProjectGraph

    Raises:
        ConfigurationError: If the workspace file is missing or malformed
    """
    root = Path(root).resolve()
    config = read_json_file(root / workspace_file)
    if not isinstance(config, dict) or not isinstance(config.get("projects"), dict):
        raise ConfigurationError(f"{root / workspace_file} must declare a 'projects' mapping")

    npm_scope = config.get("npmScope")
    graph = ProjectGraph()
    for name, data in config["projects"].items():
        graph.add_project(_parse_project(name, data, npm_scope))

    for node in graph.projects():
        for dependency in node.implicit_dependencies:
            if dependency not in graph:
                raise ConfigurationError(
                    f"Project '{node.name}' has an implicit dependency on unknown project '{dependency}'"
                )
            if dependency == node.name:
                raise ConfigurationError(
                    f"Project '{node.name}' lists itself in implicitDependencies"
                )
            graph.add_dependency(node.name, dependency, DependencyType.IMPLICIT)

    package_names = {node.name: resolve_package_name(root, node) for node in graph.projects()}
    for source, target in infer_dependencies(graph.projects(), package_names, root):
        graph.add_dependency(source, target, DependencyType.STATIC)

    logger.debug(
        "Loaded workspace %s: %d projects, %d dependencies",
        root, len(graph), graph.graph.number_of_edges()
    )

    return Workspace(
        root=root,
        graph=graph,
        dist_root=config.get("distRoot", DEFAULT_DIST_ROOT),
        npm_scope=npm_scope,
    )


def _parse_project(name: str, data: Any, npm_scope: str | None) -> ProjectNode:
    if not isinstance(data, dict) or not data.get("root"):
        raise ConfigurationError(f"Project '{name}' must declare a 'root' directory")

    try:
        project_type = ProjectType(data.get("projectType", ProjectType.LIBRARY.value))
    except ValueError:
        raise ConfigurationError(
            f"Project '{name}' has unknown projectType '{data.get('projectType')}'"
        )

    targets = data.get("targets") or data.get("architect") or {}
    build = targets.get("build")
    build_target = None
    if build is not None:
        build_target = BuildTarget(
            builder=build.get("builder", ""),
            options=dict(build.get("options") or {}),
        )

    return ProjectNode(
        name=name,
        type=project_type,
        root=data["root"].rstrip("/"),
        prefix=data.get("prefix", npm_scope),
        build_target=build_target,
        implicit_dependencies=tuple(data.get("implicitDependencies", [])),
    )
