"""
Project graph using networkx
"""

import networkx as nx
from typing import Optional

from libforge_core.exceptions import ProjectNotFoundError
from libforge_core.model.project import DependencyEdge, DependencyType, ProjectNode


class ProjectGraph:
    """
    Directed graph of workspace projects.

    Nodes carry their ProjectNode under the ``project`` attribute. An edge
    ``a -> b`` means project ``a`` depends on project ``b``. Successor order
    follows insertion order, which is the declaration order of dependencies.
    Cycles are allowed; callers that recurse must check with find_cycle().
    """

    def __init__(self):
        self.graph = nx.DiGraph()

    def add_project(self, node: ProjectNode) -> None:
        """Add a project node."""
        self.graph.add_node(node.name, project=node)

    def add_dependency(
        self,
        source: str,
        target: str,
        dependency_type: DependencyType = DependencyType.STATIC
    ) -> None:
        """
        Add a dependency edge: ``source`` depends on ``target``.

        Re-adding an existing edge keeps its original position and kind.

        Args:
            source: Name of the dependent project
            target: Name of the project depended upon
            dependency_type: How the dependency was discovered
        """
        if source not in self:
            raise ProjectNotFoundError(source)
        if target not in self:
            raise ProjectNotFoundError(target)
        if self.graph.has_edge(source, target):
            return
        self.graph.add_edge(source, target, edge_type=dependency_type)

    def get_node(self, name: str) -> ProjectNode:
        """Get the ProjectNode for a project name."""
        if name not in self:
            raise ProjectNotFoundError(name)
        return self.graph.nodes[name]["project"]

    def get_dependencies(self, name: str) -> list[DependencyEdge]:
        """Get the outgoing dependency edges of a project, in declaration order."""
        if name not in self:
            raise ProjectNotFoundError(name)
        return [
            DependencyEdge(source=name, target=target, type=data["edge_type"])
            for target, data in self.graph.adj[name].items()
        ]

    def find_cycle(self, source: str, buildable_only: bool = False) -> Optional[list[str]]:
        """
        Find a dependency cycle reachable from ``source``.

        Args:
            source: Project to search from
            buildable_only: Only follow edges into buildable libraries, the
                edges a dependency build recurses along

        Returns:
            The cycle as a list of project names whose last entry repeats the
            first (e.g. ``["a", "b", "a"]``), or None when there is no cycle.
        """
        graph = self.graph
        if buildable_only:
            graph = nx.subgraph_view(
                self.graph,
                filter_edge=lambda u, v: self.get_node(v).is_buildable_library,
            )
        try:
            edges = nx.find_cycle(graph, source=source)
        except nx.NetworkXNoCycle:
            return None
        return [src for src, _ in edges] + [edges[-1][1]]

    def projects(self) -> list[ProjectNode]:
        """All project nodes in insertion order."""
        return [data["project"] for _, data in self.graph.nodes(data=True)]

    def __len__(self) -> int:
        """Number of projects in the graph."""
        return len(self.graph.nodes())

    def __contains__(self, name: str) -> bool:
        """Check if a project exists in the graph."""
        return name in self.graph.nodes()
