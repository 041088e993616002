"""
Model primitives for libforge
"""

from libforge_core.model.project import (
    ProjectType,
    DependencyType,
    BuildTarget,
    ProjectNode,
    DependencyEdge,
    DependentLibraryNode,
    BuildResult,
)
from libforge_core.model.graph import ProjectGraph

__all__ = [
    "ProjectType",
    "DependencyType",
    "BuildTarget",
    "ProjectNode",
    "DependencyEdge",
    "DependentLibraryNode",
    "BuildResult",
    "ProjectGraph",
]
