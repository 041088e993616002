"""
Project graph primitives: nodes, edges and build results
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ProjectType(str, Enum):
    """Kind of a workspace project."""
    APPLICATION = "application"
    LIBRARY = "library"


class DependencyType(str, Enum):
    """How a dependency edge was discovered."""
    STATIC = "static"  # derived from an import in the project sources
    IMPLICIT = "implicit"  # declared in workspace.json


@dataclass(frozen=True)
class BuildTarget:
    """
    Build target descriptor of a project.

    The builder identifier selects the build implementation; options are the raw
    (camelCase) options from workspace.json.
    """
    builder: str
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def output_path(self) -> Optional[str]:
        return self.options.get("outputPath") or None


@dataclass(frozen=True)
class ProjectNode:
    """
    A project in the workspace graph.

    Immutable once the graph is built; the graph owns every node.
    """
    name: str
    type: ProjectType
    root: str
    prefix: Optional[str] = None
    build_target: Optional[BuildTarget] = None
    implicit_dependencies: tuple[str, ...] = ()

    @property
    def package_name(self) -> str:
        """Conventional scoped package name (``@prefix/name``)."""
        if self.prefix:
            return f"@{self.prefix}/{self.name}"
        return self.name

    @property
    def has_build_target(self) -> bool:
        return self.build_target is not None and self.build_target.builder != ""

    @property
    def is_buildable_library(self) -> bool:
        return self.type == ProjectType.LIBRARY and self.has_build_target


@dataclass(frozen=True)
class DependencyEdge:
    """Directed edge: ``source`` depends on ``target``."""
    source: str
    target: str
    type: DependencyType = DependencyType.STATIC


@dataclass(frozen=True)
class DependentLibraryNode:
    """
    A buildable library the current target depends on.

    Computed fresh for every build invocation and never persisted.
    """
    scope: str  # publish name, e.g. @proj/mylib
    output_path: str  # where the library's build artifacts land
    node: ProjectNode


@dataclass(frozen=True)
class BuildResult:
    """Terminal value of one build attempt."""
    success: bool
    error: Optional[str] = None
    output_path: Optional[str] = None

    @classmethod
    def ok(cls, output_path: Optional[str] = None) -> "BuildResult":
        return cls(success=True, output_path=output_path)

    @classmethod
    def failed(cls, error: str) -> "BuildResult":
        return cls(success=False, error=error)
