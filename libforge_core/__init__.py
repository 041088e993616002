"""
libforge core - dependency-ordered builds for monorepo libraries

Resolves a project's buildable library dependencies from the workspace graph,
optionally builds them first, compiles the project against their build output
and pins their versions in the published package.json.
"""

from libforge_core.config import BuildOptions, AssetGlob
from libforge_core.ingest.workspace import Workspace, load_workspace
from libforge_core.build.session import BuildSession
from libforge_core.model.project import BuildResult

__version__ = "0.1.0"

__all__ = [
    "BuildOptions",
    "AssetGlob",
    "Workspace",
    "load_workspace",
    "BuildSession",
    "BuildResult",
]
