"""
Build orchestration: dependency resolution, scheduling, compilation and packaging
"""

from libforge_core.build.resolver import resolve_dependencies
from libforge_core.build.freshness import check_built
from libforge_core.build.scheduler import BuildScheduler, DependencyBuildState
from libforge_core.build.compiler import CompilerInvoker
from libforge_core.build.manifest import patch_manifest
from libforge_core.build.builder import run_package_builder
from libforge_core.build.session import BuildSession

__all__ = [
    "resolve_dependencies",
    "check_built",
    "BuildScheduler",
    "DependencyBuildState",
    "CompilerInvoker",
    "patch_manifest",
    "run_package_builder",
    "BuildSession",
]
