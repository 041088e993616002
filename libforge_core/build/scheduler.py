"""
Dependency build scheduling
"""

import logging
from enum import Enum
from typing import Any, Optional, Protocol

from libforge_core.config import BuildOptions
from libforge_core.constants import BUILD_TARGET
from libforge_core.model.graph import ProjectGraph
from libforge_core.model.project import BuildResult, DependentLibraryNode

logger = logging.getLogger(__name__)


class ScheduledBuild(Protocol):
    """Handle of a scheduled target build."""

    def result(self) -> BuildResult:
        """Wait for the build to finish and return its result."""
        ...


class TargetScheduler(Protocol):
    """Runs another project's target, e.g. a dependency's build."""

    def schedule_target(
        self,
        project: str,
        target: str = BUILD_TARGET,
        overrides: Optional[dict[str, Any]] = None,
    ) -> ScheduledBuild:
        ...


class DependencyBuildState(str, Enum):
    """Progress of one dependency build within a scheduling run."""
    PENDING = "pending"
    BUILDING = "building"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def validate_options(options: BuildOptions) -> BuildResult:
    """Reject option combinations that cannot be built."""
    if options.with_deps and options.watch:
        message = "Using --with-deps in combination with --watch is not supported"
        logger.error(message)
        return BuildResult.failed(message)
    return BuildResult.ok()


def check_for_cycles(graph: ProjectGraph, project: str) -> BuildResult:
    """Fail if building dependencies of ``project`` would recurse forever."""
    cycle = graph.find_cycle(project, buildable_only=True)
    if cycle:
        message = f"Cannot build dependencies of {project}: circular dependency {' -> '.join(cycle)}"
        logger.error(message)
        return BuildResult.failed(message)
    return BuildResult.ok()


class BuildScheduler:
    """
    Builds a target's library dependencies one at a time, in resolver order.

    Each dependency build is awaited before the next one starts so that no two
    builds write into the dist tree at once. The first failure stops the run;
    the dependencies after it are never attempted and stay PENDING.
    """

    def __init__(self, target_scheduler: TargetScheduler):
        self.target_scheduler = target_scheduler
        self.states: dict[str, DependencyBuildState] = {}

    def maybe_build_dependencies(
        self,
        options: BuildOptions,
        dependencies: list[DependentLibraryNode],
    ) -> BuildResult:
        """
        Build all dependencies first when ``with_deps`` is set.

        Args:
            options: Options of the project being built; ``with_deps`` is
                passed through unchanged so dependency builds recurse
            dependencies: Resolved library dependencies, in build order

        Returns:
            BuildResult, failed on the first failing dependency build
        """
        if not options.with_deps:
            return BuildResult.ok()

        validation = validate_options(options)
        if not validation.success:
            return validation

        self.states = {dependency.node.name: DependencyBuildState.PENDING for dependency in dependencies}

        for dependency in dependencies:
            name = dependency.node.name
            self.states[name] = DependencyBuildState.BUILDING
            logger.info("Building dependency %s of %s", dependency.scope, options.project)

            build_run = self.target_scheduler.schedule_target(
                name,
                BUILD_TARGET,
                {"withDeps": options.with_deps},
            )
            result = build_run.result()

            if not result.success:
                self.states[name] = DependencyBuildState.FAILED
                message = f"Dependency {dependency.scope} of {options.project} failed to build"
                logger.error(message)
                return BuildResult.failed(result.error or message)

            self.states[name] = DependencyBuildState.SUCCEEDED

        return BuildResult.ok()
