"""
Build sessions: run project build targets in-process
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from libforge_core.build.builder import BUILDERS, BuilderContext
from libforge_core.build.compiler import CompilerInvoker
from libforge_core.config import BuildOptions
from libforge_core.constants import BUILD_TARGET, WORKSPACE_FILE
from libforge_core.exceptions import ConfigurationError
from libforge_core.ingest.workspace import load_workspace
from libforge_core.model.project import BuildResult

logger = logging.getLogger(__name__)


class PendingBuild:
    """Scheduled build that runs when its result is first requested."""

    def __init__(self, run: Callable[[], BuildResult]):
        self._run = run
        self._result: Optional[BuildResult] = None

    def result(self) -> BuildResult:
        if self._result is None:
            self._result = self._run()
        return self._result


class BuildSession:
    """
    One host-level run of the orchestrator.

    The session schedules target builds for the package builder, owns one
    CompilerInvoker per project (so a project never has two compilers running)
    and remembers which projects already built successfully, so a library
    shared by several dependents is built once per session.

    Use as a context manager so watch-mode compilers are stopped on exit.
    """

    def __init__(self, workspace_root: Path | str, workspace_file: str = WORKSPACE_FILE):
        self.workspace_root = Path(workspace_root).resolve()
        self.workspace_file = workspace_file
        self.compilers: dict[str, CompilerInvoker] = {}
        self.completed: dict[str, BuildResult] = {}

    def build(self, project: str, overrides: Optional[dict[str, Any]] = None) -> BuildResult:
        """Build a project's build target, always running it."""
        return self.run_target(project, BUILD_TARGET, overrides)

    def schedule_target(
        self,
        project: str,
        target: str = BUILD_TARGET,
        overrides: Optional[dict[str, Any]] = None,
    ) -> PendingBuild:
        """Schedule a dependency build, reusing a successful build from this session."""
        def run() -> BuildResult:
            if project in self.completed:
                logger.info("Library %s is already built", project)
                return self.completed[project]
            return self.run_target(project, target, overrides)
        return PendingBuild(run)

    def run_target(self, project: str, target: str, overrides: Optional[dict[str, Any]] = None) -> BuildResult:
        """
        Run a target of a project.

        The workspace is loaded fresh for every run.

        Raises:
            ConfigurationError: If the project or target is not configured
        """
        workspace = load_workspace(self.workspace_root, self.workspace_file)
        node = workspace.graph.get_node(project)

        if target != BUILD_TARGET or not node.has_build_target:
            raise ConfigurationError(f"Project '{project}' has no '{target}' target")

        builder = BUILDERS.get(node.build_target.builder)
        if builder is None:
            message = f"Project '{project}' uses unknown builder '{node.build_target.builder}'"
            logger.error(message)
            return BuildResult.failed(message)

        options = BuildOptions.from_dict(project, {**node.build_target.options, **(overrides or {})})
        compiler = self.compilers.setdefault(project, CompilerInvoker(self.workspace_root))
        context = BuilderContext(
            workspace=workspace,
            project=project,
            target_scheduler=self,
            compiler=compiler,
        )

        result = builder(options, context)
        if result.success and not options.watch:
            self.completed[project] = result
        return result

    def running_compilers(self) -> list[CompilerInvoker]:
        return [compiler for compiler in self.compilers.values() if compiler.is_running]

    @property
    def watching(self) -> bool:
        """Whether a watch-mode compiler is attached, even if it already exited."""
        return any(compiler.process is not None for compiler in self.compilers.values())

    def wait(self) -> None:
        """Block until every watch-mode compiler has exited."""
        for compiler in self.compilers.values():
            compiler.wait()

    def close(self) -> None:
        """Stop every compiler still running in this session."""
        for compiler in self.compilers.values():
            compiler.terminate()

    def __enter__(self) -> "BuildSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
