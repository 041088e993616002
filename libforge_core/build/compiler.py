"""
Compiler process invocation and supervision
"""

import copy
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Any, Optional

import psutil

from libforge_core.config import BuildOptions
from libforge_core.constants import TERMINATE_TIMEOUT, TMP_CONFIG_NAME
from libforge_core.model.project import BuildResult, DependentLibraryNode
from libforge_core.utils import read_json_file, write_json_file

logger = logging.getLogger(__name__)


def rewrite_module_paths(config: dict[str, Any], dependencies: list[DependentLibraryNode]) -> dict[str, Any]:
    """
    Point each dependency's module path at its build output.

    Returns a copy of the compiler config where ``compilerOptions.paths[scope]``
    starts with the dependency's output path, so the compiler resolves the
    built library instead of its sources. ``config`` is left untouched.
    """
    rewritten = copy.deepcopy(config)
    compiler_options = rewritten.setdefault("compilerOptions", {})
    paths = compiler_options.setdefault("paths", {})

    for dependency in dependencies:
        paths[dependency.scope] = [dependency.output_path, *paths.get(dependency.scope, [])]

    return rewritten


class CompilerInvoker:
    """
    Runs the compiler for one project and owns its process handle.

    At most one compiler process runs per invoker: starting a compile first
    terminates the process left over from the previous one (e.g. a watcher).
    """

    def __init__(self, workspace_root: Path | str):
        self.workspace_root = Path(workspace_root)
        self.process: Optional[subprocess.Popen] = None
        self.tmp_config_path: Optional[Path] = None

    @property
    def is_running(self) -> bool:
        return self.process is not None and self.process.poll() is None

    def compile(
        self,
        options: BuildOptions,
        project_root: str,
        dependencies: list[DependentLibraryNode],
    ) -> BuildResult:
        """
        Compile a project.

        One-shot builds clear the output path, wait for the compiler and succeed
        on exit code 0. Watch builds succeed as soon as the compiler has started
        and leave it running.

        Args:
            options: Normalized build options of the project
            project_root: Project root, where the rewritten config is written
            dependencies: Library dependencies to resolve from their build output

        Returns:
            BuildResult
        """
        if self.process is not None:
            self.terminate()

        output_path = self.workspace_root / options.output_path
        if not options.watch:
            shutil.rmtree(output_path, ignore_errors=True)

        config_path = self.workspace_root / options.ts_config
        if dependencies:
            rewritten = rewrite_module_paths(read_json_file(config_path), dependencies)
            config_path = self.workspace_root / project_root / TMP_CONFIG_NAME
            write_json_file(config_path, rewritten)
            self.tmp_config_path = config_path

        args = [*options.compiler, "-p", str(config_path), "--outDir", str(output_path)]
        if options.source_map:
            args.append("--sourceMap")
        if options.watch:
            args.append("--watch")

        if options.watch:
            logger.info("Starting compiler in watch mode for library %s", options.project)
        else:
            logger.info("Compiling files for library %s...", options.project)
        logger.debug("Compiler command: %s", " ".join(args))

        try:
            self.process = subprocess.Popen(args, cwd=self.workspace_root)
        except OSError as e:
            self._cleanup_tmp_config()
            message = f"Could not compile files for library {options.project}: {e}"
            logger.error(message)
            return BuildResult.failed(message)

        if options.watch:
            return BuildResult.ok(output_path=options.output_path)

        exit_code = self.process.wait()
        self.process = None
        self._cleanup_tmp_config()

        if exit_code != 0:
            message = f"Could not compile files for library {options.project} (compiler exited with code {exit_code})"
            logger.error(message)
            return BuildResult.failed(message)

        logger.info("Done compiling files for library %s", options.project)
        return BuildResult.ok(output_path=options.output_path)

    def wait(self) -> Optional[int]:
        """Block until a running (watch) compiler exits; returns its exit code."""
        if self.process is None:
            return None
        exit_code = self.process.wait()
        self.process = None
        self._cleanup_tmp_config()
        return exit_code

    def terminate(self, timeout: float = TERMINATE_TIMEOUT) -> None:
        """
        Stop the compiler process and its children.

        Sends SIGTERM to the whole process tree, then SIGKILL to anything still
        alive after ``timeout`` seconds.
        """
        if self.process is None:
            return

        process, self.process = self.process, None
        logger.debug("Terminating compiler process %d", process.pid)

        try:
            parent = psutil.Process(process.pid)
            procs = parent.children(recursive=True) + [parent]
        except psutil.NoSuchProcess:
            procs = []

        for proc in procs:
            try:
                proc.terminate()
            except psutil.NoSuchProcess:
                continue

        _, alive = psutil.wait_procs(procs, timeout=timeout)
        for proc in alive:
            logger.warning("Compiler process %d did not stop, killing it", proc.pid)
            try:
                proc.kill()
            except psutil.NoSuchProcess:
                continue

        process.wait()
        self._cleanup_tmp_config()

    def _cleanup_tmp_config(self) -> None:
        if self.tmp_config_path is not None:
            self.tmp_config_path.unlink(missing_ok=True)
            self.tmp_config_path = None
