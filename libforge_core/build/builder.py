"""
Package builder: the build pipeline of one library
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable

from libforge_core.build.assets import collect_assets, copy_assets
from libforge_core.build.compiler import CompilerInvoker
from libforge_core.build.freshness import check_built
from libforge_core.build.manifest import patch_manifest, write_output_manifest
from libforge_core.build.resolver import resolve_dependencies
from libforge_core.build.scheduler import (
    BuildScheduler,
    TargetScheduler,
    check_for_cycles,
    validate_options,
)
from libforge_core.config import BuildOptions
from libforge_core.constants import DEFAULT_TS_CONFIG, PACKAGE_BUILDER, PACKAGE_JSON
from libforge_core.ingest.workspace import Workspace
from libforge_core.model.project import BuildResult, DependentLibraryNode, ProjectNode
from libforge_core.utils import resolve_package_name

logger = logging.getLogger(__name__)


@dataclass
class BuilderContext:
    """Everything a builder needs besides its options."""
    workspace: Workspace
    project: str
    target_scheduler: TargetScheduler
    compiler: CompilerInvoker


@dataclass
class BuildState:
    """Bundle handed from one pipeline stage to the next."""
    options: BuildOptions
    context: BuilderContext
    node: ProjectNode
    dependencies: list[DependentLibraryNode] = field(default_factory=list)

    @property
    def root(self) -> Path:
        return self.context.workspace.root


Stage = Callable[[BuildState], BuildResult]


def normalize_options(options: BuildOptions, node: ProjectNode, workspace: Workspace) -> BuildOptions:
    """Fill in path defaults derived from the project root."""
    return replace(
        options,
        ts_config=options.ts_config or f"{node.root}/{DEFAULT_TS_CONFIG}",
        package_json=options.package_json or f"{node.root}/{PACKAGE_JSON}",
        output_path=options.output_path or workspace.default_output_path(node),
    )


def _validate(state: BuildState) -> BuildResult:
    return validate_options(state.options)


def _check_cycles(state: BuildState) -> BuildResult:
    if not state.options.with_deps:
        return BuildResult.ok()
    return check_for_cycles(state.context.workspace.graph, state.node.name)


def _build_dependencies(state: BuildState) -> BuildResult:
    scheduler = BuildScheduler(state.context.target_scheduler)
    return scheduler.maybe_build_dependencies(state.options, state.dependencies)


def _check_dependencies_built(state: BuildState) -> BuildResult:
    return check_built(
        state.node.name,
        state.dependencies,
        state.root,
        state.context.workspace.dist_root,
    )


def _compile(state: BuildState) -> BuildResult:
    return state.context.compiler.compile(state.options, state.node.root, state.dependencies)


def _update_manifest(state: BuildState) -> BuildResult:
    if state.options.watch:
        return BuildResult.ok()

    output_manifest = state.root / state.options.output_path / PACKAGE_JSON
    if (state.root / state.options.package_json).is_file():
        output_manifest = write_output_manifest(state.options, state.root)
    elif not output_manifest.is_file():
        message = (
            f"Cannot write {PACKAGE_JSON} for {state.node.name}: "
            f"{state.options.package_json} does not exist and the compiler did not emit one"
        )
        logger.error(message)
        return BuildResult.failed(message)

    patch_manifest(output_manifest, state.dependencies, state.root)
    return BuildResult.ok()


def _copy_assets(state: BuildState) -> BuildResult:
    if state.options.watch:
        return BuildResult.ok()
    files = collect_assets(state.options.assets, state.root, state.options.output_path)
    return copy_assets(files)


PIPELINE: list[Stage] = [
    _validate,
    _check_cycles,
    _build_dependencies,
    _check_dependencies_built,
    _compile,
    _update_manifest,
    _copy_assets,
]


def run_package_builder(options: BuildOptions, context: BuilderContext) -> BuildResult:
    """
    Build one library.

    Executes the build pipeline, stopping at the first failing stage:
    1. Validate options (--with-deps and --watch are exclusive)
    2. Reject dependency cycles (with --with-deps)
    3. Build library dependencies first (with --with-deps)
    4. Verify every library dependency has been built
    5. Compile against the dependencies' build output
    6. Write the output package.json and pin dependency versions
    7. Copy assets

    Args:
        options: Build options of the project
        context: Workspace, scheduler and compiler for this build

    Returns:
        BuildResult with the output path on success
    """
    workspace = context.workspace
    node = workspace.graph.get_node(context.project)
    state = BuildState(
        options=normalize_options(options, node, workspace),
        context=context,
        node=node,
        dependencies=resolve_dependencies(
            workspace.graph, node.name, workspace.root, workspace.dist_root
        ),
    )

    for stage in PIPELINE:
        result = stage(state)
        if not result.success:
            return result

    if not state.options.watch:
        logger.info("Built %s", resolve_package_name(workspace.root, node))
    return BuildResult.ok(output_path=state.options.output_path)


BUILDERS: dict[str, Callable[[BuildOptions, BuilderContext], BuildResult]] = {
    PACKAGE_BUILDER: run_package_builder,
}
