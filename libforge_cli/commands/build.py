"""
Build command - Build a library and, optionally, its dependencies
"""

import time
from pathlib import Path
from typing import Optional

import click

from libforge_core.build.session import BuildSession
from libforge_core.config import BuildOverrides
from libforge_core.exceptions import LibforgeError
from libforge_cli.utils.config import load_cli_config
from libforge_cli.utils.errors import BuildError, ConfigError
from libforge_cli.utils.output import (
    configure_logging, format_duration, print_header, print_info, print_success, print_warning
)


@click.command()
@click.argument('project')
@click.option(
    '--workspace', '-w',
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
    help='Workspace root containing workspace.json (default: current directory)'
)
@click.option(
    '--with-deps',
    is_flag=True,
    help='Build all buildable library dependencies first'
)
@click.option(
    '--watch',
    is_flag=True,
    help='Keep the compiler running and rebuild on changes'
)
@click.option(
    '--source-map/--no-source-map',
    default=None,
    help='Emit source maps (default: the target option)'
)
@click.option(
    '--output-path', '-o',
    type=str,
    help='Output path relative to the workspace root (default: dist/<project root>)'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Verbose output'
)
def build(project: str, workspace: str, with_deps: bool, watch: bool, source_map: Optional[bool],
          output_path: str, verbose: bool):
    """
    Build a library of the workspace.

    \b
    Compiles PROJECT against the build output of the libraries it depends
    on and writes its package.json, pinning the versions of those libraries.

    \b
    Examples:
      libforge build mylib                  # Dependencies must be built already
      libforge build mylib --with-deps      # Build dependencies first
      libforge build mylib --watch          # Rebuild on changes
      libforge build mylib -w ../workspace  # Workspace in another directory
    """
    cli_config = load_cli_config()
    verbose = verbose or cli_config.get('build', 'verbose', False)
    configure_logging(verbose)

    workspace_root = Path(workspace or cli_config.get('build', 'workspace', '.')).resolve()
    overrides = BuildOverrides(
        watch=watch or None,
        source_map=source_map if source_map is not None else (cli_config.get('build', 'source_map', False) or None),
        with_deps=(with_deps or cli_config.get('build', 'with_deps', False)) or None,
        output_path=output_path,
    )

    print_header("libforge build")
    print_info(f"Workspace: {workspace_root}")
    print_info(f"Project: {project}")
    if overrides.with_deps:
        print_info("Building dependencies first (--with-deps)")

    start = time.time()
    with BuildSession(workspace_root) as session:
        try:
            result = session.build(project, overrides.to_options())
        except LibforgeError as e:
            raise ConfigError(str(e))

        if not result.success:
            raise BuildError(f"Build of {project} failed:\n{result.error or 'unknown error'}")

        if session.watching:
            print_info("Watching for file changes. Press Ctrl+C to stop.")
            try:
                session.wait()
            except KeyboardInterrupt:
                print_warning("Interrupted, stopping compiler...")
            return

    print_success(f"Built {project} in {format_duration(time.time() - start)}")
    print_info(f"Output written to: {result.output_path}")
