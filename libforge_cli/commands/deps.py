"""
Deps command - Show the libraries a project needs built first
"""

from pathlib import Path

import click

from libforge_core.build.freshness import is_built
from libforge_core.build.resolver import resolve_dependencies
from libforge_core.exceptions import LibforgeError
from libforge_core.ingest.workspace import load_workspace
from libforge_cli.utils.errors import ConfigError
from libforge_cli.utils.output import console, print_info, print_table


@click.command()
@click.argument('project')
@click.option(
    '--workspace', '-w',
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
    default='.',
    help='Workspace root containing workspace.json (default: current directory)'
)
def deps(project: str, workspace: str):
    """
    List the buildable library dependencies of PROJECT.

    \b
    Shows each library's package name, output path and whether its build
    output is present.

    \b
    Examples:
      libforge deps mylib
      libforge deps mylib -w ../workspace
    """
    try:
        loaded = load_workspace(Path(workspace))
        dependencies = resolve_dependencies(loaded.graph, project, loaded.root, loaded.dist_root)
        direct = loaded.graph.get_dependencies(project)
    except LibforgeError as e:
        raise ConfigError(str(e))

    if not dependencies:
        print_info(f"{project} has no buildable library dependencies")
        return

    rows = [
        {
            "Library": dependency.scope,
            "Project": dependency.node.name,
            "Output path": dependency.output_path,
            "Built": "yes" if is_built(dependency, loaded.root, loaded.dist_root) else "no",
        }
        for dependency in dependencies
    ]
    print_table(rows, ["Library", "Project", "Output path", "Built"], title=f"Dependencies of {project}")

    skipped = len(direct) - len(dependencies)
    if skipped:
        console.print(f"[dim]{skipped} dependencies without a build step not shown[/dim]")
