"""
libforge CLI - Main entry point
"""

import click

from libforge_cli import __version__
from libforge_cli.utils.errors import handle_cli_error


@click.group()
@click.version_option(version=__version__, prog_name="libforge")
@click.pass_context
def cli(ctx):
    """
    libforge - dependency-ordered builds for monorepo libraries

    \b
    Common Commands:
      build     - Build a library (optionally with its dependencies)
      deps      - Show the libraries a project needs built first

    \b
    Examples:
      libforge build mylib               # Build a library
      libforge build mylib --with-deps   # Build its dependencies first
      libforge deps mylib                # List buildable dependencies

    For more help on a specific command, use:
      libforge COMMAND --help
    """
    ctx.ensure_object(dict)


from libforge_cli.commands.build import build
from libforge_cli.commands.deps import deps

cli.add_command(build)
cli.add_command(deps)


def main():
    """Main entry point with error handling"""
    try:
        cli(obj={})
    except Exception as exc:
        handle_cli_error(exc, verbose=False)


if __name__ == "__main__":
    main()
