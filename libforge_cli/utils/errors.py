"""
Error handling utilities for libforge CLI
"""

import sys
from typing import Optional

from rich.console import Console
from rich.panel import Panel

console = Console()


class CLIError(Exception):
    """Base exception for CLI errors"""

    def __init__(self, message: str, exit_code: int = 1):
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class ConfigError(CLIError):
    """Workspace or CLI configuration is invalid"""

    def __init__(self, message: str):
        super().__init__(message, exit_code=2)


class BuildError(CLIError):
    """Error during build process"""

    def __init__(self, message: str):
        super().__init__(message, exit_code=4)


def format_exception(exc: Exception, context: Optional[str] = None) -> str:
    """
    Format exception with context

    Args:
        exc: The exception to format
        context: Optional context about where error occurred

    Returns:
        Formatted error message
    """
    lines = []

    if context:
        lines.append(f"Error in {context}:")

    lines.append(f"{type(exc).__name__}: {str(exc)}")

    return "\n".join(lines)


def suggest_fix(exc: Exception) -> Optional[str]:
    """
    Suggest fixes for common errors

    Args:
        exc: The exception to analyze

    Returns:
        Suggestion string or None
    """
    error_msg = str(exc).lower()

    if "have not been built yet" in error_msg:
        return "Build the listed libraries first, or pass --with-deps to build them automatically."

    if "--with-deps in combination with --watch" in error_msg:
        return "Build the dependencies once with --with-deps, then start --watch separately."

    if "circular dependency" in error_msg:
        return "Remove the import or implicitDependencies entry that closes the cycle."

    if "cannot find project" in error_msg:
        return "Check the project name against the 'projects' in workspace.json."

    if "workspace.json" in error_msg and "does not exist" in error_msg:
        return "Run the command from the workspace root or pass --workspace."

    if "no such file or directory" in error_msg or "does not exist" in error_msg:
        return "Check that the path exists and is spelled correctly."

    if "invalid package name" in error_msg:
        return "Fix the 'name' field in the library's package.json."

    if "json" in error_msg:
        return "Check that the file is valid JSON."

    return None


def show_error(exc: Exception, context: Optional[str] = None, verbose: bool = False):
    """
    Display error message to user

    Args:
        exc: The exception to display
        context: Optional context about where error occurred
        verbose: Show full traceback if True
    """
    if verbose:
        console.print_exception()
    else:
        error_msg = format_exception(exc, context)
        console.print(Panel(error_msg, title="Error", border_style="red"))

        suggestion = suggest_fix(exc)
        if suggestion:
            console.print(f"\n💡 [cyan]Suggestion:[/cyan] {suggestion}")


def handle_cli_error(exc: Exception, verbose: bool = False):
    """
    Handle CLI error and exit with appropriate code

    Args:
        exc: The exception to handle
        verbose: Show full traceback if True
    """
    show_error(exc, verbose=verbose)
    if isinstance(exc, CLIError):
        sys.exit(exc.exit_code)
    sys.exit(1)
