"""
Dependency inference: analyze imports to find edges between projects.
"""

import re
from pathlib import Path
from typing import Dict, List, Tuple

from libforge_core.constants import SOURCE_EXTENSIONS
from libforge_core.model.project import ProjectNode

# import x from '...', export * from '...', import '...', import('...'), require('...')
IMPORT_PATTERN = re.compile(
    r"""(?:\bfrom\s*|\bimport\s*\(?\s*|\brequire\s*\(\s*)['"]([^'"\n]+)['"]"""
)


def extract_module_specifiers(source: str) -> List[str]:
    """Return the module specifiers imported by a source file, in order."""
    return IMPORT_PATTERN.findall(source)


def iter_source_files(project_dir: Path) -> List[Path]:
    """Source files under a project directory, sorted, skipping node_modules."""
    if not project_dir.is_dir():
        return []
    return sorted(
        path for path in project_dir.rglob("*")
        if path.suffix in SOURCE_EXTENSIONS
        and path.is_file()
        and "node_modules" not in path.relative_to(project_dir).parts
    )


def infer_dependencies(
    projects: List[ProjectNode],
    package_names: Dict[str, str],
    workspace_root: Path,
) -> List[Tuple[str, str]]:
    """
    Infer dependency edges between projects by analyzing imports.

    Args:
        projects: Projects to scan
        package_names: Mapping of project name to its publish name
        workspace_root: Root of the workspace

    Returns:
        List of (dependent, dependency) tuples in discovery order, without duplicates
    """
    name_to_project = {package: project for project, package in package_names.items()}

    edges: List[Tuple[str, str]] = []
    seen = set()

    for node in projects:
        for file_path in iter_source_files(Path(workspace_root) / node.root):
            source = file_path.read_text(encoding="utf-8", errors="replace")
            for specifier in extract_module_specifiers(source):
                target = _resolve_specifier(specifier, name_to_project)
                if target and target != node.name and (node.name, target) not in seen:
                    seen.add((node.name, target))
                    edges.append((node.name, target))

    return edges


def _resolve_specifier(specifier: str, name_to_project: Dict[str, str]) -> str:
    """Resolve a module specifier (``@proj/lib`` or ``@proj/lib/deep``) to a project name."""
    if specifier in name_to_project:
        return name_to_project[specifier]

    for package, project in name_to_project.items():
        if specifier.startswith(package + "/"):
            return project

    return ""
