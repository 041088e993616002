"""
Workspace ingestion: project graph reading and import-derived dependencies
"""

from libforge_core.ingest.workspace import Workspace, load_workspace
from libforge_core.ingest.deps import infer_dependencies

__all__ = [
    "Workspace",
    "load_workspace",
    "infer_dependencies",
]
