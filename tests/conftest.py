"""
Root conftest.py - test-suite wide fixtures.

Provides a factory for throwaway workspaces whose libraries are compiled by
tests/fixtures/fake_compiler.py, a stand-in honouring the compiler contract
(``-p CONFIG --outDir OUT [--sourceMap] [--watch]``, exit code 0 on success).
"""

import json
import sys
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"
FAKE_COMPILER = FIXTURES_DIR / "fake_compiler.py"


def write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))


def read_json(path: Path):
    return json.loads(Path(path).read_text())


class WorkspaceFactory:
    """Builds a workspace on disk, one project at a time."""

    def __init__(self, root: Path, compiler: list[str]):
        self.root = root
        self.compiler = compiler
        self.projects: dict = {}

    def add_library(
        self,
        name: str,
        version: str = "0.0.1",
        deps: tuple = (),
        imports: tuple = (),
        buildable: bool = True,
        project_type: str = "library",
        exit_code: int = 0,
        package_name: str | None = "default",
        options: dict | None = None,
    ) -> "WorkspaceFactory":
        """
        Add a project under libs/<name>.

        Args:
            deps: Project names declared as implicitDependencies
            imports: Project names imported from src/index.ts
            buildable: Whether the project declares a build target
            exit_code: Exit code the fake compiler returns for this project
            package_name: Name written to package.json; None skips package.json
            options: Extra build options
        """
        root = f"libs/{name}"
        project_dir = self.root / root

        if package_name is not None:
            write_json(project_dir / "package.json", {
                "name": f"@proj/{name}" if package_name == "default" else package_name,
                "version": version,
            })

        ts_config = {
            "compilerOptions": {
                "paths": {f"@proj/{dep}": [f"libs/{dep}/src/index.ts"] for dep in (*deps, *imports)}
            },
            "files": ["src/index.ts"],
        }
        if exit_code:
            ts_config["fakeCompiler"] = {"exitCode": exit_code}
        write_json(project_dir / "tsconfig.lib.json", ts_config)

        source = "".join(f"import {{ value }} from '@proj/{dep}';\n" for dep in imports)
        (project_dir / "src").mkdir(parents=True, exist_ok=True)
        (project_dir / "src" / "index.ts").write_text(source + "export const value = 1;\n")

        project = {"root": root, "projectType": project_type, "prefix": "proj"}
        if deps:
            project["implicitDependencies"] = list(deps)
        if buildable:
            project["targets"] = {
                "build": {
                    "builder": "libforge:package",
                    "options": {
                        "tsConfig": f"{root}/tsconfig.lib.json",
                        "main": f"{root}/src/index.ts",
                        "packageJson": f"{root}/package.json",
                        "outputPath": f"dist/{root}",
                        "compiler": self.compiler,
                        **(options or {}),
                    },
                }
            }
        self.projects[name] = project
        return self

    def write(self) -> Path:
        write_json(self.root / "workspace.json", {"npmScope": "proj", "projects": self.projects})
        return self.root


@pytest.fixture
def compiler_command():
    """Command line of the stand-in compiler"""
    return [sys.executable, str(FAKE_COMPILER)]


@pytest.fixture
def workspace_factory(tmp_path, compiler_command):
    """Factory for a workspace rooted at tmp_path"""
    return WorkspaceFactory(tmp_path, compiler_command)
