"""
Unit tests for workspace loading and import-derived dependencies
"""

import json

import pytest

from libforge_core.exceptions import ConfigurationError
from libforge_core.ingest.deps import extract_module_specifiers, infer_dependencies
from libforge_core.ingest.workspace import load_workspace
from libforge_core.model.project import DependencyType, ProjectType


class TestExtractModuleSpecifiers:
    """Tests for import scanning"""

    def test_import_forms(self):
        source = "\n".join([
            "import { A } from '@proj/a';",
            'import * as b from "@proj/b";',
            "export { c } from '@proj/c';",
            "import '@proj/side-effect';",
            "const d = require('@proj/d');",
            "const e = await import('@proj/e');",
        ])

        assert extract_module_specifiers(source) == [
            "@proj/a", "@proj/b", "@proj/c", "@proj/side-effect", "@proj/d", "@proj/e"
        ]

    def test_multiline_import(self):
        source = "import {\n  A,\n  B,\n} from '@proj/a';\n"
        assert extract_module_specifiers(source) == ["@proj/a"]


class TestLoadWorkspace:
    """Tests for load_workspace"""

    def test_loads_projects(self, workspace_factory):
        workspace_factory.add_library("child")
        workspace_factory.add_library("app", project_type="application", buildable=False)
        root = workspace_factory.write()

        workspace = load_workspace(root)

        assert workspace.root == root.resolve()
        assert workspace.dist_root == "dist"
        assert workspace.npm_scope == "proj"
        child = workspace.graph.get_node("child")
        assert child.type == ProjectType.LIBRARY
        assert child.root == "libs/child"
        assert child.prefix == "proj"
        assert child.build_target.builder == "libforge:package"
        assert child.build_target.output_path == "dist/libs/child"
        assert workspace.graph.get_node("app").build_target is None

    def test_implicit_dependencies_in_declared_order(self, workspace_factory):
        workspace_factory.add_library("b")
        workspace_factory.add_library("a")
        workspace_factory.add_library("parent", deps=("b", "a"))
        root = workspace_factory.write()

        edges = load_workspace(root).graph.get_dependencies("parent")

        assert [(edge.target, edge.type) for edge in edges] == [
            ("b", DependencyType.IMPLICIT),
            ("a", DependencyType.IMPLICIT),
        ]

    def test_import_derived_dependencies(self, workspace_factory):
        workspace_factory.add_library("child")
        workspace_factory.add_library("parent", imports=("child",))
        root = workspace_factory.write()

        edges = load_workspace(root).graph.get_dependencies("parent")

        assert [(edge.target, edge.type) for edge in edges] == [("child", DependencyType.STATIC)]

    def test_implicit_dependency_wins_over_import(self, workspace_factory):
        workspace_factory.add_library("child")
        workspace_factory.add_library("parent", deps=("child",), imports=("child",))
        root = workspace_factory.write()

        edges = load_workspace(root).graph.get_dependencies("parent")

        assert len(edges) == 1
        assert edges[0].type == DependencyType.IMPLICIT

    def test_deep_import_resolves_to_project(self, workspace_factory):
        workspace_factory.add_library("child")
        workspace_factory.add_library("parent")
        root = workspace_factory.write()
        (root / "libs/parent/src/util.ts").write_text("import { x } from '@proj/child/testing';\n")

        edges = load_workspace(root).graph.get_dependencies("parent")

        assert [edge.target for edge in edges] == ["child"]

    def test_node_modules_are_not_scanned(self, workspace_factory):
        workspace_factory.add_library("child")
        workspace_factory.add_library("parent")
        root = workspace_factory.write()
        vendored = root / "libs/parent/node_modules/pkg/index.js"
        vendored.parent.mkdir(parents=True)
        vendored.write_text("require('@proj/child');\n")

        assert load_workspace(root).graph.get_dependencies("parent") == []

    def test_architect_alias_and_dist_root(self, tmp_path):
        (tmp_path / "workspace.json").write_text(json.dumps({
            "distRoot": "build",
            "projects": {
                "lib": {
                    "root": "libs/lib/",
                    "prefix": "org",
                    "architect": {"build": {"builder": "libforge:package", "options": {}}},
                }
            },
        }))

        workspace = load_workspace(tmp_path)

        node = workspace.graph.get_node("lib")
        assert workspace.dist_root == "build"
        assert node.root == "libs/lib"
        assert node.has_build_target
        assert workspace.default_output_path(node) == "build/libs/lib"

    def test_missing_workspace_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            load_workspace(tmp_path)

    def test_invalid_json(self, tmp_path):
        (tmp_path / "workspace.json").write_text("{ not json")

        with pytest.raises(ConfigurationError, match="Failed to parse JSON"):
            load_workspace(tmp_path)

    def test_missing_projects(self, tmp_path):
        (tmp_path / "workspace.json").write_text("{}")

        with pytest.raises(ConfigurationError, match="projects"):
            load_workspace(tmp_path)

    def test_unknown_project_type(self, tmp_path):
        (tmp_path / "workspace.json").write_text(json.dumps({
            "projects": {"lib": {"root": "libs/lib", "projectType": "plugin"}}
        }))

        with pytest.raises(ConfigurationError, match="plugin"):
            load_workspace(tmp_path)

    def test_unknown_implicit_dependency(self, tmp_path):
        (tmp_path / "workspace.json").write_text(json.dumps({
            "projects": {"lib": {"root": "libs/lib", "implicitDependencies": ["ghost"]}}
        }))

        with pytest.raises(ConfigurationError, match="ghost"):
            load_workspace(tmp_path)

    def test_self_implicit_dependency(self, workspace_factory):
        root = workspace_factory.add_library("child", deps=("child",)).write()

        with pytest.raises(ConfigurationError, match="'child' lists itself"):
            load_workspace(root)


def test_infer_dependencies_ignores_self_imports(workspace_factory):
    workspace_factory.add_library("child")
    root = workspace_factory.write()
    (root / "libs/child/src/other.ts").write_text("import { value } from '@proj/child';\n")

    workspace = load_workspace(root)
    edges = infer_dependencies(
        workspace.graph.projects(), {"child": "@proj/child"}, root
    )

    assert edges == []
