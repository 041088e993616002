"""
Unit tests for the dependency freshness check
"""

from libforge_core.build.freshness import check_built, is_built
from libforge_core.model.project import (
    BuildTarget, DependentLibraryNode, ProjectNode, ProjectType
)


def make_dependency(name):
    node = ProjectNode(
        name=name,
        type=ProjectType.LIBRARY,
        root=f"libs/{name}",
        prefix="proj",
        build_target=BuildTarget(builder="libforge:package"),
    )
    return DependentLibraryNode(scope=f"@proj/{name}", output_path=f"dist/libs/{name}", node=node)


def mark_built(root, name, dist_root="dist"):
    marker = root / dist_root / "libs" / name / "package.json"
    marker.parent.mkdir(parents=True, exist_ok=True)
    marker.write_text("{}")


class TestIsBuilt:
    """Tests for is_built"""

    def test_marker_missing(self, tmp_path):
        assert is_built(make_dependency("child"), tmp_path) is False

    def test_marker_present(self, tmp_path):
        mark_built(tmp_path, "child")
        assert is_built(make_dependency("child"), tmp_path) is True

    def test_output_directory_without_marker(self, tmp_path):
        (tmp_path / "dist/libs/child").mkdir(parents=True)
        (tmp_path / "dist/libs/child/index.js").write_text("")

        assert is_built(make_dependency("child"), tmp_path) is False

    def test_custom_dist_root(self, tmp_path):
        mark_built(tmp_path, "child", dist_root="out")

        assert is_built(make_dependency("child"), tmp_path) is False
        assert is_built(make_dependency("child"), tmp_path, dist_root="out") is True


class TestCheckBuilt:
    """Tests for check_built"""

    def test_no_dependencies(self, tmp_path):
        assert check_built("parent", [], tmp_path).success is True

    def test_all_built(self, tmp_path):
        mark_built(tmp_path, "a")
        mark_built(tmp_path, "b")

        result = check_built("parent", [make_dependency("a"), make_dependency("b")], tmp_path)

        assert result.success is True
        assert result.error is None

    def test_reports_every_missing_dependency(self, tmp_path):
        mark_built(tmp_path, "b")
        dependencies = [make_dependency(name) for name in ("a", "b", "c")]

        result = check_built("parent", dependencies, tmp_path)

        assert result.success is False
        assert result.error == (
            "Some of the library parent's dependencies have not been built yet. "
            "Please build these libraries before:\n"
            " - @proj/a\n"
            " - @proj/c"
        )

    def test_failure_is_logged(self, tmp_path, caplog):
        check_built("parent", [make_dependency("child")], tmp_path)

        assert "@proj/child" in caplog.text
