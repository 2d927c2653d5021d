"""
Tests for the rendering pipeline: template resolution, combination and output.
"""

from pathlib import Path

import pytest

from agentsmd.engine import (
    compute_output_path,
    compute_root,
    render_combined,
    resolve_template_path,
    unified_diff,
    write_if_changed,
)
from agentsmd.errors import ProjectRootError, TemplateReadError
from agentsmd.templating import TemplateError
from tests.infrastructure import write


@pytest.fixture
def shared_dir(tmp_path_factory):
    return tmp_path_factory.mktemp("shared")


class TestRenderCombined:

    def test_shared_only(self, project, shared_dir):
        root = project(["Cargo.toml"])
        shared = write(shared_dir / "agents.md", '<!-- if exists("Cargo.toml") -->\nrust\n<!-- endif -->\n')

        assert render_combined(root, shared, {}) == "rust\n"

    def test_local_then_shared(self, project, shared_dir):
        root = project(contents={".agents.md": "local\n"})
        shared = write(shared_dir / "agents.md", "shared\n")

        assert render_combined(root, shared, {}) == "local\nshared\n"

    def test_same_file_rendered_once(self, project):
        root = project(contents={".agents.md": "only once\n"})
        assert render_combined(root, root / ".agents.md", {}) == "only once\n"

    def test_templates_see_environment(self, project, shared_dir):
        root = project(contents={".agents.md": "<!-- if env(CI) -->\nci\n<!-- endif -->\n"})
        shared = write(shared_dir / "agents.md", "<!-- if env(CI=) -->\nempty\n<!-- endif -->\n")

        assert render_combined(root, shared, {"CI": "1"}) == "ci\n"
        assert render_combined(root, shared, {"CI": ""}) == "empty\n"

    def test_missing_shared_template(self, project, shared_dir):
        root = project()
        with pytest.raises(TemplateReadError, match="template read error"):
            render_combined(root, shared_dir / "missing.md", {})

    def test_error_in_local_template(self, project, shared_dir):
        root = project(contents={".agents.md": "<!-- if env(A) -->\nno endif\n"})
        shared = write(shared_dir / "agents.md", "shared\n")

        with pytest.raises(TemplateError, match="unclosed"):
            render_combined(root, shared, {})


class TestResolveTemplatePath:

    def test_explicit(self):
        assert resolve_template_path(Path("x.md"), {"AGENTS_TEMPLATE": "y.md"}) == Path("x.md")

    def test_environment_variable(self):
        assert resolve_template_path(None, {"AGENTS_TEMPLATE": "y.md", "HOME": "/h"}) == Path("y.md")

    def test_empty_environment_variable_is_ignored(self):
        assert resolve_template_path(None, {"AGENTS_TEMPLATE": "", "HOME": "/h"}) == Path("/h") / ".agents.md"

    def test_home(self):
        assert resolve_template_path(None, {"HOME": "/h"}) == Path("/h") / ".agents.md"

    def test_userprofile(self):
        assert resolve_template_path(None, {"USERPROFILE": "/u"}) == Path("/u") / ".agents.md"

    def test_no_home(self):
        with pytest.raises(ProjectRootError, match="HOME is not set"):
            resolve_template_path(None, {})


class TestOutput:

    def test_compute_root(self, project, tmp_path_factory):
        root = project(["src/main.rs"])
        forced = tmp_path_factory.mktemp("forced")

        assert compute_root(root / "src") == root
        assert compute_root(root / "src", forced) == forced

    def test_compute_output_path(self, tmp_path):
        assert compute_output_path(tmp_path) == tmp_path / "AGENTS.md"
        assert compute_output_path(tmp_path, Path("docs/AI.md")) == tmp_path / "docs" / "AI.md"
        absolute = tmp_path / "elsewhere" / "OUT.md"
        assert compute_output_path(tmp_path / "root", absolute) == absolute

    def test_write_if_changed(self, tmp_path):
        target = tmp_path / "AGENTS.md"

        assert write_if_changed(target, "one\n") is True
        assert target.read_text(encoding="utf-8") == "one\n"
        assert write_if_changed(target, "one\n") is False
        assert write_if_changed(target, "two\n") is True
        assert target.read_text(encoding="utf-8") == "two\n"

    def test_unified_diff(self):
        diff = unified_diff("a\nb\n", "a\nc\n", Path("/p/AGENTS.md"))
        lines = diff.splitlines()

        assert lines[0] == "--- a/AGENTS.md"
        assert lines[1] == "+++ b/AGENTS.md"
        assert "-b" in lines
        assert "+c" in lines
        assert " a" in lines

    def test_unified_diff_without_final_newline(self):
        diff = unified_diff("", "new", Path("AGENTS.md"))
        assert diff.endswith("+new\n")

    def test_unified_diff_identical(self):
        assert unified_diff("same\n", "same\n", Path("AGENTS.md")) == ""
