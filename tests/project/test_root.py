import pytest

from agentsmd.errors import ProjectRootError
from agentsmd.project.root import project_root
from tests.infrastructure import touch


class TestProjectRoot:

    def test_git_root(self, project):
        root = project(["src/deep/main.rs"])
        assert project_root(root / "src" / "deep") == root

    def test_start_at_file(self, project):
        root = project(["src/main.rs"])
        assert project_root(root / "src" / "main.rs") == root

    @pytest.mark.parametrize("vcs", [".hg", ".svn"])
    def test_other_vcs(self, tmp_path, vcs):
        (tmp_path / vcs).mkdir()
        (tmp_path / "pkg").mkdir()
        assert project_root(tmp_path / "pkg") == tmp_path

    def test_nearest_vcs_wins(self, project):
        root = project(["vendor/lib/x.c"])
        (root / "vendor" / "lib" / ".git").mkdir()
        assert project_root(root / "vendor" / "lib") == root / "vendor" / "lib"

    def test_vcs_beats_nearer_fallback(self, project):
        root = project(["crates/core/Cargo.lock"])
        assert project_root(root / "crates" / "core") == root

    def test_cargo_lock_fallback(self, tmp_path):
        touch(tmp_path / "Cargo.lock")
        (tmp_path / "src").mkdir()
        assert project_root(tmp_path / "src") == tmp_path

    def test_git_file_is_not_a_vcs_dir(self, tmp_path):
        touch(tmp_path / ".git")
        touch(tmp_path / "Cargo.lock")
        assert project_root(tmp_path) == tmp_path

    def test_not_found(self, tmp_path, monkeypatch):
        monkeypatch.setattr("agentsmd.project.root.FALLBACK_MARKERS", ())
        monkeypatch.setattr("agentsmd.project.root.VCS_DIRS", ())
        with pytest.raises(ProjectRootError, match="project root not found"):
            project_root(tmp_path)
