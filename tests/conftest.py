from pathlib import Path

import pytest

from tests.infrastructure import FakeProjectQuery, make_project


@pytest.fixture(autouse=True)
def _isolate_user_config(monkeypatch, tmp_path_factory):
    # keeps the developer's global git excludes and template out of the tests
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    monkeypatch.delenv("AGENTS_TEMPLATE", raising=False)


@pytest.fixture
def project(tmp_path: Path):
    """Factory: project(files=[...], contents={...}) -> root with a .git directory."""
    def _make(files=(), contents=None, *, vcs=True) -> Path:
        return make_project(tmp_path, files, contents, vcs=vcs)
    return _make


@pytest.fixture
def fake_query():
    """Factory for an in-memory ProjectQuery."""
    def _make(files=(), env=None) -> FakeProjectQuery:
        return FakeProjectQuery(files=list(files), env=dict(env or {}))
    return _make
