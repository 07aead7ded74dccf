"""Tests for session models."""

from mingle.models import (
    ConfigSession,
    Session,
    SessionCatalog,
    SessionKind,
    SessionSource,
    normalize_session_name,
)


class TestNormalization:
    def test_dots_become_underscores(self):
        assert normalize_session_name("a.b.c") == "a_b_c"

    def test_name_without_dots_is_unchanged(self):
        assert normalize_session_name("/home/me/src") == "/home/me/src"

    def test_normalized_keeps_other_fields(self):
        session = Session(name="/src/site.io", path="/src/site.io", tmuxinator="web", source=SessionSource.CONFIG)
        normalized = session.normalized()

        assert normalized.name == "/src/site_io"
        assert normalized.path == "/src/site.io"
        assert normalized.tmuxinator == "web"
        assert session.name == "/src/site.io"


class TestConfigSession:
    def test_flat_entry(self):
        entry = ConfigSession(path="/a", tmuxinator="dev")
        assert not entry.is_worktree_root

        session = entry.to_session()
        assert session.name == "/a"
        assert session.path == "/a"
        assert session.tmuxinator == "dev"
        assert session.kind is None
        assert session.source == SessionSource.CONFIG

    def test_worktree_root_entry(self):
        entry = ConfigSession(path="/repo", type="worktreeroot", tmuxinator="dev")
        assert entry.is_worktree_root

        session = entry.worktree_session("/repo/feature")
        assert session.name == "/repo/feature"
        assert session.path == "/repo/feature"
        assert session.kind == SessionKind.WORKTREE_ROOT
        assert session.tmuxinator == "dev"

    def test_unknown_type_is_flat(self):
        assert not ConfigSession(path="/a", type="something").is_worktree_root

    def test_unknown_keys_ignored(self):
        entry = ConfigSession.model_validate({"path": "/a", "color": "blue"})
        assert entry.path == "/a"


class TestSessionCatalog:
    def test_get_and_names(self):
        catalog = SessionCatalog(sessions=[Session(name="one"), Session(name="two", path="/two")])

        assert catalog.names() == ["one", "two"]
        assert len(catalog) == 2
        assert catalog.get("two").path == "/two"
        assert catalog.get("three") is None

    def test_iteration_keeps_order(self):
        catalog = SessionCatalog(sessions=[Session(name="b"), Session(name="a")])
        assert [s.name for s in catalog] == ["b", "a"]
