"""Shared fixtures: an isolated home/config/temp root and a fake tmux."""

import pytest

from pr import Context, FavouritesStore, LiveSession


class FakeBackend:
    """Records tmux calls instead of running tmux."""

    def __init__(self, sessions=None, current_path="/"):
        self.sessions = list(sessions or [])
        self.created = []
        self.switched = []
        self.current_path = current_path

    def list_sessions(self):
        return list(self.sessions)

    def create_session(self, name, path, cmd="", env=None):
        self.created.append((name, path, cmd, dict(env or {})))
        self.sessions.append(LiveSession(name=name, path=path))

    def switch_to(self, name):
        self.switched.append(name)

    def current_session_path(self):
        return self.current_path


@pytest.fixture
def ctx(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    temp_root = tmp_path / "tmp"
    temp_root.mkdir()
    return Context(
        home=home,
        config_path=tmp_path / "config" / "pr.json",
        temp_root=str(temp_root),
        editor="vi",
    )


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def favourites(ctx):
    return FavouritesStore(ctx.config_path, ctx.temp_root)
