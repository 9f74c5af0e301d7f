"""Tests for finding/creating the live session and switching to it."""

import json
import os

import pytest

from pr import (
    FavouriteSession,
    FavouritesStore,
    FilesystemError,
    LiveSession,
    ResolutionError,
    Target,
    change_session,
    materialize,
)

from conftest import FakeBackend


def test_reuses_live_session_bound_to_same_directory(backend, favourites):
    sessions = [LiveSession("proj", "/work/proj")]
    name = materialize(Target("proj", "/work/proj"), sessions, backend, favourites)
    assert name == "proj"
    assert backend.created == []
    assert favourites.sessions[0].name == "proj"


def test_creates_missing_session_with_cmd_and_env(backend, favourites):
    target = Target("proj", "/work/proj", cmd="make dev", env={"STAGE": "dev"})
    name = materialize(target, [], backend, favourites)
    assert name == "proj"
    assert backend.created == [("proj", "/work/proj", "make dev", {"STAGE": "dev"})]
    assert favourites.find("proj").path == "/work/proj"


def test_name_collision_moves_to_next_suffix(backend, favourites):
    foreign = LiveSession("proj", "/other/proj", attached=True, window_count=3)
    name = materialize(Target("proj", "/work/proj"), [foreign], backend, favourites)
    assert name == "proj1"
    assert backend.created == [("proj1", "/work/proj", "", {})]
    assert foreign == LiveSession("proj", "/other/proj", attached=True, window_count=3)
    # history is keyed by the project name, not the suffixed session name
    assert [f.name for f in favourites] == ["proj"]


def test_suffixed_session_with_same_directory_is_reused(backend, favourites):
    sessions = [LiveSession("proj", "/other/proj"), LiveSession("proj1", "/work/proj")]
    name = materialize(Target("proj", "/work/proj"), sessions, backend, favourites)
    assert name == "proj1"
    assert backend.created == []


def test_reused_suffixed_session_is_remembered_under_its_own_name(ctx, backend):
    favourites = FavouritesStore(ctx.config_path, ctx.temp_root, [FavouriteSession("proj", "/a/proj")])
    sessions = [LiveSession("proj", "/a/proj"), LiveSession("proj1", "/b/proj")]
    name = materialize(Target("proj", "/b/proj"), sessions, backend, favourites)
    assert name == "proj1"
    assert favourites.sessions[0] == FavouriteSession("proj1", "/b/proj")
    assert favourites.find("proj").path == "/a/proj"


def test_all_suffixes_taken_is_fatal(backend, favourites):
    sessions = [LiveSession("proj" + s, f"/other/{i}") for i, s in enumerate(["", *"123456789"])]
    with pytest.raises(FilesystemError, match="proj, proj1..proj9"):
        materialize(Target("proj", "/work/proj"), sessions, backend, favourites)
    assert backend.created == []
    assert favourites.dirty is False


def test_tmux_unsafe_characters_are_replaced(backend, favourites):
    name = materialize(Target("my.site", "/work/my.site"), [], backend, favourites)
    assert name == "my_site"
    assert favourites.find("my.site") is not None


def test_change_session_saves_history_before_switching(ctx, favourites):
    seen = []

    class CheckingBackend(FakeBackend):
        def switch_to(self, name):
            seen.append(json.loads(ctx.config_path.read_text()))
            super().switch_to(name)

    (ctx.home / "proj").mkdir()
    backend = CheckingBackend()
    name = change_session(ctx, "proj", [], backend, favourites)

    assert name == "proj"
    assert backend.switched == ["proj"]
    assert seen[0]["sessions"][0]["name"] == "proj"
    assert seen[0]["sessions"][0]["path"] == str(ctx.home / "proj")


def test_change_session_to_existing_session_does_not_rewrite_history(ctx, backend):
    favourites = FavouritesStore(ctx.config_path, ctx.temp_root,
                                 [FavouriteSession("proj", "/work/proj")])
    sessions = [LiveSession("proj", "/work/proj")]
    change_session(ctx, "proj", sessions, backend, favourites)
    assert backend.switched == ["proj"]
    assert not ctx.config_path.exists()


def test_change_session_to_temp_project_is_not_remembered(ctx, backend, favourites):
    path = os.path.join(ctx.temp_root, "t0")
    change_session(ctx, path, [], backend, favourites)
    assert backend.created == [("t0", path, "", {})]
    assert backend.switched == ["t0"]
    assert len(favourites) == 0
    assert not ctx.config_path.exists()


def test_previous_session_end_to_end(ctx, backend, favourites):
    sessions = [
        LiveSession("A", "/a", last_activity=300),
        LiveSession("B", "/b", last_activity=200),
        LiveSession("C", "/c", last_activity=100),
    ]
    for token in ("-", "--", "---"):
        change_session(ctx, token, sessions, backend, favourites)
    assert backend.switched == ["B", "C", "C"]
    assert backend.created == []


def test_failed_resolution_changes_nothing(ctx, backend, favourites):
    with pytest.raises(ResolutionError):
        change_session(ctx, "missing", [], backend, favourites)
    assert backend.created == []
    assert backend.switched == []
    assert not ctx.config_path.exists()
