"""Tests for robackup.utils.profiles.ProfileStore."""
from __future__ import annotations

import json

import pytest

from robackup.models.job import JobConfiguration
from robackup.utils.profiles import InvalidProfileName, ProfileError, ProfileStore


def _sample() -> JobConfiguration:
    return JobConfiguration(
        source_path=r"C:\Users\me\Documents",
        destination_path=r"E:\Backup\Docs",
        options={"/MIR": True, "/R": 3, "/COPY": "DAT", "/LOG": r"C:\Logs\daily.log"},
        text_options={"/XF": "*.tmp\nThumbs.db", "/XD": "node_modules", "/IF": ""},
        simulate_only=False,
    )


def test_save_then_load_round_trips(tmp_path) -> None:
    store = ProfileStore(tmp_path / "profiles")
    config = _sample()

    store.save("daily", config)
    loaded = store.load("daily")

    assert loaded == config
    assert list(loaded.options) == list(config.options)


def test_delete_then_load_returns_none(tmp_path) -> None:
    store = ProfileStore(tmp_path)
    store.save("daily", _sample())

    assert store.delete("daily") is True
    assert store.load("daily") is None


def test_missing_profile(tmp_path) -> None:
    store = ProfileStore(tmp_path)
    assert store.load("nope") is None
    assert store.delete("nope") is False


def test_names_lists_saved_profiles(tmp_path) -> None:
    store = ProfileStore(tmp_path / "p")
    assert store.names() == []
    store.save("weekly", JobConfiguration())
    store.save("daily", JobConfiguration())
    (tmp_path / "p" / "notes.txt").write_text("ignored")
    assert store.names() == ["daily", "weekly"]


def test_saving_same_name_overwrites(tmp_path) -> None:
    store = ProfileStore(tmp_path)
    store.save("daily", _sample())
    store.save("daily", JobConfiguration(source_path="X:\\"))
    assert store.load("daily").source_path == "X:\\"
    assert store.names() == ["daily"]


def test_file_format_uses_profile_record_keys(tmp_path) -> None:
    store = ProfileStore(tmp_path)
    path = store.save("daily", _sample())
    data = json.loads(path.read_text(encoding="utf-8"))
    assert set(data) == {"sourcePath", "destPath", "options", "textOptions", "simulationMode"}
    assert data["simulationMode"] is False


def test_partial_record_gets_defaults(tmp_path) -> None:
    (tmp_path / "old.json").write_text(json.dumps({"sourcePath": "C:\\A"}), encoding="utf-8")
    loaded = ProfileStore(tmp_path).load("old")
    assert loaded == JobConfiguration(source_path="C:\\A")
    assert loaded.simulate_only is True


@pytest.mark.parametrize("name", ["", "   ", "a/b", "a\\b", "c:d", "what?", "x*", "<x>", 'q"', "p|q", ".."])
def test_reserved_names_are_rejected(tmp_path, name: str) -> None:
    store = ProfileStore(tmp_path)
    with pytest.raises(InvalidProfileName):
        store.save(name, JobConfiguration())


def test_malformed_file_raises_profile_error(tmp_path) -> None:
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ProfileError):
        ProfileStore(tmp_path).load("broken")


def test_non_object_record_raises_profile_error(tmp_path) -> None:
    (tmp_path / "list.json").write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ProfileError):
        ProfileStore(tmp_path).load("list")


@pytest.mark.parametrize("name", ["", "a/b", "..", "what?"])
def test_unsaveable_names_load_and_delete_as_missing(tmp_path, name: str) -> None:
    store = ProfileStore(tmp_path)
    assert store.load(name) is None
    assert store.delete(name) is False


@pytest.mark.parametrize(
    "record",
    [
        {"sourcePath": 123},
        {"destPath": ["D:\\"]},
        {"simulationMode": "yes"},
        {"options": ["/E"]},
        {"options": {"/R": [3]}},
        {"options": {"/R": 2.5}},
        {"textOptions": {"/XF": 5}},
        {"textOptions": "*.tmp"},
    ],
)
def test_wrongly_typed_record_raises_profile_error(tmp_path, record: dict) -> None:
    (tmp_path / "bad.json").write_text(json.dumps(record), encoding="utf-8")
    with pytest.raises(ProfileError):
        ProfileStore(tmp_path).load("bad")
