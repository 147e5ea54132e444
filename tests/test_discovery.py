from __future__ import annotations

import os
from pathlib import Path

import pytest

from conftest import make_files
from subextract import discovery as discovery_mod
from subextract.discovery import PathDiscoverer
from subextract.errors import DiscoveryError, RootPathError, UnsupportedInputError
from subextract.work_queue import WorkQueue


def test_single_qualifying_file_is_emitted_once(tmp_path: Path, reporter) -> None:
    make_files(tmp_path, "movie.mkv")
    found = list(PathDiscoverer(reporter=reporter).iter_candidates(tmp_path / "movie.mkv"))
    assert found == [tmp_path / "movie.mkv"]


def test_single_non_qualifying_file_is_rejected(tmp_path: Path, reporter) -> None:
    make_files(tmp_path, "notes.txt")
    with pytest.raises(UnsupportedInputError):
        list(PathDiscoverer(reporter=reporter).iter_candidates(tmp_path / "notes.txt"))


def test_missing_root_fails_before_emitting(tmp_path: Path, reporter) -> None:
    with pytest.raises(RootPathError) as exc_info:
        list(PathDiscoverer(reporter=reporter).iter_candidates(tmp_path / "nope"))
    assert isinstance(exc_info.value.cause, FileNotFoundError)


def test_directory_walk_filters_by_suffix(tmp_path: Path, reporter) -> None:
    make_files(tmp_path, "a.mkv", "b.vtt", "c.txt", "sub/d.mkv", "sub/deeper/e.mkv",
               "sub/deeper/f.MKV", "sub/g.mkv.part")
    found = list(PathDiscoverer(reporter=reporter).iter_candidates(tmp_path))
    assert sorted(p.relative_to(tmp_path).as_posix() for p in found) == [
        "a.mkv", "sub/d.mkv", "sub/deeper/e.mkv",
    ]


def test_directory_with_no_candidates_yields_nothing(tmp_path: Path, reporter) -> None:
    make_files(tmp_path, "c.txt")
    assert list(PathDiscoverer(reporter=reporter).iter_candidates(tmp_path)) == []


def test_custom_input_suffix(tmp_path: Path, reporter) -> None:
    make_files(tmp_path, "a.mkv", "b.mp4")
    found = list(PathDiscoverer(".mp4", reporter=reporter).iter_candidates(tmp_path))
    assert [p.name for p in found] == ["b.mp4"]


def test_discover_into_enqueues_every_candidate(tmp_path: Path, reporter) -> None:
    make_files(tmp_path, "a.mkv", "b.mkv", "x/c.mkv")
    q = WorkQueue(capacity=10)
    count = PathDiscoverer(reporter=reporter).discover_into(tmp_path, q)
    q.close()
    names = []
    while True:
        item = q.get()
        if item is None:
            break
        names.append(item.path.name)
    assert count == 3
    assert sorted(names) == ["a.mkv", "b.mkv", "c.mkv"]


def _walk_with_error(root: Path):
    def fake_walk(top, onerror=None):
        yield str(root), ["bad", "good"], ["a.mkv"]
        onerror(PermissionError(13, "Permission denied", str(root / "bad")))
        yield str(root / "good"), [], ["b.mkv"]

    return fake_walk


def test_walk_error_aborts_discovery_by_default(tmp_path: Path, reporter, monkeypatch) -> None:
    monkeypatch.setattr(discovery_mod.os, "walk", _walk_with_error(tmp_path))
    found = []
    with pytest.raises(DiscoveryError):
        for p in PathDiscoverer(reporter=reporter).iter_candidates(tmp_path):
            found.append(p.name)
    assert found == ["a.mkv"]
    assert any("Permission denied" in e for e in reporter.errors)


def test_walk_error_skip_policy_continues(tmp_path: Path, reporter, monkeypatch) -> None:
    monkeypatch.setattr(discovery_mod.os, "walk", _walk_with_error(tmp_path))
    discoverer = PathDiscoverer(reporter=reporter, walk_errors="skip")
    found = [p.name for p in discoverer.iter_candidates(tmp_path)]
    assert found == ["a.mkv", "b.mkv"]
    assert len(reporter.errors) == 1


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlinked_directories_are_not_followed(tmp_path: Path, reporter) -> None:
    make_files(tmp_path, "real/a.mkv")
    (tmp_path / "root").mkdir()
    os.symlink(tmp_path / "real", tmp_path / "root" / "link", target_is_directory=True)
    assert list(PathDiscoverer(reporter=reporter).iter_candidates(tmp_path / "root")) == []
