"""Tests for asset directory resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

import src.utils.paths as paths


@pytest.fixture(autouse=True)
def reset_cached_dir(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(paths, "_resources_dir", None)


class TestGetResourcesDir:
    def test_first_candidate_with_assets_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        unrelated = tmp_path / "a"
        unrelated.mkdir()
        assets = tmp_path / "b"
        (assets / "fonts").mkdir(parents=True)
        monkeypatch.setattr(paths, "resource_candidates", lambda: [unrelated, assets])

        assert paths.get_resources_dir() == assets

    def test_result_is_remembered(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "canvas").mkdir()
        monkeypatch.setattr(paths, "resource_candidates", lambda: [tmp_path])
        first = paths.get_resources_dir()

        monkeypatch.setattr(paths, "resource_candidates", lambda: [])
        assert paths.get_resources_dir() == first

    def test_nothing_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(paths, "resource_candidates", lambda: [tmp_path / "missing"])

        with pytest.raises(FileNotFoundError, match="card assets"):
            paths.get_resources_dir()

    def test_candidates_order(self) -> None:
        candidates = paths.resource_candidates()
        assert len(candidates) == 3
        assert candidates[0].parent.name == "src"
        assert all(c.name == "resources" for c in candidates)
