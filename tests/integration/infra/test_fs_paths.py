from __future__ import annotations

"""
Integration tests for the FileSystem Infrastructure Layer.
"""

import os
from pathlib import Path

import pytest

from termscout.infra.fs import ensure_parent_dir, get_user_data_dir, normalize_path


def test_normalize_path_expands_user_and_vars(isolated_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCAN_ROOT", str(isolated_home / "code"))

    assert normalize_path("$SCAN_ROOT/app") == os.path.join(str(isolated_home), "code", "app")
    assert normalize_path("  ", fallback="~") == str(isolated_home)
    assert normalize_path(None) == ""


def test_user_data_dir_is_under_home(isolated_home: Path) -> None:
    path = get_user_data_dir()

    assert not os.path.exists(path)
    assert path.startswith(str(isolated_home))


def test_ensure_parent_dir(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "report.csv"
    ensure_parent_dir(str(target))

    assert target.parent.is_dir()
    assert not target.exists()
