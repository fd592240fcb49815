"""Shared pytest fixtures for FSSearch tests."""
import os
from pathlib import Path
from typing import Callable

import pytest
import yaml

from fssearch.infrastructure.logger import set_global_logger

SAMPLE_FILES = ("a1b.txt", "a2b.txt", "2ab.txt", "a1b.tvt")


@pytest.fixture
def search_root(tmp_path: Path) -> str:
    """Create the sample tree used by the search and rule tests.

    Layout::

        root/{a1b.txt, a2b.txt, 2ab.txt, a1b.tvt}
        root/f1/{same four files}
        root/f2/{same four files}
        root/f1/f2/{same four files}
        root/f1/f2/f1/2ab.txt
    """
    root = tmp_path / "test"
    for directory in (root, root / "f1", root / "f2", root / "f1" / "f2"):
        directory.mkdir(parents=True)
        for name in SAMPLE_FILES:
            (directory / name).write_text(name)

    deepest = root / "f1" / "f2" / "f1"
    deepest.mkdir()
    (deepest / "2ab.txt").write_text("2ab.txt")

    return str(root)


@pytest.fixture
def path_in(search_root: str) -> Callable[..., str]:
    """Build a path below the sample root."""

    def build(*parts: str) -> str:
        return os.path.join(search_root, *parts)

    return build


@pytest.fixture
def missing_dir(tmp_path: Path) -> str:
    """Path of a directory that does not exist."""
    return str(tmp_path / "test_directory_not_exists")


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a configuration file."""
    config_path = tmp_path / "fssearch.yaml"
    with open(config_path, "w") as f:
        yaml.dump(
            {
                "fssearch": {
                    "logging": {"level": "INFO"},
                    "rules": {"halt_on_blank_line": True},
                }
            },
            f,
        )
    return config_path


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset the global logger and drop FSSEARCH_* variables between tests."""
    for key in list(os.environ):
        if key.startswith("FSSEARCH_"):
            monkeypatch.delenv(key)
    set_global_logger(None)
    yield
    set_global_logger(None)
