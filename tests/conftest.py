"""Shared fixtures for readdirp tests."""

import os
import sys
from pathlib import Path
from typing import Iterable

import pytest

from readdirp.aio.core import fsio

needs_symlinks = pytest.mark.skipif(
    sys.platform == "win32",
    reason="Symlinks need admin rights on default Windows installs",
)

needs_permissions = pytest.mark.skipif(
    sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="Permission bits are not enforced for root or on Windows",
)


def make_tree(base: Path, files: Iterable[str] = (), dirs: Iterable[str] = ()) -> None:
    """Create directories, then files (with content) under base."""
    for name in dirs:
        (base / name).mkdir(parents=True, exist_ok=True)
    for name in files:
        path = base / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"content of {name}")


@pytest.fixture
def root(tmp_path):
    """Empty traversal root."""
    directory = tmp_path / "root"
    directory.mkdir()
    return directory


@pytest.fixture
def touch(root):
    """Build files and directories inside the traversal root."""
    def _touch(files: Iterable[str] = (), dirs: Iterable[str] = ()) -> None:
        make_tree(root, files, dirs)
    return _touch


@pytest.fixture
def sorted_listing(monkeypatch):
    """Make directory listings come back sorted by name.

    Real listing order depends on the filesystem; tests asserting exact
    emission order use this.
    """
    original = fsio.scandir

    async def scandir(path):
        return sorted(await original(path), key=lambda record: record.name)

    monkeypatch.setattr(fsio, "scandir", scandir)
    return scandir


def rel(*parts: str) -> str:
    """Root-relative path as the engine builds it."""
    return os.path.join(*parts)
