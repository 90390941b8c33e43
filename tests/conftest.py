"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def make_tree() -> Callable[[Path, dict[str, str | None]], Path]:
    """Build a directory tree from a mapping of relative path to content.

    A value of None creates a directory. Values starting with "->" create
    a symlink to the rest of the string.
    """

    def _make(root: Path, layout: dict[str, str | None]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in layout.items():
            target = root / rel
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if content.startswith("->"):
                target.symlink_to(content[2:])
            else:
                target.write_text(content)
        return root

    return _make


@pytest.fixture
def bundle_tree(tmp_path: Path, make_tree: Callable[[Path, dict[str, str | None]], Path]) -> Path:
    """Sample application bundle with nested directories and a symlink."""
    return make_tree(
        tmp_path / "bundle",
        {
            "x.txt": "hi",
            "link": "->x.txt",
            ".hidden": "secret",
            "bin/game": "#!/bin/sh\necho game\n",
            "data/levels/1.dat": "level one",
            "data/levels/2.dat": "level two",
            "data/empty": None,
        },
    )
