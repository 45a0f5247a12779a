"""Pytest configuration for glint tests.

Shared fixtures: the Taichi runtime (started once on the CPU backend),
the example scene directory and the default two-sphere world.
"""

from pathlib import Path

import pytest
import taichi as ti

SCENES_DIR = Path(__file__).resolve().parent.parent / "scenes"


@pytest.fixture(scope="session", autouse=True)
def taichi_runtime():
    """Start Taichi before any canvas or preview field is allocated.

    Calling ti.init again mid-session would drop fields that other tests
    still hold.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def scenes_dir() -> Path:
    """Directory holding the example scene files."""
    return SCENES_DIR


@pytest.fixture
def world():
    """The default two-sphere world."""
    from glint.scene.world import default_world

    return default_world()
