import os
import sys
from typing import Iterator
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'campusflow' and tests/ importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from helpers.cache_utils import reset_campusflow_caches  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point CAMPUSFLOW_HOME at a fresh directory and drop leaked overrides."""
    for key in list(os.environ):
        if key.startswith("CAMPUSFLOW_"):
            monkeypatch.delenv(key, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("CAMPUSFLOW_HOME", str(home))
    reset_campusflow_caches()
    yield home
    reset_campusflow_caches()


@pytest.fixture
def memory_store():
    from helpers.stores import MemoryByteStore

    return MemoryByteStore()


@pytest.fixture
def storage(memory_store):
    from campusflow.core.registry.storage import RegistryStorage

    return RegistryStorage(memory_store)
