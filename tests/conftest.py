"""
Shared pytest fixtures for the chest test suite.

Every test works inside its own ``tmp_path`` and with the CHEST_* environment
overrides cleared, so nothing touches a real ``.chest`` or ``.chest_key``.
"""

import pytest

from chestvault.utils.core import Chest
from chestvault.utils.dataModels import ChestConfig

VERSION = 1
CIPHER = "AES_256_CTR"
CONTENT = b"CHEST CONTENT"


@pytest.fixture(autouse=True)
def _clear_chest_env(monkeypatch):
    for name in ("CHEST_KEY", "CHEST_SECRETS", "CHEST_CIPHER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def key_path(tmp_path):
    return tmp_path / "output" / ".chest_key"


@pytest.fixture
def chest_path(tmp_path):
    return tmp_path / "output" / ".chest"


@pytest.fixture
def make_chest(key_path):
    """Build a quiet Chest for any cipher, sharing the test's key path."""
    def _make(cipher=CIPHER, version=VERSION):
        return Chest(ChestConfig(key_path=key_path, cipher=cipher, version=version, ignore=True))
    return _make


@pytest.fixture
def chest(make_chest):
    return make_chest()


@pytest.fixture
def secrets_file(chest_path):
    chest_path.parent.mkdir(parents=True, exist_ok=True)
    chest_path.write_bytes(CONTENT)
    return chest_path


@pytest.fixture
def header():
    return f"$CHEST:{VERSION}:{CIPHER};\n".encode()
