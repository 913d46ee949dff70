from __future__ import annotations

import sys
from pathlib import Path

import pytest

# pytest may run without installing the project; ensure repo root is importable.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from nodecred.security.credentials import OperatorType  # noqa: E402
from nodecred.security.manager import CredentialManager  # noqa: E402

FIXED_KEY = bytes(range(32))
NODE_ID = bytes(range(1, 21))
TIMESTAMP = 1_700_000_000


@pytest.fixture()
def temp_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture()
def key() -> bytes:
    return FIXED_KEY


@pytest.fixture()
def node_id() -> bytes:
    return NODE_ID


@pytest.fixture()
def manager(key: bytes) -> CredentialManager:
    return CredentialManager(key)


@pytest.fixture()
def issued(manager: CredentialManager, node_id: bytes):
    """A credential issued for the reference node at the reference timestamp."""

    return manager.create(TIMESTAMP, node_id, OperatorType.SOLO)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("NODECRED_CREDENTIALS__SECRET_KEY", "NODECRED_CREDENTIALS__POOL_SIZE", "NODECRED_LOGGING__LEVEL"):
        monkeypatch.delenv(name, raising=False)
