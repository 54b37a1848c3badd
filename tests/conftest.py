"""
Shared fixtures for the calculator test suite.

Provides:
- The default snapshot and a concrete chained-base scenario
- A fake remote backend standing in for Supabase
- Storage managers writing to a temporary directory
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from calculator.defaults import initial_state
from services import project_store
from services.auth import Session
from services.storage import RemoteStorageError, StorageManager


class FakeRemote:
    """In-memory stand-in for RemoteStorage."""

    def __init__(self, available=True, fail=False):
        self.available = available
        self.fail = fail
        self.rows = {}
        self.calls = []

    def is_available(self):
        return self.available

    def _maybe_fail(self, action):
        self.calls.append(action)
        if self.fail:
            raise RemoteStorageError(f"{action} failed (HTTP 500)")

    def load(self, owner_id, access_token):
        self._maybe_fail("load")
        return [dict(p) for p in self.rows.get(owner_id, {}).values()]

    def create(self, owner_id, access_token, project):
        self._maybe_fail("create")
        self.rows.setdefault(owner_id, {})[project["id"]] = dict(project)

    def update(self, owner_id, access_token, project_id, updated_at, name=None, state=None):
        self._maybe_fail("update")
        row = self.rows.get(owner_id, {}).get(project_id)
        if row is None:
            return False
        if name is not None:
            row["name"] = name
        if state is not None:
            row["state"] = state
        row["updatedAt"] = updated_at
        return True

    def delete(self, owner_id, access_token, project_id):
        self._maybe_fail("delete")
        self.rows.get(owner_id, {}).pop(project_id, None)


@pytest.fixture
def default_state():
    return initial_state()


@pytest.fixture
def session():
    return Session(user_id="user-1", email="owner@example.com", access_token="token-1")


@pytest.fixture
def fake_remote():
    return FakeRemote()


@pytest.fixture
def storage(tmp_path, fake_remote):
    return StorageManager(local_path=tmp_path / "projects.json", remote=fake_remote)


@pytest.fixture
def store(storage):
    """project_store wired to a temporary storage manager."""
    project_store.configure(storage)
    yield project_store
    project_store.configure(None)
