# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides a fake Supabase client (table + storage + auth) built on MagicMock
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-hs256-signing")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import MagicMock

import pytest

PUBLIC_PREFIX = "https://test-project.supabase.co/storage/v1/object/public/portfolio/"


# =============================================================================
# Fake Supabase
# =============================================================================

class FakeStorageBucket:
    """In-memory stand-in for client.storage.from_(bucket)."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.fail_upload = False
        self.fail_remove_paths: set[str] = set()
        self.removed_calls: list[list[str]] = []

    def upload(self, path, file, file_options=None):
        if self.fail_upload:
            raise RuntimeError("storage down")
        self.objects[path] = file
        return {"Key": f"portfolio/{path}"}

    def get_public_url(self, path):
        return PUBLIC_PREFIX + path

    def remove(self, paths):
        self.removed_calls.append(list(paths))
        for path in paths:
            if path in self.fail_remove_paths:
                raise RuntimeError(f"cannot remove {path}")
        removed = [{"name": p} for p in paths if p in self.objects]
        for p in paths:
            self.objects.pop(p, None)
        return removed


class FakeQuery:
    """Chainable stand-in for a PostgREST query builder."""

    def __init__(self, table: "FakeTable", action: str, payload=None):
        self.table = table
        self.action = action
        self.payload = payload
        self.filters: dict[str, str] = {}
        self.contains_filters: dict[str, list] = {}

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        self.filters[column] = value
        return self

    def contains(self, column, values):
        self.contains_filters[column] = list(values)
        return self

    def limit(self, n):
        return self

    def _matches(self, row):
        if not all(str(row.get(k)) == str(v) for k, v in self.filters.items()):
            return False
        return all(
            set(v) <= set(row.get(k) or []) for k, v in self.contains_filters.items()
        )

    def execute(self):
        if self.action in self.table.fail_actions:
            raise RuntimeError(f"{self.action} failed")
        self.table.calls.append(self.action)

        if self.action == "select":
            data = [dict(r) for r in self.table.rows if self._matches(r)]
        elif self.action == "insert":
            self.table.counter += 1
            row = {
                "id": f"00000000-0000-0000-0000-{self.table.counter:012d}",
                "created_at": "2024-01-15T10:00:00+00:00",
                "updated_at": "2024-01-15T10:00:00+00:00",
                **self.payload,
            }
            self.table.rows.append(row)
            data = [dict(row)]
        elif self.action == "update":
            data = []
            for row in self.table.rows:
                if self._matches(row):
                    row.update(self.payload)
                    data.append(dict(row))
        else:
            data = [dict(r) for r in self.table.rows if self._matches(r)]
            self.table.rows = [r for r in self.table.rows if not self._matches(r)]

        return MagicMock(data=data, count=len(data))


class FakeTable:
    """In-memory stand-in for client.table(name)."""

    def __init__(self):
        self.rows: list[dict] = []
        self.counter = 0
        self.fail_actions: set[str] = set()
        self.calls: list[str] = []

    def select(self, *args, **kwargs):
        return FakeQuery(self, "select")

    def insert(self, payload):
        return FakeQuery(self, "insert", payload)

    def update(self, payload):
        return FakeQuery(self, "update", payload)

    def delete(self):
        return FakeQuery(self, "delete")


@pytest.fixture
def fake_table():
    return FakeTable()


@pytest.fixture
def fake_bucket():
    return FakeStorageBucket()


@pytest.fixture
def fake_client(fake_table, fake_bucket):
    """MagicMock Supabase client backed by the in-memory table and bucket."""
    client = MagicMock()
    client.table.side_effect = lambda name: fake_table
    client.storage.from_.side_effect = lambda name: fake_bucket
    return client


# =============================================================================
# Sample Data
# =============================================================================

@pytest.fixture
def sample_form_dict():
    """Form input for a project."""
    return {
        "title": "A",
        "description": "d",
        "tech_stack": ["Go"],
        "screenshots": [],
    }


@pytest.fixture
def sample_project_row():
    """A project row as PostgREST returns it."""
    return {
        "id": "11111111-1111-1111-1111-111111111111",
        "title": "Ray Tracer",
        "description": "A small path tracer",
        "tech_stack": ["Rust", "WGPU"],
        "github_url": "https://github.com/me/tracer",
        "live_url": None,
        "screenshots": [PUBLIC_PREFIX + "projects/1700000000000-a.png"],
        "created_at": "2024-01-15T10:00:00+00:00",
        "updated_at": "2024-01-15T10:30:00+00:00",
    }
