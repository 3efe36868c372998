"""
Shared fixtures for the Folio test suite.

The Supabase adapter is replaced by FakeBackend, an in-memory stand-in
with the same method surface that records every call and can be told to
fail any of them.
"""

import os
import shutil
import tempfile

import pytest
from flask import Flask

from folio import Folio
from folio.core.errors import BackendError

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse"
PUBLIC_PREFIX = "https://demo.supabase.co/storage/v1/object/public/project-images/"


class FakeBackend:

    def __init__(self):
        self.rows = []
        self.objects = {}
        self.removed = []
        self.calls = []
        self.failures = {}
        self.users = {ADMIN_EMAIL: ADMIN_PASSWORD}
        self.tokens = {}
        self._next_id = 1

    def fail(self, method, message="service unavailable"):
        self.failures[method] = message

    def _record(self, method, *args):
        self.calls.append((method,) + args)
        if method in self.failures:
            raise BackendError(self.failures[method])

    def called(self, method):
        return [call for call in self.calls if call[0] == method]

    def add_project(self, **fields):
        row = {
            "title": "", "category": [], "technologies": [], "description": "",
            "longDescription": "", "link": "", "image": "",
        }
        row.update(fields)
        row.setdefault("id", str(self._next_id))
        row.setdefault("created_at", f"2024-01-{self._next_id:02d}T10:00:00+00:00")
        self._next_id += 1
        self.rows.append(row)
        return row

    # ===== Auth =====

    def sign_in(self, email, password):
        self._record("sign_in", email)
        if self.users.get(email) != password:
            raise BackendError("Invalid login credentials")
        token = f"token-{email}"
        self.tokens[token] = email
        return {"access_token": token, "refresh_token": f"refresh-{email}", "email": email}

    def sign_out(self, access_token, refresh_token=None):
        self._record("sign_out", access_token)
        self.tokens.pop(access_token, None)

    def get_user(self, access_token):
        self._record("get_user", access_token)
        email = self.tokens.get(access_token)
        return {"email": email} if email else None

    # ===== Table =====

    def select_projects(self):
        self._record("select_projects")
        return sorted((dict(r) for r in self.rows), key=lambda r: r["created_at"], reverse=True)

    def select_project(self, project_id):
        self._record("select_project", project_id)
        for row in self.rows:
            if str(row["id"]) == str(project_id):
                return dict(row)
        return None

    def insert_project(self, row):
        self._record("insert_project", row)
        return dict(self.add_project(**row))

    def update_project(self, project_id, row):
        self._record("update_project", project_id, row)
        for stored in self.rows:
            if str(stored["id"]) == str(project_id):
                stored.update(row)
                return dict(stored)
        return None

    def delete_project(self, project_id):
        self._record("delete_project", project_id)
        self.rows = [r for r in self.rows if str(r["id"]) != str(project_id)]

    # ===== Storage =====

    def upload_object(self, path, data, content_type=None):
        self._record("upload_object", path, content_type)
        self.objects[path] = data
        return path

    def public_url(self, path):
        return PUBLIC_PREFIX + path

    def remove_objects(self, names):
        self._record("remove_objects", list(names))
        self.removed.extend(names)
        for name in names:
            self.objects.pop(name, None)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for the log database, cleaned up after."""
    d = tempfile.mkdtemp(prefix="folio-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def app(tmp_db_dir, backend):
    """Flask app with every Folio module registered on the fake backend."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["LOGS_DB"] = os.path.join(tmp_db_dir, "app_logs.db")
    app.config["LOCALE"] = "en"
    Folio(app, {"brand_name": "Test Folio"}, backend=backend)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client, backend):
    """Test client carrying a session token the fake auth service accepts."""
    token = f"token-{ADMIN_EMAIL}"
    backend.tokens[token] = ADMIN_EMAIL
    with client.session_transaction() as sess:
        sess["access_token"] = token
        sess["refresh_token"] = f"refresh-{ADMIN_EMAIL}"
        sess["admin_email"] = ADMIN_EMAIL
    return client
