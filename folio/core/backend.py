"""
Supabase Backend
================

Thin adapter over supabase-py. This is the only module that talks to the
hosted service; every failure is re-raised as BackendError with the
service's own message so callers can surface it verbatim.
"""

import logging
from flask import g, current_app, session

from .config import get_config_value
from .errors import BackendError

logger = logging.getLogger(__name__)


def _service_message(error):
    """Pull the human readable message out of a supabase/postgrest/storage error"""
    message = getattr(error, 'message', None)
    if isinstance(message, str) and message:
        return message
    if isinstance(error, dict) and error.get('message'):
        return error['message']
    return str(error) or type(error).__name__


class SupabaseBackend:
    """Auth, table and storage calls against one Supabase project."""

    def __init__(self, client, table='projects', bucket='project-images'):
        self.client = client
        self.table_name = table
        self.bucket_name = bucket
        self.access_token = None

    @classmethod
    def from_config(cls):
        from supabase import create_client

        url = get_config_value('SUPABASE_URL')
        key = get_config_value('SUPABASE_KEY')
        if not url or not key:
            raise BackendError('SUPABASE_URL and SUPABASE_KEY must be configured')

        try:
            client = create_client(url, key)
        except Exception as e:
            raise BackendError(_service_message(e)) from e

        return cls(
            client,
            table=get_config_value('PROJECTS_TABLE', 'projects'),
            bucket=get_config_value('IMAGE_BUCKET', 'project-images'),
        )

    def use_access_token(self, access_token):
        """Send table and storage requests as the user owning access_token.

        Storage is created lazily from the client headers, so the header
        has to be in place before the first storage call.
        """
        self.client.options.headers['Authorization'] = f"Bearer {access_token}"
        self.client.postgrest.auth(access_token)
        self.access_token = access_token

    # ===== Auth =====

    def sign_in(self, email, password):
        """Sign in with an email/password pair.

        Returns a dict with access_token, refresh_token and email.
        """
        try:
            response = self.client.auth.sign_in_with_password({'email': email, 'password': password})
        except Exception as e:
            raise BackendError(_service_message(e)) from e

        session = getattr(response, 'session', None)
        if not session:
            raise BackendError('Login failed')

        user = getattr(response, 'user', None)
        return {
            'access_token': session.access_token,
            'refresh_token': session.refresh_token,
            'email': getattr(user, 'email', None) or email,
        }

    def sign_out(self, access_token, refresh_token=None):
        try:
            if refresh_token:
                self.client.auth.set_session(access_token, refresh_token)
            self.client.auth.sign_out()
        except Exception as e:
            raise BackendError(_service_message(e)) from e

    def get_user(self, access_token):
        """Return the user for a token, or None when the service rejects it."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as e:
            raise BackendError(_service_message(e)) from e
        return getattr(response, 'user', None) if response else None

    # ===== Table =====

    def select_projects(self):
        try:
            response = (
                self.client.table(self.table_name)
                .select('*')
                .order('created_at', desc=True)
                .execute()
            )
        except Exception as e:
            raise BackendError(_service_message(e)) from e
        return response.data or []

    def select_project(self, project_id):
        """Return the row for an id, or None"""
        try:
            response = (
                self.client.table(self.table_name)
                .select('*')
                .eq('id', project_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise BackendError(_service_message(e)) from e
        rows = response.data or []
        return rows[0] if rows else None

    def insert_project(self, row):
        try:
            response = self.client.table(self.table_name).insert([row]).execute()
        except Exception as e:
            raise BackendError(_service_message(e)) from e
        rows = response.data or []
        return rows[0] if rows else dict(row)

    def update_project(self, project_id, row):
        try:
            response = (
                self.client.table(self.table_name)
                .update(row)
                .eq('id', project_id)
                .execute()
            )
        except Exception as e:
            raise BackendError(_service_message(e)) from e
        rows = response.data or []
        return rows[0] if rows else None

    def delete_project(self, project_id):
        try:
            self.client.table(self.table_name).delete().eq('id', project_id).execute()
        except Exception as e:
            raise BackendError(_service_message(e)) from e

    # ===== Storage =====

    def upload_object(self, path, data, content_type=None):
        options = {'content-type': content_type} if content_type else None
        try:
            bucket = self.client.storage.from_(self.bucket_name)
            if options:
                bucket.upload(path, data, options)
            else:
                bucket.upload(path, data)
        except Exception as e:
            raise BackendError(_service_message(e)) from e
        return path

    def public_url(self, path):
        url = self.client.storage.from_(self.bucket_name).get_public_url(path)
        # Older storage clients return {'publicURL': ...}
        if isinstance(url, dict):
            url = url.get('publicUrl') or url.get('publicURL')
        return url.rstrip('?') if isinstance(url, str) else url

    def remove_objects(self, names):
        try:
            self.client.storage.from_(self.bucket_name).remove(list(names))
        except Exception as e:
            raise BackendError(_service_message(e)) from e


def get_backend():
    """Return the backend for the current request.

    The Folio extension may hold a preconfigured backend (tests inject one);
    otherwise a Supabase client is created lazily and cached on flask.g.
    Table and storage calls on that client carry the signed-in admin's
    access token, so row-level security sees the authenticated role.
    """
    ext = current_app.extensions.get('folio')
    if ext is not None and ext.backend is not None:
        return ext.backend

    backend = g.get('folio_backend')
    if backend is None:
        backend = SupabaseBackend.from_config()
        g.folio_backend = backend
        logger.debug("Created Supabase client for request")

    token = session.get('access_token')
    if token and token != backend.access_token:
        backend.use_access_token(token)
    return backend
