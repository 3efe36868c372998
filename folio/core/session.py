"""
Session Context
===============

Explicit view of the admin's auth session for the current request.

The Supabase token pair lives in the Flask session cookie. A SessionContext
answers one question, "is a session present", and is the single place that
signs in and out. Transitions are broadcast on the ``session_changed``
signal so subscribers hear about them in one place.
"""

import logging
from blinker import Namespace
from flask import session, g

from .backend import get_backend
from .errors import BackendError, AuthError
from .logging_service import LoggingService

logger = logging.getLogger(__name__)

_signals = Namespace()

# Sent with event='signed_in' or event='signed_out' and the admin email
session_changed = _signals.signal('session-changed')

SESSION_KEYS = ('access_token', 'refresh_token', 'admin_email')


class SessionContext:

    def __init__(self, store, backend_getter=get_backend):
        self._store = store
        self._backend_getter = backend_getter
        self._present = None

    @property
    def access_token(self):
        return self._store.get('access_token')

    @property
    def email(self):
        return self._store.get('admin_email')

    def is_present(self):
        """True when the stored token is accepted by the auth service.

        Any failure during the lookup counts as absent.
        """
        if self._present is not None:
            return self._present

        token = self.access_token
        if not token:
            self._present = False
            return False

        try:
            user = self._backend_getter().get_user(token)
            self._present = user is not None
        except BackendError as e:
            logger.warning(f"Session lookup failed, treating as signed out: {e.message}")
            LoggingService.log_security_event('Session lookup failed', {'error': e.message})
            self._present = False

        return self._present

    def sign_in(self, email, password):
        """Exchange credentials for a session, raising AuthError when rejected"""
        try:
            result = self._backend_getter().sign_in(email, password)
        except BackendError as e:
            raise AuthError(e.message) from e

        self._store['access_token'] = result['access_token']
        self._store['refresh_token'] = result['refresh_token']
        self._store['admin_email'] = result['email']
        self._present = True

        session_changed.send(self, event='signed_in', email=result['email'])
        return result

    def sign_out(self):
        email = self.email
        token = self.access_token
        refresh = self._store.get('refresh_token')

        try:
            if token:
                self._backend_getter().sign_out(token, refresh)
        finally:
            for key in SESSION_KEYS:
                self._store.pop(key, None)
            self._present = False
            session_changed.send(self, event='signed_out', email=email)


def get_session_context():
    """Return the SessionContext bound to the current request"""
    ctx = g.get('folio_session')
    if ctx is None:
        ctx = SessionContext(session)
        g.folio_session = ctx
    return ctx


@session_changed.connect
def _record_session_change(sender, event=None, email=None, **extra):
    LoggingService.log_user_action('auth', event, user_id=email)
