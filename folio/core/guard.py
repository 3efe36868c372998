"""
Session Guard
=============

Runs before every request. Unauthenticated visitors are kept out of the
admin area, and a signed-in admin is sent past the login page.
"""

from functools import wraps
from flask import request, redirect, url_for, g

from .session import get_session_context
from .logging_service import LoggingService

LOGIN_PATH = '/'
ADMIN_PREFIX = '/admin'


def is_admin_path(path):
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + '/')


def resolve_redirect(path, session_present):
    """Return the path to redirect to, or None to let the request through"""
    if not session_present and is_admin_path(path):
        return LOGIN_PATH
    if session_present and path == LOGIN_PATH:
        return ADMIN_PREFIX
    return None


def session_guard():
    path = request.path
    if path != LOGIN_PATH and not is_admin_path(path):
        return None

    target = resolve_redirect(path, get_session_context().is_present())
    if target is None:
        return None

    if target == LOGIN_PATH:
        LoggingService.log_security_event('Unauthenticated admin access redirected', {'path': path})
    return redirect(target)


def _forget_session_context(exc=None):
    # The app context (and g) can outlive one request
    g.pop('folio_session', None)
    g.pop('folio_backend', None)


def register_session_guard(app):
    app.before_request(session_guard)
    app.teardown_request(_forget_session_context)


def admin_required(f):
    """Decorator re-checking the session inside admin views"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not get_session_context().is_present():
            return redirect(url_for('auth.login'))
        return f(*args, **kwargs)
    return decorated_function
