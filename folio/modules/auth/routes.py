from flask import Blueprint, render_template, request, redirect, url_for, flash, session

from folio.core.config import get_config_value
from folio.core.errors import AuthError, BackendError
from folio.core.logging_service import LoggingService
from folio.core.messages import message
from folio.core.session import get_session_context

auth_bp = Blueprint(
    'auth',
    __name__,
    template_folder='templates'
)

ATTEMPTS_KEY = 'login_attempts'


def auth_error_message(error_text):
    """Map an auth service message to the text shown on the login form"""
    if 'Invalid login' in error_text:
        return message('login_invalid_credentials')
    if 'Email not confirmed' in error_text:
        return message('login_email_not_confirmed')
    return error_text


def _max_attempts():
    return int(get_config_value('LOGIN_MAX_ATTEMPTS', 5))


def _render_login(error=None, email='', status=200):
    attempts = session.get(ATTEMPTS_KEY, 0)
    attempts_left = max(_max_attempts() - attempts, 0)
    return render_template(
        'auth/login.html',
        error=error,
        email=email,
        locked=attempts_left == 0,
        attempts_left=message('login_attempts_left', count=attempts_left) if attempts else None,
    ), status


@auth_bp.route('/', methods=['GET', 'POST'])
def login():
    """Admin login page"""
    if request.method == 'GET':
        return _render_login()

    email = request.form.get('email', '').strip()
    password = request.form.get('password', '')

    if not email or not password.strip():
        return _render_login(message('login_required_fields'), email, 400)

    attempts = session.get(ATTEMPTS_KEY, 0)
    if attempts >= _max_attempts():
        LoggingService.log_security_event('Login refused after too many attempts', {'email': email, 'attempts': attempts})
        return _render_login(message('login_too_many_attempts'), email, 429)

    try:
        get_session_context().sign_in(email, password)
    except AuthError as e:
        session[ATTEMPTS_KEY] = attempts + 1
        LoggingService.log_security_event('Failed admin login', {'email': email, 'attempts': attempts + 1, 'error': e.message})
        return _render_login(auth_error_message(e.message), email, 401)
    except Exception as e:
        LoggingService.log_error_with_traceback('auth', e, {'email': email})
        return _render_login(message('login_unexpected'), email, 500)

    session.pop(ATTEMPTS_KEY, None)
    return redirect(url_for('projects_admin.project_list'))


@auth_bp.route('/admin/logout', methods=['GET', 'POST'])
def logout():
    """Admin logout route"""
    try:
        get_session_context().sign_out()
        flash(message('logout_success'), 'info')
    except BackendError as e:
        LoggingService.error('auth', 'Logout error', {'error': e.message})
        flash(message('logout_error'), 'error')
    return redirect(url_for('auth.login'))
