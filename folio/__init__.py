"""
Folio - A Flask Portfolio Admin
===============================

Portfolio project management backed by Supabase:
- Admin login through Supabase email/password auth
- Session guard for the admin area
- Project create/edit/delete with image upload to Supabase storage
- Public portfolio page and JSON API

Usage:
    from flask import Flask
    from folio import Folio

    app = Flask(__name__)
    folio = Folio(app, {'brand_name': 'My Portfolio'})
"""

import os
from flask import Flask, Blueprint
from flask_cors import CORS

from .core.config import Config
from .core.guard import register_session_guard
from .core.messages import current_locale
from .modules.projects.display import format_display_date

__version__ = '0.1.0'

CONFIG_KEYS = (
    'SUPABASE_URL', 'SUPABASE_KEY', 'PROJECTS_TABLE', 'IMAGE_BUCKET',
    'DB_DIR', 'LOGIN_MAX_ATTEMPTS', 'NOTIFICATION_TIMEOUT_MS',
    'PROJECT_CATEGORIES', 'LOCALE', 'BRAND_NAME', 'CORS_ORIGINS',
)

# Shared layout templates (base.html, _project_detail.html) for every module
templates_bp = Blueprint('folio', __name__, template_folder='templates')


class Folio:
    """Flask extension that registers the Folio modules on an app."""

    DEFAULT_FEATURES = {
        'auth': True,
        'projects': True,
        'projects_public': True,
    }

    def __init__(self, app=None, config=None, backend=None):
        self._config = dict(config or {})
        self.backend = backend
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_config(app)
        self._setup_database_dir(app)
        self._register_modules(app)
        register_session_guard(app)

        CORS(app, resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}})

        @app.context_processor
        def inject_folio_context():
            return {
                'folio_config': {
                    'features': self.features,
                    'locale': app.config['LOCALE'],
                },
                'brand_name': self._config.get('brand_name') or app.config['BRAND_NAME'],
                'notification_timeout': app.config['NOTIFICATION_TIMEOUT_MS'],
            }

        @app.template_filter('display_date')
        def display_date_filter(value):
            return format_display_date(value, current_locale())

        app.extensions['folio'] = self

    @property
    def features(self):
        features = dict(self.DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    def _apply_config(self, app):
        """Fill app.config from Config without overriding what the host app set"""
        for key in CONFIG_KEYS:
            app.config.setdefault(key, getattr(Config, key))
        # Log database follows DB_DIR unless LOGS_DB is given explicitly
        app.config.setdefault('LOGS_DB', os.getenv('LOGS_DB') or os.path.join(app.config['DB_DIR'], 'app_logs.db'))
        if not app.config.get('SECRET_KEY'):
            app.config['SECRET_KEY'] = Config.SECRET_KEY

        app.config.setdefault('SESSION_COOKIE_HTTPONLY', True)
        app.config.setdefault('SESSION_COOKIE_SAMESITE', 'Lax')

    def _setup_database_dir(self, app):
        db_dir = app.config.get('DB_DIR')
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    def _register_modules(self, app):
        features = self.features
        app.register_blueprint(templates_bp)

        if features.get('auth'):
            from .modules.auth import auth_bp
            app.register_blueprint(auth_bp)
            self._registered.append('auth')

        if features.get('projects'):
            from .modules.projects import projects_bp
            app.register_blueprint(projects_bp)
            self._registered.append('projects')

        if features.get('projects_public'):
            from .modules.projects_public import projects_public_bp, projects_api_bp
            app.register_blueprint(projects_public_bp)
            app.register_blueprint(projects_api_bp)
            self._registered.append('projects_public')

    def get_registered_modules(self):
        return list(self._registered)


def create_app(overrides=None, backend=None):
    """Build a Flask app with every Folio module enabled"""
    app = Flask(__name__)
    if overrides:
        app.config.update(overrides)
    Folio(app, backend=backend)
    return app


__all__ = ['Folio', 'create_app']
