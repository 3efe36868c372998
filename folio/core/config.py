import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _split_env_list(value, default):
    if not value:
        return list(default)
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    """
    Base configuration for Folio.
    Deployments provide Supabase credentials via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Supabase project
    SUPABASE_URL = os.getenv('SUPABASE_URL')
    SUPABASE_KEY = os.getenv('SUPABASE_KEY') or os.getenv('SUPABASE_ANON_KEY')

    # Table and bucket names
    PROJECTS_TABLE = os.getenv('PROJECTS_TABLE', 'projects')
    IMAGE_BUCKET = os.getenv('IMAGE_BUCKET', 'project-images')

    # Local databases (application logs only, records live in Supabase)
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))
    LOGS_DB = os.getenv('LOGS_DB', os.path.join(DB_DIR, 'app_logs.db'))

    # Admin UI
    LOGIN_MAX_ATTEMPTS = int(os.getenv('LOGIN_MAX_ATTEMPTS', '5'))
    NOTIFICATION_TIMEOUT_MS = int(os.getenv('NOTIFICATION_TIMEOUT_MS', '3000'))
    PROJECT_CATEGORIES = _split_env_list(os.getenv('PROJECT_CATEGORIES'), ['Laravel', 'NextJs', 'UI/UX'])
    LOCALE = os.getenv('LOCALE', 'en')
    BRAND_NAME = os.getenv('BRAND_NAME', 'Folio')

    # Origins allowed to call the JSON API from another site
    CORS_ORIGINS = _split_env_list(os.getenv('CORS_ORIGINS'), ['http://localhost:3000'])

    # Port for local server
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
