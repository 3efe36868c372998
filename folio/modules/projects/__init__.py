"""
Projects Admin Module
=====================

Admin interface for the project portfolio.

Provides:
- Project list with search, category filter, grid/list views and detail overlay
- Project creation and editing through one shared form
- Image upload to the Supabase storage bucket
- Confirmed deletion with best-effort image cleanup
"""

from flask import Blueprint

projects_bp = Blueprint(
    'projects_admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates',
)

from . import routes

__all__ = ['projects_bp']
