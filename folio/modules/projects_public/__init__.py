"""
Projects Public Module
======================

Read-only portfolio page and the JSON API used by the front end:
- /projects              public portfolio listing with search and detail overlay
- GET  /api/projects     all projects, newest first
- POST /api/projects     create a project from a JSON body
"""

from .routes import projects_public_bp, projects_api_bp

__all__ = ['projects_public_bp', 'projects_api_bp']
