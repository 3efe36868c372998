"""
Folio Modules
=============

Flask blueprint modules for the portfolio admin and public pages.
"""

__all__ = ['auth', 'projects', 'projects_public']
