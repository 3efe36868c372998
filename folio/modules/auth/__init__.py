"""
Folio Auth Module

Admin sign-in against Supabase email/password auth:
- Login page at the site root
- Per-session failed attempt counter with lockout
- Logout
"""

from .routes import auth_bp

__all__ = ['auth_bp']
