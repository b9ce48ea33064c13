"""
Transport relay.

A host-whitelisted HTTP forwarder with permissive CORS headers, plus
the stateful VMClub session exchange (cookies + CSRF token).

Modules:
    app           - Flask application (create_app)
    allowlist     - Destination host checks
    vmclub_session - requests-based session bootstrap and search
"""

from .allowlist import is_allowed_host
from .app import create_app
from .vmclub_session import VMClubSession, extract_csrf_token

__all__ = ['create_app', 'is_allowed_host', 'VMClubSession', 'extract_csrf_token']
