"""
eventdesk.auth

Authentication/authorization package.

Responsibilities:
- JWT issuing and validation.
- Password hashing.
- The access gate every procedure passes through.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package imports FastAPI; the API layer adapts it via
# `eventdesk.api.deps`.
