"""
eventdesk

Top-level package for the eventdesk events/venues/membership backend.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Import-time side effects are kept out of this file; the app is built by
# `eventdesk.api.app.create_app`.
