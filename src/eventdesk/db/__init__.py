"""
eventdesk.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, repositories and bootstrap data.
"""

# Package marker.
