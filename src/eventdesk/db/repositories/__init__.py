"""
eventdesk.db.repositories

One repository class per aggregate; each wraps a caller-owned AsyncSession.
"""

# Package marker.
