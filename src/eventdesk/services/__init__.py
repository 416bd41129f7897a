"""
eventdesk.services

Service layer: validation rules, transaction boundaries and mutation logging.

Responsibilities:
- Own commits; repositories only flush.
- Raise `eventdesk.errors.ProcedureError` subclasses for client-visible failures.
"""

# Package marker.
