"""
eventdesk.errors

Procedure error hierarchy.

Responsibilities:
- Give every client-visible failure a stable wire code and HTTP status.
- Keep messages free of internal details; the API layer renders them verbatim.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)


class ProcedureError(Exception):
    code: str = "INTERNAL_SERVER_ERROR"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(ProcedureError):
    code = "BAD_REQUEST"
    status_code = HTTP_400_BAD_REQUEST


class Unauthenticated(ProcedureError):
    code = "UNAUTHORIZED"
    status_code = HTTP_401_UNAUTHORIZED


class Forbidden(ProcedureError):
    code = "FORBIDDEN"
    status_code = HTTP_403_FORBIDDEN


class NotFound(ProcedureError):
    code = "NOT_FOUND"
    status_code = HTTP_404_NOT_FOUND


class Conflict(ProcedureError):
    code = "CONFLICT"
    status_code = HTTP_409_CONFLICT


# --- Module Notes -----------------------------------------------------------
# `Unauthenticated` and `Forbidden` are raised by the access gate
# (`eventdesk.auth.gate`); the rest come from the service layer.
