"""
eventdesk.api.errors

Exception handlers rendering procedure failures as `{"error": {"code", "message"}}`.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from eventdesk.errors import ProcedureError
from eventdesk.observability.logging import get_logger

log = get_logger(__name__)


async def procedure_error_handler(request: Request, exc: ProcedureError) -> JSONResponse:
    log.info("procedure_rejected", code=exc.code, message=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.info("procedure_input_invalid", issues=len(exc.errors()))
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "BAD_REQUEST",
                "message": "Invalid input",
                "issues": jsonable_encoder(exc.errors()),
            }
        },
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProcedureError, procedure_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, validation_error_handler  # type: ignore[arg-type]
    )
