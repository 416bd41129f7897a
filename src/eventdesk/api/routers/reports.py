from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.deps import db_session, gate_dep
from eventdesk.api.schemas import ExportRequest
from eventdesk.auth.gate import AccessGate
from eventdesk.services.clock import utcnow
from eventdesk.services.reports import ReportService

router = APIRouter(prefix="/rpc", tags=["reports"])


@router.post("/exportToExcel")
async def export_to_excel(
    body: ExportRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    principal = await gate.require_authenticated(body.auth_token)
    table = await ReportService(session=session).export(
        principal=principal,
        export_type=body.export_type,
        event_id=body.event_id,
        start=body.start_date,
        end=body.end_date,
    )
    return {
        "headers": table.headers,
        "data": table.rows,
        "exportType": body.export_type,
        "timestamp": utcnow().isoformat() + "Z",
    }
