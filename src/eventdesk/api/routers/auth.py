"""
eventdesk.api.routers.auth

Login, self-registration and "who am I" procedures.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.deps import db_session, gate_dep, jwt_config_dep
from eventdesk.api.schemas import AuthedRequest, LoginRequest, RegisterRequest
from eventdesk.api.serializers import member_out
from eventdesk.auth.gate import AccessGate
from eventdesk.auth.jwt import JwtConfig
from eventdesk.db.models import User
from eventdesk.services.accounts import AccountService, MemberDetails

router = APIRouter(prefix="/rpc", tags=["auth"])


def _session_user(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "member": member_out(user.member) if user.member is not None else None,
    }


@router.post("/login")
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(db_session),
    jwt_cfg: JwtConfig = Depends(jwt_config_dep),
) -> dict[str, Any]:
    token, user = await AccountService(session=session, jwt_cfg=jwt_cfg).login(
        email=body.email, password=body.password
    )
    return {"token": token, "user": _session_user(user)}


@router.post("/register")
async def register(
    body: RegisterRequest,
    session: AsyncSession = Depends(db_session),
    jwt_cfg: JwtConfig = Depends(jwt_config_dep),
) -> dict[str, Any]:
    token, user = await AccountService(session=session, jwt_cfg=jwt_cfg).register(
        details=MemberDetails(
            name=body.member_name,
            email=body.member_email,
            phone=body.member_phone,
            adults=body.adults,
            children=body.children,
            infants=body.infants,
            elder=body.elder,
        ),
        password=body.password,
    )
    return {"token": token, "user": _session_user(user)}


@router.post("/getMe")
async def get_me(
    body: AuthedRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
    jwt_cfg: JwtConfig = Depends(jwt_config_dep),
) -> dict[str, Any]:
    principal = await gate.require_authenticated(body.auth_token)
    user = await AccountService(session=session, jwt_cfg=jwt_cfg).get_user(principal.id)
    return _session_user(user)
