"""
eventdesk.api.routers.users

Administrator user management.

Responsibilities:
- Create, list, update and delete login accounts with their member profiles.
- Keep administrators from deleting their own account.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.deps import db_session, gate_dep, jwt_config_dep
from eventdesk.api.schemas import AuthedRequest, CreateUserRequest, UpdateUserRequest, UserIdRequest
from eventdesk.api.serializers import user_out
from eventdesk.auth.gate import AccessGate
from eventdesk.auth.jwt import JwtConfig
from eventdesk.services.accounts import AccountService, MemberDetails

router = APIRouter(prefix="/rpc", tags=["users"])


@router.post("/createUser")
async def create_user(
    body: CreateUserRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
    jwt_cfg: JwtConfig = Depends(jwt_config_dep),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    user = await AccountService(session=session, jwt_cfg=jwt_cfg).create_user(
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
        role=body.role,
    )
    return {"success": True, "user": user_out(user)}


@router.post("/getUsers")
async def get_users(
    body: AuthedRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
    jwt_cfg: JwtConfig = Depends(jwt_config_dep),
) -> list[dict[str, Any]]:
    await gate.require_administrator(body.auth_token)
    users = await AccountService(session=session, jwt_cfg=jwt_cfg).list_users()
    return [user_out(u) for u in users]


@router.post("/updateUser")
async def update_user(
    body: UpdateUserRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
    jwt_cfg: JwtConfig = Depends(jwt_config_dep),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    user = await AccountService(session=session, jwt_cfg=jwt_cfg).update_user(
        user_id=body.user_id,
        name=body.member_name,
        email=body.member_email,
        phone=body.member_phone,
        adults=body.adults,
        children=body.children,
        infants=body.infants,
        elder=body.elder,
        password=body.password,
        role=body.role,
    )
    return {"success": True, "user": user_out(user)}


@router.post("/deleteUser")
async def delete_user(
    body: UserIdRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
    jwt_cfg: JwtConfig = Depends(jwt_config_dep),
) -> dict[str, bool]:
    principal = await gate.require_administrator(body.auth_token)
    await AccountService(session=session, jwt_cfg=jwt_cfg).delete_user(
        user_id=body.user_id, actor=principal
    )
    return {"success": True}
