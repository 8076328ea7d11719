from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.orm import Session

from sinceonearth.core.auth import CurrentUser, require_admin
from sinceonearth.core.db import get_db
from sinceonearth.core.errors import NotFoundError
from sinceonearth.schemas.admin import (
    InviteCodeCreateRequest,
    InviteCodeListItem,
    InviteCodeOut,
    InvitedUserOut,
)
from sinceonearth.schemas.auth import AdminUserOut
from sinceonearth.services import invite_codes
from sinceonearth.services import users as users_service

router = APIRouter(prefix="/admin", tags=["admin"])


# ----------------------------
# USERS
# ----------------------------
@router.get("/users", response_model=list[AdminUserOut])
def admin_list_users(
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return users_service.list_users(db)


@router.get("/pending-users", response_model=list[AdminUserOut])
def admin_pending_users(
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return users_service.list_pending_users(db)


@router.post("/approve-user/{user_id}")
def admin_approve_user(
    user_id: str,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        user = users_service.approve_user(db, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info(f"[admin] {admin.username} approved {user.username}")
    return {"message": "User approved", "user": AdminUserOut.model_validate(user)}


@router.delete("/reject-user/{user_id}")
def admin_reject_user(
    user_id: str,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        users_service.reject_user(db, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "User rejected"}


@router.delete("/delete-user/{user_id}")
def admin_delete_user(
    user_id: str,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        users_service.delete_user(db, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "User deleted"}


# ----------------------------
# INVITE CODES
# ----------------------------
@router.post("/invite-codes", response_model=InviteCodeOut)
def admin_create_invite_code(
    payload: InviteCodeCreateRequest,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return invite_codes.create_invite_code(db, admin.user_id, payload.max_uses, payload.expires_at)


@router.get("/invite-codes", response_model=list[InviteCodeListItem])
def admin_list_invite_codes(
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    out = []
    for code, creator in invite_codes.list_invite_codes(db):
        item = InviteCodeListItem.model_validate(code)
        item.created_by_username = creator
        out.append(item)
    return out


@router.patch("/invite-codes/{code_id}/deactivate")
def admin_deactivate_invite_code(
    code_id: str,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        code = invite_codes.deactivate_invite_code(db, code_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Code deactivated", "code": InviteCodeOut.model_validate(code)}


@router.get("/invite-codes/{code}/users", response_model=list[InvitedUserOut])
def admin_users_by_invite_code(
    code: str,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return invite_codes.users_by_invite_code(db, code)
