from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.orm import Session

from sinceonearth.core.auth import CurrentUser, get_current_user, require_admin
from sinceonearth.core.db import get_db
from sinceonearth.core.errors import NotFoundError
from .schemas import ContactCreateRequest, ContactMessageOut, ReplyRequest
from .service import (
    create_message,
    messages_for_email,
    user_reply,
    all_messages,
    mark_read,
    admin_reply,
    delete_message,
)

router = APIRouter(tags=["contact"])
admin_router = APIRouter(prefix="/admin/contact-messages", tags=["admin"])


def _require_reply(payload: ReplyRequest) -> str:
    reply = payload.reply.strip()
    if not reply:
        raise HTTPException(status_code=400, detail="Reply cannot be empty")
    return reply


@router.post("/contact", status_code=201)
def contact_submit(
    payload: ContactCreateRequest,
    db: Session = Depends(get_db),
):
    msg = create_message(db, payload.name, payload.email, payload.subject, payload.message)
    logger.info(f"Contact message received | id={msg.id}")
    return {
        "message": "Message sent successfully",
        "contactMessage": ContactMessageOut.model_validate(msg),
    }


@router.get("/contact-messages", response_model=list[ContactMessageOut])
def contact_my_messages(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return messages_for_email(db, user.email)


@router.patch("/contact-messages/{message_id}/user-reply")
def contact_user_reply(
    message_id: str,
    payload: ReplyRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    reply = _require_reply(payload)
    try:
        msg = user_reply(db, message_id, user.email, reply)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Reply sent successfully", "data": ContactMessageOut.model_validate(msg)}


# ---------- ADMIN ----------

@admin_router.get("", response_model=list[ContactMessageOut])
def admin_list_messages(
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return all_messages(db)


@admin_router.patch("/{message_id}/read")
def admin_mark_read(
    message_id: str,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        msg = mark_read(db, message_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Message marked as read", "data": ContactMessageOut.model_validate(msg)}


@admin_router.patch("/{message_id}/reply")
def admin_reply_message(
    message_id: str,
    payload: ReplyRequest,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    reply = _require_reply(payload)
    try:
        msg = admin_reply(db, message_id, reply)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Reply sent successfully", "data": ContactMessageOut.model_validate(msg)}


@admin_router.delete("/{message_id}")
def admin_delete_message(
    message_id: str,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        delete_message(db, message_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Message deleted"}
