from datetime import datetime

from sqlalchemy.orm import Session

from sinceonearth.core.errors import NotFoundError
from .models import ContactMessage


# ---------- PUBLIC ----------

def create_message(db: Session, name: str, email: str, subject: str, message: str):
    msg = ContactMessage(
        name=name,
        email=email,
        subject=subject,
        message=message,
        is_read=False,
    )
    db.add(msg)
    db.commit()
    db.refresh(msg)
    return msg


# ---------- SENDER ----------

def messages_for_email(db: Session, email: str):
    return (
        db.query(ContactMessage)
        .filter(ContactMessage.email == email)
        .order_by(ContactMessage.created_at.desc())
        .all()
    )


def user_reply(db: Session, message_id: str, email: str, reply: str):
    msg = (
        db.query(ContactMessage)
        .filter(ContactMessage.id == message_id, ContactMessage.email == email)
        .first()
    )
    if not msg:
        raise NotFoundError("Message not found or you don't have permission")

    msg.user_reply = reply
    msg.user_replied_at = datetime.utcnow()
    db.commit()
    db.refresh(msg)
    return msg


# ---------- ADMIN ----------

def all_messages(db: Session):
    return db.query(ContactMessage).order_by(ContactMessage.created_at.desc()).all()


def _get(db: Session, message_id: str) -> ContactMessage:
    msg = db.get(ContactMessage, message_id)
    if not msg:
        raise NotFoundError("Message not found")
    return msg


def mark_read(db: Session, message_id: str):
    msg = _get(db, message_id)
    msg.is_read = True
    db.commit()
    db.refresh(msg)
    return msg


def admin_reply(db: Session, message_id: str, reply: str):
    msg = _get(db, message_id)
    msg.admin_reply = reply
    msg.replied_at = datetime.utcnow()
    db.commit()
    db.refresh(msg)
    return msg


def delete_message(db: Session, message_id: str) -> None:
    msg = _get(db, message_id)
    db.delete(msg)
    db.commit()
