import secrets
import string
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from loguru import logger
from sqlalchemy import or_
from sqlalchemy.orm import Session, aliased

from sinceonearth.core.errors import NotFoundError
from sinceonearth.models.invite_code import InviteCode
from sinceonearth.models.user import User

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 12


def generate_code() -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def find_valid_code(db: Session, code: str, now: Optional[datetime] = None) -> Optional[InviteCode]:
    """Active, unexpired and not used up."""
    now = now or datetime.utcnow()
    return (
        db.query(InviteCode)
        .filter(
            InviteCode.code == code,
            InviteCode.is_active.is_(True),
            or_(InviteCode.expires_at.is_(None), InviteCode.expires_at > now),
            InviteCode.current_uses < InviteCode.max_uses,
        )
        .first()
    )


def mark_code_used(db: Session, invite: InviteCode, user_id: str) -> None:
    invite.current_uses = (invite.current_uses or 0) + 1
    invite.used_by = user_id


def create_invite_code(
    db: Session,
    created_by: str,
    max_uses: int = 1,
    expires_at: Optional[datetime] = None,
) -> InviteCode:
    code = generate_code()
    while db.query(InviteCode.id).filter(InviteCode.code == code).first():
        code = generate_code()

    # stored naive, compared against utcnow()
    if expires_at is not None and expires_at.tzinfo is not None:
        expires_at = expires_at.astimezone(timezone.utc).replace(tzinfo=None)

    invite = InviteCode(
        code=code,
        created_by=created_by,
        max_uses=max_uses,
        current_uses=0,
        is_active=True,
        expires_at=expires_at,
    )
    db.add(invite)
    db.commit()
    db.refresh(invite)

    logger.info(f"Invite code created | code={code} max_uses={max_uses} by={created_by}")
    return invite


def list_invite_codes(db: Session) -> List[Tuple[InviteCode, Optional[str]]]:
    creator = aliased(User)
    return (
        db.query(InviteCode, creator.username)
        .outerjoin(creator, InviteCode.created_by == creator.id)
        .order_by(InviteCode.created_at.desc())
        .all()
    )


def deactivate_invite_code(db: Session, code_id: str) -> InviteCode:
    invite = db.get(InviteCode, code_id)
    if not invite:
        raise NotFoundError("Invite code not found")

    invite.is_active = False
    db.commit()
    db.refresh(invite)
    return invite


def users_by_invite_code(db: Session, code: str) -> List[User]:
    return (
        db.query(User)
        .filter(User.invite_code_used == code)
        .order_by(User.created_at.desc())
        .all()
    )
