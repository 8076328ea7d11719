from typing import List, Optional

from loguru import logger
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sinceonearth.core.auth import hash_password, verify_password
from sinceonearth.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidInviteCodeError,
    NotFoundError,
    UserLimitReachedError,
)
from sinceonearth.models.flight import Flight
from sinceonearth.models.invite_code import InviteCode
from sinceonearth.models.stayin import StayIn
from sinceonearth.models.user import User
from sinceonearth.services import invite_codes

MAX_ALIEN = 99


# ---------- lookups ----------

def get_by_username_or_email(db: Session, identifier: str) -> Optional[User]:
    return (
        db.query(User)
        .filter(or_(User.username == identifier, User.email == identifier))
        .first()
    )


def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def _next_alien(db: Session) -> str:
    current = db.query(func.max(User.alien)).scalar() or "00"
    nxt = int(current) + 1
    if nxt > MAX_ALIEN:
        raise UserLimitReachedError("Maximum number of users reached")
    return f"{nxt:02d}"


# ---------- registration / login ----------

def register_user(
    db: Session,
    *,
    name: str,
    username: str,
    email: str,
    password: str,
    country: Optional[str] = None,
    invite_code: Optional[str] = None,
) -> User:
    if get_by_username_or_email(db, email):
        raise ConflictError("Email already registered")
    if get_by_username_or_email(db, username):
        raise ConflictError("Username already taken")

    invite: Optional[InviteCode] = None
    if invite_code:
        invite = invite_codes.find_valid_code(db, invite_code)
        if not invite:
            raise InvalidInviteCodeError("Invalid or expired invite code")

    password_hash = hash_password(password)
    invite_id = invite.id if invite else None
    invite_value = invite.code if invite else None

    # a concurrent registration can take the same alien number; retry once
    for attempt in range(2):
        user = User(
            alien=_next_alien(db),
            username=username,
            email=email,
            password_hash=password_hash,
            name=name,
            country=country or "Other",
            approved=invite_id is not None,
            invite_code_used=invite_value,
        )
        db.add(user)
        try:
            db.flush()
            break
        except IntegrityError:
            db.rollback()
            if attempt:
                raise ConflictError("Registration conflicted with another signup, please retry")
            logger.warning(f"Alien number {user.alien} taken concurrently, retrying | username={username}")

    if invite_id:
        invite = db.get(InviteCode, invite_id)
        invite_codes.mark_code_used(db, invite, user.id)

    db.commit()
    db.refresh(user)

    logger.info(f"User registered | user={user.id} alien={user.alien} approved={user.approved}")
    return user


def authenticate(db: Session, identifier: str, password: str) -> User:
    user = get_by_username_or_email(db, identifier)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError("Invalid credentials")
    return user


# ---------- profile ----------

def update_profile(
    db: Session,
    user_id: str,
    *,
    name: str,
    username: str,
    email: str,
    country: Optional[str],
) -> User:
    user = get_user(db, user_id)

    other = get_by_username_or_email(db, email)
    if other and other.id != user_id:
        raise ConflictError("Email already in use")

    other = get_by_username_or_email(db, username)
    if other and other.id != user_id:
        raise ConflictError("Username already taken")

    user.name = name
    user.username = username
    user.email = email
    user.country = country or "Other"
    db.commit()
    db.refresh(user)
    return user


def change_password(db: Session, user_id: str, current: str, new: str) -> None:
    user = get_user(db, user_id)
    if not verify_password(current, user.password_hash):
        raise InvalidCredentialsError("Current password is incorrect")

    user.password_hash = hash_password(new)
    db.commit()
    logger.info(f"Password changed | user={user_id}")


def complete_profile_setup(db: Session, user_id: str, profile_icon: str, profile_color: str) -> User:
    user = get_user(db, user_id)
    user.profile_icon = profile_icon
    user.profile_color = profile_color
    user.profile_setup_complete = True
    db.commit()
    db.refresh(user)
    return user


def update_profile_icon(db: Session, user_id: str, profile_icon: str) -> User:
    user = get_user(db, user_id)
    user.profile_icon = profile_icon
    db.commit()
    db.refresh(user)
    return user


def profile_icon_for(db: Session, user_id: str) -> Optional[str]:
    row = db.query(User.profile_icon).filter(User.id == user_id).first()
    return row[0] if row else None


# ---------- admin ----------

def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.alien.asc()).all()


def list_pending_users(db: Session) -> List[User]:
    return (
        db.query(User)
        .filter(User.approved.is_(False))
        .order_by(User.created_at.desc())
        .all()
    )


def approve_user(db: Session, user_id: str) -> User:
    user = get_user(db, user_id)
    user.approved = True
    db.commit()
    db.refresh(user)
    logger.info(f"User approved | user={user_id}")
    return user


def reject_user(db: Session, user_id: str) -> None:
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info(f"User rejected | user={user_id}")


def delete_user(db: Session, user_id: str) -> None:
    """Remove a user together with everything they logged."""
    user = get_user(db, user_id)

    db.query(InviteCode).filter(InviteCode.used_by == user_id).update(
        {InviteCode.used_by: None}, synchronize_session=False
    )
    db.query(InviteCode).filter(InviteCode.created_by == user_id).update(
        {InviteCode.created_by: None}, synchronize_session=False
    )
    db.query(Flight).filter(Flight.user_id == user_id).delete(synchronize_session=False)
    db.query(StayIn).filter(StayIn.user_id == user_id).delete(synchronize_session=False)
    db.delete(user)
    db.commit()

    logger.info(f"User deleted | user={user_id}")
