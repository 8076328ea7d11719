from typing import List

from loguru import logger
from sqlalchemy.orm import Session

from sinceonearth.core.errors import NotFoundError
from sinceonearth.models.stayin import StayIn
from sinceonearth.schemas.stayins import StayInCreateRequest


def list_stayins(db: Session, user_id: str) -> List[StayIn]:
    return (
        db.query(StayIn)
        .filter(StayIn.user_id == user_id)
        .order_by(StayIn.check_in.desc())
        .all()
    )


def create_stayin(db: Session, user_id: str, payload: StayInCreateRequest) -> StayIn:
    stayin = StayIn(
        user_id=user_id,
        name=payload.name,
        city=payload.city,
        country=payload.country,
        check_in=payload.check_in,
        check_out=payload.check_out,
        maps_pin=payload.maps_pin or None,
        type=payload.type,
    )
    db.add(stayin)
    db.commit()
    db.refresh(stayin)

    logger.info(f"Stay in added | user={user_id} name={stayin.name}")
    return stayin


def delete_stayin(db: Session, user_id: str, stayin_id: str) -> None:
    deleted = (
        db.query(StayIn)
        .filter(StayIn.id == stayin_id, StayIn.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise NotFoundError("Stay in not found")
    db.commit()
