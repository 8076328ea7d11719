from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from sinceonearth.core.auth import CurrentUser, get_current_user
from sinceonearth.core.db import get_db
from sinceonearth.core.errors import NotFoundError
from sinceonearth.schemas.stayins import StayInCreateRequest, StayInCreateResponse, StayInOut
from sinceonearth.services import stayins as stayins_service

router = APIRouter(prefix="/stayins", tags=["stayins"])


@router.get("", response_model=list[StayInOut])
def list_stayins(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return stayins_service.list_stayins(db, user.user_id)


@router.post("", status_code=201, response_model=StayInCreateResponse)
def add_stayin(
    payload: StayInCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    stayin = stayins_service.create_stayin(db, user.user_id, payload)
    return {"message": "Stay in added successfully", "stayin": StayInOut.model_validate(stayin)}


@router.delete("/{stayin_id}")
def delete_stayin(
    stayin_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        stayins_service.delete_stayin(db, user.user_id, stayin_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Stay in deleted successfully"}
