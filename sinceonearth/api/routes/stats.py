from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sinceonearth.core.auth import CurrentUser, get_current_user
from sinceonearth.core.db import get_db
from sinceonearth.schemas.stats import PublicStats, TravelStats
from sinceonearth.services import stats as stats_service

router = APIRouter(tags=["stats"])


@router.get("/public/stats", response_model=PublicStats)
def get_public_stats(db: Session = Depends(get_db)):
    return stats_service.public_stats(db)


@router.get("/stats", response_model=TravelStats)
def get_my_stats(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return stats_service.travel_stats(db, user.user_id)
