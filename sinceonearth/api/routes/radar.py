from fastapi import APIRouter, Depends, Query
from loguru import logger
from sqlalchemy.orm import Session

from sinceonearth.core.auth import CurrentUser, get_current_user
from sinceonearth.core.db import get_db
from sinceonearth.core.radar_config import DEFAULT_RADIUS_KM
from sinceonearth.schemas.radar import (
    NearbyResponse,
    NearbyUser,
    RadarUpdateRequest,
    RadarUpdateResponse,
)
from sinceonearth.services.presence_registry import PresenceRegistry, get_presence_registry
from sinceonearth.services.users import profile_icon_for

router = APIRouter(prefix="/radr", tags=["radar"])


# ------------------------------------------------------------------
# UPDATE
# ------------------------------------------------------------------

@router.post("/update", response_model=RadarUpdateResponse)
def radar_update(
    payload: RadarUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    registry: PresenceRegistry = Depends(get_presence_registry),
):
    icon = profile_icon_for(db, user.user_id)

    registry.report(
        user_id=user.user_id,
        display_name=user.username,
        lat=payload.lat,
        lng=payload.lng,
        profile_icon=icon,
    )

    return {"message": "Location updated"}


# ------------------------------------------------------------------
# NEARBY
# ------------------------------------------------------------------

@router.get("/nearby", response_model=NearbyResponse)
def radar_nearby(
    lat: float = Query(..., ge=-90, le=90, allow_inf_nan=False),
    lng: float = Query(..., ge=-180, le=180, allow_inf_nan=False),
    radius_km: float = Query(DEFAULT_RADIUS_KM, gt=0, allow_inf_nan=False),
    user: CurrentUser = Depends(get_current_user),
    registry: PresenceRegistry = Depends(get_presence_registry),
):
    hits = registry.query_nearby(user.user_id, lat, lng, radius_km)

    logger.debug(f"[radar] nearby user={user.user_id} radius_km={radius_km} hits={len(hits)}")

    return {
        "nearby": [
            NearbyUser(
                userId=h.record.user_id,
                username=h.record.display_name,
                lat=h.record.latitude,
                lng=h.record.longitude,
                lastSeen=h.record.last_seen,
                profile_icon=h.record.profile_icon,
                distance=h.distance_km,
            )
            for h in hits
        ]
    }
