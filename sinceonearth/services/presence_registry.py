"""
In-memory presence registry behind the radar endpoints.

One record per user, overwritten on every location report. Nothing is
persisted: a restart empties the radar.

Staleness is enforced lazily. After each report the registry asks its
staleness policy to sweep; the default policy drops every record older than
the TTL using the same ``now`` the upsert used. Queries never sweep, so a
record that expired after the last write can still be returned until the
next write arrives (at worst one TTL past expiry when nobody reports).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from loguru import logger

from sinceonearth.core.radar_config import DEFAULT_RADIUS_KM, PRESENCE_STALE_TTL_SECONDS
from sinceonearth.services.geo import haversine_km


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PresenceRecord:
    user_id: str
    display_name: str
    latitude: float
    longitude: float
    last_seen: datetime
    profile_icon: Optional[str] = None


@dataclass(frozen=True)
class NearbyPresence:
    record: PresenceRecord
    distance_km: float


class WriteTriggeredSweep:
    """Drop records whose last_seen is older than ``ttl`` at write time."""

    def __init__(self, ttl: timedelta = timedelta(seconds=PRESENCE_STALE_TTL_SECONDS)):
        self.ttl = ttl

    def after_write(self, records: Dict[str, PresenceRecord], now: datetime) -> int:
        cutoff = now - self.ttl
        stale = [uid for uid, rec in records.items() if rec.last_seen < cutoff]
        for uid in stale:
            del records[uid]
        return len(stale)


class PresenceRegistry:
    def __init__(
        self,
        clock: Callable[[], datetime] = _utcnow,
        staleness: Optional[WriteTriggeredSweep] = None,
    ):
        self._records: Dict[str, PresenceRecord] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._staleness = staleness or WriteTriggeredSweep()

    def report(
        self,
        user_id: str,
        display_name: str,
        lat: float,
        lng: float,
        profile_icon: Optional[str] = None,
    ) -> PresenceRecord:
        with self._lock:
            now = self._clock()
            record = PresenceRecord(
                user_id=user_id,
                display_name=display_name,
                latitude=lat,
                longitude=lng,
                last_seen=now,
                profile_icon=profile_icon,
            )
            self._records[user_id] = record
            evicted = self._staleness.after_write(self._records, now)

        if evicted:
            logger.debug(f"[radar] evicted {evicted} stale presence record(s)")
        return record

    def query_nearby(
        self,
        requester_id: str,
        lat: float,
        lng: float,
        radius_km: float = DEFAULT_RADIUS_KM,
    ) -> List[NearbyPresence]:
        # snapshot under the lock, measure outside it
        with self._lock:
            snapshot = list(self._records.values())

        out: List[NearbyPresence] = []
        for rec in snapshot:
            if rec.user_id == requester_id:
                continue
            distance = haversine_km(lat, lng, rec.latitude, rec.longitude)
            if distance <= radius_km:
                out.append(NearbyPresence(record=rec, distance_km=distance))
        return out

    def get(self, user_id: str) -> Optional[PresenceRecord]:
        with self._lock:
            return self._records.get(user_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


_registry = PresenceRegistry()


def get_presence_registry() -> PresenceRegistry:
    return _registry
