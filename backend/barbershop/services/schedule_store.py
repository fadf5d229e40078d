# backend/barbershop/services/schedule_store.py
"""
Current schedule: latest-wins log in the database, optional Redis cache.

Key format: schedule:current
Value: JSON {"id": <schedule row id>, "schedule": <camelCase payload>}, with TTL.

replace() overwrites the key right after the commit. get() only fills the
key when it is absent (SET NX), so a slow reader can never put an older
schedule over a newer write-through. The highest row id this process has
written is remembered; cached entries older than that are ignored, which
covers a write-through that failed to reach Redis.
Other processes may see the previous value until the key expires.
"""

import json
import logging
import threading
from typing import Any, Mapping

from redis import Redis
from sqlalchemy.orm import Session

from ..config import settings
from ..exceptions import ScheduleValidationError
from ..repository import ScheduleRepository
from .slots.config import ScheduleConfig, get_default_schedule
from .slots.validator import validate_schedule

logger = logging.getLogger(__name__)


class ScheduleStore:
    """Read/replace access to the single current schedule."""

    CACHE_KEY = "schedule:current"

    # Highest schedule row id written by this process
    _last_written_id = 0
    _marker_lock = threading.Lock()

    def __init__(self, db: Session, redis: Redis | None = None, ttl_seconds: int | None = None):
        self.db = db
        self.redis = redis
        self.ttl_seconds = ttl_seconds or settings.schedule_cache_ttl_seconds

    # ── Read ─────────────────────────────────────────────────────────────

    def get(self) -> ScheduleConfig:
        """Most recently stored schedule, or the built-in default."""
        cached = self._cache_get()
        if cached is not None:
            return cached

        latest = ScheduleRepository.latest(self.db)
        if latest is None:
            # Not cached: the first replace() must be visible immediately
            return get_default_schedule()

        schedule_id, config = latest
        self._cache_fill(schedule_id, config)
        return config

    # ── Write ────────────────────────────────────────────────────────────

    def replace(self, candidate: Any) -> ScheduleConfig:
        """
        Validate and store a complete schedule.

        Raises:
            ScheduleValidationError: with the validator's error list
        """
        if isinstance(candidate, Mapping) and candidate.get("vacationRanges") is None:
            candidate = {**candidate, "vacationRanges": []}

        result = validate_schedule(candidate)
        if not result.valid:
            raise ScheduleValidationError(errors=result.errors)

        schedule_id, stored = ScheduleRepository.append(
            self.db, ScheduleConfig.from_payload(candidate)
        )
        self._mark_written(schedule_id)
        self._cache_write_through(schedule_id, stored)
        logger.info(
            f"Schedule replaced: id={schedule_id} days={list(stored.open_days)} "
            f"{stored.start_time}-{stored.end_time} step={stored.slot_minutes}"
        )
        return stored

    # ── Cache ────────────────────────────────────────────────────────────

    @classmethod
    def _mark_written(cls, schedule_id: int) -> None:
        with cls._marker_lock:
            if schedule_id > cls._last_written_id:
                cls._last_written_id = schedule_id

    def _cache_get(self) -> ScheduleConfig | None:
        if self.redis is None:
            return None
        try:
            data = self.redis.get(self.CACHE_KEY)
            if not data:
                return None
            entry = json.loads(data)
            if entry["id"] < ScheduleStore._last_written_id:
                logger.info(
                    f"Ignoring cached schedule id={entry['id']}, "
                    f"this process wrote id={ScheduleStore._last_written_id}"
                )
                self.invalidate()
                return None
            return ScheduleConfig.from_payload(entry["schedule"])
        except Exception as e:
            logger.warning(f"Schedule cache read error: {e}")
        return None

    def _cache_fill(self, schedule_id: int, config: ScheduleConfig) -> None:
        """Populate the key only if nobody else has set it meanwhile."""
        if self.redis is None:
            return
        try:
            self.redis.set(
                self.CACHE_KEY,
                self._encode(schedule_id, config),
                ex=self.ttl_seconds,
                nx=True,
            )
        except Exception as e:
            logger.warning(f"Schedule cache fill error: {e}")

    def _cache_write_through(self, schedule_id: int, config: ScheduleConfig) -> None:
        if self.redis is None:
            return
        try:
            self.redis.setex(self.CACHE_KEY, self.ttl_seconds, self._encode(schedule_id, config))
        except Exception as e:
            logger.warning(f"Schedule cache write error: {e}")
            self.invalidate()

    @staticmethod
    def _encode(schedule_id: int, config: ScheduleConfig) -> str:
        return json.dumps({"id": schedule_id, "schedule": config.to_payload()})

    def invalidate(self) -> None:
        """Drop the cached schedule (e.g. after a manual database edit)."""
        if self.redis is None:
            return
        try:
            self.redis.delete(self.CACHE_KEY)
        except Exception as e:
            logger.warning(f"Schedule cache delete error: {e}")
