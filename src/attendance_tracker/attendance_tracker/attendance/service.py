from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import elapsed_seconds, now_local
from ..core.exceptions import ConflictError, InvalidStateError
from .model import AttendanceRecord, HistoryPage
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Session ledger: owns the open/closed transitions of attendance records.

    A user has at most one open session. The repository enforces that
    atomically on insert and only closes rows that are still open, so two
    racing requests cannot both succeed; the look-ups here exist to report
    the common case with a clear error before touching the store.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def get_active_session(self, user_id: str) -> Optional[AttendanceRecord]:
        return self._attendance.get_open_for_user(user_id)

    def is_working(self, user_id: str) -> bool:
        return self.get_active_session(user_id) is not None

    def check_in(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()

        if self.get_active_session(user_id):
            logger.info("Rejected check-in for %s: session already open", user_id)
            raise ConflictError("User is already checked in. Please check out first.")

        attendance_id = self._attendance.create_checkin(user_id=user_id, check_in_time=now)
        logger.info("User %s checked in at %s (attendance_id=%s)", user_id, now.isoformat(), attendance_id)
        return self._reload(attendance_id)

    def check_out(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()

        record = self.get_active_session(user_id)
        if not record:
            logger.info("Rejected check-out for %s: no active session", user_id)
            raise InvalidStateError("No active session found. Please check in first.")

        if now < record.check_in:
            logger.warning(
                "Clock for %s went backwards (check-in %s, now %s); closing with zero duration",
                user_id, record.check_in.isoformat(), now.isoformat(),
            )
            now = record.check_in
        duration = elapsed_seconds(record.check_in, now)

        closed = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            duration_seconds=duration,
        )
        if not closed:
            # Closed by a concurrent request between the look-up and the update.
            raise InvalidStateError("No active session found. Please check in first.")

        logger.info("User %s checked out after %ss (attendance_id=%s)", user_id, duration, record.attendance_id)
        return self._reload(record.attendance_id)

    def list_history(self, user_id: str, page: int, limit: int) -> HistoryPage:
        """Page ``page`` of the user's records, ``limit`` per page.

        ``page`` and ``limit`` must already be validated (both >= 1).
        """

        offset = (page - 1) * limit
        data = self._attendance.list_for_user(user_id, offset=offset, limit=limit)
        total = self._attendance.count_for_user(user_id)
        return HistoryPage.build(data=list(data), total=total, page=page, limit=limit)

    def _reload(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if record is None:
            raise RuntimeError(f"attendance record {attendance_id} vanished after write")
        return record
