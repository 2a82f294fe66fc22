from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_open_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        """The record of ``user_id`` whose check-out is unset, if any."""

        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, *, user_id: str, check_in_time: datetime) -> int:
        """Insert an open record and return its id.

        Must raise ConflictError when the store already holds an open record
        for ``user_id``; the check and the insert are one atomic operation.
        """

        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, duration_seconds: int) -> bool:
        """Close an open record. Returns False when it was not open anymore."""

        raise NotImplementedError

    def list_for_user(self, user_id: str, *, offset: int, limit: int) -> Sequence[AttendanceRecord]:
        """Records ordered by check-in DESC, then id DESC."""

        raise NotImplementedError

    def count_for_user(self, user_id: str) -> int:
        raise NotImplementedError
