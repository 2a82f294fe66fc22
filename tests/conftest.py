from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.container import Container
from src.attendance_tracker.attendance_tracker.core.exceptions import ConflictError
from src.attendance_tracker.attendance_tracker.main import create_app


class InMemoryAttendance:
    """Repository fake; create_checkin is atomic like the unique open-session index."""

    def __init__(self):
        self._by_id: dict[int, AttendanceRecord] = {}
        self._id = 0

    def get_open_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        open_records = [r for r in self._by_id.values() if r.user_id == user_id and r.check_out is None]
        return max(open_records, key=lambda r: (r.check_in, r.attendance_id), default=None)

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(attendance_id)

    def create_checkin(self, *, user_id: str, check_in_time: datetime) -> int:
        if any(r.user_id == user_id and r.check_out is None for r in self._by_id.values()):
            raise ConflictError("User is already checked in. Please check out first.")
        self._id += 1
        self._by_id[self._id] = AttendanceRecord(
            attendance_id=self._id,
            user_id=user_id,
            check_in=check_in_time,
            created_at=check_in_time,
            updated_at=check_in_time,
        )
        return self._id

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, duration_seconds: int) -> bool:
        rec = self._by_id.get(attendance_id)
        if rec is None or rec.check_out is not None:
            return False
        self._by_id[attendance_id] = replace(
            rec, check_out=check_out_time, duration=duration_seconds, updated_at=check_out_time
        )
        return True

    def list_for_user(self, user_id: str, *, offset: int, limit: int):
        items = [r for r in self._by_id.values() if r.user_id == user_id]
        items.sort(key=lambda r: (r.check_in, r.attendance_id), reverse=True)
        return items[offset:offset + limit]

    def count_for_user(self, user_id: str) -> int:
        return sum(1 for r in self._by_id.values() if r.user_id == user_id)

    # test helper, not part of the repository protocol
    def add_closed(self, *, user_id: str, check_in_time: datetime, check_out_time: datetime) -> AttendanceRecord:
        attendance_id = self.create_checkin(user_id=user_id, check_in_time=check_in_time)
        self.update_checkout(
            attendance_id=attendance_id,
            check_out_time=check_out_time,
            duration_seconds=int((check_out_time - check_in_time).total_seconds()),
        )
        return self._by_id[attendance_id]


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 0, 0)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def ledger(attendance_repo) -> AttendanceService:
    return AttendanceService(attendance_repo)


@pytest.fixture
def app(monkeypatch, attendance_repo, ledger):
    monkeypatch.setenv("APP_ENV", "testing")
    container = Container(conn=None, attendance_repo=attendance_repo, attendance_service=ledger)
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
