from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in/check-out session of a user."""

    attendance_id: int
    user_id: str
    check_in: datetime
    check_out: Optional[datetime] = None
    duration: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "checkIn": isoformat_or_none(self.check_in),
            "checkOut": isoformat_or_none(self.check_out),
            "duration": self.duration,
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }


@dataclass(frozen=True)
class HistoryPage:
    """One window of a user's history, most recent check-in first."""

    data: list[AttendanceRecord] = field(default_factory=list)
    total: int = 0
    page: int = 1
    last_page: int = 0

    @classmethod
    def build(cls, *, data: list[AttendanceRecord], total: int, page: int, limit: int) -> "HistoryPage":
        return cls(data=list(data), total=total, page=page, last_page=math.ceil(total / limit))

    def to_dict(self) -> dict:
        return {
            "data": [r.to_dict() for r in self.data],
            "total": self.total,
            "page": self.page,
            "lastPage": self.last_page,
        }
