from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, user_id, check_in_time, check_out_time, duration_seconds, created_at, updated_at
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    duration = r.get("duration_seconds")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=str(r["user_id"]),
        check_in=r["check_in_time"],
        check_out=r.get("check_out_time"),
        duration=int(duration) if duration is not None else None,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_open_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND check_out_time IS NULL
                ORDER BY check_in_time DESC, attendance_id DESC
                LIMIT 1
                """,
                (user_id,),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(self, *, user_id: str, check_in_time: datetime) -> int:
        # uq_attendance_open_session rejects a second open row for the user.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, check_in_time, created_at, updated_at)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (user_id, check_in_time, check_in_time, check_in_time),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("User is already checked in. Please check out first.") from e
            raise

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, duration_seconds: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, duration_seconds=%s, updated_at=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, int(duration_seconds), check_out_time, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_for_user(self, user_id: str, *, offset: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY check_in_time DESC, attendance_id DESC
                LIMIT %s OFFSET %s
                """,
                (user_id, int(limit), int(offset)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_for_user(self, user_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM attendance_records WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            return int(r["total"]) if r else 0
