from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import day_start, next_day
from ..core.constants import OPEN_PUNCH_CONFLICT_MESSAGE
from ..core.enums import EntryType
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewPunch, Punch, PunchCorrection, is_set
from .repository import PunchRepository
from .rules import apply_correction, compute_total_minutes

_COLUMNS = """
    t.punch_id, t.employee_id, t.clock_in, t.clock_out, t.entry_type, t.total_minutes,
    t.notes, t.adjusted_by, t.adjusted_at, t.adjustment_reason, t.created_at
"""


def _to_punch(r: dict) -> Punch:
    return Punch(
        punch_id=int(r["punch_id"]),
        employee_id=int(r["employee_id"]),
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        entry_type=EntryType(r.get("entry_type") or EntryType.SHIFT.value),
        total_minutes=int(r["total_minutes"]) if r.get("total_minutes") is not None else None,
        notes=r.get("notes"),
        adjusted_by=r.get("adjusted_by"),
        adjusted_at=r.get("adjusted_at"),
        adjustment_reason=r.get("adjustment_reason"),
        created_at=r.get("created_at"),
    )


def _day_bounds(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    # Half-open range on clock_in so the index on clock_in is usable.
    return day_start(start_date), day_start(next_day(end_date))


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_by_id(self, cur, punch_id: int, *, for_update: bool = False) -> Optional[Punch]:
        cur.execute(
            f"SELECT {_COLUMNS} FROM employee_timeclock t WHERE t.punch_id=%s" + (" FOR UPDATE" if for_update else ""),
            (int(punch_id),),
        )
        r = fetchone(cur)
        return _to_punch(r) if r else None

    def get_by_id(self, punch_id: int) -> Optional[Punch]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_by_id(cur, punch_id)

    def list_for_day(self, work_date: date) -> Sequence[Punch]:
        return self.list_between(start_date=work_date, end_date=work_date)

    def list_between(self, *, start_date: date, end_date: date, department: Optional[str] = None) -> Sequence[Punch]:
        lo, hi = _day_bounds(start_date, end_date)
        clauses = ["t.clock_in >= %s", "t.clock_in < %s", "e.is_active=1"]
        params: list[object] = [lo, hi]
        if department:
            clauses.append("LOWER(e.department) LIKE %s")
            params.append(f"%{department.lower()}%")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_timeclock t
                JOIN employees e ON e.employee_id = t.employee_id
                WHERE {" AND ".join(clauses)}
                ORDER BY t.employee_id, t.clock_in, t.punch_id
                """,
                tuple(params),
            )
            return [_to_punch(r) for r in fetchall(cur)]

    def list_open_for_employee(self, employee_id: int) -> Sequence[Punch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_timeclock t
                WHERE t.employee_id=%s AND t.clock_out IS NULL
                ORDER BY t.clock_in DESC, t.punch_id DESC
                """,
                (int(employee_id),),
            )
            return [_to_punch(r) for r in fetchall(cur)]

    def _employee_filter(
        self, employee_id: int, start_date: Optional[date], end_date: Optional[date]
    ) -> tuple[list[str], list[object]]:
        clauses = ["t.employee_id=%s"]
        params: list[object] = [int(employee_id)]
        if start_date is not None:
            clauses.append("t.clock_in >= %s")
            params.append(day_start(start_date))
        if end_date is not None:
            clauses.append("t.clock_in < %s")
            params.append(day_start(next_day(end_date)))
        return clauses, params

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Punch]:
        clauses, params = self._employee_filter(employee_id, start_date, end_date)
        params.extend([int(limit), int(offset)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_timeclock t
                WHERE {" AND ".join(clauses)}
                ORDER BY t.clock_in DESC, t.punch_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params),
            )
            return [_to_punch(r) for r in fetchall(cur)]

    def count_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        closed_only: bool = False,
    ) -> tuple[int, int]:
        clauses, params = self._employee_filter(employee_id, start_date, end_date)
        if closed_only:
            clauses.append("t.total_minutes IS NOT NULL")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(*) AS records, COALESCE(SUM(t.total_minutes), 0) AS minutes
                FROM employee_timeclock t
                WHERE {" AND ".join(clauses)}
                """,
                tuple(params),
            )
            r = fetchone(cur) or {}
            return int(r.get("records") or 0), int(r.get("minutes") or 0)

    def _lock_employee(self, cur, employee_id: int, *, allow_open_punch_id: Optional[int] = None) -> None:
        """Serialize writers on the employee row, then refuse a second open punch."""
        cur.execute("SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
        if not fetchone(cur):
            raise NotFoundError("Employee not found")

        sql = "SELECT punch_id FROM employee_timeclock WHERE employee_id=%s AND clock_out IS NULL"
        params: list[object] = [int(employee_id)]
        if allow_open_punch_id is not None:
            sql += " AND punch_id<>%s"
            params.append(int(allow_open_punch_id))
        # locking read: sees rows committed after this transaction's snapshot
        cur.execute(sql + " LIMIT 1 FOR UPDATE", tuple(params))
        if fetchone(cur):
            raise ConflictError(OPEN_PUNCH_CONFLICT_MESSAGE)

    def create(self, punch: NewPunch) -> Punch:
        total_minutes = compute_total_minutes(punch.clock_in, punch.clock_out)
        with db_cursor(self._conn_factory) as (_, cur):
            if punch.clock_out is None:
                self._lock_employee(cur, punch.employee_id)
            cur.execute(
                """
                INSERT INTO employee_timeclock(
                    employee_id, clock_in, clock_out, entry_type, total_minutes,
                    notes, adjusted_by, adjusted_at, adjustment_reason
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(punch.employee_id),
                    punch.clock_in,
                    punch.clock_out,
                    punch.entry_type.value,
                    total_minutes,
                    punch.notes,
                    punch.adjusted_by,
                    punch.adjusted_at,
                    punch.adjustment_reason,
                ),
            )
            return self._select_by_id(cur, int(cur.lastrowid))

    def _write(self, cur, punch: Punch) -> None:
        cur.execute(
            """
            UPDATE employee_timeclock
            SET clock_in=%s, clock_out=%s, total_minutes=%s, notes=%s,
                adjusted_by=%s, adjusted_at=%s, adjustment_reason=%s
            WHERE punch_id=%s
            """,
            (
                punch.clock_in,
                punch.clock_out,
                punch.total_minutes,
                punch.notes,
                punch.adjusted_by,
                punch.adjusted_at,
                punch.adjustment_reason,
                punch.punch_id,
            ),
        )

    def apply_correction(self, punch_id: int, correction: PunchCorrection) -> Optional[Punch]:
        with db_cursor(self._conn_factory) as (_, cur):
            current = self._select_by_id(cur, punch_id)
            if current is None:
                return None
            reopening = is_set(correction.clock_out) and correction.clock_out is None and not current.is_open
            if reopening:
                # employee row first, then the punch: same lock order as create
                self._lock_employee(cur, current.employee_id, allow_open_punch_id=current.punch_id)
            current = self._select_by_id(cur, punch_id, for_update=True)
            if current is None:
                return None
            updated = apply_correction(current, correction)
            self._write(cur, updated)
            return self._select_by_id(cur, punch_id)

    def close(self, punch_id: int, *, clock_out: datetime) -> Punch:
        with db_cursor(self._conn_factory) as (_, cur):
            current = self._select_by_id(cur, punch_id, for_update=True)
            if current is None:
                raise NotFoundError("Time record not found")
            if not current.is_open:
                raise ValidationError("Time record is already closed")
            cur.execute(
                "UPDATE employee_timeclock SET clock_out=%s, total_minutes=%s WHERE punch_id=%s",
                (clock_out, compute_total_minutes(current.clock_in, clock_out), int(punch_id)),
            )
            return self._select_by_id(cur, punch_id)

    def close_and_open(self, punch_id: int, *, at: datetime, next_entry_type: EntryType) -> Punch:
        with db_cursor(self._conn_factory) as (_, cur):
            current = self._select_by_id(cur, punch_id)
            if current is None:
                raise NotFoundError("Time record not found")
            self._lock_employee(cur, current.employee_id, allow_open_punch_id=current.punch_id)
            current = self._select_by_id(cur, punch_id, for_update=True)
            if current is None:
                raise NotFoundError("Time record not found")
            if not current.is_open:
                raise ValidationError("Time record is already closed")
            cur.execute(
                "UPDATE employee_timeclock SET clock_out=%s, total_minutes=%s WHERE punch_id=%s",
                (at, compute_total_minutes(current.clock_in, at), int(punch_id)),
            )
            cur.execute(
                "INSERT INTO employee_timeclock(employee_id, clock_in, entry_type) VALUES(%s,%s,%s)",
                (current.employee_id, at, next_entry_type.value),
            )
            return self._select_by_id(cur, int(cur.lastrowid))

    def delete(self, punch_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employee_timeclock WHERE punch_id=%s", (int(punch_id),))
            return cur.rowcount > 0
