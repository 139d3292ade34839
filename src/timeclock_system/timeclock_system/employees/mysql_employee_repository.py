from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, first_name, last_name, position, department, hourly_rate, pin_code, is_active"


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        position=r.get("position"),
        department=r.get("department"),
        hourly_rate=to_decimal(r.get("hourly_rate")),
        pin_code=r.get("pin_code"),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_active(self, *, department: Optional[str] = None) -> Sequence[Employee]:
        clauses = ["is_active=1"]
        params: list[object] = []
        if department:
            clauses.append("LOWER(department) LIKE %s")
            params.append(f"%{department.lower()}%")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE {" AND ".join(clauses)}
                ORDER BY last_name, first_name, employee_id
                """,
                tuple(params),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def get_active_by_pin(self, employee_id: int, pin_code: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s AND pin_code=%s AND is_active=1",
                (int(employee_id), pin_code),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None
