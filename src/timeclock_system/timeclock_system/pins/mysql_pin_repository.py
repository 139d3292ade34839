from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import PIN_IN_USE_MESSAGE
from ..core.enums import PinOwner
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PinHolder
from .repository import PinRepository

_POOLS = {
    PinOwner.EMPLOYEE: ("employees", "employee_id"),
    PinOwner.PARENT: ("parents", "parent_id"),
}


class MySQLPinRepository(PinRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _query_holders(
        self,
        cur,
        pin_code: str,
        exclude_owner: Optional[PinOwner],
        exclude_id: Optional[int],
    ) -> Sequence[PinHolder]:
        selects: list[str] = []
        params: list[object] = []
        for owner, (table, id_col) in _POOLS.items():
            sql = (
                f"SELECT '{owner.value}' AS owner_type, {id_col} AS owner_id, first_name, last_name, is_active "
                f"FROM {table} WHERE pin_code=%s"
            )
            params.append(pin_code)
            if exclude_owner == owner and exclude_id is not None:
                sql += f" AND {id_col}<>%s"
                params.append(int(exclude_id))
            selects.append(sql)

        cur.execute(" UNION ALL ".join(selects), tuple(params))
        return [
            PinHolder(
                owner_type=PinOwner(r["owner_type"]),
                owner_id=int(r["owner_id"]),
                first_name=r["first_name"],
                last_name=r["last_name"],
                is_active=bool(r.get("is_active", True)),
            )
            for r in fetchall(cur)
        ]

    def find_holders(
        self,
        pin_code: str,
        *,
        exclude_owner: Optional[PinOwner] = None,
        exclude_id: Optional[int] = None,
    ) -> Sequence[PinHolder]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._query_holders(cur, pin_code, exclude_owner, exclude_id)

    def assign(self, owner_type: PinOwner, owner_id: int, pin_code: Optional[str]) -> bool:
        table, id_col = _POOLS[owner_type]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {id_col} FROM {table} WHERE {id_col}=%s FOR UPDATE", (int(owner_id),))
            if not fetchone(cur):
                return False

            if pin_code and self._query_holders(cur, pin_code, owner_type, owner_id):
                raise ConflictError(PIN_IN_USE_MESSAGE)

            # kiosk_pins.pin_code is the primary key: a concurrent writer of the
            # same PIN fails here with a duplicate key.
            cur.execute("DELETE FROM kiosk_pins WHERE owner_type=%s AND owner_id=%s", (owner_type.value, int(owner_id)))
            if pin_code:
                cur.execute(
                    "INSERT INTO kiosk_pins(pin_code, owner_type, owner_id) VALUES(%s,%s,%s)",
                    (pin_code, owner_type.value, int(owner_id)),
                )
            cur.execute(f"UPDATE {table} SET pin_code=%s WHERE {id_col}=%s", (pin_code, int(owner_id)))
            return True
