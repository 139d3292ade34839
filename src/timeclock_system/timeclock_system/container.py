from __future__ import annotations

from dataclasses import dataclass

from .corrections.service import CorrectionService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .kiosk.service import KioskClockService
from .pins.mysql_pin_repository import MySQLPinRepository
from .pins.service import PinService
from .reports.service import PeriodReportService
from .timeclock.mysql_punch_repository import MySQLPunchRepository
from .timeclock.service import TimeclockService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    employees_repo: MySQLEmployeeRepository
    punches_repo: MySQLPunchRepository
    pins_repo: MySQLPinRepository

    auth_service: AuthService
    timeclock_service: TimeclockService
    period_report_service: PeriodReportService
    correction_service: CorrectionService
    pin_service: PinService
    kiosk_service: KioskClockService


def build_container(*, db_config: dict, pin_min_length: int = 4, pin_max_length: int = 6) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    punches_repo = MySQLPunchRepository(conn)
    pins_repo = MySQLPinRepository(conn)

    return Container(
        conn=conn,
        users_repo=users_repo,
        employees_repo=employees_repo,
        punches_repo=punches_repo,
        pins_repo=pins_repo,
        auth_service=AuthService(users_repo),
        timeclock_service=TimeclockService(punches_repo, employees_repo),
        period_report_service=PeriodReportService(punches_repo, employees_repo),
        correction_service=CorrectionService(punches_repo, employees_repo),
        pin_service=PinService(pins_repo, min_length=pin_min_length, max_length=pin_max_length),
        kiosk_service=KioskClockService(punches_repo, employees_repo),
    )
