from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from .admins.mysql_admin_repository import MySQLAdminRepository
from .admins.repository import AdminRepository
from .admins.service import AuthService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import utc_offset_label
from .core.constants import DEFAULT_UTC_OFFSET_HOURS
from .dashboard.mysql_dashboard_repository import MySQLDashboardRepository
from .dashboard.repository import DashboardRepository
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .faces.mysql_face_repository import MySQLFaceRepository
from .faces.repository import FaceRepository
from .faces.service import FaceService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    admins_repo: AdminRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    faces_repo: FaceRepository
    dashboard_repo: DashboardRepository
    reports_repo: ReportRepository

    auth_service: AuthService
    employee_service: EmployeeService
    face_service: FaceService
    attendance_service: AttendanceService
    dashboard_service: DashboardService
    report_service: ReportService


def assemble_container(
    *,
    conn: Optional[DatabaseConnection],
    admins_repo: AdminRepository,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    faces_repo: FaceRepository,
    dashboard_repo: DashboardRepository,
    reports_repo: ReportRepository,
    utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS,
    late_cutoff: time = time(8, 30),
) -> Container:
    """Wire services on top of the given repositories (MySQL ones in the app, fakes in tests)."""
    return Container(
        conn=conn,
        admins_repo=admins_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        faces_repo=faces_repo,
        dashboard_repo=dashboard_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(admins_repo),
        employee_service=EmployeeService(employees_repo, attendance_repo, faces_repo),
        face_service=FaceService(faces_repo, employees_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            employees_repo,
            strategy_factory=AttendanceStrategyFactory(),
            utc_offset_hours=utc_offset_hours,
            late_cutoff=late_cutoff,
        ),
        dashboard_service=DashboardService(dashboard_repo, utc_offset_hours=utc_offset_hours),
        report_service=ReportService(reports_repo, dashboard_repo, utc_offset_hours=utc_offset_hours),
    )


def build_container(
    *,
    db_config: dict,
    pool_size: int = 5,
    pool_timeout: float = 5.0,
    utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS,
    late_cutoff: time = time(8, 30),
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(pool_size),
        pool_timeout=float(pool_timeout),
        time_zone=utc_offset_label(utc_offset_hours),
    )
    conn = DatabaseConnection.get_instance(config)

    return assemble_container(
        conn=conn,
        admins_repo=MySQLAdminRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        faces_repo=MySQLFaceRepository(conn),
        dashboard_repo=MySQLDashboardRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        utc_offset_hours=utc_offset_hours,
        late_cutoff=late_cutoff,
    )
