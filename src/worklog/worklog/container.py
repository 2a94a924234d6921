from __future__ import annotations

from dataclasses import dataclass

from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .audit.mysql_audit_repository import MySQLAuditLogRepository
from .audit.repository import AuditLogRepository
from .audit.service import AuditService
from .core.constants import DEFAULT_TRAINER_PASSWORD
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .task_types.mysql_task_type_repository import MySQLTaskTypeRepository
from .task_types.repository import TaskTypeRepository
from .task_types.service import TaskTypeService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    tasks_repo: TaskRepository
    task_types_repo: TaskTypeRepository
    announcements_repo: AnnouncementRepository
    audit_repo: AuditLogRepository

    audit_service: AuditService
    auth_service: AuthService
    user_service: UserService
    task_service: TaskService
    task_type_service: TaskTypeService
    announcement_service: AnnouncementService
    report_service: ReportService


def wire(
    *,
    users_repo: UserRepository,
    tasks_repo: TaskRepository,
    task_types_repo: TaskTypeRepository,
    announcements_repo: AnnouncementRepository,
    audit_repo: AuditLogRepository,
    default_password: str = DEFAULT_TRAINER_PASSWORD,
) -> Container:
    """Build services on top of any repository implementations (MySQL or in-memory)."""

    audit_service = AuditService(audit_repo)
    return Container(
        users_repo=users_repo,
        tasks_repo=tasks_repo,
        task_types_repo=task_types_repo,
        announcements_repo=announcements_repo,
        audit_repo=audit_repo,
        audit_service=audit_service,
        auth_service=AuthService(users_repo, audit_service),
        user_service=UserService(users_repo, audit_service, default_password=default_password),
        task_service=TaskService(tasks_repo, audit_service),
        task_type_service=TaskTypeService(task_types_repo, audit_service),
        announcement_service=AnnouncementService(announcements_repo, audit_service),
        report_service=ReportService(tasks_repo, users_repo),
    )


def build_container(*, db_config: dict, default_password: str = DEFAULT_TRAINER_PASSWORD) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        users_repo=MySQLUserRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        task_types_repo=MySQLTaskTypeRepository(conn),
        announcements_repo=MySQLAnnouncementRepository(conn),
        audit_repo=MySQLAuditLogRepository(conn),
        default_password=default_password,
    )
